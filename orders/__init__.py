"""
Orders domain package.

Public API:
- Domain models: Order, Pickup, AssignmentStatus
- Map filters: OrderFilter, filter_map_orders

Delivery charges live in orders.pricing (needs a backend client).
"""
from .models import Order, Pickup, AssignmentStatus
from .filters import OrderFilter, filter_map_orders

__all__ = ["Order",
           "Pickup",
           "AssignmentStatus",
           "OrderFilter",
           "filter_map_orders",
           ]
