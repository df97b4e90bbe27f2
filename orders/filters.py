"""
Purpose: Which orders show up on the assignment map.
Orders without a delivery coordinate are never shown (nothing to pin).
"""

from enum import Enum
from typing import Iterable, List

from .models import Order


class OrderFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    ASSIGNED = "assigned"


def filter_map_orders(orders: Iterable[Order], order_filter: OrderFilter = OrderFilter.ALL) -> List[Order]:
    visible = [order for order in orders if order.delivery_location is not None]

    if order_filter == OrderFilter.PENDING:
        return [order for order in visible if order.is_pending]
    if order_filter == OrderFilter.ASSIGNED:
        return [order for order in visible if order.is_assigned]
    return visible
