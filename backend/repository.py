"""
Purpose: The backend-backed collaborators of the dispatch board.
What it does:
- loads agents and orders as typed records
- resolves an order's pickup restaurant (PickupLookup)
- records a dispatcher's decision (AssignmentSink)

Every row is converted at this boundary; raw dicts never leave this module.
Errors from the client (BackendError) propagate; the board decides what a
failed lookup means.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from agents.models import DeliveryAgent
from orders.models import AssignmentStatus, Order, Pickup

from .client import BackendClient

logger = logging.getLogger(__name__)

AGENT_COLUMNS = "id, name, lat, lng, is_online, status, vehicle_type, phone_number, rating"
ORDER_COLUMNS = (
    "id, orderno, user_latitude, user_longitude, status, delivery_agent_status, "
    "delivery_agent_id, delivery_agent_name, user_address, user_name, total_amount, created_at"
)
PICKUP_COLUMNS = "restaurant_id, restaurants(latitude, longitude, name)"


def fetch_delivery_agents(client: BackendClient) -> List[DeliveryAgent]:
    rows = client.select("delivery_agents", columns=AGENT_COLUMNS)
    return [DeliveryAgent.from_record(row) for row in rows]


def fetch_orders(client: BackendClient, limit: Optional[int] = None) -> List[Order]:
    rows = client.select("orders", columns=ORDER_COLUMNS, limit=limit)
    return [Order.from_record(row) for row in rows]


class RestaurantPickupLookup:
    """
    Resolves where an order is picked up: the restaurant of the order's
    first food item. Returns None when there is no item or no coordinates.
    """
    def __init__(self, client: BackendClient):
        self.client = client

    def __call__(self, order_id: str) -> Optional[Pickup]:
        rows = self.client.select(
            "order_food_items",
            columns=PICKUP_COLUMNS,
            filters={"order_id": order_id},
            limit=1,
        )
        if not rows:
            logger.warning("order %s has no food items, pickup unknown", order_id)
            return None

        pickup = Pickup.from_record(rows[0])
        if pickup is None:
            logger.warning("restaurant location not available for order %s", order_id)
        return pickup


class OrderAssignmentWriter:
    """
    Records a dispatch decision on the order row.
    """
    def __init__(self, client: BackendClient):
        self.client = client

    def __call__(self, order_id: str, agent_id: str) -> None:
        self.client.update(
            "orders",
            {
                "delivery_agent_id": agent_id,
                "delivery_agent_status": AssignmentStatus.ASSIGNED.value,
            },
            filters={"id": order_id},
        )
        logger.info("order %s assigned to agent %s", order_id, agent_id)
