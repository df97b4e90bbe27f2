"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- Order (id, delivery coords, agent assignment state, display fields)
- Pickup (restaurant name + coords the agent has to collect from)

Defines enums/constants:
- AssignmentStatus = PENDING | ASSIGNED

Builds typed records from raw backend rows (the `from_record` constructors),
so nothing downstream ever touches an untyped dict.

Rule: No backend calls, no scoring logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

LatLon = Tuple[float, float]


class AssignmentStatus(Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


def _coordinate(lat: Any, lng: Any) -> Optional[LatLon]:
    if lat is None or lng is None or lat == "" or lng == "":
        return None
    return (float(lat), float(lng))


def _timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class Pickup:
    """
    Where the agent collects the food: the restaurant linked to the
    order's first food item.
    """
    name: str
    location: LatLon
    restaurant_id: Optional[str] = None

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> Optional[Pickup]:
        """
        Build from an `order_food_items` row with the embedded `restaurants` object.
        Returns None when the restaurant or its coordinates are missing or unparseable.
        """
        restaurant = row.get("restaurants")
        # one-to-one embeds come back as an object, some setups send a 1-element list
        if isinstance(restaurant, list):
            restaurant = restaurant[0] if restaurant else None
        if not restaurant:
            return None

        try:
            location = _coordinate(restaurant.get("latitude"), restaurant.get("longitude"))
        except (TypeError, ValueError):
            return None
        if location is None:
            return None

        restaurant_id = row.get("restaurant_id")
        return cls(
            name=restaurant.get("name") or "",
            location=location,
            restaurant_id=str(restaurant_id) if restaurant_id is not None else None,
        )


@dataclass(frozen=True)
class Order:
    """
    Represents a single delivery order as seen by the dispatcher.
    """

    id: str
    delivery_location: Optional[LatLon]
    delivery_agent_status: AssignmentStatus = AssignmentStatus.PENDING
    delivery_agent_id: Optional[str] = None

    #display fields
    order_number: Optional[str] = None
    address: Optional[str] = None
    total_amount: Optional[float] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    delivery_agent_name: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.delivery_agent_status == AssignmentStatus.PENDING or not self.delivery_agent_id

    @property
    def is_assigned(self) -> bool:
        return self.delivery_agent_status == AssignmentStatus.ASSIGNED and bool(self.delivery_agent_id)

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> Order:
        """
        Build an order from an `orders` row as returned by the backend.
        """
        agent_id = row.get("delivery_agent_id")
        total = row.get("total_amount")

        return cls(
            id=str(row["id"]),
            delivery_location=_coordinate(row.get("user_latitude"), row.get("user_longitude")),
            delivery_agent_status=AssignmentStatus(row.get("delivery_agent_status") or "pending"),
            delivery_agent_id=str(agent_id) if agent_id else None,
            order_number=row.get("orderno"),
            address=row.get("user_address"),
            total_amount=float(total) if total is not None else None,
            created_at=_timestamp(row.get("created_at")),
            customer_name=row.get("user_name"),
            delivery_agent_name=row.get("delivery_agent_name"),
        )
