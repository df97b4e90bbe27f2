"""
Purpose: Core data models for the delivery agents domain.
What it does:
Defines the structure of a DeliveryAgent and their status, and turns raw
backend rows into typed records at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

LatLon = Tuple[float, float]


class AgentStatus(str, Enum):
    """
    Standardizes the state a delivery agent can be in.
    Anything the backend sends that we don't recognise becomes UNKNOWN.
    """
    AVAILABLE = "available"
    ONLINE = "online"
    BUSY = "busy"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return cls.UNKNOWN


# Statuses the scorer is allowed to recommend.
DISPATCHABLE_STATUSES: FrozenSet[AgentStatus] = frozenset(
    {AgentStatus.AVAILABLE, AgentStatus.ONLINE, AgentStatus.BUSY}
)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _flag(value: Any) -> bool:
    # backends and CSV exports send booleans as "true" / "false" strings too
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return bool(value)


@dataclass(frozen=True)
class DeliveryAgent:
    """
    A stateless snapshot of a delivery agent at a specific point in time.
    """
    id: str
    name: str
    location: Optional[LatLon]
    is_online: bool
    status: AgentStatus

    vehicle_type: Optional[str] = None
    rating: Optional[float] = None
    phone_number: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.location is not None

    @classmethod
    def new(
        cls,
        agent_id: str,
        name: str,
        lat: Optional[float],
        lng: Optional[float],
        status: str | AgentStatus = AgentStatus.AVAILABLE,
        is_online: bool = True,
        vehicle_type: Optional[str] = None,
        rating: Optional[float] = None,
        phone_number: Optional[str] = None,
    ) -> DeliveryAgent:
        if isinstance(status, str):
            status = AgentStatus(status)

        location = (lat, lng) if lat is not None and lng is not None else None

        return cls(
            id=agent_id,
            name=name,
            location=location,
            is_online=is_online,
            status=status,
            vehicle_type=vehicle_type,
            rating=rating,
            phone_number=phone_number,
        )

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> DeliveryAgent:
        """
        Build an agent from a `delivery_agents` row as returned by the backend.
        """
        phone_number = row.get("phone_number")

        return cls.new(
            agent_id=str(row["id"]),
            name=row.get("name") or "",
            lat=_optional_float(row.get("lat")),
            lng=_optional_float(row.get("lng")),
            status=row.get("status") or AgentStatus.UNKNOWN,
            is_online=_flag(row.get("is_online")),
            vehicle_type=row.get("vehicle_type"),
            rating=_optional_float(row.get("rating")),
            phone_number=str(phone_number) if phone_number is not None else None,
        )
