"""
Purpose: Delivery charge for a trip distance.
The pricing rules (distance brackets, peak hours, surcharges) live in the
backend's `calculate-delivery-charge` function; this module only calls it and
falls back to a flat per-km rate when the backend can't answer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from backend.client import BackendClient, BackendError
from routing.geo import round_half_up

logger = logging.getLogger(__name__)

CHARGE_FUNCTION = "calculate-delivery-charge"
FALLBACK_RATE_PER_KM = 10.0


def fallback_delivery_charge(distance_km: float) -> float:
    return round_half_up(distance_km * FALLBACK_RATE_PER_KM, 2)


def calculate_delivery_charge(
    client: BackendClient,
    distance_km: float,
    timestamp: Optional[datetime] = None,
    tenant_id: Optional[str] = None,
) -> float:
    """
    Ask the backend for the charge of a `distance_km` delivery at `timestamp`
    (now if omitted) for `tenant_id` (all tenants if omitted).
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    body = {
        "distanceKm": distance_km,
        "timestamp": timestamp.isoformat(),
        "tenantId": tenant_id,
    }

    try:
        data = client.invoke(CHARGE_FUNCTION, body)
        return float(data["charge"])
    except BackendError as exc:
        logger.error("Failed to calculate delivery charge: %s", exc)
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Unexpected delivery charge response: %s", exc)

    charge = fallback_delivery_charge(distance_km)
    logger.warning("Using fallback delivery charge %.2f for %.2f km", charge, distance_km)
    return charge
