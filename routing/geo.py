#Purpose: Straight-line ("as the crow flies") distance math, plus the half-up rounding used for display.
#Used by the agent scorer as a proxy for travel distance between
#agent -> restaurant and restaurant -> customer.
#No routing engine, no I/O. Garbage coordinates give garbage distances, never errors.

import math
from typing import Tuple

#internal coordinate type :(lat,lon)
LatLon = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance in kilometres between two (lat, lng) points.

    Symmetric, 0 for identical points. NaN inputs give NaN.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # clamp so out-of-range input can't push sqrt(1 - a) negative
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(origin: LatLon, destination: LatLon) -> float:
    """Same as haversine_km but for (lat, lng) tuples."""
    return haversine_km(origin[0], origin[1], destination[0], destination[1])


def is_point_within_radius(
    lat: float,
    lng: float,
    center_lat: float,
    center_lng: float,
    radius_km: float,
) -> bool:
    """True if the point is within radius_km of the center (inclusive)."""
    return haversine_km(lat, lng, center_lat, center_lng) <= radius_km


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves up (2.5 -> 3, 6.5 -> 7), unlike round() which rounds to even.
    Used for displayed distances, minutes and charges.
    """
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale
