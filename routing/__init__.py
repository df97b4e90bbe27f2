#Marks routing as a package.
#Re-exports the distance helpers so other modules import from routing
#without knowing internal file names.
#No business logic.

from .geo import LatLon, EARTH_RADIUS_KM, haversine_km, distance_between, is_point_within_radius, round_half_up

__all__ = [
    "LatLon",
    "EARTH_RADIUS_KM",
    "haversine_km",
    "distance_between",
    "is_point_within_radius",
    "round_half_up",
]
