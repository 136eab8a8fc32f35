"""
Geodesic distance and geofence checks
"""
import math
from typing import NamedTuple, Optional

EARTH_RADIUS_M = 6371000


class GeofenceCheck(NamedTuple):
    """Outcome of a geofence check; distance_m is None when no check was made"""
    checked: bool
    within: bool
    distance_m: Optional[float]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        float: Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def is_within_radius(
    lat: float,
    lon: float,
    center_lat: float,
    center_lon: float,
    radius_m: float
) -> bool:
    return haversine_distance(lat, lon, center_lat, center_lon) <= radius_m


def check_geofence(
    lat: float,
    lon: float,
    center_lat: Optional[float],
    center_lon: Optional[float],
    radius_m: float
) -> GeofenceCheck:
    """
    Check a point against a circular geofence

    Sites without coordinates are not checked and always pass.
    """
    if center_lat is None or center_lon is None:
        return GeofenceCheck(checked=False, within=True, distance_m=None)

    distance = haversine_distance(lat, lon, center_lat, center_lon)
    within = is_within_radius(lat, lon, center_lat, center_lon, radius_m)
    return GeofenceCheck(checked=True, within=within, distance_m=distance)
