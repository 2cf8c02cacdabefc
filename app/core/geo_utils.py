"""
Geographic utilities for distance calculations.
"""

import math

from app.core.schemas import BusinessRecord

EARTH_RADIUS_KM = 6371


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lng1: Coordinates of point 1
        lat2, lng2: Coordinates of point 2

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(a: BusinessRecord, b: BusinessRecord) -> float | None:
    """Distance in km between two businesses, or None if either lacks coordinates."""
    if not (a.has_coordinates() and b.has_coordinates()):
        return None
    return haversine_distance(
        a.coordinates.latitude,
        a.coordinates.longitude,
        b.coordinates.latitude,
        b.coordinates.longitude,
    )
