"""
Utilities for estimating travel time between activities.
"""

import math

WALKING_SPEED_KMH = 5.0
# Streets are never a straight line
DETOUR_FACTOR = 1.2
MIN_TRAVEL_MINUTES = 1
MAX_TRAVEL_MINUTES = 120


def estimate_walking_minutes(distance_km: float) -> int | None:
    """
    Estimate walking time in minutes for a great-circle distance.

    Args:
        distance_km: Straight-line distance in kilometers

    Returns:
        Minutes rounded half-up and clamped to [1, 120], or None when the
        estimate rounds to 0 (the places are effectively next door)
    """
    minutes = math.floor(distance_km / WALKING_SPEED_KMH * 60 * DETOUR_FACTOR + 0.5)
    if minutes <= 0:
        return None
    return max(MIN_TRAVEL_MINUTES, min(MAX_TRAVEL_MINUTES, minutes))
