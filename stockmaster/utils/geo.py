"""Great-circle distance helpers used by the geofencing gate."""

import math
from typing import Tuple

from ..models.warehouse import WarehouseLocation

EARTH_RADIUS_METERS = 6371e3


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance between two coordinates.

    Args:
        lat1, lng1: First point in degrees
        lat2, lng2: Second point in degrees

    Returns:
        Surface distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def within_radius(lat: float, lng: float, warehouse: WarehouseLocation) -> Tuple[bool, float]:
    """Return whether (lat, lng) is inside the warehouse fence, and the measured distance."""
    distance = calculate_distance(lat, lng, warehouse.lat, warehouse.lng)
    return distance <= warehouse.radius, distance
