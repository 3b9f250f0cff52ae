"""Great-circle distance between stations and the user."""

import math

from .models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Haversine distance between two points, in kilometers.

    Inputs are not validated. Coordinates outside |lat| <= 90, |lon| <= 180
    give an undefined result.
    """
    if a == b:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def format_distance(km: float) -> str:
    """
    Format a distance for display.

    Args:
        km: Non-negative distance in kilometers.

    Returns:
        Whole meters below 1 km (e.g. "500m"), otherwise kilometers with one
        decimal (e.g. "1.0km", "12.3km").
    """
    if km < 1:
        return f"{math.floor(km * 1000 + 0.5)}m"
    return f"{km:.1f}km"
