from math import radians, sin, cos, sqrt, atan2

from ..geocoding.models import Coordinate

EARTH_RADIUS_MILES = 3959.0


def great_circle_distance_miles(
    origin_lat: float,
    origin_lon: float,
    target_lat: float,
    target_lon: float,
) -> float:
    """
    Haversine distance in miles between two WGS84 points.

    Symmetric in its two points; identical points give 0.
    """
    lat1, lon1 = radians(origin_lat), radians(origin_lon)
    lat2, lon2 = radians(target_lat), radians(target_lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_MILES * c


def distance_between(origin: Coordinate, target: Coordinate) -> float:
    return great_circle_distance_miles(
        origin.latitude, origin.longitude, target.latitude, target.longitude
    )
