"""Great-circle distance between geocoded points."""
from __future__ import annotations

import math
from typing import Protocol

EARTH_RADIUS_KM = 6371.0


class _HasCoordinates(Protocol):
    latitude: float
    longitude: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (``round`` would go to even)."""
    return int(math.floor(value + 0.5))


def distance_km(point_a: _HasCoordinates, point_b: _HasCoordinates) -> int:
    """Haversine distance in whole kilometres.

    Coordinates are trusted as given; range checks belong to whoever geocoded
    the cities.
    """
    lat_a = math.radians(point_a.latitude)
    lat_b = math.radians(point_b.latitude)
    d_lat = math.radians(point_b.latitude - point_a.latitude)
    d_lon = math.radians(point_b.longitude - point_a.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat_a) * math.cos(lat_b) * math.sin(d_lon / 2) ** 2
    # float error can push near-antipodal pairs just past 1.0
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round_half_up(EARTH_RADIUS_KM * c)
