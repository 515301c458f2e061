"""Great-circle distance on a spherical Earth.

``haversine_km`` is the only distance function in the engine; containment,
matching and duplicate detection all go through it.
"""

from __future__ import annotations

import math

from bopeep.contracts.common import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometers. Symmetric; 0.0 for equal points."""
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2, lng2 = math.radians(b.lat), math.radians(b.lng)
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(h))) * EARTH_RADIUS_KM


def destination_point(origin: Coordinate, bearing_deg: float, distance_km: float) -> Coordinate:
    """Point reached from ``origin`` along a great circle.

    ``bearing_deg`` is measured clockwise from true north. Longitude is
    normalized to [-180, 180].
    """
    lat1 = math.radians(origin.lat)
    lng1 = math.radians(origin.lng)
    theta = math.radians(bearing_deg)
    delta = distance_km / EARTH_RADIUS_KM

    sin_lat2 = math.sin(lat1) * math.cos(delta) + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lng2 = lng1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )

    lng_deg = (math.degrees(lng2) + 540.0) % 360.0 - 180.0
    return Coordinate(lat=math.degrees(lat2), lng=lng_deg)


def format_distance(km: float) -> str:
    """Human-readable distance: ``"850m"`` below 1 km, ``"2.4km"`` above."""
    if km < 1:
        return f"{round(km * 1000)}m"
    return f"{km:.1f}km"
