"""Point containment tests for polygon and circle alert areas."""

from __future__ import annotations

from collections.abc import Sequence

from bopeep.contracts.common import Coordinate
from bopeep.services.geo.distance import haversine_km


def point_in_polygon(point: Coordinate, ring: Sequence[Coordinate]) -> bool:
    """Even-odd ray casting on planar lng/lat.

    Casts a ray from ``point`` towards +lng and counts edge crossings.
    Works on open or closed rings. Points exactly on an edge or vertex get
    whatever answer the crossing count gives; no tolerance is applied.
    Rings with fewer than 3 distinct vertices contain nothing.
    """
    vertices = list(ring)
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices = vertices[:-1]
    if len(set(vertices)) < 3:
        return False

    x, y = point.lng, point.lat
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i].lng, vertices[i].lat
        xj, yj = vertices[j].lng, vertices[j].lat
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def point_in_radius(point: Coordinate, center: Coordinate, radius_km: float) -> bool:
    """Boundary-inclusive circle test. A non-positive radius contains nothing."""
    if radius_km <= 0:
        return False
    return haversine_km(point, center) <= radius_km
