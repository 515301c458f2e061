"""Polygon utilities for the alert-area setup workflow.

Validation, display centroid, circle-to-polygon conversion and bounding
boxes. None of these run on the hot report path except ``centroid``,
which the matcher uses as the ranking anchor for polygon areas.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from bopeep.contracts.area import AlertArea, BoundingBox, CircleArea, PolygonArea
from bopeep.contracts.common import Coordinate
from bopeep.services.geo.distance import destination_point

MIN_RING_LENGTH = 4
DEFAULT_CIRCLE_STEPS = 64


def validate_polygon(ring: Sequence[Coordinate]) -> bool:
    """True iff the ring has at least 4 coordinates and is closed.

    Closed means first and last coordinates are exactly equal. Winding
    order and self-intersection are not checked.
    """
    if len(ring) < MIN_RING_LENGTH:
        return False
    return ring[0] == ring[-1]


def validate_area(area: AlertArea) -> bool:
    """Check an alert area before it is stored."""
    if isinstance(area, PolygonArea):
        return validate_polygon(area.ring)
    if isinstance(area, CircleArea):
        return area.radius_km > 0
    return False


def centroid(ring: Sequence[Coordinate]) -> Coordinate:
    """Arithmetic mean of the ring's vertices.

    The closing vertex is not counted twice. This is an approximation
    (not the area-weighted centroid) and is only used to rank matches
    and place labels.
    """
    vertices = list(ring)
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices = vertices[:-1]
    if not vertices:
        raise ValueError("centroid of an empty ring is undefined")

    n = len(vertices)
    return Coordinate(
        lat=sum(v.lat for v in vertices) / n,
        lng=sum(v.lng for v in vertices) / n,
    )


def make_circle_polygon(
    center: Coordinate,
    radius_km: float,
    steps: int = DEFAULT_CIRCLE_STEPS,
) -> list[Coordinate]:
    """Approximate a circle with a closed ring of ``steps`` vertices.

    Vertex ``i`` sits ``radius_km`` from ``center`` along the great circle
    at bearing ``-i * 360 / steps`` (north first, then counter-clockwise).
    The first vertex is repeated at the end to close the ring.
    """
    if radius_km <= 0:
        raise ValueError(f"radius_km must be positive, got {radius_km}")
    if steps < 3:
        raise ValueError(f"steps must be at least 3, got {steps}")

    ring = [destination_point(center, -i * 360.0 / steps, radius_km) for i in range(steps)]
    ring.append(ring[0])
    return ring


def bounding_box(points: Iterable[Coordinate]) -> BoundingBox:
    """Smallest lat/lng box around ``points``; all-zero box when empty."""
    it = iter(points)
    first = next(it, None)
    if first is None:
        return BoundingBox()

    min_lat = max_lat = first.lat
    min_lng = max_lng = first.lng
    for p in it:
        min_lat = min(min_lat, p.lat)
        max_lat = max(max_lat, p.lat)
        min_lng = min(min_lng, p.lng)
        max_lng = max(max_lng, p.lng)

    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)
