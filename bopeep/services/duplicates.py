"""Duplicate sighting detection.

A new sighting duplicates a recent report when both are within
``max_distance_km`` of each other and the report is no older than
``max_age``. The scan is linear over the candidate list;
``prefilter_by_geohash`` can shrink that list first, as long as its cells
are at least as wide as the duplicate radius (``bucket_precision`` picks
such a precision).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from bopeep.contracts.common import Coordinate, as_utc
from bopeep.contracts.sighting import SightingReport
from bopeep.services.geo.distance import haversine_km
from bopeep.services.geo.geohash import bounds, encode, neighbors

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE_KM = 0.05  # 50 m
DEFAULT_MAX_AGE = timedelta(hours=2)
DEFAULT_BUCKET_PRECISION = 6  # ~1.2 km x 0.6 km cells


@dataclass(frozen=True)
class DuplicateWindow:
    """Space/time tolerance for treating two reports as one sighting."""

    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    max_age: timedelta = DEFAULT_MAX_AGE


def find_duplicate(
    new_sighting: Coordinate,
    recent_reports: Iterable[SightingReport],
    now: datetime,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
    max_age: timedelta = DEFAULT_MAX_AGE,
) -> SightingReport | None:
    """Return the first report in input order that covers ``new_sighting``.

    Reports created before ``now - max_age`` are ignored. Input order is
    not re-sorted: pre-sort the candidates if "first" should mean newest.
    """
    cutoff = as_utc(now) - max_age

    for report in recent_reports:
        if report.created_at < cutoff:
            continue
        distance = haversine_km(new_sighting, report.location)
        if distance <= max_distance_km:
            logger.debug(
                "Sighting %s duplicates report %s (%.4f km)", new_sighting, report.id, distance
            )
            return report
    return None


def _min_cell_span_km(location: Coordinate, precision: int) -> float:
    """Narrowest side of the cells in the 3x3 block around ``location``.

    Cell width shrinks towards the poles, so it is measured on the block's
    poleward edge.
    """
    cell = bounds(encode(location.lat, location.lng, precision))
    height = haversine_km(
        Coordinate(lat=cell.min_lat, lng=cell.lng),
        Coordinate(lat=cell.max_lat, lng=cell.lng),
    )
    edge_lat = min(90.0, max(abs(cell.min_lat), abs(cell.max_lat)) + 2 * cell.lat_err)
    width = haversine_km(
        Coordinate(lat=edge_lat, lng=cell.min_lng),
        Coordinate(lat=edge_lat, lng=cell.max_lng),
    )
    return min(height, width)


def bucket_precision(
    location: Coordinate,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
    max_precision: int = DEFAULT_BUCKET_PRECISION,
) -> int | None:
    """Finest precision up to ``max_precision`` whose cells span the radius.

    Returns None when even single-character cells are too narrow (very
    large radius or a location at a pole); skip pre-bucketing then.
    """
    for precision in range(max_precision, 0, -1):
        if _min_cell_span_km(location, precision) >= max_distance_km:
            return precision
    return None


def prefilter_by_geohash(
    location: Coordinate,
    reports: Iterable[SightingReport],
    precision: int = DEFAULT_BUCKET_PRECISION,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
) -> list[SightingReport]:
    """Keep reports whose geohash cell is the location's cell or a neighbour.

    The 3x3 block only covers every report within ``max_distance_km`` when
    each cell is at least that wide, so a ``precision`` with narrower cells
    raises ``ValueError`` (see ``bucket_precision``). Stored geohashes are
    trusted. Input order is preserved.
    """
    span = _min_cell_span_km(location, precision)
    if span < max_distance_km:
        raise ValueError(
            f"precision {precision} cells ({span:.3f} km) are narrower than "
            f"the duplicate radius ({max_distance_km} km)"
        )

    own = encode(location.lat, location.lng, precision)
    block = {own, *neighbors(own)}

    kept: list[SightingReport] = []
    for report in reports:
        if len(report.geohash) >= precision:
            prefix = report.geohash[:precision].lower()
        else:
            prefix = encode(report.location.lat, report.location.lng, precision)
        if prefix in block:
            kept.append(report)
    return kept
