"""Alert matching: which owners should hear about a sighting, nearest first.

Owners are evaluated independently. Malformed areas never match and never
raise; validation belongs to the area setup workflow (``validate_area``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from bopeep.contracts.area import CircleArea, PolygonArea
from bopeep.contracts.common import Coordinate
from bopeep.contracts.match import MatchResult
from bopeep.contracts.owner import AlertAreaOwner
from bopeep.services.geo.containment import point_in_polygon, point_in_radius
from bopeep.services.geo.distance import haversine_km
from bopeep.services.geo.polygon import centroid, validate_polygon

logger = logging.getLogger(__name__)


def find_matches(
    sighting: Coordinate,
    owners: Iterable[AlertAreaOwner],
    now: datetime,
) -> list[MatchResult]:
    """Return eligible owners whose area contains ``sighting``.

    Sorted ascending by ``distance_km``; equal distances keep input order.

    Parameters
    ----------
    sighting:
        Location of the new report.
    owners:
        Candidate owners, already narrowed to the relevant region by the
        caller.
    now:
        Evaluation time for mute windows (not the sighting's creation time).
    """
    matches: list[MatchResult] = []
    evaluated = 0

    for owner in owners:
        evaluated += 1
        if not owner.eligibility.is_eligible(now):
            logger.debug("Owner %s skipped: not eligible", owner.id)
            continue
        if owner.area is None:
            logger.debug("Owner %s skipped: no alert area", owner.id)
            continue

        distance = _match_distance(sighting, owner)
        if distance is not None:
            matches.append(MatchResult(owner_id=owner.id, distance_km=distance))

    matches.sort(key=lambda m: m.distance_km)
    logger.debug("Sighting %s matched %d of %d owners", sighting, len(matches), evaluated)
    return matches


def _match_distance(sighting: Coordinate, owner: AlertAreaOwner) -> float | None:
    """Distance to the matched area's anchor, or None if nothing matched.

    The polygon is tried first; a circle (the area itself or the owner's
    fallback circle) only when the polygon did not match. At most one
    geometry matches per owner.
    """
    area = owner.area
    circle: CircleArea | None = owner.fallback_circle

    if isinstance(area, PolygonArea):
        if not validate_polygon(area.ring):
            logger.debug("Owner %s has a malformed polygon ring", owner.id)
        elif point_in_polygon(sighting, area.ring):
            return haversine_km(sighting, centroid(area.ring))
    elif isinstance(area, CircleArea):
        circle = area

    if circle is not None and point_in_radius(sighting, circle.center, circle.radius_km):
        return haversine_km(sighting, circle.center)
    return None
