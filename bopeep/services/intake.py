"""New-sighting intake: duplicate check first, then alert matching."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from bopeep.contracts.common import Coordinate
from bopeep.contracts.match import SightingOutcome
from bopeep.contracts.owner import AlertAreaOwner
from bopeep.contracts.sighting import SightingReport
from bopeep.services.duplicates import (
    DuplicateWindow,
    bucket_precision,
    find_duplicate,
    prefilter_by_geohash,
)
from bopeep.services.geo.geohash import DEFAULT_PRECISION, encode
from bopeep.services.matcher import find_matches

logger = logging.getLogger(__name__)


def evaluate_sighting(
    location: Coordinate,
    recent_reports: Iterable[SightingReport],
    owners: Iterable[AlertAreaOwner],
    now: datetime,
    window: DuplicateWindow = DuplicateWindow(),
    precision: int = DEFAULT_PRECISION,
) -> SightingOutcome:
    """Run a new sighting through the engine.

    1. Encode the geohash to store with the report
    2. Look for a recent report of the same sighting among the reports in
       the surrounding geohash cells; stop there if found
    3. Otherwise rank the owners whose alert areas contain the location
    """
    geohash = encode(location.lat, location.lng, precision)

    candidates = list(recent_reports)
    bucket = bucket_precision(location, window.max_distance_km)
    if bucket is not None:
        candidates = prefilter_by_geohash(
            location, candidates, bucket, max_distance_km=window.max_distance_km
        )

    duplicate = find_duplicate(
        location,
        candidates,
        now,
        max_distance_km=window.max_distance_km,
        max_age=window.max_age,
    )
    if duplicate is not None:
        logger.debug("Sighting at %s duplicates report %s", geohash, duplicate.id)
        return SightingOutcome(geohash=geohash, duplicate_of=duplicate)

    return SightingOutcome(geohash=geohash, matches=find_matches(location, owners, now))
