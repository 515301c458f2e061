"""FastAPI dependency injection wiring."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

from bopeep.services.duplicates import (
    DEFAULT_MAX_AGE,
    DEFAULT_MAX_DISTANCE_KM,
    DuplicateWindow,
)
from bopeep.services.geo.geohash import DEFAULT_PRECISION


# ------------------------------------------------------------------
# Clock (overridden in tests)
# ------------------------------------------------------------------


def get_clock() -> datetime:
    """Evaluation time for mute windows and duplicate age checks."""
    return datetime.now(tz=timezone.utc)


# ------------------------------------------------------------------
# Engine settings (environment, read per request)
# ------------------------------------------------------------------


def get_duplicate_window() -> DuplicateWindow:
    radius = os.environ.get("BOPEEP_DUPLICATE_RADIUS_KM")
    hours = os.environ.get("BOPEEP_DUPLICATE_MAX_AGE_HOURS")
    return DuplicateWindow(
        max_distance_km=float(radius) if radius else DEFAULT_MAX_DISTANCE_KM,
        max_age=timedelta(hours=float(hours)) if hours else DEFAULT_MAX_AGE,
    )


def get_geohash_precision() -> int:
    value = os.environ.get("BOPEEP_GEOHASH_PRECISION")
    return int(value) if value else DEFAULT_PRECISION
