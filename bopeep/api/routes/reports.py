"""Sighting report endpoints: duplicate check and full intake evaluation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from bopeep.api.deps import get_clock, get_duplicate_window, get_geohash_precision
from bopeep.api.routes.matches import match_payload
from bopeep.contracts.common import Coordinate
from bopeep.contracts.enums import SheepTag
from bopeep.contracts.owner import AlertAreaOwner
from bopeep.contracts.sighting import SightingReport
from bopeep.services.duplicates import DuplicateWindow, find_duplicate
from bopeep.services.intake import evaluate_sighting

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


class DuplicateCheckRequest(BaseModel):
    location: Coordinate
    recent_reports: list[SightingReport] = Field(default_factory=list)
    max_distance_km: float | None = Field(default=None, gt=0)
    max_age_hours: float | None = Field(default=None, gt=0)


class EvaluateRequest(BaseModel):
    """A new walker submission plus the candidate sets fetched by the caller."""

    location: Coordinate
    tags: list[SheepTag] = Field(default_factory=list)
    description: str | None = None
    walker_id: str | None = None
    recent_reports: list[SightingReport] = Field(default_factory=list)
    owners: list[AlertAreaOwner] = Field(default_factory=list)


@router.post("/duplicate-check")
async def duplicate_check(
    request: DuplicateCheckRequest,
    now: datetime = Depends(get_clock),
    window: DuplicateWindow = Depends(get_duplicate_window),
) -> dict:
    """Find an existing report that already covers this sighting."""
    duplicate = find_duplicate(
        request.location,
        request.recent_reports,
        now,
        max_distance_km=request.max_distance_km or window.max_distance_km,
        max_age=(
            timedelta(hours=request.max_age_hours) if request.max_age_hours else window.max_age
        ),
    )
    return {
        "duplicate": duplicate is not None,
        "report": duplicate.to_record() if duplicate is not None else None,
    }


@router.post("/evaluate")
async def evaluate(
    request: EvaluateRequest,
    now: datetime = Depends(get_clock),
    window: DuplicateWindow = Depends(get_duplicate_window),
    precision: int = Depends(get_geohash_precision),
) -> dict:
    """Duplicate check, then matching.

    A duplicate is a warning, not a rejection: the response carries the
    existing report and no new report is minted.
    """
    outcome = evaluate_sighting(
        request.location,
        request.recent_reports,
        request.owners,
        now,
        window=window,
        precision=precision,
    )

    if outcome.duplicate_of is not None:
        logger.info("Duplicate warning for sighting near %s", outcome.geohash)
        return {
            "success": False,
            "duplicate_warning": True,
            "error": "A similar report already exists nearby",
            "duplicate_of": outcome.duplicate_of.to_record(),
            "geohash": outcome.geohash,
            "matches": [],
        }

    report = SightingReport.new(
        request.location,
        now,
        walker_id=request.walker_id,
        tags=request.tags,
        description=request.description,
        precision=precision,
    )
    return {
        "success": True,
        "duplicate_warning": False,
        "report": report.to_record(),
        "geohash": outcome.geohash,
        "matches": [match_payload(m) for m in outcome.matches],
    }
