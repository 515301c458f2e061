"""Alert matching endpoint."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from bopeep.api.deps import get_clock
from bopeep.contracts.common import Coordinate
from bopeep.contracts.match import MatchResult
from bopeep.contracts.owner import AlertAreaOwner
from bopeep.services.geo.distance import format_distance
from bopeep.services.matcher import find_matches

router = APIRouter(prefix="/matches", tags=["matches"])


class MatchRequest(BaseModel):
    """A sighting and the owners to test it against."""

    sighting: Coordinate
    owners: list[AlertAreaOwner] = Field(
        default_factory=list, description="Candidate owners for the sighting's region"
    )


def match_payload(match: MatchResult) -> dict:
    data = match.to_record()
    data["distance_label"] = format_distance(match.distance_km)
    return data


@router.post("")
async def match_sighting(
    request: MatchRequest,
    now: datetime = Depends(get_clock),
) -> dict:
    """Owners to notify, nearest first."""
    matches = find_matches(request.sighting, request.owners, now)
    return {"matches": [match_payload(m) for m in matches]}
