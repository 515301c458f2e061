"""SightingReport — a walker's report of a stray sheep at a location.

Created once per submission and immutable afterwards, except for the
workflow fields (``status``) owned by the calling service. The engine
only reads ``location`` and ``created_at``.
"""

import uuid
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from bopeep.contracts.common import Coordinate, EngineModel, UTCDateTime
from bopeep.contracts.enums import ReportStatus, SheepTag
from bopeep.services.geo.geohash import DEFAULT_PRECISION, encode


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SightingReport(EngineModel):
    """A stored sighting, as handed over by the persistence layer.

    ``geohash`` is derived from ``location`` (precision 7) when the record
    does not carry one. Flat records with top-level ``lat``/``lng`` columns
    are accepted as well as the nested ``location`` form.
    """

    id: str = Field(..., min_length=1)
    location: Coordinate
    created_at: UTCDateTime
    geohash: str = Field(..., min_length=1)
    walker_id: str | None = None
    tags: list[SheepTag] = Field(default_factory=list)
    description: str | None = None
    status: ReportStatus = ReportStatus.PENDING

    @model_validator(mode="before")
    @classmethod
    def fill_location_and_geohash(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "location" not in data and "lat" in data and "lng" in data:
            data["location"] = {"lat": data.pop("lat"), "lng": data.pop("lng")}
        if data.get("geohash"):
            return data

        # Other location shapes are left for field validation to reject
        loc = data.get("location")
        if isinstance(loc, Coordinate):
            data["geohash"] = encode(loc.lat, loc.lng, DEFAULT_PRECISION)
        elif isinstance(loc, dict) and _is_number(loc.get("lat")) and _is_number(loc.get("lng")):
            data["geohash"] = encode(loc["lat"], loc["lng"], DEFAULT_PRECISION)
        return data

    @classmethod
    def new(
        cls,
        location: Coordinate,
        now: datetime,
        *,
        walker_id: str | None = None,
        tags: Iterable[SheepTag] = (),
        description: str | None = None,
        precision: int = DEFAULT_PRECISION,
    ) -> "SightingReport":
        """Mint a fresh pending report with a random UUID4 id."""
        return cls(
            id=str(uuid.uuid4()),
            location=location,
            created_at=now,
            geohash=encode(location.lat, location.lng, precision),
            walker_id=walker_id,
            tags=list(tags),
            description=description,
        )
