"""Match results — calculated per request, never persisted by the engine."""

from pydantic import Field

from bopeep.contracts.common import EngineModel
from bopeep.contracts.sighting import SightingReport


class MatchResult(EngineModel):
    """An owner whose alert area contains the sighting.

    ``distance_km`` is measured to the polygon centroid or the circle
    center, never to the area edge.
    """

    owner_id: str
    distance_km: float = Field(..., ge=0)


class SightingOutcome(EngineModel):
    """Result of running a new sighting through duplicate check and matching.

    When ``duplicate_of`` is set the matcher did not run and ``matches``
    is empty; the caller should warn the submitter, not reject.
    """

    geohash: str
    duplicate_of: SightingReport | None = None
    matches: list[MatchResult] = Field(default_factory=list)

    @property
    def is_duplicate(self) -> bool:
        return self.duplicate_of is not None
