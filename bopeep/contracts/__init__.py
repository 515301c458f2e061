"""bopeep data contracts — Pydantic v2 models for the alert matching engine.

Data authority
--------------

**Caller-supplied** (fetched by the persistence layer, passed in per call):
- ``AlertAreaOwner`` — farmer with one ``AlertArea`` and ``Eligibility``
- ``SightingReport`` — recent reports used for duplicate detection

**Calculated** (never persisted by the engine):
- ``MatchResult`` — owner + distance, ranked nearest first
- ``SightingOutcome`` — duplicate check + matches for a new sighting
- ``BoundingBox`` — extent of an area or point set

The engine holds no state between calls. Anything time-relative takes
``now`` as an argument.
"""

from bopeep.contracts.enums import (
    ReportStatus,
    SheepTag,
    SubscriptionState,
)
from bopeep.contracts.common import Coordinate, EngineModel, UTCDateTime
from bopeep.contracts.area import AlertArea, BoundingBox, CircleArea, PolygonArea
from bopeep.contracts.owner import AlertAreaOwner, Eligibility
from bopeep.contracts.sighting import SightingReport
from bopeep.contracts.match import MatchResult, SightingOutcome

__all__ = [
    # Enums
    "ReportStatus",
    "SheepTag",
    "SubscriptionState",
    # Common
    "Coordinate",
    "EngineModel",
    "UTCDateTime",
    # Areas
    "AlertArea",
    "BoundingBox",
    "CircleArea",
    "PolygonArea",
    # Owners and reports
    "AlertAreaOwner",
    "Eligibility",
    "SightingReport",
    # Results
    "MatchResult",
    "SightingOutcome",
]
