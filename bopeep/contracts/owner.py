"""Alert-area owners (farmers) and their matching eligibility."""

from datetime import datetime
from typing import Any

from pydantic import Field

from bopeep.contracts.area import AlertArea, CircleArea, PolygonArea
from bopeep.contracts.common import Coordinate, EngineModel, UTCDateTime, as_utc
from bopeep.contracts.enums import SubscriptionState

_MATCHABLE_STATES = (SubscriptionState.ACTIVE, SubscriptionState.TRIAL)

# Subscription values written by older clients
_LEGACY_STATES = {"inactive": SubscriptionState.CANCELLED}


class Eligibility(EngineModel):
    """Whether an owner currently wants sighting alerts."""

    subscription_state: SubscriptionState
    muted_until: UTCDateTime | None = None

    def is_eligible(self, now: datetime) -> bool:
        """Active or trial, and not muted at ``now``.

        A mute that ends exactly at ``now`` no longer applies.
        """
        if self.subscription_state not in _MATCHABLE_STATES:
            return False
        if self.muted_until is not None and self.muted_until > as_utc(now):
            return False
        return True


class AlertAreaOwner(EngineModel):
    """An owner with at most one alert area.

    ``fallback_circle`` carries the radius columns of records that were
    saved with both a polygon and a radius. It is only consulted when the
    polygon does not contain the sighting.
    """

    id: str = Field(..., min_length=1)
    area: AlertArea | None = None
    fallback_circle: CircleArea | None = None
    eligibility: Eligibility

    @classmethod
    def from_farmer_record(cls, record: dict[str, Any]) -> "AlertAreaOwner":
        """Build an owner from a farmer row.

        Expected keys: ``id``, ``alert_area`` (GeoJSON geometry or None),
        ``center_lat``, ``center_lng``, ``alert_radius_km``,
        ``subscription_status``, ``muted_until``.
        """
        circle = None
        if (
            record.get("center_lat") is not None
            and record.get("center_lng") is not None
            and record.get("alert_radius_km") is not None
        ):
            circle = CircleArea(
                center=Coordinate(lat=record["center_lat"], lng=record["center_lng"]),
                radius_km=record["alert_radius_km"],
            )

        polygon = None
        geometry = record.get("alert_area")
        if geometry and geometry.get("type") == "Polygon":
            polygon = PolygonArea.from_geojson(geometry)

        state = record.get("subscription_status")
        state = _LEGACY_STATES.get(state, state)

        return cls(
            id=str(record["id"]),
            area=polygon if polygon is not None else circle,
            fallback_circle=circle if polygon is not None else None,
            eligibility=Eligibility(
                subscription_state=state,
                muted_until=record.get("muted_until"),
            ),
        )
