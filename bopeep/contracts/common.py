"""Base classes and shared types for bopeep contracts.

Unit conventions (all contracts and API responses):
- **Distances**: kilometers (km) — suffix ``_km``
- **Angles/bearings**: degrees — suffix ``_deg``
- **Datetimes**: always timezone-aware UTC, ISO 8601 in serialized form
- **Coordinates**: WGS84 decimal degrees, ``lat``/``lng`` field names

GeoJSON positions are ``[lng, lat]``; conversion happens only at the
``Coordinate.from_position`` / ``to_position`` boundary.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class EngineModel(BaseModel):
    """Base model with record-friendly serialization.

    - Enums serialize as string values.
    - ``to_record()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_record()`` hydrates from a dict handed over by the storage layer.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "EngineModel":
        """Create model instance from a stored record."""
        return cls.model_validate(data)


class Coordinate(BaseModel):
    """WGS84 geographic coordinate. Compared by value."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_position(cls, position: list[float] | tuple[float, ...]) -> "Coordinate":
        """Build from a GeoJSON ``[lng, lat]`` position (extra axes ignored)."""
        if len(position) < 2:
            raise ValueError(f"GeoJSON position needs at least 2 values, got {len(position)}")
        return cls(lat=position[1], lng=position[0])

    def to_position(self) -> list[float]:
        return [self.lng, self.lat]
