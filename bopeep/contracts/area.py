"""Alert areas — the geofenced region an owner registers for sighting alerts.

An ``AlertArea`` is either a ``PolygonArea`` (closed ring) or a
``CircleArea`` (center + radius). Areas are replaced wholesale on edit
and never shared across owners.

Malformed geometry (open rings, too few vertices, non-positive radius)
is accepted here on purpose: the matcher skips it instead of failing the
whole request. Validate with ``validate_area`` before storing an area.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from bopeep.contracts.common import Coordinate, EngineModel


class PolygonArea(EngineModel):
    """Polygon alert area, stored as its outer ring.

    A well-formed ring has at least 4 coordinates and its first and last
    coordinates are identical.
    """

    kind: Literal["polygon"] = "polygon"
    ring: list[Coordinate] = Field(default_factory=list)

    @classmethod
    def from_geojson(cls, geometry: dict[str, Any]) -> "PolygonArea":
        """Build from a GeoJSON ``Polygon`` geometry. Holes are ignored."""
        if geometry.get("type") != "Polygon":
            raise ValueError(f"Expected a GeoJSON Polygon, got {geometry.get('type')!r}")
        rings = geometry.get("coordinates") or []
        outer = rings[0] if rings else []
        return cls(ring=[Coordinate.from_position(pos) for pos in outer])

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": "Polygon",
            "coordinates": [[c.to_position() for c in self.ring]],
        }


class CircleArea(EngineModel):
    """Radius alert area around a center point."""

    kind: Literal["circle"] = "circle"
    center: Coordinate
    radius_km: float = Field(..., description="Alert radius in km, > 0 when valid")


AlertArea = Annotated[Union[PolygonArea, CircleArea], Field(discriminator="kind")]


class BoundingBox(EngineModel):
    """Axis-aligned lat/lng box. All-zero for an empty input set."""

    min_lat: float = 0.0
    max_lat: float = 0.0
    min_lng: float = 0.0
    max_lng: float = 0.0

    def contains(self, point: Coordinate) -> bool:
        """Inclusive containment test (no antimeridian handling)."""
        return (
            self.min_lat <= point.lat <= self.max_lat
            and self.min_lng <= point.lng <= self.max_lng
        )
