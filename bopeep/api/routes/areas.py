"""Alert-area setup endpoints: validation, circle conversion, extents."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from bopeep.contracts.area import AlertArea, CircleArea, PolygonArea
from bopeep.contracts.common import Coordinate
from bopeep.services.geo.polygon import (
    DEFAULT_CIRCLE_STEPS,
    MIN_RING_LENGTH,
    bounding_box,
    centroid,
    make_circle_polygon,
    validate_area,
)

router = APIRouter(prefix="/areas", tags=["areas"])


class AreaRequest(BaseModel):
    """An alert area submitted from the setup form."""

    area: AlertArea


class CirclePolygonRequest(BaseModel):
    center: Coordinate
    radius_km: float = Field(..., gt=0, description="Circle radius in km")
    steps: int = Field(default=DEFAULT_CIRCLE_STEPS, ge=3, le=360)


class PointsRequest(BaseModel):
    points: list[Coordinate] = Field(default_factory=list)


def _invalid_reason(area: AlertArea) -> str | None:
    if isinstance(area, CircleArea):
        return None if area.radius_km > 0 else "radius_km must be positive"
    if len(area.ring) < MIN_RING_LENGTH:
        return f"ring needs at least {MIN_RING_LENGTH} coordinates, got {len(area.ring)}"
    return "ring is not closed (first and last coordinates differ)"


@router.post("/validate")
async def validate(request: AreaRequest) -> dict:
    """Check an area before it is saved. Invalid areas would never match."""
    valid = validate_area(request.area)
    result: dict = {"valid": valid, "kind": request.area.kind}
    if not valid:
        result["reason"] = _invalid_reason(request.area)
    elif isinstance(request.area, PolygonArea):
        anchor = centroid(request.area.ring)
        result["centroid"] = anchor.model_dump()
    return result


@router.post("/circle-polygon")
async def circle_polygon(request: CirclePolygonRequest) -> dict:
    """Convert a radius circle into an equivalent polygon area."""
    ring = make_circle_polygon(request.center, request.radius_km, request.steps)
    area = PolygonArea(ring=ring)
    return {"area": area.to_record(), "geojson": area.to_geojson()}


@router.post("/bbox")
async def bbox(request: PointsRequest) -> dict:
    return bounding_box(request.points).to_record()
