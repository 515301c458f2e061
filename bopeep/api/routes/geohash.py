"""Geohash encode/decode endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from bopeep.errors import InvalidGeohashError
from bopeep.services.geo import geohash as codec

router = APIRouter(prefix="/geohash", tags=["geohash"])


@router.get("/encode")
async def encode_point(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    precision: int = Query(default=codec.DEFAULT_PRECISION, ge=1, le=12),
) -> dict:
    return {"geohash": codec.encode(lat, lng, precision), "precision": precision}


@router.get("/{geohash}")
async def describe_cell(geohash: str) -> dict:
    """Centre, extent and neighbouring cells of a geohash."""
    try:
        cell = codec.bounds(geohash)
        adjacent = codec.neighbors(geohash)
    except InvalidGeohashError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "geohash": geohash.lower(),
        "center": {"lat": cell.lat, "lng": cell.lng},
        "bounds": {
            "min_lat": cell.min_lat,
            "max_lat": cell.max_lat,
            "min_lng": cell.min_lng,
            "max_lng": cell.max_lng,
        },
        "neighbors": adjacent,
    }
