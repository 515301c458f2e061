"""FastAPI application factory."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from bopeep.api.deps import get_duplicate_window, get_geohash_precision  # noqa: E402
from bopeep.api.routes import areas, geohash, matches, reports  # noqa: E402
from bopeep.services.duplicates import DuplicateWindow  # noqa: E402

app = FastAPI(
    title="Bo Peep Alert Engine",
    description="Geospatial matching of stray-sheep sightings to farmers' alert areas",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(geohash.router, prefix="/api")
app.include_router(areas.router, prefix="/api")
app.include_router(matches.router, prefix="/api")
app.include_router(reports.router, prefix="/api")


@app.get("/api/health")
async def health(
    window: DuplicateWindow = Depends(get_duplicate_window),
    precision: int = Depends(get_geohash_precision),
):
    return {
        "status": "ok",
        "duplicate_radius_km": window.max_distance_km,
        "duplicate_max_age_hours": window.max_age.total_seconds() / 3600,
        "geohash_precision": precision,
    }
