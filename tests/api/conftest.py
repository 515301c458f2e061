"""Shared fixtures for API tests."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from bopeep.api.app import app
from bopeep.api.deps import get_clock

NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def test_app(monkeypatch):
    """FastAPI app with a pinned clock and default engine settings."""
    for name in (
        "BOPEEP_DUPLICATE_RADIUS_KM",
        "BOPEEP_DUPLICATE_MAX_AGE_HOURS",
        "BOPEEP_GEOHASH_PRECISION",
    ):
        monkeypatch.delenv(name, raising=False)
    app.dependency_overrides[get_clock] = lambda: NOW
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
