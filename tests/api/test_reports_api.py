"""Tests for duplicate checks and sighting evaluation."""

from __future__ import annotations

HERE = {"lat": 54.5, "lng": -2.5}
# Roughly 30 m north of HERE.
NEARBY = {"lat": 54.50027, "lng": -2.5}


def _report(report_id, location, created_at):
    return {
        "id": report_id,
        "location": location,
        "created_at": created_at,
        "tags": ["alone"],
    }


def _owner(owner_id, lat, lng, radius_km):
    return {
        "id": owner_id,
        "area": {"kind": "circle", "center": {"lat": lat, "lng": lng}, "radius_km": radius_km},
        "eligibility": {"subscription_state": "active"},
    }


class TestDuplicateCheck:
    async def test_recent_nearby_report(self, client):
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={
                "location": HERE,
                "recent_reports": [_report("r-1", NEARBY, "2026-03-14T08:30:00Z")],
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["duplicate"] is True
        assert data["report"]["id"] == "r-1"
        assert data["report"]["geohash"].startswith("gcw")

    async def test_stale_report(self, client):
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={
                "location": HERE,
                "recent_reports": [_report("r-1", NEARBY, "2026-03-14T06:30:00Z")],
            },
        )
        assert resp.json() == {"duplicate": False, "report": None}

    async def test_request_overrides_window(self, client):
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={
                "location": HERE,
                "recent_reports": [_report("r-1", NEARBY, "2026-03-14T06:30:00Z")],
                "max_age_hours": 4,
            },
        )
        assert resp.json()["duplicate"] is True

    async def test_environment_radius(self, client, monkeypatch):
        monkeypatch.setenv("BOPEEP_DUPLICATE_RADIUS_KM", "0.01")
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={
                "location": HERE,
                "recent_reports": [_report("r-1", NEARBY, "2026-03-14T08:30:00Z")],
            },
        )
        assert resp.json()["duplicate"] is False

    async def test_flat_lat_lng_reports(self, client):
        report = {
            "id": "r-flat",
            "lat": NEARBY["lat"],
            "lng": NEARBY["lng"],
            "created_at": "2026-03-14T09:00:00Z",
        }
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={"location": HERE, "recent_reports": [report]},
        )
        assert resp.json()["report"]["id"] == "r-flat"

    async def test_rejects_non_positive_radius(self, client):
        resp = await client.post(
            "/api/reports/duplicate-check",
            json={"location": HERE, "max_distance_km": 0},
        )
        assert resp.status_code == 422

    async def test_malformed_report_location(self, client):
        missing_lng = {"id": "r-1", "location": {"lat": 54.5}, "created_at": "2026-03-14T09:00:00Z"}
        as_list = {"id": "r-2", "location": [54.5, -2.5], "created_at": "2026-03-14T09:00:00Z"}
        for bad in (missing_lng, as_list):
            resp = await client.post(
                "/api/reports/duplicate-check",
                json={"location": HERE, "recent_reports": [bad]},
            )
            assert resp.status_code == 422


class TestEvaluate:
    async def test_new_sighting(self, client):
        resp = await client.post(
            "/api/reports/evaluate",
            json={
                "location": HERE,
                "tags": ["near_road", "alone"],
                "description": "Ewe on the verge",
                "walker_id": "walker-7",
                "owners": [
                    _owner("farm-far", 54.52, -2.5, 5),
                    _owner("farm-near", 54.5, -2.5, 1),
                ],
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["duplicate_warning"] is False
        assert data["geohash"].startswith("gcw")
        assert len(data["geohash"]) == 7

        report = data["report"]
        assert report["geohash"] == data["geohash"]
        assert report["status"] == "pending"
        assert report["tags"] == ["near_road", "alone"]
        assert report["walker_id"] == "walker-7"
        assert report["created_at"].startswith("2026-03-14T09:30:00")

        assert [m["owner_id"] for m in data["matches"]] == ["farm-near", "farm-far"]
        assert data["matches"][0]["distance_label"] == "0m"

    async def test_duplicate_warning(self, client):
        resp = await client.post(
            "/api/reports/evaluate",
            json={
                "location": HERE,
                "recent_reports": [_report("r-1", NEARBY, "2026-03-14T09:00:00Z")],
                "owners": [_owner("farm-near", 54.5, -2.5, 1)],
            },
        )
        data = resp.json()
        assert data["success"] is False
        assert data["duplicate_warning"] is True
        assert data["error"] == "A similar report already exists nearby"
        assert data["duplicate_of"]["id"] == "r-1"
        assert data["matches"] == []
        assert "report" not in data

    async def test_precision_from_environment(self, client, monkeypatch):
        monkeypatch.setenv("BOPEEP_GEOHASH_PRECISION", "9")
        resp = await client.post("/api/reports/evaluate", json={"location": HERE})
        data = resp.json()
        assert len(data["geohash"]) == 9
        assert data["report"]["geohash"] == data["geohash"]

    async def test_unknown_tag(self, client):
        resp = await client.post(
            "/api/reports/evaluate",
            json={"location": HERE, "tags": ["wolf"]},
        )
        assert resp.status_code == 422
