"""Tests for the SightingReport contract."""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from bopeep.contracts.common import Coordinate
from bopeep.contracts.enums import ReportStatus, SheepTag
from bopeep.contracts.sighting import SightingReport

NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


class TestSightingReport:
    def test_geohash_derived_from_location(self):
        report = SightingReport(
            id="r-1",
            location=Coordinate(lat=57.64911, lng=10.40744),
            created_at=NOW,
        )
        assert report.geohash == "u4pruyd"

    def test_explicit_geohash_kept(self):
        report = SightingReport(
            id="r-1",
            location=Coordinate(lat=57.64911, lng=10.40744),
            created_at=NOW,
            geohash="u4pr",
        )
        assert report.geohash == "u4pr"

    def test_flat_lat_lng_record(self):
        report = SightingReport.from_record(
            {
                "id": "r-2",
                "walker_id": "w-1",
                "lat": 54.5,
                "lng": -2.5,
                "created_at": "2026-03-14T08:00:00Z",
                "tags": ["alone", "near_road"],
                "status": "claimed",
            }
        )
        assert report.location == Coordinate(lat=54.5, lng=-2.5)
        assert report.created_at == datetime(2026, 3, 14, 8, 0, tzinfo=timezone.utc)
        assert report.tags == ["alone", "near_road"]
        assert report.status == ReportStatus.CLAIMED
        assert len(report.geohash) == 7

    def test_defaults(self):
        report = SightingReport(id="r-3", location=Coordinate(lat=0, lng=0), created_at=NOW)
        assert report.status == ReportStatus.PENDING
        assert report.tags == []
        assert report.walker_id is None

    def test_unknown_tag_rejected(self):
        with pytest.raises(Exception):
            SightingReport(
                id="r-4",
                location=Coordinate(lat=0, lng=0),
                created_at=NOW,
                tags=["purple_fleece"],
            )

    def test_missing_location_rejected(self):
        with pytest.raises(ValidationError):
            SightingReport(id="r-5", created_at=NOW)

    def test_location_missing_lng_rejected(self):
        with pytest.raises(ValidationError):
            SightingReport.model_validate(
                {"id": "r-6", "location": {"lat": 54.5}, "created_at": NOW}
            )

    def test_location_as_list_rejected(self):
        with pytest.raises(ValidationError):
            SightingReport.model_validate(
                {"id": "r-7", "location": [54.5, -2.5], "created_at": NOW}
            )

    def test_non_numeric_location_rejected(self):
        with pytest.raises(ValidationError):
            SightingReport.model_validate(
                {"id": "r-8", "location": {"lat": None, "lng": -2.5}, "created_at": NOW}
            )


class TestNewSighting:
    def test_new_mints_pending_report(self):
        report = SightingReport.new(
            Coordinate(lat=54.5, lng=-2.5),
            NOW,
            walker_id="w-9",
            tags=[SheepTag.INJURED],
            description="Limping ewe by the cattle grid",
        )
        assert uuid.UUID(report.id).version == 4
        assert report.status == ReportStatus.PENDING
        assert report.created_at == NOW
        assert report.tags == ["injured"]
        assert report.geohash.startswith("gcw")

    def test_new_ids_are_unique(self):
        loc = Coordinate(lat=54.5, lng=-2.5)
        assert SightingReport.new(loc, NOW).id != SightingReport.new(loc, NOW).id

    def test_precision(self):
        report = SightingReport.new(Coordinate(lat=54.5, lng=-2.5), NOW, precision=9)
        assert len(report.geohash) == 9

    def test_to_record_nested_location(self):
        report = SightingReport.new(Coordinate(lat=54.5, lng=-2.5), NOW)
        data = report.to_record()
        assert data["location"] == {"lat": 54.5, "lng": -2.5}
        assert data["status"] == "pending"
        assert data["created_at"].startswith("2026-03-14T09:30:00")
        assert "description" not in data
