# tests/test_parking_service.py
"""Unit tests for parking occupancy and the park geofence."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient
from app.config import settings
from app.database import get_db
from app.main import app
from app.services.parking_service import adjust_occupancy, check_in, parking_level
from app.utils.geo import closest_parking_lot, haversine_km, is_in_park


def make_lot(occupied=10, total_spots=64):
    lot = MagicMock()
    lot.lot_id = "lot1"
    lot.occupied = occupied
    lot.total_spots = total_spots
    return lot


def db_returning(lot):
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = lot
    return db


@pytest.fixture
def no_remote():
    with patch("app.services.parking_service.get_remote_client", return_value=None):
        yield


class TestParkingLevel:
    @pytest.mark.parametrize("occupied,expected", [(0, "low"), (31, "low"), (32, "medium"),
                                                    (51, "medium"), (52, "high"), (64, "high")])
    def test_parking_level(self, occupied, expected):
        assert parking_level(occupied, 64) == expected

    def test_empty_lot_is_low(self):
        assert parking_level(0, 0) == "low"


@pytest.mark.usefixtures("no_remote")
class TestAdjustOccupancy:
    @pytest.mark.asyncio
    async def test_adjust_increments(self):
        lot = make_lot(occupied=42)
        await adjust_occupancy(db_returning(lot), "lot1", 1)
        assert lot.occupied == 43

    @pytest.mark.asyncio
    async def test_adjust_clamped_to_capacity(self):
        lot = make_lot(occupied=64)
        await adjust_occupancy(db_returning(lot), "lot1", 1)
        assert lot.occupied == 64

    @pytest.mark.asyncio
    async def test_adjust_never_negative(self):
        lot = make_lot(occupied=0)
        await adjust_occupancy(db_returning(lot), "lot1", -1)
        assert lot.occupied == 0

    @pytest.mark.asyncio
    async def test_new_lot_created_from_config(self):
        db = db_returning(None)
        lot = await adjust_occupancy(db, "lot1", 1)
        db.add.assert_called_once()
        db.commit.assert_called()
        assert lot.name == "Main Parking Lot"
        assert lot.occupied == 1

    @pytest.mark.asyncio
    async def test_check_in_outside_park_ignored(self):
        db = MagicMock()
        assert await check_in(db, 40.7128, -74.0060) is None
        db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_check_in_inside_park_counts(self):
        lot = make_lot(occupied=5)
        await check_in(db_returning(lot), settings.PARK_CENTER_LAT, settings.PARK_CENTER_LNG)
        assert lot.occupied == 6


class TestParkingReplication:
    @pytest.mark.asyncio
    async def test_change_upserted_to_remote(self):
        remote = MagicMock()
        lot = make_lot(occupied=10)
        with patch("app.services.parking_service.get_remote_client", return_value=remote), \
             patch("app.services.parking_service.fire_and_forget") as forget:
            await adjust_occupancy(db_returning(lot), "lot1", 1)

        table, record = remote.upsert.call_args.args
        assert table == "parking_data"
        assert record["lot_id"] == "lot1"
        assert record["occupied"] == 11
        assert "last_updated" in record
        assert remote.upsert.call_args.kwargs["on_conflict"] == "lot_id"
        forget.assert_called_once()

    @pytest.mark.asyncio
    async def test_no_remote_configured_skips_replication(self):
        with patch("app.services.parking_service.get_remote_client", return_value=None), \
             patch("app.services.parking_service.fire_and_forget") as forget:
            await adjust_occupancy(db_returning(make_lot()), "lot1", 1)
        forget.assert_not_called()


class TestLotCapacityEndpoint:
    @pytest.fixture
    def client_with_db(self):
        db = db_returning(make_lot(occupied=40))
        app.dependency_overrides[get_db] = lambda: db
        yield TestClient(app), db
        app.dependency_overrides.clear()

    def test_unconfigured_lot_returns_404(self, client_with_db):
        client, db = client_with_db
        resp = client.put("/api/v1/parking/lot99/capacity", json={"total_spots": 10})
        assert resp.status_code == 404
        db.add.assert_not_called()
        db.commit.assert_not_called()

    def test_configured_lot_capacity_updated(self, client_with_db):
        client, db = client_with_db
        resp = client.put("/api/v1/parking/lot1/capacity", json={"total_spots": 30})
        assert resp.status_code == 200
        assert resp.json()["total_spots"] == 30
        db.commit.assert_called_once()


class TestGeo:
    def test_zero_distance(self):
        assert haversine_km(33.9784, -84.1315, 33.9784, -84.1315) == 0

    def test_one_degree_latitude(self):
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_geofence(self):
        assert is_in_park(33.9790, -84.1320)
        assert not is_in_park(33.99, -84.1315)

    def test_closest_lot(self):
        lots = {"north": {"lat": 34.0, "lng": -84.1}, "south": {"lat": 33.9, "lng": -84.1}}
        assert closest_parking_lot(33.91, -84.1, lots) == "south"
        assert closest_parking_lot(33.91, -84.1, {}) is None
