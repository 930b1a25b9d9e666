#!/usr/bin/env python3
"""Tests for the Flask JSON endpoints."""

import pytest

from gigtrack import RecordStore, Car, FuelLog, TripLog, TripType, Settings, save_store
from web.app import app


@pytest.fixture
def client(tmp_path):
    path = tmp_path / "me.yaml"
    store = RecordStore(
        car=Car("Corolla", odometer=1500),
        settings=Settings(tax_rate_percent=10, weekly_goal_amount=200),
        fuel_logs=[
            FuelLog(2, "2024-05-10", 1500, 40, 1.50),
            FuelLog(1, "2024-05-01", 1000, 35, 1.80),
        ],
        trip_logs=[
            TripLog(3, "2024-05-13", 100, TripType.BUSINESS, "DoorDash", 4, 100),
            TripLog(4, "2024-05-14", 50, TripType.PERSONAL, None),
        ],
    )
    save_store(path, store)
    app.config["DATA_FILE"] = path
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestSummary:
    """Tests for /api/summary."""

    def test_month(self, client):
        resp = client.get("/api/summary?period=month&date=2024-05-15")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["start"] == "2024-05-01"
        assert body["end"] == "2024-05-31"
        assert body["is_estimate"] is False
        metrics = body["metrics"]
        assert metrics["total_earnings"] == 100
        assert metrics["fuel_cost_to_use"] == pytest.approx(18.0)
        assert metrics["estimated_tax"] == pytest.approx(8.2)
        assert metrics["net_final"] == pytest.approx(73.8)
        assert body["earnings_by_platform"] == [["DoorDash", 100]]

    def test_toggles(self, client):
        body = client.get(
            "/api/summary?period=month&date=2024-05-15&tax=false&personal_fuel=false"
        ).get_json()
        metrics = body["metrics"]
        assert metrics["fuel_cost_to_use"] == pytest.approx(12.0)
        assert metrics["net_final"] == pytest.approx(88.0)
        assert metrics["toggles"]["include_tax"] is False

    def test_step(self, client):
        body = client.get("/api/summary?period=week&date=2024-05-15&step=-1").get_json()
        assert body["start"] == "2024-05-06"
        assert body["metrics"]["total_earnings"] == 0

    def test_bad_period(self, client):
        assert client.get("/api/summary?period=fortnight").status_code == 400


class TestOtherEndpoints:
    """Tests for trips, fuel, goal and backup endpoints."""

    def test_trips(self, client):
        rows = client.get("/api/trips").get_json()
        assert [r["id"] for r in rows] == [4, 3]
        assert rows[1]["netProfit"] == pytest.approx(88.0)
        assert rows[1]["hourlyRate"] == pytest.approx(25.0)

    def test_fuel(self, client):
        body = client.get("/api/fuel").get_json()
        assert body["estimate"]["avg_efficiency"] == pytest.approx(12.5)
        assert body["logs"][0]["efficiency"] == pytest.approx(12.5)
        assert body["logs"][1]["efficiency"] is None

    def test_goal(self, client):
        body = client.get("/api/goal?today=2024-05-19").get_json()
        assert body["week_start"] == "2024-05-13"
        assert body["current"] == 100
        assert body["percent"] == pytest.approx(50.0)

    def test_backup(self, client):
        body = client.get("/api/backup").get_json()
        assert body["car"]["name"] == "Corolla"
        assert len(body["tripLogs"]) == 2

    def test_missing_data_file(self, client, tmp_path):
        app.config["DATA_FILE"] = tmp_path / "missing.yaml"
        assert client.get("/api/backup").status_code == 404
