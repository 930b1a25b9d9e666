#!/usr/bin/env python3
"""Tests for trip enrichment."""
import pytest
from gigtrack import TripLog, TripType, FuelEstimate, enrich_trips
from gigtrack.enrichment import enrich_trip

ESTIMATE = FuelEstimate(avg_cost_per_distance=0.12, avg_efficiency=12.5)


class TestEnrichTrip:
    """Tests for enrich_trip."""

    def test_business_trip(self):
        trip = TripLog(1, "2024-05-01", 50, TripType.BUSINESS, "DoorDash", 2.5, 100)
        enriched = enrich_trip(trip, ESTIMATE)
        assert enriched.trip is trip
        assert enriched.estimated_fuel_cost == pytest.approx(6.0)
        assert enriched.net_profit == pytest.approx(94.0)
        assert enriched.hourly_rate == pytest.approx(40.0)

    def test_personal_trip_is_negative_fuel_cost(self):
        trip = TripLog(1, "2024-05-01", 25, TripType.PERSONAL, None, 1)
        enriched = enrich_trip(trip, ESTIMATE)
        assert enriched.net_profit == pytest.approx(-3.0)
        assert enriched.hourly_rate == 0

    def test_no_duration_no_hourly_rate(self):
        trip = TripLog(1, "2024-05-01", 10, TripType.BUSINESS, "Menulog", 0, 30)
        assert enrich_trip(trip, ESTIMATE).hourly_rate == 0

    def test_without_fuel_data(self):
        trip = TripLog(1, "2024-05-01", 10, TripType.BUSINESS, "Menulog", 1, 30)
        enriched = enrich_trip(trip, FuelEstimate())
        assert enriched.estimated_fuel_cost == 0
        assert enriched.net_profit == 30


class TestEnrichTrips:
    """Tests for enrich_trips."""

    def test_newest_first(self):
        trips = [
            TripLog(1, "2024-05-01", 10),
            TripLog(2, "2024-05-03", 10),
            TripLog(3, "2024-05-02", 10),
        ]
        assert [e.trip.id for e in enrich_trips(trips, ESTIMATE)] == [2, 3, 1]

    def test_empty(self):
        assert enrich_trips([], ESTIMATE) == []
