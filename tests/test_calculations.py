#!/usr/bin/env python3
"""Tests for fuel efficiency estimation."""
import pytest
from gigtrack import FuelLog, FuelEstimate, DEFAULT_EFFICIENCY, estimate_fuel_efficiency, fill_efficiencies
from gigtrack.calculations import full_tank_distance, sort_by_odometer


def fill(log_id, odometer, litres=40, price=1.50, full=True, date="2024-05-01"):
    return FuelLog(log_id, date, odometer, litres, price, full)


class TestFullTankDistance:
    """Tests for full_tank_distance helper."""

    def test_both_full(self):
        assert full_tank_distance(fill(2, 1500), fill(1, 1000)) == 500

    def test_partial_fill_not_measurable(self):
        assert full_tank_distance(fill(2, 1500, full=False), fill(1, 1000)) is None
        assert full_tank_distance(fill(2, 1500), fill(1, 1000, full=False)) is None

    def test_non_positive_delta_skipped(self):
        """Duplicate or out-of-order readings never count."""
        assert full_tank_distance(fill(2, 1000), fill(1, 1000)) is None
        assert full_tank_distance(fill(2, 900), fill(1, 1000)) is None


class TestEstimateFuelEfficiency:
    """Tests for estimate_fuel_efficiency."""

    def test_two_full_fills(self):
        """Cost is the later fill's price over the distance between fills."""
        logs = [fill(1, 1000, litres=35, price=1.80), fill(2, 1500, litres=40, price=1.50)]
        result = estimate_fuel_efficiency(logs)
        assert result.avg_cost_per_distance == pytest.approx(0.12)
        assert result.avg_efficiency == pytest.approx(12.5)
        assert result.is_estimate is False

    def test_input_order_does_not_matter(self):
        logs = [fill(2, 1500), fill(1, 1000)]
        assert estimate_fuel_efficiency(logs) == estimate_fuel_efficiency(list(reversed(logs)))

    def test_accumulates_over_several_intervals(self):
        logs = [
            fill(1, 1000),
            fill(2, 1500, litres=40, price=1.50),  # 500 km, $60
            fill(3, 2100, litres=50, price=2.00),  # 600 km, $100
        ]
        result = estimate_fuel_efficiency(logs)
        assert result.avg_cost_per_distance == pytest.approx(160 / 1100)
        assert result.avg_efficiency == pytest.approx(1100 / 90)
        assert result.is_estimate is False

    def test_partial_fill_breaks_interval(self):
        """Only pairs where both fills are full contribute."""
        logs = [
            fill(1, 1000),
            fill(2, 1300, litres=20, full=False),
            fill(3, 1800, litres=40, price=2.00),
            fill(4, 2300, litres=50, price=2.00),
        ]
        result = estimate_fuel_efficiency(logs)
        # Only 1800 -> 2300 is measurable
        assert result.avg_cost_per_distance == pytest.approx(100 / 500)
        assert result.avg_efficiency == pytest.approx(10.0)

    def test_single_log_falls_back(self):
        result = estimate_fuel_efficiency([fill(1, 1000, price=2.00)])
        assert result.is_estimate is True
        assert result.avg_efficiency == 10
        assert result.avg_cost_per_distance == pytest.approx(0.20)

    def test_no_full_pair_uses_latest_price(self):
        """Fallback uses the price of the highest-odometer fill."""
        logs = [
            fill(1, 1000, price=1.00, full=False),
            fill(2, 1500, price=3.00, full=False),
        ]
        result = estimate_fuel_efficiency(logs)
        assert result.is_estimate is True
        assert result.avg_efficiency == DEFAULT_EFFICIENCY
        assert result.avg_cost_per_distance == pytest.approx(0.30)

    def test_duplicate_odometer_falls_back(self):
        logs = [fill(1, 1000), fill(2, 1000)]
        assert estimate_fuel_efficiency(logs).is_estimate is True

    def test_no_logs(self):
        """No data is distinct from a low-confidence estimate."""
        result = estimate_fuel_efficiency([])
        assert result == FuelEstimate(0.0, 0.0, False)


class TestFillEfficiencies:
    """Tests for per-fill efficiency."""

    def test_highest_odometer_first(self):
        logs = [fill(1, 1000), fill(2, 1500)]
        assert [log.id for log in sort_by_odometer(logs)] == [2, 1]

    def test_efficiency_per_fill(self):
        logs = [fill(1, 1000), fill(2, 1500, litres=40), fill(3, 1900, litres=40, full=False)]
        result = fill_efficiencies(logs)
        assert [log.id for log, _ in result] == [3, 2, 1]
        assert result[0][1] is None
        assert result[1][1] == pytest.approx(12.5)
        assert result[2][1] is None
