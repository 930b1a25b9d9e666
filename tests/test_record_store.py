#!/usr/bin/env python3
"""Tests for the immutable record store."""
import pytest
from gigtrack import (
    RecordStore,
    Car,
    Settings,
    TripType,
    ExpenseCategory,
    OdometerError,
    RecordNotFoundError,
    InvalidRecordError,
)
from dataclasses import replace


@pytest.fixture
def store():
    return RecordStore(car=Car("Corolla", odometer=1000))


class TestFuelLogs:
    """Tests for adding and deleting fuel logs."""

    def test_add_advances_odometer(self, store):
        updated = store.add_fuel_log("2024-05-01", 1400, 40, 1.5)
        assert updated.car.odometer == 1400
        assert updated.fuel_logs[0].odometer == 1400
        assert updated.fuel_logs[0].total_price == pytest.approx(60.0)

    def test_add_does_not_mutate_original(self, store):
        store.add_fuel_log("2024-05-01", 1400, 40, 1.5)
        assert store.fuel_logs == ()
        assert store.car.odometer == 1000

    def test_rejects_reading_not_above_car(self, store):
        with pytest.raises(OdometerError):
            store.add_fuel_log("2024-05-01", 1000, 40, 1.5)
        with pytest.raises(OdometerError):
            store.add_fuel_log("2024-05-01", 900, 40, 1.5)

    def test_second_fill_must_pass_first(self, store):
        updated = store.add_fuel_log("2024-05-01", 1400, 40, 1.5)
        with pytest.raises(OdometerError):
            updated.add_fuel_log("2024-05-08", 1300, 40, 1.5)

    def test_without_car_no_check(self):
        updated = RecordStore().add_fuel_log("2024-05-01", 5, 40, 1.5)
        assert updated.car is None
        assert len(updated.fuel_logs) == 1

    def test_rejects_invalid_date(self, store):
        with pytest.raises(InvalidRecordError):
            store.add_fuel_log("2024-02-30", 1400, 40, 1.5)

    def test_delete(self, store):
        updated = store.add_fuel_log("2024-05-01", 1400, 40, 1.5)
        log_id = updated.fuel_logs[0].id
        assert updated.delete_fuel_log(log_id).fuel_logs == ()

    def test_delete_unknown(self, store):
        with pytest.raises(RecordNotFoundError):
            store.delete_fuel_log(42)


class TestTrips:
    """Tests for adding, editing and deleting trips."""

    def test_add_newest_first_with_unique_ids(self, store):
        updated = store.add_trip("2024-05-01", 10, earnings=20)
        updated = updated.add_trip("2024-05-02", 20, earnings=40)
        assert [t.km for t in updated.trip_logs] == [20, 10]
        assert len({t.id for t in updated.trip_logs}) == 2

    def test_ids_unique_across_collections(self, store):
        updated = store.add_trip("2024-05-01", 10)
        updated = updated.add_expense("2024-05-01", ExpenseCategory.OTHER, 5)
        assert updated.expense_logs[0].id != updated.trip_logs[0].id

    def test_personal_trip_has_no_earnings(self, store):
        updated = store.add_trip("2024-05-01", 10, trip_type=TripType.PERSONAL, earnings=50)
        assert updated.trip_logs[0].earnings == 0

    def test_update_in_place(self, store):
        updated = store.add_trip("2024-05-01", 10, earnings=20)
        updated = updated.add_trip("2024-05-02", 20, earnings=40)
        original = updated.trip_logs[1]
        edited = updated.update_trip(replace(original, earnings=25))
        assert edited.trip_logs[1].earnings == 25
        assert edited.trip_logs[1].id == original.id
        assert edited.trip_logs[0] == updated.trip_logs[0]

    def test_update_unknown(self, store):
        updated = store.add_trip("2024-05-01", 10)
        with pytest.raises(RecordNotFoundError):
            updated.update_trip(replace(updated.trip_logs[0], id=999))

    def test_delete(self, store):
        updated = store.add_trip("2024-05-01", 10)
        assert updated.delete_trip(updated.trip_logs[0].id).trip_logs == ()


class TestExpenses:
    """Tests for expenses."""

    def test_add_and_delete(self, store):
        updated = store.add_expense("2024-05-01", ExpenseCategory.INSURANCE, 85, "monthly")
        expense = updated.expense_logs[0]
        assert expense.cost == 85
        assert expense.note == "monthly"
        assert updated.delete_expense(expense.id).expense_logs == ()

    def test_delete_unknown(self, store):
        with pytest.raises(RecordNotFoundError):
            store.delete_expense(1)


class TestRestored:
    """Tests for partial restore."""

    def test_absent_collections_untouched(self, store):
        original = store.add_trip("2024-05-01", 10).add_expense(
            "2024-05-01", ExpenseCategory.OTHER, 5
        )
        restored = original.restored(settings=Settings(tax_rate_percent=20))
        assert restored.settings.tax_rate_percent == 20
        assert restored.trip_logs == original.trip_logs
        assert restored.expense_logs == original.expense_logs
        assert restored.car == original.car

    def test_empty_list_replaces(self, store):
        original = store.add_trip("2024-05-01", 10)
        assert original.restored(trip_logs=[]).trip_logs == ()

    def test_lists_stored_as_tuples(self):
        store = RecordStore(trip_logs=[])
        assert store.trip_logs == ()
        hash(store)


class TestWriteValidation:
    """Tests for value checks applied before anything is stored."""

    @pytest.mark.parametrize("litres,price", [(0, 1.5), (-40, 1.5), (40, 0), (40, -1.5)])
    def test_fuel_needs_positive_litres_and_price(self, store, litres, price):
        with pytest.raises(InvalidRecordError):
            store.add_fuel_log("2024-05-01", 1400, litres, price)

    def test_bad_fill_checked_before_odometer(self, store):
        """A bad fill is reported as such even if the odometer is also wrong."""
        with pytest.raises(InvalidRecordError):
            store.add_fuel_log("2024-05-01", 900, -40, 1.5)

    def test_negative_fill_cannot_reach_estimate(self, store):
        updated = store.add_fuel_log("2024-05-01", 1400, 40, 1.5)
        with pytest.raises(InvalidRecordError):
            updated.add_fuel_log("2024-05-08", 1900, -40, 1.5)
        assert len(updated.fuel_logs) == 1

    @pytest.mark.parametrize(
        "km,duration,earnings", [(-50, 1, 10), (50, -1, 10), (50, 1, -10)]
    )
    def test_trip_rejects_negative_values(self, store, km, duration, earnings):
        with pytest.raises(InvalidRecordError):
            store.add_trip("2024-05-01", km, duration_hours=duration, earnings=earnings)

    def test_trip_zero_values_allowed(self, store):
        updated = store.add_trip("2024-05-01", 0, duration_hours=0, earnings=0)
        assert updated.trip_logs[0].km == 0

    def test_update_rejects_negative_km(self, store):
        updated = store.add_trip("2024-05-01", 10)
        with pytest.raises(InvalidRecordError):
            updated.update_trip(replace(updated.trip_logs[0], km=-5))

    def test_expense_rejects_negative_cost(self, store):
        with pytest.raises(InvalidRecordError):
            store.add_expense("2024-05-01", ExpenseCategory.OTHER, -100)

    def test_rejects_date_with_trailing_junk(self, store):
        with pytest.raises(InvalidRecordError):
            store.add_trip("2024-01-15garbage", 10)
