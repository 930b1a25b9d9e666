"""RecordStore - the immutable snapshot of everything the driver has logged."""

import logging
from dataclasses import dataclass, field, replace
from itertools import chain
from typing import Iterable, Optional, Tuple

from .car import Car
from .settings import Settings
from .fuel_log import FuelLog
from .trip_log import TripLog, TripType, DEFAULT_PLATFORM
from .expense_log import ExpenseLog, ExpenseCategory
from .dates import parse_record_date
from .errors import InvalidRecordError, OdometerError, RecordNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordStore:
    """
    Car profile, settings and the three log collections.

    A store is never mutated: every write returns a new store, so the
    metrics engine can treat whatever it is handed as a stable snapshot.
    Newest logs come first, matching the order they are displayed in.
    """

    car: Optional[Car] = None
    settings: Settings = field(default_factory=Settings)
    fuel_logs: Tuple[FuelLog, ...] = ()
    trip_logs: Tuple[TripLog, ...] = ()
    expense_logs: Tuple[ExpenseLog, ...] = ()

    def __post_init__(self):
        # Accept any iterable, store tuples so the snapshot stays hashable
        for name in ("fuel_logs", "trip_logs", "expense_logs"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def next_id(self) -> int:
        """Next free record id, unique across all collections."""
        ids = [r.id for r in chain(self.fuel_logs, self.trip_logs, self.expense_logs)]
        return max(ids, default=0) + 1

    def get_trip(self, trip_id: int) -> TripLog:
        for trip in self.trip_logs:
            if trip.id == trip_id:
                return trip
        raise RecordNotFoundError(f"No trip with id {trip_id}")

    # -------------------------------------------------------------------------
    # Profile and settings
    # -------------------------------------------------------------------------

    def with_car(self, car: Car) -> "RecordStore":
        return replace(self, car=car)

    def with_settings(self, settings: Settings) -> "RecordStore":
        return replace(self, settings=settings)

    # -------------------------------------------------------------------------
    # Fuel logs
    # -------------------------------------------------------------------------

    def add_fuel_log(
        self,
        date: str,
        odometer: float,
        litres: float,
        price_per_litre: float,
        full_tank: bool = True,
    ) -> "RecordStore":
        """
        Append a fuel purchase.

        The reading must be above the car's current odometer; the write is
        refused otherwise. A successful fill advances the car's odometer.
        """
        parse_record_date(date)
        _require_positive(litres=litres, price_per_litre=price_per_litre)
        car = self.car
        if car is not None:
            if odometer <= car.odometer:
                logger.warning(
                    "Refusing fuel log at %s: car odometer is %s", odometer, car.odometer
                )
                raise OdometerError(odometer, car.odometer)
            car = car.advanced_to(odometer)

        entry = FuelLog(
            id=self.next_id(),
            date=date,
            odometer=odometer,
            litres=litres,
            price_per_litre=price_per_litre,
            full_tank=full_tank,
        )
        logger.debug("Adding fuel log %s", entry)
        return replace(self, car=car, fuel_logs=(entry,) + self.fuel_logs)

    def delete_fuel_log(self, log_id: int) -> "RecordStore":
        return replace(self, fuel_logs=_without(self.fuel_logs, log_id, "fuel log"))

    # -------------------------------------------------------------------------
    # Trip logs
    # -------------------------------------------------------------------------

    def add_trip(
        self,
        date: str,
        km: float,
        trip_type: TripType = TripType.BUSINESS,
        platform: Optional[str] = DEFAULT_PLATFORM,
        duration_hours: float = 0.0,
        earnings: float = 0.0,
    ) -> "RecordStore":
        """Append a trip. Personal trips have their earnings zeroed."""
        parse_record_date(date)
        _require_non_negative(km=km, duration_hours=duration_hours, earnings=earnings)
        entry = TripLog(
            id=self.next_id(),
            date=date,
            km=km,
            type=trip_type,
            platform=platform,
            duration_hours=duration_hours or 0.0,
            earnings=earnings or 0.0,
        )
        logger.debug("Adding trip %s", entry)
        return replace(self, trip_logs=(entry,) + self.trip_logs)

    def update_trip(self, trip: TripLog) -> "RecordStore":
        """Replace the trip sharing `trip.id`, keeping its position."""
        parse_record_date(trip.date)
        _require_non_negative(
            km=trip.km, duration_hours=trip.duration_hours, earnings=trip.earnings
        )
        self.get_trip(trip.id)
        trips = tuple(trip if t.id == trip.id else t for t in self.trip_logs)
        return replace(self, trip_logs=trips)

    def delete_trip(self, trip_id: int) -> "RecordStore":
        return replace(self, trip_logs=_without(self.trip_logs, trip_id, "trip"))

    # -------------------------------------------------------------------------
    # Expense logs
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        date: str,
        category: ExpenseCategory,
        cost: float,
        note: Optional[str] = None,
    ) -> "RecordStore":
        parse_record_date(date)
        _require_non_negative(cost=cost)
        entry = ExpenseLog(
            id=self.next_id(), date=date, category=category, cost=cost, note=note
        )
        logger.debug("Adding expense %s", entry)
        return replace(self, expense_logs=(entry,) + self.expense_logs)

    def delete_expense(self, expense_id: int) -> "RecordStore":
        return replace(
            self, expense_logs=_without(self.expense_logs, expense_id, "expense")
        )

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    def restored(
        self,
        car: Optional[Car] = None,
        settings: Optional[Settings] = None,
        fuel_logs: Optional[Iterable[FuelLog]] = None,
        trip_logs: Optional[Iterable[TripLog]] = None,
        expense_logs: Optional[Iterable[ExpenseLog]] = None,
    ) -> "RecordStore":
        """
        Replace whichever parts are given, leaving the rest untouched.

        Used when restoring a backup that only carries some collections.
        """
        changes = {}
        if car is not None:
            changes["car"] = car
        if settings is not None:
            changes["settings"] = settings
        if fuel_logs is not None:
            changes["fuel_logs"] = tuple(fuel_logs)
        if trip_logs is not None:
            changes["trip_logs"] = tuple(trip_logs)
        if expense_logs is not None:
            changes["expense_logs"] = tuple(expense_logs)
        return replace(self, **changes)


def _without(records: tuple, record_id: int, kind: str) -> tuple:
    """Drop the record with `record_id`, or raise if there is none."""
    kept = tuple(r for r in records if r.id != record_id)
    if len(kept) == len(records):
        raise RecordNotFoundError(f"No {kind} with id {record_id}")
    return kept


def _require_positive(**values) -> None:
    for name, value in values.items():
        if value is None or not value > 0:
            raise InvalidRecordError(f"{name} must be greater than 0 (got {value!r})")


def _require_non_negative(**values) -> None:
    # None means unknown (duration, earnings) and is stored as 0
    for name, value in values.items():
        if value is not None and not value >= 0:
            raise InvalidRecordError(f"{name} cannot be negative (got {value!r})")
