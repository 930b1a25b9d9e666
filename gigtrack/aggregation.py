"""Period financial summaries - the aggregation engine."""

from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Tuple

from .calculations import FuelEstimate
from .expense_log import ExpenseLog
from .fuel_log import FuelLog
from .period import Window
from .record_store import RecordStore
from .trip_log import TripLog


@dataclass(frozen=True)
class Toggles:
    """Which cost components count against a period's net profit."""

    include_external_expenses: bool = True
    include_tax: bool = True
    include_personal_fuel: bool = True


@dataclass(frozen=True)
class PeriodRecords:
    """The slice of each log collection that falls inside a window."""

    trips: Tuple[TripLog, ...]
    fuel: Tuple[FuelLog, ...]
    expenses: Tuple[ExpenseLog, ...]


@dataclass(frozen=True)
class PeriodMetrics:
    """Financial summary of one reporting window."""

    toggles: Toggles
    total_earnings: float
    total_duration_hours: float
    business_km: float
    personal_km: float
    est_business_fuel_cost: float
    est_personal_fuel_cost: float
    total_other_expenses_raw: float
    total_other_expenses: float
    fuel_cost_to_use: float
    net_profit_before_tax: float
    estimated_tax: float
    net_final: float
    profit_per_distance: float
    hourly_rate: float
    actual_fuel_spend: float
    total_litres_purchased: float

    @property
    def total_costs(self) -> float:
        """Everything deducted from earnings to reach net_final."""
        tax = self.estimated_tax if self.toggles.include_tax else 0.0
        return self.fuel_cost_to_use + self.total_other_expenses + tax

    @property
    def has_activity(self) -> bool:
        return (
            self.total_earnings > 0
            or self.total_other_expenses > 0
            or self.est_personal_fuel_cost > 0
        )


def filter_records(window: Window, store: RecordStore) -> PeriodRecords:
    """Select the trips, fuel logs and expenses dated inside the window."""
    return PeriodRecords(
        trips=tuple(t for t in store.trip_logs if window.contains(t.date)),
        fuel=tuple(f for f in store.fuel_logs if window.contains(f.date)),
        expenses=tuple(e for e in store.expense_logs if window.contains(e.date)),
    )


def aggregate_period(
    window: Window,
    store: RecordStore,
    toggles: Toggles = Toggles(),
    tax_rate_percent: float = 0.0,
    fuel_estimate: FuelEstimate = FuelEstimate(),
) -> PeriodMetrics:
    """
    Summarize earnings, costs and profit for the records inside a window.

    Fuel cost is estimated from distance driven at the global cost per
    distance; the actual money spent at the pump in the window is reported
    alongside it and never reconciled. Tax only applies to a profit.
    """
    records = filter_records(window, store)
    return summarize_records(records, toggles, tax_rate_percent, fuel_estimate)


@lru_cache(maxsize=128)
def summarize_records(
    records: PeriodRecords,
    toggles: Toggles,
    tax_rate_percent: float,
    fuel_estimate: FuelEstimate,
) -> PeriodMetrics:
    """Compute period metrics for an already-filtered record slice."""
    business = [t for t in records.trips if t.is_business]
    personal = [t for t in records.trips if not t.is_business]

    total_earnings = sum(t.earnings or 0 for t in business)
    total_duration = sum(t.duration_hours or 0 for t in business)
    business_km = sum(t.km for t in business)
    personal_km = sum(t.km for t in personal)

    cost_per_distance = fuel_estimate.avg_cost_per_distance
    est_business_fuel = business_km * cost_per_distance
    est_personal_fuel = personal_km * cost_per_distance

    other_raw = sum(e.cost for e in records.expenses)
    other = other_raw if toggles.include_external_expenses else 0.0

    if toggles.include_personal_fuel:
        fuel_cost_to_use = est_business_fuel + est_personal_fuel
    else:
        fuel_cost_to_use = est_business_fuel

    before_tax = total_earnings - fuel_cost_to_use - other
    tax = before_tax * tax_rate_percent / 100 if before_tax > 0 else 0.0
    net_final = before_tax - tax if toggles.include_tax else before_tax

    return PeriodMetrics(
        toggles=toggles,
        total_earnings=total_earnings,
        total_duration_hours=total_duration,
        business_km=business_km,
        personal_km=personal_km,
        est_business_fuel_cost=est_business_fuel,
        est_personal_fuel_cost=est_personal_fuel,
        total_other_expenses_raw=other_raw,
        total_other_expenses=other,
        fuel_cost_to_use=fuel_cost_to_use,
        net_profit_before_tax=before_tax,
        estimated_tax=tax,
        net_final=net_final,
        profit_per_distance=net_final / business_km if business_km > 0 else 0.0,
        hourly_rate=total_earnings / total_duration if total_duration > 0 else 0.0,
        actual_fuel_spend=sum(f.total_price for f in records.fuel),
        total_litres_purchased=sum(f.litres for f in records.fuel),
    )


# =============================================================================
# Breakdowns
# =============================================================================


def earnings_by_platform(trips: Iterable[TripLog]) -> List[Tuple[str, float]]:
    """Business earnings per platform, in the order platforms first appear."""
    totals: "OrderedDict[str, float]" = OrderedDict()
    for trip in trips:
        if not trip.is_business:
            continue
        totals[trip.platform] = totals.get(trip.platform, 0.0) + (trip.earnings or 0)
    return list(totals.items())


def hourly_by_platform(trips: Iterable[TripLog]) -> List[Tuple[str, float]]:
    """Earnings per hour for each platform, best paying first."""
    earnings: "OrderedDict[str, float]" = OrderedDict()
    hours = {}
    for trip in trips:
        if not trip.is_business or not trip.duration_hours > 0:
            continue
        earnings[trip.platform] = earnings.get(trip.platform, 0.0) + (trip.earnings or 0)
        hours[trip.platform] = hours.get(trip.platform, 0.0) + trip.duration_hours
    rates = [
        (platform, round(total / hours[platform], 2) if hours[platform] > 0 else 0.0)
        for platform, total in earnings.items()
    ]
    return sorted(rates, key=lambda item: item[1], reverse=True)


def cost_breakdown(metrics: PeriodMetrics) -> List[Tuple[str, float]]:
    """Where the period's earnings went, as labelled slices."""
    return [
        ("Bus. Fuel", metrics.est_business_fuel_cost),
        ("Pers. Fuel", metrics.est_personal_fuel_cost),
        ("Expenses", metrics.total_other_expenses),
        ("Est. Tax", metrics.estimated_tax),
        ("Net Profit", metrics.net_final),
    ]
