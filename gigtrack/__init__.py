"""
Gig driver operations tracking.

This package provides records and metrics for a delivery driver:
- Car, Settings: Vehicle profile and business settings
- FuelLog, TripLog, ExpenseLog: Logged records
- RecordStore: Immutable snapshot of all records
- estimate_fuel_efficiency: Global cost per distance from fuel history
- resolve_window, step_window: Calendar reporting windows
- aggregate_period: Period financial summary under accounting toggles
- enrich_trips: Per-trip fuel cost, net profit and hourly rate
- weekly_goal_status: Current week's earnings against the goal
"""

from .errors import GigTrackError, InvalidRecordError, OdometerError, RecordNotFoundError
from .car import Car, FuelType
from .settings import Settings
from .fuel_log import FuelLog
from .trip_log import TripLog, TripType
from .expense_log import ExpenseLog, ExpenseCategory
from .record_store import RecordStore
from .calculations import FuelEstimate, DEFAULT_EFFICIENCY, estimate_fuel_efficiency, fill_efficiencies
from .period import Granularity, Window, resolve_window, step_window, start_of_week
from .aggregation import (
    Toggles,
    PeriodMetrics,
    aggregate_period,
    filter_records,
    earnings_by_platform,
    hourly_by_platform,
    cost_breakdown,
)
from .enrichment import EnrichedTrip, enrich_trips
from .weekly_goal import WeeklyGoalStatus, weekly_goal_status
from .loader import load_store, save_store, export_backup, import_backup

__all__ = [
    "GigTrackError",
    "InvalidRecordError",
    "OdometerError",
    "RecordNotFoundError",
    "Car",
    "FuelType",
    "Settings",
    "FuelLog",
    "TripLog",
    "TripType",
    "ExpenseLog",
    "ExpenseCategory",
    "RecordStore",
    "FuelEstimate",
    "DEFAULT_EFFICIENCY",
    "estimate_fuel_efficiency",
    "fill_efficiencies",
    "Granularity",
    "Window",
    "resolve_window",
    "step_window",
    "start_of_week",
    "Toggles",
    "PeriodMetrics",
    "aggregate_period",
    "filter_records",
    "earnings_by_platform",
    "hourly_by_platform",
    "cost_breakdown",
    "EnrichedTrip",
    "enrich_trips",
    "WeeklyGoalStatus",
    "weekly_goal_status",
    "load_store",
    "save_store",
    "export_backup",
    "import_backup",
]
