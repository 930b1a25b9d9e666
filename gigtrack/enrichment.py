"""Per-trip profitability figures."""

from dataclasses import dataclass
from typing import Iterable, List

from .calculations import FuelEstimate
from .dates import parse_record_date
from .trip_log import TripLog


@dataclass(frozen=True)
class EnrichedTrip:
    """A trip with its estimated fuel cost, net profit and hourly rate."""

    trip: TripLog
    estimated_fuel_cost: float
    net_profit: float
    hourly_rate: float


def enrich_trip(trip: TripLog, fuel_estimate: FuelEstimate) -> EnrichedTrip:
    """
    Derive profitability for a single trip.

    Personal trips go through the same arithmetic; with no earnings their
    net profit is simply the negative fuel cost.
    """
    earnings = trip.earnings or 0
    fuel_cost = trip.km * fuel_estimate.avg_cost_per_distance
    hourly = earnings / trip.duration_hours if trip.duration_hours > 0 and earnings > 0 else 0.0
    return EnrichedTrip(
        trip=trip,
        estimated_fuel_cost=fuel_cost,
        net_profit=earnings - fuel_cost,
        hourly_rate=hourly,
    )


def enrich_trips(
    trip_logs: Iterable[TripLog], fuel_estimate: FuelEstimate
) -> List[EnrichedTrip]:
    """Enrich every trip, newest first."""
    ordered = sorted(trip_logs, key=lambda t: parse_record_date(t.date), reverse=True)
    return [enrich_trip(trip, fuel_estimate) for trip in ordered]
