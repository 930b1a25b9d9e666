"""Progress towards the weekly earnings goal."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .calculations import FuelEstimate
from .dates import parse_record_date
from .period import start_of_week
from .trip_log import TripLog


@dataclass(frozen=True)
class WeeklyGoalStatus:
    """Earnings for the current week measured against the goal."""

    current: float
    percent: float
    week_profit_per_distance: float
    week_start: Optional[date] = None
    week_business_km: float = 0.0
    week_estimated_fuel: float = 0.0
    week_net: float = 0.0


def weekly_goal_status(
    trip_logs: Iterable[TripLog],
    weekly_goal_amount: float,
    fuel_estimate: FuelEstimate,
    today: Optional[date] = None,
) -> WeeklyGoalStatus:
    """
    Calculate this week's earnings and goal progress.

    The week is the real Monday-start week containing `today`, regardless
    of any window being viewed. Business trips dated on or after Monday
    count. Progress is capped at 100 percent.
    """
    if today is None:
        today = date.today()
    week_start = start_of_week(today)

    week_trips = [
        t for t in trip_logs
        if t.is_business and parse_record_date(t.date) >= week_start
    ]
    earnings = sum(t.earnings or 0 for t in week_trips)
    business_km = sum(t.km for t in week_trips)

    if weekly_goal_amount > 0:
        percent = min(100.0, earnings / weekly_goal_amount * 100)
    else:
        percent = 0.0

    estimated_fuel = business_km * fuel_estimate.avg_cost_per_distance
    net = earnings - estimated_fuel

    return WeeklyGoalStatus(
        current=earnings,
        percent=percent,
        week_profit_per_distance=net / business_km if business_km > 0 else 0.0,
        week_start=week_start,
        week_business_km=business_km,
        week_estimated_fuel=estimated_fuel,
        week_net=net,
    )
