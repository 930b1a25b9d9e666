"""Calendar windows for period reporting."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

from dateutil.relativedelta import relativedelta

from .dates import parse_record_date

# Last representable millisecond of a day
END_OF_DAY = time(23, 59, 59, 999000)


class Granularity(Enum):
    """Reporting granularity."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Window:
    """Inclusive reporting interval, from the first to the last instant of its days."""

    start: datetime
    end: datetime

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return self.end.date()

    @property
    def days(self) -> int:
        return (self.last_day - self.first_day).days + 1

    def contains(self, day: Union[str, date]) -> bool:
        """Check if a record date falls inside, comparing calendar days only."""
        return self.first_day <= parse_record_date(day) <= self.last_day


def start_of_week(day: date) -> date:
    """Monday on or before `day` (a Sunday belongs to the week before)."""
    return day - timedelta(days=day.weekday())


def _window(first: date, last: date) -> Window:
    return Window(datetime.combine(first, time.min), datetime.combine(last, END_OF_DAY))


def resolve_window(granularity: Granularity, anchor: date) -> Window:
    """
    Resolve the window of the given granularity containing `anchor`.

    - DAY: the anchor's day
    - WEEK: Monday through Sunday
    - MONTH: first through last day of the month
    - YEAR: January 1 through December 31
    """
    if isinstance(anchor, datetime):
        anchor = anchor.date()

    if granularity is Granularity.DAY:
        return _window(anchor, anchor)
    if granularity is Granularity.WEEK:
        first = start_of_week(anchor)
        return _window(first, first + timedelta(days=6))
    if granularity is Granularity.MONTH:
        first = anchor.replace(day=1)
        return _window(first, first + relativedelta(months=1, days=-1))
    if granularity is Granularity.YEAR:
        return _window(date(anchor.year, 1, 1), date(anchor.year, 12, 31))
    raise ValueError(f"Unknown granularity: {granularity!r}")


def step_window(granularity: Granularity, anchor: date, direction: int) -> date:
    """
    Move the anchor `direction` units of the granularity forwards or back.

    Month and year steps clamp to the end of shorter months, so stepping
    from January 31 lands on the last day of February.
    """
    if isinstance(anchor, datetime):
        anchor = anchor.date()

    if granularity is Granularity.DAY:
        return anchor + timedelta(days=direction)
    if granularity is Granularity.WEEK:
        return anchor + timedelta(days=7 * direction)
    if granularity is Granularity.MONTH:
        return anchor + relativedelta(months=direction)
    if granularity is Granularity.YEAR:
        return anchor + relativedelta(years=direction)
    raise ValueError(f"Unknown granularity: {granularity!r}")
