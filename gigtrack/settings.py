"""Settings for tax and weekly goal accounting."""

from dataclasses import dataclass

DEFAULT_TAX_RATE = 15.0
DEFAULT_WEEKLY_GOAL = 500.0
DEFAULT_CURRENCY = "AUD"


@dataclass(frozen=True)
class Settings:
    """Business settings edited explicitly by the user."""

    tax_rate_percent: float = DEFAULT_TAX_RATE
    weekly_goal_amount: float = DEFAULT_WEEKLY_GOAL
    currency_code: str = DEFAULT_CURRENCY
