"""ExpenseLog class for non-fuel vehicle costs."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ExpenseCategory(Enum):
    """Expense categories."""

    MAINTENANCE = "Maintenance"
    INSURANCE = "Insurance"
    REPAIRS = "Repairs"
    CLEANING = "Cleaning"
    REGISTRATION = "Registration"
    OTHER = "Other"


@dataclass(frozen=True)
class ExpenseLog:
    """A miscellaneous vehicle expense (insurance, repairs, ...)."""

    id: int
    date: str
    category: ExpenseCategory
    cost: float
    note: Optional[str] = None
