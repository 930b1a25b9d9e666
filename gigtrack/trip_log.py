"""TripLog class for driving records."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TripType(Enum):
    """Whether a trip earned money or was private driving."""

    BUSINESS = "Business"
    PERSONAL = "Personal"


DEFAULT_PLATFORM = "DoorDash"
PLATFORMS = ["DoorDash", "Uber Eats", "Menulog", "Amazon Flex"]


@dataclass(frozen=True)
class TripLog:
    """
    A trip or shift.

    Personal trips never carry earnings: the amount is forced to zero on
    construction. The platform label only means something for business
    trips, which always get one (DEFAULT_PLATFORM when none is given).
    """

    id: int
    date: str
    km: float
    type: TripType = TripType.BUSINESS
    platform: Optional[str] = DEFAULT_PLATFORM
    duration_hours: float = 0.0
    earnings: float = 0.0

    def __post_init__(self):
        if self.type is TripType.PERSONAL and self.earnings:
            object.__setattr__(self, "earnings", 0.0)
        if self.duration_hours is None:
            object.__setattr__(self, "duration_hours", 0.0)
        if self.type is TripType.BUSINESS and not self.platform:
            object.__setattr__(self, "platform", DEFAULT_PLATFORM)

    @property
    def is_business(self) -> bool:
        return self.type is TripType.BUSINESS
