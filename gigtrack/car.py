"""Car class for the driver's vehicle profile."""

from dataclasses import dataclass, replace
from enum import Enum


class FuelType(Enum):
    """Fuel types offered on the vehicle profile."""

    PETROL = "Petrol"
    DIESEL = "Diesel"
    HYBRID = "Hybrid"
    ELECTRIC = "Electric"


@dataclass(frozen=True)
class Car:
    """Vehicle profile. The odometer only ever moves forward."""

    name: str
    fuel_type: FuelType = FuelType.PETROL
    tank_size: float = 50.0
    odometer: float = 0.0

    def advanced_to(self, odometer: float) -> "Car":
        """Return a copy with the odometer raised to `odometer` if higher."""
        if odometer > self.odometer:
            return replace(self, odometer=odometer)
        return self
