"""FuelLog class for fuel purchase records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FuelLog:
    """A single fuel purchase. Logs are appended or deleted, never edited."""

    id: int
    date: str
    odometer: float
    litres: float
    price_per_litre: float
    full_tank: bool = True

    @property
    def total_price(self) -> float:
        """Purchase total, always derived from litres and unit price."""
        return self.litres * self.price_per_litre
