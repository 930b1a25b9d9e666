"""Fuel efficiency estimation from fuel purchase history."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .fuel_log import FuelLog

logger = logging.getLogger(__name__)

# Distance per litre assumed when there is no full-tank interval to measure
DEFAULT_EFFICIENCY = 10.0


@dataclass(frozen=True)
class FuelEstimate:
    """Global cost-per-distance and efficiency derived from fuel logs."""

    avg_cost_per_distance: float = 0.0
    avg_efficiency: float = 0.0
    is_estimate: bool = False


def sort_by_odometer(fuel_logs: Iterable[FuelLog]) -> List[FuelLog]:
    """Fuel logs ordered by odometer, highest (most recent) first."""
    return sorted(fuel_logs, key=lambda log: log.odometer, reverse=True)


def full_tank_distance(current: FuelLog, previous: FuelLog) -> Optional[float]:
    """
    Distance covered between two consecutive fills.

    Only measurable when both fills topped the tank up and the odometer
    actually advanced; None otherwise.
    """
    if not (current.full_tank and previous.full_tank):
        return None
    distance = current.odometer - previous.odometer
    if distance <= 0:
        return None
    return distance


def estimate_fuel_efficiency(fuel_logs: Iterable[FuelLog]) -> FuelEstimate:
    """
    Estimate cost per distance and efficiency across all fuel logs.

    - Sum distance, cost and litres over every measurable full-tank pair
    - Without a measurable pair, fall back to DEFAULT_EFFICIENCY and the
      most recent price, flagged as an estimate
    - Without any logs, everything is zero and not an estimate
    """
    ordered = sort_by_odometer(fuel_logs)
    if not ordered:
        return FuelEstimate()

    total_distance = 0.0
    total_fuel_cost = 0.0
    total_litres = 0.0
    for current, previous in zip(ordered, ordered[1:]):
        distance = full_tank_distance(current, previous)
        if distance is None:
            logger.debug("Skipping fuel pair %s -> %s", previous.id, current.id)
            continue
        total_distance += distance
        total_fuel_cost += current.total_price
        total_litres += current.litres

    if total_distance > 0:
        return FuelEstimate(
            avg_cost_per_distance=total_fuel_cost / total_distance,
            avg_efficiency=total_distance / total_litres if total_litres > 0 else 0.0,
            is_estimate=False,
        )

    latest = ordered[0]
    return FuelEstimate(
        avg_cost_per_distance=latest.price_per_litre / DEFAULT_EFFICIENCY,
        avg_efficiency=DEFAULT_EFFICIENCY,
        is_estimate=True,
    )


def fill_efficiencies(
    fuel_logs: Iterable[FuelLog],
) -> List[Tuple[FuelLog, Optional[float]]]:
    """Pair each fill (highest odometer first) with its own efficiency, if measurable."""
    ordered = sort_by_odometer(fuel_logs)
    result = []
    for idx, log in enumerate(ordered):
        efficiency = None
        if idx + 1 < len(ordered):
            distance = full_tank_distance(log, ordered[idx + 1])
            if distance is not None and log.litres > 0:
                efficiency = distance / log.litres
        result.append((log, efficiency))
    return result
