"""YAML data file and JSON backup utilities for the record store."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .car import Car, FuelType
from .settings import Settings, DEFAULT_TAX_RATE, DEFAULT_WEEKLY_GOAL, DEFAULT_CURRENCY
from .fuel_log import FuelLog
from .trip_log import TripLog, TripType, DEFAULT_PLATFORM
from .expense_log import ExpenseLog, ExpenseCategory
from .record_store import RecordStore
from .errors import InvalidRecordError

logger = logging.getLogger(__name__)

BACKUP_KEYS = ("car", "settings", "fuelLogs", "tripLogs", "expenseLogs")


# =============================================================================
# Parsing (camelCase interchange dicts -> records)
# =============================================================================


def _date_str(value: Any) -> str:
    """YAML turns bare dates into date objects; records keep ISO strings."""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _enum(enum_cls, value: Any, default=None):
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidRecordError(f"Invalid {enum_cls.__name__}: {value!r}") from None


def _parse_car(dct: Dict[str, Any]) -> Car:
    return Car(
        name=dct.get("name", ""),
        fuel_type=_enum(FuelType, dct.get("fuelType"), FuelType.PETROL),
        tank_size=float(dct.get("tankSize") or 0),
        odometer=float(dct.get("odometer") or 0),
    )


def _parse_settings(dct: Dict[str, Any]) -> Settings:
    return Settings(
        tax_rate_percent=float(dct.get("taxRate", DEFAULT_TAX_RATE)),
        weekly_goal_amount=float(dct.get("weeklyGoal", DEFAULT_WEEKLY_GOAL)),
        currency_code=dct.get("currency") or DEFAULT_CURRENCY,
    )


def _parse_fuel_log(dct: Dict[str, Any]) -> FuelLog:
    # totalPrice is derived; a stored value is ignored
    return FuelLog(
        id=dct["id"],
        date=_date_str(dct["date"]),
        odometer=float(dct["odometer"]),
        litres=float(dct["litres"]),
        price_per_litre=float(dct["price"]),
        full_tank=bool(dct.get("fullTank", True)),
    )


def _parse_trip(dct: Dict[str, Any]) -> TripLog:
    return TripLog(
        id=dct["id"],
        date=_date_str(dct["date"]),
        km=float(dct.get("km") or 0),
        type=_enum(TripType, dct.get("type"), TripType.BUSINESS),
        platform=dct.get("platform", DEFAULT_PLATFORM),
        duration_hours=float(dct.get("duration") or 0),
        earnings=float(dct.get("earnings") or 0),
    )


def _parse_expense(dct: Dict[str, Any]) -> ExpenseLog:
    return ExpenseLog(
        id=dct["id"],
        date=_date_str(dct["date"]),
        category=_enum(ExpenseCategory, dct.get("category"), ExpenseCategory.OTHER),
        cost=float(dct.get("cost") or 0),
        note=dct.get("note") or None,
    )


def _parse_one(item, parser, kind: str):
    try:
        return parser(item)
    except InvalidRecordError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise InvalidRecordError(f"Malformed {kind}: {e}") from e


def _parse_list(items, parser, kind: str):
    records = []
    for idx, item in enumerate(items or []):
        records.append(_parse_one(item, parser, f"{kind} at index {idx}"))
    return records


def store_from_dict(
    data: Dict[str, Any], base: Optional[RecordStore] = None
) -> RecordStore:
    """
    Build a store from an interchange dict.

    Only the keys present are applied on top of `base`; absent
    collections are left exactly as they were.
    """
    if not isinstance(data, dict):
        raise InvalidRecordError("Backup data must be a mapping")
    base = base or RecordStore()
    return base.restored(
        car=_parse_one(data["car"], _parse_car, "car") if data.get("car") else None,
        settings=(
            _parse_one(data["settings"], _parse_settings, "settings")
            if data.get("settings") else None
        ),
        fuel_logs=(
            _parse_list(data["fuelLogs"], _parse_fuel_log, "fuel log")
            if data.get("fuelLogs") is not None else None
        ),
        trip_logs=(
            _parse_list(data["tripLogs"], _parse_trip, "trip")
            if data.get("tripLogs") is not None else None
        ),
        expense_logs=(
            _parse_list(data["expenseLogs"], _parse_expense, "expense")
            if data.get("expenseLogs") is not None else None
        ),
    )


# =============================================================================
# Serializing (records -> camelCase interchange dicts)
# =============================================================================


def _car_to_dict(car: Car) -> Dict[str, Any]:
    return {
        "name": car.name,
        "fuelType": car.fuel_type.value,
        "tankSize": car.tank_size,
        "odometer": car.odometer,
    }


def _settings_to_dict(settings: Settings) -> Dict[str, Any]:
    return {
        "taxRate": settings.tax_rate_percent,
        "weeklyGoal": settings.weekly_goal_amount,
        "currency": settings.currency_code,
    }


def _fuel_log_to_dict(log: FuelLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "date": log.date,
        "odometer": log.odometer,
        "litres": log.litres,
        "price": log.price_per_litre,
        "totalPrice": log.total_price,
        "fullTank": log.full_tank,
    }


def _trip_to_dict(trip: TripLog) -> Dict[str, Any]:
    return {
        "id": trip.id,
        "date": trip.date,
        "type": trip.type.value,
        "platform": trip.platform,
        "km": trip.km,
        "duration": trip.duration_hours,
        "earnings": trip.earnings,
    }


def _expense_to_dict(expense: ExpenseLog) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": expense.id,
        "date": expense.date,
        "category": expense.category.value,
        "cost": expense.cost,
    }
    if expense.note is not None:
        d["note"] = expense.note
    return d


def store_to_dict(store: RecordStore) -> Dict[str, Any]:
    """Serialize a store to the interchange dict format (camelCase keys)."""
    return {
        "car": _car_to_dict(store.car) if store.car else None,
        "settings": _settings_to_dict(store.settings),
        "fuelLogs": [_fuel_log_to_dict(f) for f in store.fuel_logs],
        "tripLogs": [_trip_to_dict(t) for t in store.trip_logs],
        "expenseLogs": [_expense_to_dict(e) for e in store.expense_logs],
    }


# =============================================================================
# Files
# =============================================================================


def load_store(filename: Union[str, Path]) -> RecordStore:
    """Load a record store from a YAML data file."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    return store_from_dict(data)


def save_store(filename: Union[str, Path], store: RecordStore) -> None:
    """Write a record store to a YAML data file."""
    with open(filename, "w") as fp:
        yaml.dump(
            store_to_dict(store),
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def backup_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"gigtrack_backup_{today.isoformat()}.json"


def export_backup(
    store: RecordStore, directory: Union[str, Path], today: Optional[date] = None
) -> Path:
    """Write a JSON backup of the whole store into `directory`."""
    path = Path(directory) / backup_filename(today)
    with open(path, "w") as fp:
        json.dump(store_to_dict(store), fp, indent=2)
    logger.info("Exported backup to %s", path)
    return path


def import_backup(filename: Union[str, Path], store: RecordStore) -> RecordStore:
    """
    Restore a backup file over `store`.

    JSON backups are read with the YAML loader (JSON is valid YAML).
    Collections missing from the backup are kept from `store`.
    """
    with open(filename, "r") as fp:
        try:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise InvalidRecordError(f"Invalid file format: {e}") from e
    restored = store_from_dict(data, base=store)
    present = [key for key in BACKUP_KEYS if data.get(key) is not None]
    logger.info("Restored %s from %s", ", ".join(present) or "nothing", filename)
    return restored
