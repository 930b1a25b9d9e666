#!/usr/bin/env python3
"""
Unified CLI for gig driver tracking.

Commands:
  init         - Create a new data file
  car          - Show or edit the vehicle profile
  settings     - Show or edit tax rate, weekly goal and currency
  summary      - Financial summary for a day, week, month or year
  trips        - List trips with estimated fuel cost and profit
  fuel         - List fuel purchases with per-fill efficiency
  expenses     - List other vehicle expenses
  goal         - Progress towards this week's earnings goal
  log-fuel     - Add a fuel purchase
  log-trip     - Add a trip
  edit-trip    - Change an existing trip
  log-expense  - Add an expense
  delete       - Delete a fuel log, trip or expense
  export       - Write a JSON backup
  import       - Restore a JSON backup
"""

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from gigtrack import (
    Car,
    FuelType,
    TripType,
    ExpenseCategory,
    RecordStore,
    EnrichedTrip,
    PeriodMetrics,
    Granularity,
    Toggles,
    GigTrackError,
    estimate_fuel_efficiency,
    fill_efficiencies,
    resolve_window,
    step_window,
    aggregate_period,
    filter_records,
    earnings_by_platform,
    hourly_by_platform,
    cost_breakdown,
    enrich_trips,
    weekly_goal_status,
    load_store,
    save_store,
    export_backup,
    import_backup,
)
from gigtrack.trip_log import PLATFORMS, DEFAULT_PLATFORM
from gigtrack.dates import parse_record_date

logger = logging.getLogger("gigtrack")

CURRENCY_SYMBOLS = {"AUD": "$", "USD": "$", "NZD": "$", "CAD": "$", "EUR": "€", "GBP": "£"}

# =============================================================================
# Formatting helpers
# =============================================================================


def format_money(amount: Optional[float], currency: str = "AUD") -> str:
    """Format a monetary amount for display."""
    if amount is None:
        return "-"
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_km(km: Optional[float]) -> str:
    """Format distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_hours(hours: Optional[float]) -> str:
    """Format a duration in hours (e.g., '2h 30m')."""
    if not hours:
        return "-"
    whole = int(hours)
    minutes = int(round((hours - whole) * 60))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if whole and minutes:
        return f"{whole}h {minutes}m"
    if whole:
        return f"{whole}h"
    return f"{minutes}m"


def format_percent(value: float) -> str:
    return f"{value:.0f}%"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_window(granularity: Granularity, anchor: date) -> str:
    """Human label for the window containing `anchor`."""
    window = resolve_window(granularity, anchor)
    if granularity is Granularity.DAY:
        return anchor.strftime("%a %d %b %Y")
    if granularity is Granularity.WEEK:
        return f"{window.first_day:%d %b} - {window.last_day:%d %b %Y}"
    if granularity is Granularity.MONTH:
        return anchor.strftime("%B %Y")
    return str(anchor.year)


def parse_date_arg(value: Optional[str]) -> str:
    """Validate a YYYY-MM-DD argument, defaulting to today."""
    if not value:
        return date.today().isoformat()
    return parse_record_date(value).isoformat()


# =============================================================================
# Table helpers
# =============================================================================


def make_trip_table(trips: List[EnrichedTrip], currency: str) -> List[List[str]]:
    """Convert enriched trips to table rows."""
    rows = []
    for enriched in trips:
        trip = enriched.trip
        is_business = trip.type is TripType.BUSINESS
        rows.append(
            [
                trip.id,
                trip.date,
                trip.platform if is_business else "Personal",
                format_km(trip.km),
                format_hours(trip.duration_hours),
                format_money(trip.earnings, currency) if is_business else "-",
                format_money(enriched.estimated_fuel_cost, currency),
                # Net profit of a personal trip is just its fuel cost
                format_money(enriched.net_profit, currency) if is_business else "-",
                format_money(enriched.hourly_rate, currency) if enriched.hourly_rate else "-",
            ]
        )
    return rows


def make_fuel_table(store: RecordStore, currency: str) -> List[List[str]]:
    """Convert fuel logs to table rows, highest odometer first."""
    rows = []
    for log, efficiency in fill_efficiencies(store.fuel_logs):
        rows.append(
            [
                log.id,
                log.date,
                format_km(log.odometer),
                f"{log.litres:g}L @ {format_money(log.price_per_litre, currency)}/L",
                format_money(log.total_price, currency),
                "yes" if log.full_tank else "partial",
                f"{efficiency:.1f} km/L" if efficiency else "-",
            ]
        )
    return rows


def make_summary_table(metrics: PeriodMetrics, currency: str) -> List[List[str]]:
    """Key figures of a period summary."""
    toggles = metrics.toggles
    rows = [
        ["Revenue", format_money(metrics.total_earnings, currency)],
        ["Business fuel (est.)", format_money(metrics.est_business_fuel_cost, currency)],
        [
            "Personal fuel (est.)" + ("" if toggles.include_personal_fuel else " [excluded]"),
            format_money(metrics.est_personal_fuel_cost, currency),
        ],
        [
            "Other expenses" + ("" if toggles.include_external_expenses else " [excluded]"),
            format_money(metrics.total_other_expenses_raw, currency),
        ],
        [
            "Estimated tax" + ("" if toggles.include_tax else " [excluded]"),
            format_money(metrics.estimated_tax, currency),
        ],
        ["Total costs", format_money(metrics.total_costs, currency)],
        ["Net profit before tax", format_money(metrics.net_profit_before_tax, currency)],
        ["Net profit", format_money(metrics.net_final, currency)],
        ["Business km", format_km(metrics.business_km)],
        ["Personal km", format_km(metrics.personal_km)],
        ["Profit per km", format_money(metrics.profit_per_distance, currency)],
        ["Hours worked", format_hours(metrics.total_duration_hours)],
        ["Hourly rate", format_money(metrics.hourly_rate, currency)],
        ["Actual fuel spend", format_money(metrics.actual_fuel_spend, currency)],
        ["Litres purchased", f"{metrics.total_litres_purchased:,.1f}"],
    ]
    return rows


# =============================================================================
# Init / car / settings commands
# =============================================================================


def cmd_init(args):
    """Create a new data file."""
    if args.data_file.exists():
        print(f"Error: File already exists: {args.data_file}")
        return 1
    car = None
    if args.name:
        car = Car(
            name=args.name,
            fuel_type=FuelType(args.fuel_type),
            tank_size=args.tank_size,
            odometer=args.odometer,
        )
    save_store(args.data_file, RecordStore(car=car))
    print(f"Created {args.data_file}")
    return 0


def cmd_car(args):
    """Show or edit the vehicle profile."""
    store = load_store(args.data_file)
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    currency = store.settings.currency_code

    changes = {}
    if args.name is not None:
        changes["name"] = args.name
    if args.fuel_type is not None:
        changes["fuel_type"] = FuelType(args.fuel_type)
    if args.tank_size is not None:
        changes["tank_size"] = args.tank_size
    if args.odometer is not None:
        changes["odometer"] = args.odometer

    if changes:
        car = replace(store.car, **changes) if store.car else Car(**{"name": "", **changes})
        print(f"Updating car: {car.name} ({car.fuel_type.value}), "
              f"{car.tank_size:g}L tank, {format_km(car.odometer)} km")
        if args.dry_run:
            print("(dry run - no changes made)")
            return 0
        save_store(args.data_file, store.with_car(car))
        print("Car saved.")
        return 0

    if store.car is None:
        print("No car profile. Set one with: car --name NAME --odometer KM")
    else:
        print(f"Car: {store.car.name} ({store.car.fuel_type.value})")
        print(f"Tank size: {store.car.tank_size:g} L")
        print(f"Odometer: {format_km(store.car.odometer)} km")
    label = " (estimate)" if estimate.is_estimate else ""
    print(f"Efficiency: {estimate.avg_efficiency:.1f} km/L{label}")
    print(f"Cost per km: {format_money(estimate.avg_cost_per_distance, currency)}{label}")
    return 0


def cmd_settings(args):
    """Show or edit business settings."""
    store = load_store(args.data_file)
    settings = store.settings

    changes = {}
    if args.tax_rate is not None:
        if not 0 <= args.tax_rate <= 100:
            print("Error: --tax-rate must be between 0 and 100")
            return 1
        changes["tax_rate_percent"] = args.tax_rate
    if args.weekly_goal is not None:
        if args.weekly_goal < 0:
            print("Error: --weekly-goal cannot be negative")
            return 1
        changes["weekly_goal_amount"] = args.weekly_goal
    if args.currency is not None:
        changes["currency_code"] = args.currency.upper()

    if changes:
        settings = replace(settings, **changes)

    print(f"Tax rate: {settings.tax_rate_percent:g}%")
    print(f"Weekly goal: {format_money(settings.weekly_goal_amount, settings.currency_code)}")
    print(f"Currency: {settings.currency_code}")

    if changes:
        if args.dry_run:
            print("(dry run - no changes made)")
            return 0
        save_store(args.data_file, store.with_settings(settings))
        print("Settings saved.")
    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args):
    """Financial summary for a reporting window."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code
    granularity = Granularity(args.period)

    anchor = date.fromisoformat(args.date) if args.date else date.today()
    if args.step:
        anchor = step_window(granularity, anchor, args.step)

    window = resolve_window(granularity, anchor)
    toggles = Toggles(
        include_external_expenses=not args.no_expenses,
        include_tax=not args.no_tax,
        include_personal_fuel=not args.no_personal_fuel,
    )
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    metrics = aggregate_period(
        window, store, toggles, store.settings.tax_rate_percent, estimate
    )

    print(f"Period: {format_window(granularity, anchor)}")
    if estimate.is_estimate:
        print("Note: fuel cost per km is an estimate (not enough full-tank fills)")
    print()

    print(tabulate(make_summary_table(metrics, currency), tablefmt="simple"))
    print()

    if not metrics.has_activity:
        print("No activity in this period.")
        return 0

    records = filter_records(window, store)
    by_platform = earnings_by_platform(records.trips)
    if by_platform:
        hourly = dict(hourly_by_platform(records.trips))
        rows = [
            [name, format_money(total, currency), format_money(hourly.get(name), currency)]
            for name, total in by_platform
        ]
        print("BY PLATFORM:")
        print(tabulate(rows, headers=["Platform", "Earnings", "Per hour"], tablefmt="simple"))
        print()

    if args.breakdown:
        rows = [[label, format_money(value, currency)] for label, value in cost_breakdown(metrics)]
        print("BREAKDOWN:")
        print(tabulate(rows, tablefmt="simple"))
        print()

    if records.expenses and toggles.include_external_expenses:
        print("EXPENSES:")
        rows = [
            [e.date, e.category.value, format_money(e.cost, currency), truncate(e.note)]
            for e in records.expenses
        ]
        print(tabulate(rows, headers=["Date", "Category", "Cost", "Note"], tablefmt="simple"))
        print()

    return 0


# =============================================================================
# Listing commands
# =============================================================================


def cmd_trips(args):
    """List trips with derived profitability."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    trips = enrich_trips(store.trip_logs, estimate)

    if args.business:
        trips = [t for t in trips if t.trip.type is TripType.BUSINESS]
    if args.since:
        trips = [t for t in trips if t.trip.date >= args.since]
    if args.limit:
        trips = trips[: args.limit]

    print(f"Trips: {len(store.trip_logs)}")
    if len(trips) != len(store.trip_logs):
        print(f"Showing: {len(trips)} (filtered)")
    print()

    if not trips:
        print("No trips found.")
        return 0

    headers = ["Id", "Date", "Platform", "Km", "Time", "Earned", "Fuel (est.)", "Net", "Per hour"]
    print(tabulate(make_trip_table(trips, currency), headers=headers, tablefmt="simple"))
    return 0


def cmd_fuel(args):
    """List fuel purchases."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code

    print(f"Fuel logs: {len(store.fuel_logs)}")
    if len(store.fuel_logs) == 1:
        print("Add another full-tank fill to start measuring efficiency.")
    print()

    if not store.fuel_logs:
        print("No fuel logs found.")
        return 0

    headers = ["Id", "Date", "Odometer", "Fill", "Total", "Full", "Efficiency"]
    print(tabulate(make_fuel_table(store, currency), headers=headers, tablefmt="simple"))
    return 0


def cmd_expenses(args):
    """List expenses, newest first."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code
    expenses = sorted(store.expense_logs, key=lambda e: e.date, reverse=True)

    if not expenses:
        print("No expenses found.")
        return 0

    rows = [
        [e.id, e.date, e.category.value, format_money(e.cost, currency), truncate(e.note)]
        for e in expenses
    ]
    print(tabulate(rows, headers=["Id", "Date", "Category", "Cost", "Note"], tablefmt="simple"))
    print()
    print(f"Total: {format_money(sum(e.cost for e in expenses), currency)}")
    return 0


def cmd_goal(args):
    """Show progress towards this week's goal."""
    store = load_store(args.data_file)
    settings = store.settings
    currency = settings.currency_code
    today = date.fromisoformat(args.today) if args.today else date.today()

    estimate = estimate_fuel_efficiency(store.fuel_logs)
    status = weekly_goal_status(
        store.trip_logs, settings.weekly_goal_amount, estimate, today=today
    )

    print(f"Week of {status.week_start:%d %b %Y}")
    print(
        f"Weekly goal: {format_money(status.current, currency)} / "
        f"{format_money(settings.weekly_goal_amount, currency)} "
        f"({format_percent(status.percent)})"
    )
    print(f"Business km: {format_km(status.week_business_km)}")
    print(f"Net after fuel: {format_money(status.week_net, currency)}")
    print(f"Profit per km: {format_money(status.week_profit_per_distance, currency)}")
    return 0


# =============================================================================
# Write commands
# =============================================================================


def cmd_log_fuel(args):
    """Add a fuel purchase."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code

    store = store.add_fuel_log(
        date=parse_date_arg(args.date),
        odometer=args.odometer,
        litres=args.litres,
        price_per_litre=args.price,
        full_tank=not args.partial,
    )
    entry = store.fuel_logs[0]

    print(f"Adding fuel log to {args.data_file}:")
    print(f"  Date:     {entry.date}")
    print(f"  Odometer: {format_km(entry.odometer)}")
    print(f"  Fill:     {entry.litres:g}L @ {format_money(entry.price_per_litre, currency)}/L")
    print(f"  Total:    {format_money(entry.total_price, currency)}")
    print(f"  Full:     {'yes' if entry.full_tank else 'partial'}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, store)
    print("Entry saved.")
    return 0


def cmd_log_trip(args):
    """Add a trip."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code
    trip_type = TripType(args.type)

    store = store.add_trip(
        date=parse_date_arg(args.date),
        km=args.km,
        trip_type=trip_type,
        platform=args.platform if trip_type is TripType.BUSINESS else None,
        duration_hours=args.duration or 0.0,
        earnings=args.earnings or 0.0,
    )
    entry = store.trip_logs[0]

    print(f"Adding trip to {args.data_file}:")
    print(f"  Date:     {entry.date}")
    print(f"  Type:     {entry.type.value}")
    if entry.type is TripType.BUSINESS:
        print(f"  Platform: {entry.platform}")
        print(f"  Earnings: {format_money(entry.earnings, currency)}")
    print(f"  Km:       {format_km(entry.km)}")
    if entry.duration_hours:
        print(f"  Time:     {format_hours(entry.duration_hours)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, store)
    print("Entry saved.")
    return 0


def cmd_edit_trip(args):
    """Change fields of an existing trip."""
    store = load_store(args.data_file)
    trip = store.get_trip(args.id)

    changes = {}
    if args.date is not None:
        changes["date"] = parse_date_arg(args.date)
    if args.km is not None:
        changes["km"] = args.km
    if args.type is not None:
        changes["type"] = TripType(args.type)
    if args.platform is not None:
        changes["platform"] = args.platform
    if args.duration is not None:
        changes["duration_hours"] = args.duration
    if args.earnings is not None:
        changes["earnings"] = args.earnings

    if not changes:
        print("Nothing to change.")
        return 0

    updated = replace(trip, **changes)
    print(f"Updating trip {trip.id}:")
    for field_name in changes:
        print(f"  {field_name}: {getattr(trip, field_name)} -> {getattr(updated, field_name)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, store.update_trip(updated))
    print("Trip saved.")
    return 0


def cmd_log_expense(args):
    """Add an expense."""
    store = load_store(args.data_file)
    currency = store.settings.currency_code

    store = store.add_expense(
        date=parse_date_arg(args.date),
        category=ExpenseCategory(args.category),
        cost=args.cost,
        note=args.note,
    )
    entry = store.expense_logs[0]

    print(f"Adding expense to {args.data_file}:")
    print(f"  Date:     {entry.date}")
    print(f"  Category: {entry.category.value}")
    print(f"  Cost:     {format_money(entry.cost, currency)}")
    if entry.note:
        print(f"  Note:     {entry.note}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, store)
    print("Entry saved.")
    return 0


def cmd_delete(args):
    """Delete a fuel log, trip or expense by id."""
    store = load_store(args.data_file)
    if args.kind == "fuel":
        store = store.delete_fuel_log(args.id)
    elif args.kind == "trip":
        store = store.delete_trip(args.id)
    else:
        store = store.delete_expense(args.id)

    print(f"Deleting {args.kind} {args.id} from {args.data_file}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, store)
    print("Deleted.")
    return 0


def cmd_export(args):
    """Write a JSON backup."""
    store = load_store(args.data_file)
    path = export_backup(store, args.dir)
    print(f"Backup written to {path}")
    return 0


def cmd_import(args):
    """Restore a JSON backup over the data file."""
    store = load_store(args.data_file)
    restored = import_backup(args.backup_file, store)

    print(f"Restoring {args.backup_file} into {args.data_file}:")
    print(f"  Fuel logs: {len(store.fuel_logs)} -> {len(restored.fuel_logs)}")
    print(f"  Trips:     {len(store.trip_logs)} -> {len(restored.trip_logs)}")
    print(f"  Expenses:  {len(store.expense_logs)} -> {len(restored.expense_logs)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data_file, restored)
    print("Data restored successfully!")
    return 0


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "init": cmd_init,
    "car": cmd_car,
    "settings": cmd_settings,
    "summary": cmd_summary,
    "trips": cmd_trips,
    "fuel": cmd_fuel,
    "expenses": cmd_expenses,
    "goal": cmd_goal,
    "log-fuel": cmd_log_fuel,
    "log-trip": cmd_log_trip,
    "edit-trip": cmd_edit_trip,
    "log-expense": cmd_log_expense,
    "delete": cmd_delete,
    "export": cmd_export,
    "import": cmd_import,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gig driver earnings and fuel tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/me.yaml init --name "Toyota Corolla" --odometer 120000
  %(prog)s data/me.yaml summary --period week
  %(prog)s data/me.yaml summary --period month --step -1 --no-tax
  %(prog)s data/me.yaml log-fuel 120450 40 1.89
  %(prog)s data/me.yaml log-trip 62 --platform "Uber Eats" --duration 3.5 --earnings 140
  %(prog)s data/me.yaml log-trip 15 --type Personal
  %(prog)s data/me.yaml log-expense Insurance 85 --note "monthly premium"
  %(prog)s data/me.yaml goal
  %(prog)s data/me.yaml export --dir backups/
""",
    )
    parser.add_argument("data_file", type=Path, help="Path to data YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    fuel_types = [f.value for f in FuelType]

    # Init subcommand
    init_parser = subparsers.add_parser("init", help="Create a new data file")
    init_parser.add_argument("--name", type=str, help="Car name (e.g. 'Toyota Camry Hybrid')")
    init_parser.add_argument("--fuel-type", choices=fuel_types, default="Petrol")
    init_parser.add_argument("--tank-size", type=float, default=50.0, help="Tank size in litres")
    init_parser.add_argument("--odometer", type=float, default=0.0, help="Current odometer")

    # Car subcommand
    car_parser = subparsers.add_parser("car", help="Show or edit the vehicle profile")
    car_parser.add_argument("--name", type=str)
    car_parser.add_argument("--fuel-type", choices=fuel_types)
    car_parser.add_argument("--tank-size", type=float)
    car_parser.add_argument("--odometer", type=float)
    car_parser.add_argument("--dry-run", action="store_true")

    # Settings subcommand
    settings_parser = subparsers.add_parser("settings", help="Show or edit business settings")
    settings_parser.add_argument("--tax-rate", type=float, help="Estimated tax rate (%%)")
    settings_parser.add_argument("--weekly-goal", type=float, help="Weekly income goal")
    settings_parser.add_argument("--currency", type=str, help="Currency code (e.g. AUD)")
    settings_parser.add_argument("--dry-run", action="store_true")

    # Summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Financial summary for a period")
    summary_parser.add_argument(
        "--period",
        choices=[g.value for g in Granularity],
        default="month",
        help="Reporting period (default: month)",
    )
    summary_parser.add_argument("--date", type=str, help="Any date in the period (default: today)")
    summary_parser.add_argument(
        "--step", type=int, default=0, help="Move N periods back (negative) or forward"
    )
    summary_parser.add_argument(
        "--no-expenses", action="store_true", help="Exclude other expenses from profit"
    )
    summary_parser.add_argument("--no-tax", action="store_true", help="Show profit before tax")
    summary_parser.add_argument(
        "--no-personal-fuel", action="store_true", help="Exclude personal trip fuel"
    )
    summary_parser.add_argument(
        "--breakdown", action="store_true", help="Show where the earnings went"
    )

    # Trips subcommand
    trips_parser = subparsers.add_parser("trips", help="List trips")
    trips_parser.add_argument("--business", action="store_true", help="Business trips only")
    trips_parser.add_argument("--since", type=str, help="Only trips since date (YYYY-MM-DD)")
    trips_parser.add_argument("--limit", type=int, help="Show at most N trips")

    subparsers.add_parser("fuel", help="List fuel purchases")
    subparsers.add_parser("expenses", help="List expenses")

    goal_parser = subparsers.add_parser("goal", help="Weekly goal progress")
    goal_parser.add_argument("--today", type=str, help="Override today's date (YYYY-MM-DD)")

    # Log fuel subcommand
    log_fuel_parser = subparsers.add_parser("log-fuel", help="Add a fuel purchase")
    log_fuel_parser.add_argument("odometer", type=float, help="Odometer reading")
    log_fuel_parser.add_argument("litres", type=float, help="Litres purchased")
    log_fuel_parser.add_argument("price", type=float, help="Price per litre")
    log_fuel_parser.add_argument("--date", type=str, help="Date YYYY-MM-DD (default: today)")
    log_fuel_parser.add_argument(
        "--partial", action="store_true", help="Tank was not filled completely"
    )
    log_fuel_parser.add_argument("--dry-run", action="store_true")

    # Log trip subcommand
    log_trip_parser = subparsers.add_parser("log-trip", help="Add a trip")
    log_trip_parser.add_argument("km", type=float, help="Distance driven")
    log_trip_parser.add_argument(
        "--type", choices=[t.value for t in TripType], default="Business"
    )
    log_trip_parser.add_argument(
        "--platform", type=str, default=DEFAULT_PLATFORM,
        help=f"Platform (e.g. {', '.join(PLATFORMS)})",
    )
    log_trip_parser.add_argument("--duration", type=float, help="Hours worked")
    log_trip_parser.add_argument("--earnings", type=float, help="Amount earned")
    log_trip_parser.add_argument("--date", type=str, help="Date YYYY-MM-DD (default: today)")
    log_trip_parser.add_argument("--dry-run", action="store_true")

    # Edit trip subcommand
    edit_trip_parser = subparsers.add_parser("edit-trip", help="Change an existing trip")
    edit_trip_parser.add_argument("id", type=int, help="Trip id")
    edit_trip_parser.add_argument("--km", type=float)
    edit_trip_parser.add_argument("--type", choices=[t.value for t in TripType])
    edit_trip_parser.add_argument("--platform", type=str)
    edit_trip_parser.add_argument("--duration", type=float)
    edit_trip_parser.add_argument("--earnings", type=float)
    edit_trip_parser.add_argument("--date", type=str)
    edit_trip_parser.add_argument("--dry-run", action="store_true")

    # Log expense subcommand
    log_expense_parser = subparsers.add_parser("log-expense", help="Add an expense")
    log_expense_parser.add_argument("category", choices=[c.value for c in ExpenseCategory])
    log_expense_parser.add_argument("cost", type=float, help="Amount paid")
    log_expense_parser.add_argument("--note", type=str)
    log_expense_parser.add_argument("--date", type=str, help="Date YYYY-MM-DD (default: today)")
    log_expense_parser.add_argument("--dry-run", action="store_true")

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("kind", choices=["fuel", "trip", "expense"])
    delete_parser.add_argument("id", type=int)
    delete_parser.add_argument("--dry-run", action="store_true")

    # Backup subcommands
    export_parser = subparsers.add_parser("export", help="Write a JSON backup")
    export_parser.add_argument("--dir", type=Path, default=Path("."), help="Output directory")

    import_parser = subparsers.add_parser("import", help="Restore a JSON backup")
    import_parser.add_argument("backup_file", type=Path)
    import_parser.add_argument("--dry-run", action="store_true")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate data file exists
    if args.command != "init" and not args.data_file.exists():
        print(f"Error: File not found: {args.data_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except GigTrackError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        # Bad dates or enum values from the command line
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
