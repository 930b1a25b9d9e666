"""Flask web application serving gig driver metrics as JSON."""

import logging
import os
from dataclasses import asdict
from datetime import date
from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from gigtrack.aggregation import (
    Toggles,
    aggregate_period,
    filter_records,
    earnings_by_platform,
    hourly_by_platform,
    cost_breakdown,
)
from gigtrack.calculations import estimate_fuel_efficiency, fill_efficiencies
from gigtrack.enrichment import enrich_trips
from gigtrack.errors import GigTrackError
from gigtrack.loader import load_store, store_to_dict
from gigtrack.period import Granularity, resolve_window, step_window
from gigtrack.weekly_goal import weekly_goal_status

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["DATA_FILE"] = Path(
    os.environ.get("GIGTRACK_DATA", Path(__file__).parent.parent / "data" / "gigtrack.yaml")
)


def get_store():
    """Load the current record snapshot from the configured data file."""
    return load_store(app.config["DATA_FILE"])


def flag(name: str, default: bool = True) -> bool:
    """Read a boolean query parameter ('true'/'false')."""
    value = request.args.get(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def query_date(name: str) -> date:
    value = request.args.get(name)
    return date.fromisoformat(value) if value else date.today()


@app.errorhandler(GigTrackError)
def handle_record_error(error):
    logger.warning("Request failed: %s", error)
    return jsonify({"error": str(error)}), 400


@app.errorhandler(FileNotFoundError)
def handle_missing_data(error):
    return jsonify({"error": f"Data file not found: {app.config['DATA_FILE']}"}), 404


@app.route("/api/summary")
def summary():
    """Period summary. Query: period, date, step, expenses, tax, personal_fuel."""
    store = get_store()
    try:
        granularity = Granularity(request.args.get("period", "month"))
        anchor = query_date("date")
        step = int(request.args.get("step", 0))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if step:
        anchor = step_window(granularity, anchor, step)
    window = resolve_window(granularity, anchor)
    toggles = Toggles(
        include_external_expenses=flag("expenses"),
        include_tax=flag("tax"),
        include_personal_fuel=flag("personal_fuel"),
    )
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    metrics = aggregate_period(window, store, toggles, store.settings.tax_rate_percent, estimate)
    records = filter_records(window, store)

    body = asdict(metrics)
    body["total_costs"] = metrics.total_costs
    return jsonify({
        "period": granularity.value,
        "anchor": anchor.isoformat(),
        "start": window.first_day.isoformat(),
        "end": window.last_day.isoformat(),
        "is_estimate": estimate.is_estimate,
        "metrics": body,
        "earnings_by_platform": earnings_by_platform(records.trips),
        "hourly_by_platform": hourly_by_platform(records.trips),
        "cost_breakdown": cost_breakdown(metrics),
    })


@app.route("/api/trips")
def trips():
    """All trips with estimated fuel cost, net profit and hourly rate."""
    store = get_store()
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    rows = []
    for enriched in enrich_trips(store.trip_logs, estimate):
        trip = enriched.trip
        rows.append({
            "id": trip.id,
            "date": trip.date,
            "type": trip.type.value,
            "platform": trip.platform,
            "km": trip.km,
            "duration": trip.duration_hours,
            "earnings": trip.earnings,
            "estimatedFuelCost": enriched.estimated_fuel_cost,
            "netProfit": enriched.net_profit,
            "hourlyRate": enriched.hourly_rate,
        })
    return jsonify(rows)


@app.route("/api/fuel")
def fuel():
    """Fuel logs, highest odometer first, with global efficiency."""
    store = get_store()
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    logs = [
        {
            "id": log.id,
            "date": log.date,
            "odometer": log.odometer,
            "litres": log.litres,
            "price": log.price_per_litre,
            "totalPrice": log.total_price,
            "fullTank": log.full_tank,
            "efficiency": efficiency,
        }
        for log, efficiency in fill_efficiencies(store.fuel_logs)
    ]
    return jsonify({"estimate": asdict(estimate), "logs": logs})


@app.route("/api/goal")
def goal():
    """This week's earnings against the weekly goal."""
    store = get_store()
    estimate = estimate_fuel_efficiency(store.fuel_logs)
    try:
        today = query_date("today")
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    status = weekly_goal_status(
        store.trip_logs, store.settings.weekly_goal_amount, estimate, today=today
    )
    body = asdict(status)
    body["week_start"] = status.week_start.isoformat()
    body["goal"] = store.settings.weekly_goal_amount
    return jsonify(body)


@app.route("/api/backup")
def backup():
    """The whole store in backup interchange format."""
    return jsonify(store_to_dict(get_store()))


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
