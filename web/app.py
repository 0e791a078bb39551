"""Flask JSON API serving document expiry alerts for a fleet file."""

import logging
import sys
from datetime import date
from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from expiry.builder import build_all, expired_vehicles, vehicles_with_alerts
from expiry.calculations import today
from expiry.config import configure_logging, get_settings
from expiry.fields import find_field
from expiry.loader import FleetFileError, load_fleet_file
from expiry.recipients import recipients_for
from expiry.summary import REPORT_PERIODS, build_report, summarize

logger = logging.getLogger(__name__)

settings = get_settings()

app = Flask(__name__)
app.config["FLEET_FILE"] = settings.fleet_file
app.config["WINDOW_DAYS"] = settings.window_days
app.config["CLOCK"] = None  # None = system date
app.config["SETTINGS"] = settings


def get_fleet_path() -> Path:
    return Path(app.config["FLEET_FILE"])


def get_window_days() -> int:
    """?days=N, or the configured window when missing or not an integer.

    Zero and negative windows pass through to build_all unchanged, so a
    remote caller gets the same alerts it would compute locally.
    """
    days = request.args.get("days", type=int)
    if days is None:
        return app.config["WINDOW_DAYS"]
    return days


def load_snapshot():
    """Records and field configs for this request."""
    return load_fleet_file(get_fleet_path())


def compute_alerts():
    records, configs = load_snapshot()
    return records, build_alerts_for(records, configs)


def build_alerts_for(records, configs):
    return build_all(records, configs, get_window_days(), app.config["CLOCK"])


@app.errorhandler(FleetFileError)
def fleet_file_error(error):
    logger.error("Fleet file error: %s", error)
    return jsonify({"success": False, "message": str(error), "data": []}), 500


@app.route("/health")
def health():
    return jsonify({"success": True, "status": "ok", "fleetFile": str(get_fleet_path())})


@app.route("/fields")
def fields():
    """Configured expiry-bearing fields."""
    _, configs = load_snapshot()
    return jsonify({"success": True, "data": [c.to_dict() for c in configs]})


@app.route("/alerts")
def all_alerts():
    """Alerts for every configured field, keyed by field type."""
    _, alerts = compute_alerts()
    data = {ft: [a.to_dict() for a in items] for ft, items in alerts.items()}
    return jsonify({"success": True, "data": data})


@app.route("/alerts/summary")
def alert_summary():
    """Dashboard counters per field type and tier."""
    _, alerts = compute_alerts()
    return jsonify({"success": True, "data": summarize(alerts).to_dict()})


@app.route("/alerts/<field_type>")
def field_alerts(field_type: str):
    """Alerts for a single field type (the shape RemoteAlertSource expects)."""
    records, configs = load_snapshot()
    config = find_field(field_type, configs)
    if config is None:
        return jsonify({"success": False, "message": f"Unknown field type '{field_type}'"}), 404

    alerts = build_alerts_for(records, [config])
    return jsonify({"success": True, "data": [a.to_dict() for a in alerts[config.type]]})


@app.route("/vehicles/expiring")
def expiring_vehicles():
    """Vehicles with at least one document inside the alert window."""
    records, alerts = compute_alerts()
    grouped = vehicles_with_alerts(records, alerts)
    days = get_window_days()
    data = [
        {**v.to_dict(), "recipients": recipients_for(v.record, v.alerts, app.config["SETTINGS"])}
        for v in grouped
    ]
    return jsonify({
        "success": True,
        "data": data,
        "count": len(grouped),
        "message": f"Found {len(grouped)} vehicles with documents expiring in {days} days",
    })


@app.route("/vehicles/expired")
def expired():
    """Vehicles with at least one expired document."""
    records, alerts = compute_alerts()
    grouped = expired_vehicles(records, alerts)
    return jsonify({
        "success": True,
        "data": [v.to_dict() for v in grouped],
        "count": len(grouped),
        "message": f"Found {len(grouped)} vehicles with expired documents",
    })


@app.route("/reports/expiry-alerts")
def expiry_report():
    """Data for the downloadable expiry alerts report."""
    period = request.args.get("period", "daily").lower()
    if period not in REPORT_PERIODS:
        return jsonify({"success": False, "message": f"Unknown report period '{period}'"}), 400

    _, alerts = compute_alerts()
    generated_on: date = today(app.config["CLOCK"])
    return jsonify({"success": True, "data": build_report(alerts, period, generated_on)})


if __name__ == "__main__":
    configure_logging(settings.log_level)
    app.run(debug=True, host="0.0.0.0", port=5001)
