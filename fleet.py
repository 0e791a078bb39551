#!/usr/bin/env python3
"""
Unified CLI for fleet document expiry alerts.

Commands:
  alerts    - Show expired and expiring documents, grouped by urgency
  summary   - Dashboard counters per document type
  expiring  - Vehicles with documents inside the alert window
  expired   - Vehicles with expired documents
  report    - Write the expiry alerts report payload as JSON
  fields    - List the tracked document fields
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from expiry import (
    AlertOrchestrator,
    ExpiryAlert,
    RemoteAlertSource,
    build_report,
    expired_vehicles,
    fleet_record_source,
    load_field_configs,
    load_fleet,
    summarize,
    vehicles_with_alerts,
)
from expiry.builder import VehicleAlerts
from expiry.config import Settings, configure_logging, get_settings
from expiry.loader import FleetFileError
from expiry.recipients import recipients_for
from expiry.summary import REPORT_PERIODS
from expiry.urgency import ALERT_TIERS


# =============================================================================
# Formatting helpers
# =============================================================================


def format_days(days: Optional[int]) -> str:
    """Format days remaining for display (e.g., '1mo 5d' or '-12d')."""
    if days is None:
        return "-"
    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_as_of(as_of: Optional[date]):
    """Clock pinned to the --as-of date, or None for the system date."""
    if as_of is None:
        return None
    return lambda: as_of


# =============================================================================
# Alerts command
# =============================================================================


def make_alert_table(alerts: List[ExpiryAlert]) -> List[List[str]]:
    """Convert alerts to table rows."""
    return [
        [
            truncate(alert.display_id or alert.record_id),
            alert.label or alert.field_type,
            alert.expiry_date.isoformat(),
            format_days(alert.days_until_expiry),
        ]
        for alert in alerts
    ]


def build_orchestrator(args, settings) -> AlertOrchestrator:
    remote_url = args.remote or settings.api_url
    remote = RemoteAlertSource(remote_url, settings.api_timeout) if remote_url else None
    return AlertOrchestrator(
        record_source=fleet_record_source(args.fleet_file),
        remote=remote,
        field_configs=load_field_configs(args.fleet_file),
        window_days=args.days,
        clock=parse_as_of(args.as_of),
    )


def cmd_alerts(args, settings):
    """Show expired and expiring documents, grouped by urgency."""
    result = build_orchestrator(args, settings).fetch(field_type=args.field)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.success else 1

    if not result.success:
        print(f"Error: {result.error}")
        print("No alerts available.")
        return 1

    alerts = result.flat
    print(f"Fleet file: {args.fleet_file}")
    print(f"Window: {args.days} days")
    print(f"Source: {result.source}")
    print(f"Alerts: {len(alerts)}")
    print()

    if not alerts:
        print("No expired or expiring documents.")
        return 0

    headers = ["Vehicle", "Document", "Expires", "Remaining"]
    for tier in ALERT_TIERS:
        in_tier = [a for a in alerts if a.urgency == tier]
        if in_tier:
            print(f"{tier.value.upper()}:")
            print(tabulate(make_alert_table(in_tier), headers=headers, tablefmt="simple"))
            print()

    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args, settings):
    """Dashboard counters per document type."""
    result = build_orchestrator(args, settings).fetch()
    if not result.success:
        print(f"Error: {result.error}")
        return 1

    summary = summarize(result.alerts)
    rows = []
    for field_type in result.alerts:
        counts = summary.count_by_tier(field_type)
        rows.append([field_type] + [counts[t.value] for t in ALERT_TIERS])

    headers = ["Document"] + [t.value.capitalize() for t in ALERT_TIERS]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    print()
    print(f"Total expired:  {summary.total_expired}")
    print(f"Total expiring: {summary.total_expiring}")
    return 0


# =============================================================================
# Expiring / Expired commands
# =============================================================================


def make_vehicle_table(
    vehicles: List[VehicleAlerts], settings: Optional[Settings] = None
) -> List[List[str]]:
    """Convert grouped vehicle alerts to table rows, with recipients if settings are given."""
    rows = []
    for v in vehicles:
        documents = ", ".join(
            f"{a.label or a.field_type} ({format_days(a.days_until_expiry)})" for a in v.alerts
        )
        row = [
            truncate(v.alerts[0].display_id or v.record_id),
            format_days(v.nearest_expiry_days),
            documents,
        ]
        if settings is not None:
            row.append(", ".join(recipients_for(v.record, v.alerts, settings)))
        rows.append(row)
    return rows


def _print_vehicles(
    title: str, vehicles: List[VehicleAlerts], settings: Optional[Settings] = None
) -> None:
    print(f"{title}: {len(vehicles)}")
    print()
    if vehicles:
        headers = ["Vehicle", "Nearest", "Documents"]
        if settings is not None:
            headers.append("Notify")
        rows = make_vehicle_table(vehicles, settings)
        print(tabulate(rows, headers=headers, tablefmt="simple"))


def cmd_expiring(args, settings):
    """Vehicles with documents inside the alert window."""
    result = build_orchestrator(args, settings).fetch()
    if not result.success:
        print(f"Error: {result.error}")
        return 1
    records = load_fleet(args.fleet_file)
    _print_vehicles(
        "Vehicles with alerts",
        vehicles_with_alerts(records, result.alerts),
        settings if args.recipients else None,
    )
    return 0


def cmd_expired(args, settings):
    """Vehicles with expired documents."""
    result = build_orchestrator(args, settings).fetch()
    if not result.success:
        print(f"Error: {result.error}")
        return 1
    records = load_fleet(args.fleet_file)
    _print_vehicles("Vehicles with expired documents", expired_vehicles(records, result.alerts))
    return 0


# =============================================================================
# Report command
# =============================================================================


def cmd_report(args, settings):
    """Write the expiry alerts report payload as JSON."""
    result = build_orchestrator(args, settings).fetch()
    if not result.success:
        print(f"Error: {result.error}")
        return 1

    clock = parse_as_of(args.as_of)
    report = build_report(result.alerts, args.period, clock() if clock else None)
    text = json.dumps(report, indent=2)

    if args.output:
        args.output.write_text(text + "\n")
        print(f"Report written to {args.output} ({len(report['rows'])} rows)")
    else:
        print(text)
    return 0


# =============================================================================
# Fields command
# =============================================================================


def cmd_fields(args, settings):
    """List the tracked document fields."""
    configs = load_field_configs(args.fleet_file)
    rows = [[c.type, c.name, c.display_name] for c in configs]
    print(tabulate(rows, headers=["Type", "Field", "Label"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet document expiry alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleet.yaml alerts
  %(prog)s fleet.yaml alerts --field insurance --days 60
  %(prog)s fleet.yaml alerts --as-of 2025-07-01 --json
  %(prog)s fleet.yaml alerts --remote http://localhost:5001
  %(prog)s fleet.yaml summary
  %(prog)s fleet.yaml expiring --recipients
  %(prog)s fleet.yaml expired
  %(prog)s fleet.yaml report --period weekly --output report.json
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=settings.window_days,
        help=f"Alert window in days (default: {settings.window_days})",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        help="Evaluate as of this date (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--remote",
        type=str,
        help="Base URL of a remote alert API (falls back to the local file on failure)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    alerts_parser = subparsers.add_parser(
        "alerts", help="Show expired and expiring documents"
    )
    alerts_parser.add_argument(
        "--field",
        type=str,
        help="Only this document type (e.g., 'insurance', 'license')",
    )
    alerts_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw alert result as JSON",
    )

    subparsers.add_parser("summary", help="Dashboard counters per document type")
    expiring_parser = subparsers.add_parser(
        "expiring", help="Vehicles with documents inside the window"
    )
    expiring_parser.add_argument(
        "--recipients",
        action="store_true",
        help="Add a column with the addresses each vehicle's alerts go to",
    )
    subparsers.add_parser("expired", help="Vehicles with expired documents")

    report_parser = subparsers.add_parser("report", help="Expiry alerts report payload")
    report_parser.add_argument(
        "--period",
        choices=REPORT_PERIODS,
        default="daily",
        help="Report period label (default: daily)",
    )
    report_parser.add_argument(
        "--output",
        type=Path,
        help="Write JSON to this file instead of stdout",
    )

    subparsers.add_parser("fields", help="List tracked document fields")

    return parser


COMMANDS = {
    "alerts": cmd_alerts,
    "summary": cmd_summary,
    "expiring": cmd_expiring,
    "expired": cmd_expired,
    "report": cmd_report,
    "fields": cmd_fields,
}


def main(argv: Optional[List[str]] = None):
    settings = get_settings()
    configure_logging(settings.log_level)
    args = build_parser(settings).parse_args(argv)

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        return COMMANDS[args.command](args, settings)
    except FleetFileError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
