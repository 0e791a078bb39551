"""
Vehicle document expiry alerting.

This package computes which vehicle documents are expired or expiring:
- Urgency: tiers (EXPIRED, CRITICAL, WARNING, INFO, VALID) and classify()
- FieldConfig: which record fields carry document expiry dates
- ExpiryAlert: one expired/expiring document of one vehicle
- build_alerts / build_all: alert lists per document type
- summarize / build_report: dashboard counters and report payloads
- AlertOrchestrator: remote alert source with local recomputation fallback
- load_fleet: vehicle records from a fleet YAML file
"""

from .urgency import Urgency, classify, DEFAULT_WINDOW_DAYS
from .calculations import days_until, today, system_clock
from .fields import FieldConfig, DEFAULT_FIELDS, extract_date, parse_date, find_field
from .record import record_id, display_identifier
from .alert import ExpiryAlert
from .builder import (
    build_alerts,
    build_all,
    flatten,
    nearest_expiry_days,
    vehicles_with_alerts,
    expired_vehicles,
)
from .summary import AlertSummary, summarize, report_rows, build_report
from .fallback import AlertOrchestrator, AlertResult
from .remote import RemoteAlertSource
from .loader import FleetFileError, load_fleet, load_fleet_file, load_field_configs, fleet_record_source

__all__ = [
    "Urgency",
    "classify",
    "DEFAULT_WINDOW_DAYS",
    "days_until",
    "today",
    "system_clock",
    "FieldConfig",
    "DEFAULT_FIELDS",
    "extract_date",
    "parse_date",
    "find_field",
    "record_id",
    "display_identifier",
    "ExpiryAlert",
    "build_alerts",
    "build_all",
    "flatten",
    "nearest_expiry_days",
    "vehicles_with_alerts",
    "expired_vehicles",
    "AlertSummary",
    "summarize",
    "report_rows",
    "build_report",
    "AlertOrchestrator",
    "AlertResult",
    "RemoteAlertSource",
    "FleetFileError",
    "load_fleet",
    "load_fleet_file",
    "load_field_configs",
    "fleet_record_source",
]
