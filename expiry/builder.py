"""
Alert building: per-field alert lists and the multi-field aggregator.

All functions are pure over the record snapshot they receive. The clock
is read once per call so every field in one query shares the same day.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .alert import ExpiryAlert
from .calculations import Clock, days_until, today
from .fields import DEFAULT_FIELDS, FieldConfig, extract_date
from .record import VehicleRecord, display_identifier, record_id
from .urgency import DEFAULT_WINDOW_DAYS, classify

logger = logging.getLogger(__name__)

AlertsByField = Dict[str, List[ExpiryAlert]]


def _build_for_field(
    records: Iterable[VehicleRecord],
    config: FieldConfig,
    window_days: int,
    current_date: date,
) -> List[ExpiryAlert]:
    alerts = []
    for record in records:
        expiry_date = extract_date(record, config.name)
        if expiry_date is None:
            continue
        days = days_until(expiry_date, current_date)
        if days > window_days:
            continue
        alerts.append(
            ExpiryAlert(
                record_id=record_id(record),
                field_type=config.type,
                expiry_date=expiry_date,
                days_until_expiry=days,
                urgency=classify(days, window_days),
                field_name=config.name,
                label=config.display_name,
                display_id=display_identifier(record),
            )
        )
    # Negative deltas (expired) sort ahead of upcoming ones; sort is stable
    alerts.sort(key=lambda a: a.days_until_expiry)
    return alerts


def build_alerts(
    records: Iterable[VehicleRecord],
    field_name: str,
    field_type: str,
    window_days: int = DEFAULT_WINDOW_DAYS,
    clock: Optional[Clock] = None,
    label: Optional[str] = None,
) -> List[ExpiryAlert]:
    """
    Build the alert list for one document field across all records.

    Records without a parseable date in field_name are skipped (not
    tracked, never treated as expired). Only entries with
    days_until_expiry <= window_days are kept, sorted most overdue first.
    """
    config = FieldConfig(field_name, field_type, label)
    return _build_for_field(records, config, window_days, today(clock))


def build_all(
    records: Iterable[VehicleRecord],
    field_configs: Optional[List[FieldConfig]] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    clock: Optional[Clock] = None,
) -> AlertsByField:
    """Build alerts for every configured field, keyed by field type."""
    records = list(records)
    configs = field_configs if field_configs is not None else DEFAULT_FIELDS
    current_date = today(clock)
    result: AlertsByField = {}
    for config in configs:
        result[config.type] = _build_for_field(records, config, window_days, current_date)
    logger.debug(
        "Built %d alerts over %d records and %d fields (window=%d, today=%s)",
        sum(len(a) for a in result.values()),
        len(records),
        len(configs),
        window_days,
        current_date.isoformat(),
    )
    return result


def flatten(alerts_by_field: AlertsByField) -> List[ExpiryAlert]:
    """Concatenate all field lists into one list sorted by days remaining."""
    merged = [a for alerts in alerts_by_field.values() for a in alerts]
    merged.sort(key=lambda a: a.days_until_expiry)
    return merged


def alerts_for_record(alerts_by_field: AlertsByField, rec_id: str) -> List[ExpiryAlert]:
    """All alerts belonging to one record, across field types."""
    return [a for a in flatten(alerts_by_field) if a.record_id == rec_id]


def nearest_expiry_days(alerts: Iterable[ExpiryAlert], rec_id: str) -> Optional[int]:
    """Smallest days_until_expiry for the record, or None if it has no alerts."""
    days = [a.days_until_expiry for a in alerts if a.record_id == rec_id]
    return min(days) if days else None


@dataclass
class VehicleAlerts:
    """A record together with its alerts across all document fields."""

    record: VehicleRecord
    alerts: List[ExpiryAlert] = field(default_factory=list)

    @property
    def record_id(self) -> str:
        return record_id(self.record)

    @property
    def nearest_expiry_days(self) -> Optional[int]:
        return nearest_expiry_days(self.alerts, self.record_id)

    @property
    def expired(self) -> List[ExpiryAlert]:
        return [a for a in self.alerts if a.is_expired]

    @property
    def expiring(self) -> List[ExpiryAlert]:
        return [a for a in self.alerts if a.is_expiring]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **dict(self.record),
            "alerts": [a.to_dict() for a in self.alerts],
            "nearestExpiryDays": self.nearest_expiry_days,
            "expiringDocuments": [a.to_dict() for a in self.expiring],
            "expiredDocuments": [a.to_dict() for a in self.expired],
        }


def vehicles_with_alerts(
    records: Iterable[VehicleRecord], alerts_by_field: AlertsByField
) -> List[VehicleAlerts]:
    """Group alerts by record, keeping only records with at least one alert."""
    by_id: Dict[str, List[ExpiryAlert]] = {}
    for alert in flatten(alerts_by_field):
        by_id.setdefault(alert.record_id, []).append(alert)

    grouped = [
        VehicleAlerts(record=record, alerts=by_id[record_id(record)])
        for record in records
        if record_id(record) in by_id
    ]
    grouped.sort(key=lambda v: v.nearest_expiry_days)
    return grouped


def expired_vehicles(
    records: Iterable[VehicleRecord], alerts_by_field: AlertsByField
) -> List[VehicleAlerts]:
    """Records with at least one expired document; alerts limited to the expired ones."""
    return [
        VehicleAlerts(record=v.record, alerts=v.expired)
        for v in vehicles_with_alerts(records, alerts_by_field)
        if v.expired
    ]
