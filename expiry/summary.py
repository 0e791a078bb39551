"""Dashboard counters and report payloads built from alert lists."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .builder import AlertsByField, flatten
from .urgency import ALERT_TIERS, Urgency

REPORT_PERIODS = ("daily", "weekly", "monthly")


def _empty_counts() -> Dict[str, int]:
    return {tier.value: 0 for tier in ALERT_TIERS}


@dataclass
class AlertSummary:
    """Alert counts per field type and tier. Rebuilt on every request."""

    by_field: Dict[str, Dict[str, int]] = field(default_factory=dict)
    total_expiring: int = 0
    total_expired: int = 0

    def count_by_tier(self, field_type: str) -> Dict[str, int]:
        """Tier counts for one field type (all zero if the type is unknown)."""
        return dict(self.by_field.get(field_type) or _empty_counts())

    @property
    def total(self) -> int:
        return self.total_expiring + self.total_expired

    def to_dict(self) -> Dict[str, Any]:
        return {
            "byField": {k: dict(v) for k, v in self.by_field.items()},
            "totalExpiring": self.total_expiring,
            "totalExpired": self.total_expired,
        }


def summarize(alerts_by_field: AlertsByField) -> AlertSummary:
    """
    Fold alert lists into counters.

    A record with expired insurance and an expiring license counts once in
    each total; there is no deduplication by record.
    """
    summary = AlertSummary()
    for field_type, alerts in alerts_by_field.items():
        counts = _empty_counts()
        for alert in alerts:
            if alert.urgency.value in counts:
                counts[alert.urgency.value] += 1
            if alert.is_expired:
                summary.total_expired += 1
            else:
                summary.total_expiring += 1
        summary.by_field[field_type] = counts
    return summary


def report_rows(alerts_by_field: AlertsByField) -> List[Dict[str, Any]]:
    """Flat rows for a downloadable expiry report, most urgent first."""
    return [
        {
            "recordId": alert.record_id,
            "displayId": alert.display_id or alert.record_id,
            "fieldType": alert.field_type,
            "label": alert.label or alert.field_type,
            "expiryDate": alert.expiry_date.isoformat(),
            "daysRemaining": alert.days_until_expiry,
            "urgencyLevel": alert.urgency.value,
        }
        for alert in flatten(alerts_by_field)
    ]


def vehicles_by_tier(alerts_by_field: AlertsByField) -> Dict[str, int]:
    """Number of distinct vehicles with at least one alert in each tier."""
    seen: Dict[str, set] = {tier.value: set() for tier in ALERT_TIERS}
    for alert in flatten(alerts_by_field):
        if alert.urgency is not Urgency.VALID:
            seen[alert.urgency.value].add(alert.record_id)
    return {tier: len(ids) for tier, ids in seen.items()}


def build_report(
    alerts_by_field: AlertsByField,
    period: str = "daily",
    generated_on: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Assemble the data behind an expiry alerts report.

    The caller hands this to whatever renders the document (PDF, email,
    spreadsheet); no file bytes are produced here.
    """
    if period not in REPORT_PERIODS:
        raise ValueError(
            f"Unknown report period '{period}' (expected one of {', '.join(REPORT_PERIODS)})"
        )
    rows = report_rows(alerts_by_field)
    return {
        "title": f"Document Expiry Alerts Report ({period.capitalize()})",
        "period": period,
        "generatedOn": (generated_on or date.today()).isoformat(),
        "summary": summarize(alerts_by_field).to_dict(),
        "vehiclesByTier": vehicles_by_tier(alerts_by_field),
        "vehicleCount": len({row["recordId"] for row in rows}),
        "rows": rows,
    }
