"""Urgency tiers for document expiry alerts."""

from enum import Enum


DEFAULT_WINDOW_DAYS = 30
CRITICAL_DAYS = 7
WARNING_DAYS = 15


class Urgency(Enum):
    """Expiry urgency tiers. Lower rank = more urgent."""

    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    VALID = "valid"  # Outside the alert window, never materialized as an alert

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {
    Urgency.EXPIRED: 1,
    Urgency.CRITICAL: 2,
    Urgency.WARNING: 3,
    Urgency.INFO: 4,
    Urgency.VALID: 5,
}

# Tiers that show up in alert lists and summary counters
ALERT_TIERS = [Urgency.EXPIRED, Urgency.CRITICAL, Urgency.WARNING, Urgency.INFO]


def classify(days_until_expiry: int, window_days: int = DEFAULT_WINDOW_DAYS) -> Urgency:
    """Map a signed day delta to an urgency tier (first match wins)."""
    if days_until_expiry < 0:
        return Urgency.EXPIRED
    if days_until_expiry <= CRITICAL_DAYS:
        return Urgency.CRITICAL
    if days_until_expiry <= WARNING_DAYS:
        return Urgency.WARNING
    if days_until_expiry <= window_days:
        return Urgency.INFO
    return Urgency.VALID
