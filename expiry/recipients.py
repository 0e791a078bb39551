"""Who gets told about a vehicle's expiring documents."""

from typing import Iterable, List, Optional

from .alert import ExpiryAlert
from .config import Settings, get_settings
from .record import VehicleRecord
from .urgency import Urgency

ESCALATION_TIERS = (Urgency.EXPIRED, Urgency.CRITICAL)


def recipients_for(
    record: VehicleRecord,
    alerts: Iterable[ExpiryAlert],
    settings: Optional[Settings] = None,
) -> List[str]:
    """
    Recipient addresses for one vehicle's alerts.

    - Default recipients always
    - The vehicle department's recipients, if configured
    - Executive recipients when any alert is expired or critical
    """
    settings = settings or get_settings()
    candidates = list(settings.default_recipients)

    department = record.get("department")
    if department:
        candidates.extend(settings.department_recipients.get(department, []))

    if any(a.urgency in ESCALATION_TIERS for a in alerts):
        candidates.extend(settings.executive_recipients)

    recipients: List[str] = []
    for email in candidates:
        if email and "@" in email and email not in recipients:
            recipients.append(email)
    return recipients
