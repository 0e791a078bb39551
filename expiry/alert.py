"""ExpiryAlert dataclass for one expired or expiring document."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from .fields import parse_date
from .urgency import Urgency


@dataclass(frozen=True)
class ExpiryAlert:
    """Derived alert for a (record, document type) pair. Never persisted."""

    record_id: str
    field_type: str
    expiry_date: date
    days_until_expiry: int
    urgency: Urgency
    field_name: Optional[str] = None
    label: Optional[str] = None
    display_id: Optional[str] = None

    @property
    def is_expired(self) -> bool:
        """True only for days_until_expiry < 0; a document due today is critical, not expired."""
        return self.urgency is Urgency.EXPIRED

    @property
    def is_expiring(self) -> bool:
        """Inside the window but not yet expired."""
        return not self.is_expired

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form (camelCase keys, ISO date)."""
        return {
            "recordId": self.record_id,
            "fieldType": self.field_type,
            "fieldName": self.field_name,
            "label": self.label,
            "displayId": self.display_id,
            "expiryDate": self.expiry_date.isoformat(),
            "daysUntilExpiry": self.days_until_expiry,
            "isExpired": self.is_expired,
            "urgencyLevel": self.urgency.value,
        }

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "ExpiryAlert":
        """
        Parse the to_dict() shape, e.g. from the remote alert API.

        Raises ValueError (or KeyError) on a malformed payload.
        """
        expiry_date = parse_date(dct["expiryDate"])
        if expiry_date is None:
            raise ValueError(f"Invalid expiryDate: {dct['expiryDate']!r}")
        return cls(
            record_id=str(dct["recordId"]),
            field_type=dct["fieldType"],
            expiry_date=expiry_date,
            days_until_expiry=int(dct["daysUntilExpiry"]),
            urgency=Urgency(dct["urgencyLevel"]),
            field_name=dct.get("fieldName"),
            label=dct.get("label"),
            display_id=dct.get("displayId"),
        )
