"""Expiry-bearing field definitions and date extraction from records."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from dateutil.parser import isoparse


@dataclass(frozen=True)
class FieldConfig:
    """A record field holding a document's validity end date."""

    name: str
    type: str
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Human-readable document name."""
        return self.label or self.type.capitalize()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "label": self.display_name}


DEFAULT_FIELDS: List[FieldConfig] = [
    FieldConfig("insuranceExpiry", "insurance", "Insurance"),
    FieldConfig("licenseExpiry", "license", "License"),
    FieldConfig("emissionExpiry", "emission", "Emission Test"),
    FieldConfig("revenueExpiry", "revenue", "Revenue License"),
    FieldConfig("registrationExpiry", "registration", "Registration"),
    FieldConfig("leaseDue", "lease", "Lease"),
    FieldConfig("nextServiceDue", "service", "Service"),
]


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a field value into a calendar date.

    Accepts date, datetime (time-of-day dropped) and ISO-8601 strings,
    including ones with a time part such as '2025-07-06T00:00:00.000Z'.
    The written date is kept as-is; no timezone conversion happens.
    Anything else returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def extract_date(record: Mapping[str, Any], field_name: str) -> Optional[date]:
    """Date stored under field_name, or None when the document isn't tracked."""
    return parse_date(record.get(field_name))


def find_field(
    field_type: str, field_configs: Optional[List[FieldConfig]] = None
) -> Optional[FieldConfig]:
    """Find a field config by its type tag."""
    for config in field_configs if field_configs is not None else DEFAULT_FIELDS:
        if config.type == field_type:
            return config
    return None
