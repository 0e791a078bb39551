"""Identity helpers for vehicle records (plain mappings of field -> value)."""

from typing import Any, Mapping

VehicleRecord = Mapping[str, Any]


def record_id(record: VehicleRecord) -> str:
    """Record identity; accepts Mongo-style '_id' as well as 'id'."""
    value = record.get("id")
    if value is None:
        value = record.get("_id")
    return "" if value is None else str(value)


def display_identifier(record: VehicleRecord) -> str:
    """Human-readable vehicle name for lists and reports."""
    number = record.get("vehicleNumber")
    if number:
        return str(number)
    parts = [str(record[k]) for k in ("year", "make", "model") if record.get(k)]
    if parts:
        return " ".join(parts)
    return record_id(record)
