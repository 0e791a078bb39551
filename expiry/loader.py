"""YAML loading for fleet files (the local mirror of vehicle records)."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .fields import DEFAULT_FIELDS, FieldConfig
from .record import VehicleRecord, record_id

logger = logging.getLogger(__name__)

_FIELD_KEYS = {"name", "type", "label"}


class FleetFileError(ValueError):
    """A fleet file is missing, unreadable or doesn't have the expected shape."""


def _json_default(value: Any) -> str:
    # Unquoted YAML dates load as date objects
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def normalize(data: Any) -> Any:
    """Round-trip YAML data through JSON so dates become ISO strings."""
    return json.loads(json.dumps(data, default=_json_default))


def _parse_field(entry: Any) -> Optional[FieldConfig]:
    """FieldConfig for one 'fields' entry, or None if it isn't a field definition."""
    if not isinstance(entry, dict) or "name" not in entry or "type" not in entry:
        return None
    if not set(entry) <= _FIELD_KEYS:
        return None
    return FieldConfig(str(entry["name"]), str(entry["type"]), entry.get("label"))


def _load_document(filename: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(filename, "rb") as fp:
            raw = yaml.load(fp, Loader=yaml.SafeLoader)
    except OSError as e:
        raise FleetFileError(f"Cannot read fleet file {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise FleetFileError(f"YAML parse error in {filename}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FleetFileError(f"{filename}: top level must be a mapping")

    # Records stay plain dicts; only the 'fields' section becomes FieldConfigs
    return normalize(raw)


def _records(document: Dict[str, Any], filename: Union[str, Path]) -> List[VehicleRecord]:
    vehicles = document.get("vehicles") or []
    if not isinstance(vehicles, list):
        raise FleetFileError(f"{filename}: 'vehicles' must be a list")

    for index, vehicle in enumerate(vehicles):
        if not isinstance(vehicle, dict) or not record_id(vehicle):
            raise FleetFileError(f"{filename}: vehicle #{index} has no id")

    logger.debug("Loaded %d vehicles from %s", len(vehicles), filename)
    return vehicles


def _field_configs(document: Dict[str, Any], filename: Union[str, Path]) -> List[FieldConfig]:
    fields = document.get("fields")
    if not fields:
        return list(DEFAULT_FIELDS)
    if not isinstance(fields, list):
        raise FleetFileError(f"{filename}: 'fields' must be a list")
    configs = [_parse_field(entry) for entry in fields]
    if any(c is None for c in configs):
        raise FleetFileError(f"{filename}: each field needs 'name' and 'type'")
    return configs


def load_fleet_file(
    filename: Union[str, Path]
) -> Tuple[List[VehicleRecord], List[FieldConfig]]:
    """Records and field configs from one read of a fleet YAML file."""
    document = _load_document(filename)
    return _records(document, filename), _field_configs(document, filename)


def load_fleet(filename: Union[str, Path]) -> List[VehicleRecord]:
    """Load the vehicle records from a fleet YAML file."""
    return _records(_load_document(filename), filename)


def load_field_configs(filename: Union[str, Path]) -> List[FieldConfig]:
    """Field definitions from the file's 'fields' section, or the defaults."""
    return _field_configs(_load_document(filename), filename)


def fleet_record_source(filename: Union[str, Path]) -> Callable[[], List[VehicleRecord]]:
    """Zero-argument record source that re-reads the file on every call."""

    def source() -> List[VehicleRecord]:
        return load_fleet(filename)

    return source
