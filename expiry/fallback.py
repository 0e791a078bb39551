"""
Remote-first alert retrieval with local recomputation on failure.

    TRY_REMOTE --success--> DONE
               --failure--> COMPUTE_LOCAL --> DONE

Any exception from the remote source (connection error, timeout, non-2xx,
bad payload) counts as failure and there is no retry here. If the local
record source fails too, the result is an explicit empty failure. Nothing
raises past fetch().
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .alert import ExpiryAlert
from .builder import AlertsByField, build_all, flatten
from .calculations import Clock
from .fields import DEFAULT_FIELDS, FieldConfig, find_field
from .record import VehicleRecord
from .urgency import DEFAULT_WINDOW_DAYS

logger = logging.getLogger(__name__)

RecordSource = Callable[[], List[VehicleRecord]]

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"
SOURCE_NONE = "none"


@dataclass
class AlertResult:
    """Outcome of an alert request. success=False always carries no alerts."""

    success: bool
    source: str
    alerts: AlertsByField = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def flat(self) -> List[ExpiryAlert]:
        return flatten(self.alerts)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "source": self.source,
            "data": [a.to_dict() for a in self.flat],
        }
        if self.error:
            data["error"] = self.error
        return data


def failure(error: str) -> AlertResult:
    return AlertResult(success=False, source=SOURCE_NONE, alerts={}, error=error)


class AlertOrchestrator:
    """Serves alerts from a remote source when it works, from local records when not."""

    def __init__(
        self,
        record_source: RecordSource,
        remote=None,
        field_configs: Optional[List[FieldConfig]] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
        clock: Optional[Clock] = None,
    ):
        self.record_source = record_source
        self.remote = remote
        self.field_configs = field_configs if field_configs is not None else DEFAULT_FIELDS
        self.window_days = window_days
        self.clock = clock

    def _configs_for(self, field_type: Optional[str]) -> Optional[List[FieldConfig]]:
        if field_type is None:
            return list(self.field_configs)
        config = find_field(field_type, self.field_configs)
        return [config] if config else None

    def _try_remote(self, configs: List[FieldConfig], window_days: int) -> AlertsByField:
        fetched = self.remote.fetch_all([c.type for c in configs], window_days)
        alerts: AlertsByField = {}
        for config in configs:
            items = list(fetched.get(config.type) or [])
            items.sort(key=lambda a: a.days_until_expiry)
            alerts[config.type] = items
        return alerts

    def _compute_local(self, configs: List[FieldConfig], window_days: int) -> AlertsByField:
        records = self.record_source()
        return build_all(records, configs, window_days, self.clock)

    def fetch(self, field_type: Optional[str] = None, window_days: Optional[int] = None) -> AlertResult:
        """Alerts for one field type, or every configured type when field_type is None."""
        window = self.window_days if window_days is None else window_days
        configs = self._configs_for(field_type)
        if configs is None:
            logger.error("Unknown field type '%s'", field_type)
            return failure(f"Unknown field type '{field_type}'")

        if self.remote is not None:
            try:
                alerts = self._try_remote(configs, window)
                logger.debug("Served alerts from remote source")
                return AlertResult(success=True, source=SOURCE_REMOTE, alerts=alerts)
            except Exception as e:
                logger.warning("Remote alert source unavailable, computing locally: %s", e)

        try:
            alerts = self._compute_local(configs, window)
        except Exception as e:
            logger.error("Local alert computation failed: %s", e)
            return failure(str(e))
        return AlertResult(success=True, source=SOURCE_LOCAL, alerts=alerts)
