"""
Settings from environment variables (and a .env file when present).

Everything has a working default, so the CLI runs against a local
fleet.yaml with no configuration at all.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List

from dotenv import load_dotenv

from .urgency import DEFAULT_WINDOW_DAYS

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_env(key: str, default: str = "") -> str:
    return os.getenv(key, default)


def _get_env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _get_env_float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _get_env_list(key: str, default: str = "", separator: str = ",") -> List[str]:
    value = os.getenv(key, default)
    return [item.strip() for item in value.split(separator) if item.strip()]


def _get_env_departments(key: str) -> Dict[str, List[str]]:
    """Parse 'Dept=a@x;b@x,Other=c@x' into {'Dept': [...], 'Other': [...]}."""
    departments: Dict[str, List[str]] = {}
    for entry in _get_env_list(key):
        name, sep, emails = entry.partition("=")
        if not sep:
            continue
        departments[name.strip()] = [e.strip() for e in emails.split(";") if e.strip()]
    return departments


@dataclass
class Settings:
    """Runtime configuration for alert queries, the remote source and routing."""

    fleet_file: str = field(default_factory=lambda: _get_env("FLEET_FILE", "fleet.yaml"))
    api_url: str = field(default_factory=lambda: _get_env("ALERT_API_URL", ""))
    api_timeout: float = field(
        default_factory=lambda: _get_env_float("ALERT_API_TIMEOUT", 5.0)
    )
    window_days: int = field(
        default_factory=lambda: _get_env_int("ALERT_WINDOW_DAYS", DEFAULT_WINDOW_DAYS)
    )
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))

    default_recipients: List[str] = field(
        default_factory=lambda: [
            _get_env("ADMIN_EMAIL", "admin@example.com"),
            _get_env("FLEET_MANAGER_EMAIL", "fleet@example.com"),
        ]
    )
    executive_recipients: List[str] = field(
        default_factory=lambda: _get_env_list("EXECUTIVE_EMAILS", "executive@example.com")
    )
    department_recipients: Dict[str, List[str]] = field(
        default_factory=lambda: _get_env_departments("DEPARTMENT_RECIPIENTS")
    )

    @property
    def remote_enabled(self) -> bool:
        return bool(self.api_url)


def get_settings() -> Settings:
    """Fresh settings read from the current environment."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the CLI and web entry points."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
