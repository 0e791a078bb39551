"""HTTP client for a remote alert source (see web/app.py for the server side)."""

import logging
from typing import Iterable, List

import requests

from .alert import ExpiryAlert
from .builder import AlertsByField
from .urgency import DEFAULT_WINDOW_DAYS

logger = logging.getLogger(__name__)


class RemoteAlertError(Exception):
    """The remote source answered, but not with a usable alert payload."""


class RemoteAlertSource:
    """Fetches precomputed alerts: GET {base_url}/alerts/<field_type>?days=N."""

    def __init__(self, base_url: str, timeout: float = 5.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, field_type: str, window_days: int = DEFAULT_WINDOW_DAYS) -> List[ExpiryAlert]:
        """
        Alerts for one field type.

        Raises requests.RequestException on connection errors, timeouts and
        non-2xx responses, RemoteAlertError on a malformed body.
        """
        url = f"{self.base_url}/alerts/{field_type}"
        logger.debug("GET %s days=%d", url, window_days)
        response = self.session.get(url, params={"days": window_days}, timeout=self.timeout)
        response.raise_for_status()

        try:
            body = response.json()
            if not body.get("success", True):
                raise RemoteAlertError(f"{url} reported failure: {body.get('message')}")
            return [ExpiryAlert.from_dict(item) for item in body["data"]]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise RemoteAlertError(f"Malformed alert payload from {url}: {e}") from e

    def fetch_all(
        self, field_types: Iterable[str], window_days: int = DEFAULT_WINDOW_DAYS
    ) -> AlertsByField:
        """Alerts for several field types; any single failure fails the whole call."""
        return {ft: self.fetch(ft, window_days) for ft in field_types}
