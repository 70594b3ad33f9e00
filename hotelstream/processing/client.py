"""HTTP client for the PMS stream-poll and room-inventory endpoints."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
ACCESS_DENIED_STATUSES = (401, 403)


class StreamError(Exception):
    """Base error for failed calls to the PMS API."""


class UpstreamError(StreamError):
    """The request failed in transport or returned a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AccessDeniedError(StreamError):
    """The PMS rejected our credentials (HTTP 401/403)."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class StreamClient:
    """Basic-auth client bound to one PMS application id.

    No retries are attempted; callers decide what a failed poll means.
    """

    def __init__(
        self,
        host_url: str,
        app_id: str,
        password: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.host_url = host_url.rstrip("/")
        self.app_id = app_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (app_id, password)
        self.session.headers.update({"Content-Type": "application/json"})

    def poll_url(self, num_messages: int) -> str:
        return f"{self.host_url}/thirdparty/hotelbrand/stream/{self.app_id}/poll?num_of_messages={num_messages}"

    def inventory_url(self, property_id: str) -> str:
        return f"{self.host_url}/v4/hotelbrand/properties/{property_id}/room-inventory"

    def _get_json(self, url: str) -> Any:
        logger.info("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise UpstreamError(f"Request to {url} failed: {exc}") from exc

        if response.status_code in ACCESS_DENIED_STATUSES:
            raise AccessDeniedError(
                f"Access denied by {url} (HTTP {response.status_code})", response.status_code
            )
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            raise UpstreamError(
                f"{url} returned HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            ) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"{url} returned a non-JSON body") from exc

    def poll(self, num_messages: int = 1) -> List[Any]:
        """Fetch up to ``num_messages`` raw events; an empty list when none."""

        body = self._get_json(self.poll_url(num_messages))
        if not isinstance(body, list):
            if body is not None:
                logger.warning("Ignoring non-list poll body of type %s", type(body).__name__)
            return []
        return body

    def room_inventory(self, property_id: str) -> Any:
        return self._get_json(self.inventory_url(property_id))
