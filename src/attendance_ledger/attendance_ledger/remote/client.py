from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ..core.exceptions import BackendError, ConflictError, StaleReferenceError

logger = logging.getLogger("attendance_ledger.remote")


@dataclass
class ApiConfig:
    base_url: str
    timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS


def path_segment(value: str) -> str:
    return quote(value, safe="")


class ApiClient:
    """JSON client for the persistence collaborator.

    Every failure leaves as a ``DomainError`` subclass carrying the store's
    ``error`` message when it sent one.
    """

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._base_url = config.base_url.rstrip("/")
        self._timeout = float(config.timeout_seconds)
        self._session = session or requests.Session()

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, payload: dict) -> Any:
        return self._request("POST", path, payload)

    def put(self, path: str, payload: dict) -> Any:
        return self._request("PUT", path, payload)

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("store request", extra={"method": method, "url": url})
        try:
            resp = self._session.request(method, url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("store unreachable", extra={"method": method, "url": url, "error": str(e)})
            raise BackendError(f"Error contacting server: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning(
                "store rejected request",
                extra={"method": method, "url": url, "status": resp.status_code, "error": message},
            )
            if resp.status_code == 404:
                raise StaleReferenceError(message)
            if resp.status_code in (400, 409, 422):
                raise ConflictError(message)
            raise BackendError(message)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from server for {method} {path}") from e


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"Server responded with HTTP {resp.status_code}"
