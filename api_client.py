"""
Project: Cafe POS
Date: October 2026

Description:
HTTP client for the POS REST API. Keeps the session cookie between calls
and turns failures into `NetworkError` / `ApiError`.
"""

import logging
from typing import Any, Optional

import httpx

from errors import ApiError, NetworkError

log = logging.getLogger(__name__)


class ApiClient:
    """Thin wrapper around `httpx.Client` bound to the server's base URL."""

    def __init__(self, base_url: str, transport: Optional[httpx.BaseTransport] = None, timeout: Optional[float] = None) -> None:
        """
        Args:
            base_url: Server root, e.g. http://localhost:5000
            transport: Optional httpx transport (tests wire the Flask app in here)
            timeout: Request timeout in seconds; None waits indefinitely
        """
        self.client = httpx.Client(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @staticmethod
    def _error_text(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return body.get("error") or body.get("message") or response.reason_phrase
        return response.reason_phrase

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Sends one request and returns the decoded JSON body (None when empty).

        Raises:
            NetworkError: the server could not be reached.
            ApiError: the server answered with a non-2xx status.
        """
        try:
            response = self.client.request(method, path, json=json)
        except httpx.TransportError as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(str(e)) from e

        if response.is_error:
            message = self._error_text(response)
            log.info("%s %s -> %s %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)

        if not response.content:
            return None
        return response.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)
