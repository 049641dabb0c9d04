"""Generic authenticated request client for the Senso control-plane API.

One call = one HTTP request: resolve credentials, build the URL, send with a
fixed 30-second timeout, normalise the body. No retries. Endpoint-specific
payload shapes live in senso.api.models; this module only knows transport.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from senso.api.exceptions import (
    ApiError,
    InvalidResponseBodyError,
    NetworkUnreachableError,
    NotAuthenticatedError,
    RequestTimeoutError,
)
from senso.config import ConfigStore, resolve_api_key, resolve_base_url
from senso.version import get_version

log = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0  # seconds


class _NoContent:
    """Sentinel returned for HTTP 204 responses."""

    _instance: _NoContent | None = None

    def __new__(cls) -> _NoContent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_CONTENT"


NO_CONTENT = _NoContent()


class ApiClient:
    """Thin wrapper around httpx.Client bound to one set of credentials.

    Args:
        store: Config store used for credential fallback.
        api_key: Explicit API key override (e.g. --api-key).
        base_url: Explicit base URL override (e.g. --base-url).
        transport: Optional httpx transport (tests inject httpx.MockTransport).
        environ: Environment mapping used for credential lookup (defaults to os.environ).
    """

    def __init__(
        self,
        store: ConfigStore,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._store = store
        self._explicit_key = api_key
        self._explicit_base_url = base_url
        self._environ = environ
        self._http = httpx.Client(timeout=REQUEST_TIMEOUT, transport=transport)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @property
    def api_key(self) -> str | None:
        return resolve_api_key(self._explicit_key, store=self._store, environ=self._environ)

    @property
    def base_url(self) -> str:
        return resolve_base_url(self._explicit_base_url, store=self._store, environ=self._environ)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one authenticated request and return the parsed JSON body.

        Returns:
            The decoded JSON value, or ``NO_CONTENT`` for HTTP 204.

        Raises:
            NotAuthenticatedError: No API key resolvable (raised before any I/O).
            ApiError: Non-2xx response.
            RequestTimeoutError: No response within 30 seconds.
            NetworkUnreachableError: Connection could not be established.
            InvalidResponseBodyError: 2xx response whose body is not JSON.
        """
        api_key = self.api_key
        if not api_key:
            raise NotAuthenticatedError()

        url = f"{self.base_url}{path}"
        query = {k: _query_value(v) for k, v in (params or {}).items() if v is not None}

        headers = {
            "X-API-Key": api_key,
            "Accept": "application/json",
            "User-Agent": f"senso-cli/{get_version()}",
        }
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        log.debug("%s %s params=%s", method.upper(), url, query or None)
        try:
            response = self._http.request(
                method.upper(), url, params=query or None, headers=headers, content=content
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"Request to {path} timed out after {REQUEST_TIMEOUT:.0f}s"
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkUnreachableError(f"Could not connect to {url}: {exc}") from exc

        return self._handle_response(response, path)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body=body)

    def patch(self, path: str, body: Any = None) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    @staticmethod
    def _handle_response(response: httpx.Response, path: str) -> Any:
        log.debug("← %s %s", response.status_code, path)
        if not response.is_success:
            text = response.text
            try:
                body: Any = json.loads(text)
            except ValueError:
                body = text
            raise ApiError(response.status_code, response.reason_phrase, body)

        if response.status_code == 204:
            return NO_CONTENT

        try:
            return json.loads(response.text)
        except ValueError as exc:
            raise InvalidResponseBodyError(path) from exc


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
