"""Exception taxonomy for the Senso API client and ingestion pipeline."""

from __future__ import annotations

from typing import Any


class SensoError(Exception):
    """Base class for every error the CLI reports to the user."""


class NotAuthenticatedError(SensoError):
    """No API key could be resolved from flag, environment, or config."""

    def __init__(self) -> None:
        super().__init__("No API key found. Run `senso login` or set SENSO_API_KEY.")


class ApiError(SensoError):
    """The control plane answered with a non-2xx status.

    Attributes:
        status: HTTP status code.
        status_text: HTTP reason phrase.
        body: Parsed JSON body, or the raw text if it was not JSON.
    """

    def __init__(self, status: int, status_text: str, body: Any) -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__(_message_from_body(body) or status_text or f"HTTP {status}")


class RequestTimeoutError(SensoError):
    """The request did not complete within the client timeout."""


class NetworkUnreachableError(SensoError):
    """The API host could not be reached (DNS, refused connection, TLS, ...)."""


class InvalidResponseBodyError(SensoError):
    """A 2xx response carried a body that is not valid JSON."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid JSON response from {path}")


class BatchValidationError(SensoError):
    """An upload batch was rejected before any I/O (too many files, duplicates)."""


class StorageUploadError(SensoError):
    """The presigned object-storage PUT for a file returned a non-2xx status."""

    def __init__(self, filename: str, status: int, detail: str = "") -> None:
        self.filename = filename
        self.status = status
        self.detail = detail
        msg = f"Upload failed for {filename} (HTTP {status})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


def _message_from_body(body: Any) -> str | None:
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None
