"""Senso error messages — actionable feedback.

Every error shown to the user states what went wrong and, where there is
one, the action that fixes it. Messages are single-line rich-markup strings.

Usage:
    from senso.cli.errors import format_error
    output.error(format_error(exc))
    raise typer.Exit(1)
"""

from __future__ import annotations

from rich.markup import escape

from senso.api.exceptions import (
    ApiError,
    NetworkUnreachableError,
    NotAuthenticatedError,
    RequestTimeoutError,
)


def err_not_authenticated() -> str:
    """No API key resolvable from flag, env, or config."""
    return "No API key found. Run `senso login` or set SENSO_API_KEY."


def err_not_logged_in() -> str:
    return "Not logged in. Run `senso login` to authenticate."


def err_auth_failed() -> str:
    """HTTP 401."""
    return "Authentication failed. Run `senso login` to update your API key."


def err_permission_denied() -> str:
    """HTTP 403."""
    return "Permission denied. Check your API key permissions."


def err_not_found() -> str:
    """HTTP 404."""
    return "Resource not found."


def err_conflict(message: str) -> str:
    """HTTP 409 — include the server's explanation."""
    return f"Conflict: {escape(message)}"


def err_server() -> str:
    """HTTP 5xx."""
    return "Server error. Try again later."


def err_api(status: int, message: str) -> str:
    """Any other 4xx."""
    return f"API error ({status}): {escape(message)}"


def err_timeout() -> str:
    return "Request timed out. Try again later."


def err_network() -> str:
    return "Could not connect to Senso API. Check your internet connection."


def err_invalid_json_data() -> str:
    """--data argument is not valid JSON."""
    return "Invalid JSON in --data"


def err_file(path: str, reason: str) -> str:
    """A local file could not be read."""
    return f"Cannot read file '{escape(path)}': {escape(reason)}"


def format_error(exc: BaseException) -> str:
    """Map any error raised by the core to a one-line user message."""
    if isinstance(exc, ApiError):
        if exc.status == 401:
            return err_auth_failed()
        if exc.status == 403:
            return err_permission_denied()
        if exc.status == 404:
            return err_not_found()
        if exc.status == 409:
            return err_conflict(str(exc))
        if exc.status >= 500:
            return err_server()
        return err_api(exc.status, str(exc))
    if isinstance(exc, NotAuthenticatedError):
        return err_not_authenticated()
    if isinstance(exc, RequestTimeoutError):
        return err_timeout()
    if isinstance(exc, NetworkUnreachableError):
        return err_network()
    if isinstance(exc, OSError):
        return err_file(str(exc.filename or ""), exc.strerror or str(exc))
    return escape(str(exc))
