"""Per-invocation CLI state and the shared error boundary for commands."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import typer
from rich.markup import escape

from senso.api.client import NO_CONTENT, ApiClient
from senso.api.exceptions import SensoError
from senso.cli import output
from senso.cli.errors import err_invalid_json_data, format_error
from senso.cli.output import OutputFormat
from senso.config import ConfigStore


@dataclass
class CliState:
    """Global options, built once by the root callback and stored on ``ctx.obj``."""

    store: ConfigStore
    api_key: str | None = None
    base_url: str | None = None
    output: OutputFormat = OutputFormat.plain
    quiet: bool = False

    @property
    def json_output(self) -> bool:
        return self.output == OutputFormat.json

    def client(self, api_key: str | None = None) -> ApiClient:
        """Return an ApiClient honouring --api-key / --base-url overrides."""
        return ApiClient(self.store, api_key=api_key or self.api_key, base_url=self.base_url)


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        raise RuntimeError("CLI state not initialised; invoke through the senso app")
    return state


@contextmanager
def reported_errors() -> Iterator[None]:
    """Print any core error as one line and exit 1."""
    try:
        yield
    except SensoError as exc:
        output.error(format_error(exc))
        raise typer.Exit(1) from exc
    except OSError as exc:
        output.error(format_error(exc))
        raise typer.Exit(1) from exc


def parse_data(raw: str) -> Any:
    """Decode a --data JSON argument or exit 1."""
    try:
        return json.loads(raw)
    except ValueError as exc:
        output.error(err_invalid_json_data())
        raise typer.Exit(1) from exc



def report_done(state: CliState, message: str, data: Any = NO_CONTENT) -> None:
    """Finish a mutating command: success line (plain) plus the returned body, if any.

    In JSON mode only the body is printed; a body-less 204 prints ``{"ok": true}``.
    """
    has_body = data is not NO_CONTENT and data is not None
    if state.json_output:
        output.print_json(data if has_body else {"ok": True})
        return
    output.success(escape(message))
    if has_body:
        output.print_json(data)
