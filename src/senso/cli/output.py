"""Console output helpers shared by all senso commands.

Human-readable progress goes to stdout; errors, warnings and the update
advisory go to stderr so `--output json` stays parseable.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    plain = "plain"
    json = "json"
    table = "table"


def success(msg: str) -> None:
    console.print(f"  [green]✓[/] {msg}")


def error(msg: str) -> None:
    err_console.print(f"  [red]✗[/] {msg}")


def warn(msg: str) -> None:
    err_console.print(f"  [yellow]![/] {msg}")


def info(msg: str) -> None:
    console.print(f"  [cyan]ℹ[/] {msg}")


def dim(msg: str) -> None:
    console.print(f"  [dim]{msg}[/]")


def print_json(data: Any) -> None:
    """Print *data* as 2-space indented JSON, without rich markup or highlighting."""
    console.print(json.dumps(data, indent=2, default=str), markup=False, highlight=False, soft_wrap=True)


def print_table(rows: Sequence[dict[str, Any]], columns: Sequence[str]) -> None:
    """Render *rows* as a rich table restricted to *columns*."""
    if not rows:
        dim("No results.")
        return
    table = Table(show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))
    console.print(table)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)
