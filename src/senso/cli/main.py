"""Senso CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from senso._logging import configure_logging
from senso.cli import output
from senso.cli.auth import login_cmd, logout_cmd, whoami_cmd
from senso.cli.categories import categories_app, topics_app
from senso.cli.content import content_app, prompts_app
from senso.cli.generate import content_types_app, engine_app, generate_app, run_config_app
from senso.cli.ingest import ingest_app
from senso.cli.org import (
    api_keys_app,
    brand_kit_app,
    members_app,
    notifications_app,
    org_app,
    users_app,
)
from senso.cli.output import OutputFormat
from senso.cli.search import search_app
from senso.cli.state import CliState
from senso.cli.update import update_cmd
from senso.config import ConfigStore, default_config_path
from senso.update_check import UpdateChecker
from senso.version import get_version


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"senso {get_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="senso",
    help=(
        "Senso CLI — Infrastructure for the Agentic Web.\n\n"
        "  senso login          Save and verify an API key.\n"
        "  senso ingest upload  Upload local files into the knowledge base.\n"
        "  senso search query   Ask the knowledge base a question."
    ),
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="Override API key (or set SENSO_API_KEY)."),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Override API base URL (or set SENSO_BASE_URL)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--output", "-o", help="Output format."),
    ] = OutputFormat.plain,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress non-essential output."),
    ] = False,
    no_update_check: Annotated[
        bool,
        typer.Option("--no-update-check", help="Skip the version check."),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config-file", hidden=True, help="Override config file path (for testing)."),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """Senso CLI — Infrastructure for the Agentic Web."""
    configure_logging()
    store = ConfigStore(config_file or default_config_path())
    ctx.obj = CliState(
        store=store,
        api_key=api_key,
        base_url=base_url,
        output=output_format,
        quiet=quiet,
    )

    silent = quiet or output_format == OutputFormat.json
    if not silent:
        output.console.print(f"\n  [bold green]Senso CLI[/] [dim]v{get_version()}[/]\n")

    # Never fails the command; a network refresh is joined on exit.
    checker = UpdateChecker(store, get_version())
    if checker.start_background(suppress=silent or no_update_check) is not None:
        ctx.call_on_close(checker.wait)


app.command("login")(login_cmd)
app.command("logout")(logout_cmd)
app.command("whoami")(whoami_cmd)
app.command("update")(update_cmd)
app.add_typer(org_app, name="org")
app.add_typer(users_app, name="users")
app.add_typer(api_keys_app, name="api-keys")
app.add_typer(categories_app, name="categories")
app.add_typer(topics_app, name="topics")
app.add_typer(content_app, name="content")
app.add_typer(prompts_app, name="prompts")
app.add_typer(search_app, name="search")
app.add_typer(ingest_app, name="ingest")
app.add_typer(generate_app, name="generate")
app.add_typer(engine_app, name="engine")
app.add_typer(content_types_app, name="content-types")
app.add_typer(run_config_app, name="run-config")
app.add_typer(brand_kit_app, name="brand-kit")
app.add_typer(members_app, name="members")
app.add_typer(notifications_app, name="notifications")


@app.command("version")
def version_cmd() -> None:
    """Show the installed Senso CLI version."""
    typer.echo(f"senso {get_version()}")


if __name__ == "__main__":
    app()
