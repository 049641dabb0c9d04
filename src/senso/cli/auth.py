"""senso login / logout / whoami — credential management.

login verifies the key against GET /org/me before anything is written, then
stores the key, the optional --base-url, and the org details in the config file.
"""

from __future__ import annotations

import typer
from rich.markup import escape

from senso.api.exceptions import SensoError
from senso.api.models import OrgInfo
from senso.cli import output
from senso.cli.errors import err_not_logged_in, format_error
from senso.cli.state import get_state, reported_errors
from senso.config import PersistedConfig, resolve_api_key

_ORG_ME = "/org/me"


def login_cmd(ctx: typer.Context) -> None:
    """Save an API key to config (validated via GET /org/me)."""
    state = get_state(ctx)

    api_key = state.api_key
    if not api_key:
        output.console.print("\n  [bold]Welcome to Senso CLI![/]\n")
        output.console.print("  [dim]1.[/] Go to [cyan]https://docs.senso.ai[/] to create an account")
        output.console.print("  [dim]2.[/] Generate an API key from your dashboard\n")
        api_key = typer.prompt("Paste your API key", hide_input=True).strip()
    if len(api_key) < 4:
        output.error("API key is required.")
        raise typer.Exit(1)

    with reported_errors():
        with state.client(api_key=api_key) as api:
            with output.console.status("Verifying API key…"):
                org = OrgInfo.from_dict(api.get(_ORG_ME))

        state.store.write(
            PersistedConfig(
                api_key=api_key,
                base_url=state.base_url,
                org_name=org.name,
                org_id=org.org_id,
                org_slug=org.slug,
                is_free_tier=org.is_free_tier,
            )
        )

    output.success(f"Authenticated as [bold]\"{escape(org.name)}\"[/] [dim]({org.org_id})[/]")
    output.success(f"Config saved to [dim]{escape(str(state.store.path))}[/]")


def logout_cmd(ctx: typer.Context) -> None:
    """Remove stored credentials."""
    state = get_state(ctx)
    with reported_errors():
        state.store.clear()
    output.success("Credentials removed.")


def whoami_cmd(ctx: typer.Context) -> None:
    """Show current auth status and org info."""
    state = get_state(ctx)
    api_key = resolve_api_key(state.api_key, store=state.store)
    if not api_key:
        output.error(err_not_logged_in())
        raise typer.Exit(1)

    cached = state.store.read()
    try:
        with state.client() as api:
            org = OrgInfo.from_dict(api.get(_ORG_ME))
    except SensoError as exc:
        if not cached.org_name:
            output.error(format_error(exc))
            raise typer.Exit(1) from exc
        output.warn(f"Could not reach API: {format_error(exc)}")
        output.console.print(f"  [bold]Organization:[/]  {escape(cached.org_name)} [dim](cached)[/]")
        output.console.print(f"  [bold]Org ID:[/]        {escape(cached.org_id or '')}")
        return

    key_prefix = api_key[:8] + "..."
    if state.json_output:
        output.print_json(
            {
                "orgId": org.org_id,
                "orgName": org.name,
                "orgSlug": org.slug,
                "isFreeTier": org.is_free_tier,
                "apiKeyPrefix": key_prefix,
            }
        )
        return

    output.console.print()
    output.console.print(f"  [bold]Organization:[/]  {escape(org.name)}")
    output.console.print(f"  [bold]Org ID:[/]        {org.org_id}")
    output.console.print(f"  [bold]Slug:[/]          {escape(org.slug)}")
    output.console.print(f"  [bold]Tier:[/]          {'Free' if org.is_free_tier else 'Paid'}")
    output.console.print(f"  [bold]API Key:[/]       {escape(key_prefix)}")
    output.console.print(f"  [bold]Config:[/]        {escape(str(state.store.path))}")
    output.console.print()
