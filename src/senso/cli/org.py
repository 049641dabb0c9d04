"""senso org / users / api-keys / members / brand-kit / notifications — organization administration."""

from __future__ import annotations

from typing import Annotated

import typer

from senso.cli import output
from senso.cli.state import get_state, parse_data, report_done, reported_errors

org_app = typer.Typer(name="org", help="Organization management.", add_completion=False)
users_app = typer.Typer(name="users", help="Manage organization users.", add_completion=False)
api_keys_app = typer.Typer(name="api-keys", help="Manage API keys.", add_completion=False)
members_app = typer.Typer(name="members", help="Organization members.", add_completion=False)
brand_kit_app = typer.Typer(
    name="brand-kit", help="Brand guidelines used for generated content.", add_completion=False
)
notifications_app = typer.Typer(
    name="notifications", help="Read and acknowledge notifications.", add_completion=False
)

_DataOpt = Annotated[str, typer.Option("--data", help="JSON request body.")]


# ------------------------------------------------------------------
# org
# ------------------------------------------------------------------


@org_app.command("get")
def org_get_cmd(ctx: typer.Context) -> None:
    """Get organization details."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/me"))


@org_app.command("update")
def org_update_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Update organization details."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.patch("/org/me", body)
    report_done(state, "Organization updated.", result)


# ------------------------------------------------------------------
# users
# ------------------------------------------------------------------


@users_app.command("list")
def users_list_cmd(ctx: typer.Context) -> None:
    """List users in the organization."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/users"))


@users_app.command("get")
def users_get_cmd(ctx: typer.Context, user_id: str) -> None:
    """Get a user by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/users/{user_id}"))


@users_app.command("add")
def users_add_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Add a user to the organization."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/users", body)
    report_done(state, "User added.", result)


@users_app.command("update")
def users_update_cmd(ctx: typer.Context, user_id: str, data: _DataOpt) -> None:
    """Update a user's role or details."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.patch(f"/org/users/{user_id}", body)
    report_done(state, f"User {user_id} updated.", result)


@users_app.command("remove")
def users_remove_cmd(ctx: typer.Context, user_id: str) -> None:
    """Remove a user from the organization."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/users/{user_id}")
    report_done(state, f"User {user_id} removed.", result)


# ------------------------------------------------------------------
# api-keys
# ------------------------------------------------------------------


@api_keys_app.command("list")
def api_keys_list_cmd(ctx: typer.Context) -> None:
    """List API keys."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/api-keys"))


@api_keys_app.command("get")
def api_keys_get_cmd(ctx: typer.Context, key_id: str) -> None:
    """Get an API key by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/api-keys/{key_id}"))


@api_keys_app.command("create")
def api_keys_create_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Create a new API key."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/api-keys", body)
    report_done(state, "API key created.", result)


@api_keys_app.command("update")
def api_keys_update_cmd(ctx: typer.Context, key_id: str, data: _DataOpt) -> None:
    """Update an API key."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.patch(f"/org/api-keys/{key_id}", body)
    report_done(state, f"API key {key_id} updated.", result)


@api_keys_app.command("delete")
def api_keys_delete_cmd(ctx: typer.Context, key_id: str) -> None:
    """Delete an API key."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/api-keys/{key_id}")
    report_done(state, f"API key {key_id} deleted.", result)


@api_keys_app.command("revoke")
def api_keys_revoke_cmd(ctx: typer.Context, key_id: str) -> None:
    """Revoke an API key."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post(f"/org/api-keys/{key_id}/revoke")
    report_done(state, f"API key {key_id} revoked.", result)


# ------------------------------------------------------------------
# members
# ------------------------------------------------------------------


@members_app.command("list")
def members_list_cmd(ctx: typer.Context) -> None:
    """List organization members and their roles."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/members"))


# ------------------------------------------------------------------
# brand-kit
# ------------------------------------------------------------------


@brand_kit_app.command("get")
def brand_kit_get_cmd(ctx: typer.Context) -> None:
    """Show the brand kit."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/brand-kit"))


@brand_kit_app.command("set")
def brand_kit_set_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Replace the brand kit with the given guidelines."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.put("/org/brand-kit", body)
    report_done(state, "Brand kit updated.", result)


# ------------------------------------------------------------------
# notifications
# ------------------------------------------------------------------

# Served outside the /org tree, relative to the same base URL.
_NOTIFICATIONS = "/app/v1/notifications"


@notifications_app.command("list")
def notifications_list_cmd(ctx: typer.Context) -> None:
    """List notifications."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(_NOTIFICATIONS))


@notifications_app.command("read")
def notifications_read_cmd(ctx: typer.Context, notification_id: str) -> None:
    """Mark a notification as read."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post(f"{_NOTIFICATIONS}/{notification_id}/read")
    report_done(state, f"Notification {notification_id} marked as read.", result)
