"""senso content / prompts — knowledge-base content items and prompts."""

from __future__ import annotations

from typing import Annotated, Any

import typer
from rich.markup import escape

from senso.cli import output
from senso.cli.output import OutputFormat
from senso.cli.state import get_state, parse_data, report_done, reported_errors

content_app = typer.Typer(
    name="content",
    help="Manage content items: list, inspect, review, ownership and publishing state.",
    add_completion=False,
)
prompts_app = typer.Typer(name="prompts", help="Manage prompts.", add_completion=False)

_SORT_ORDERS = ("title_asc", "title_desc", "created_asc", "created_desc")


@content_app.command("list")
def content_list_cmd(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option("--limit", help="Items per page.")] = 10,
    offset: Annotated[int, typer.Option("--offset", help="Pagination offset.")] = 0,
    search: Annotated[
        str | None, typer.Option("--search", help="Filter content by title.")
    ] = None,
    sort: Annotated[
        str | None,
        typer.Option("--sort", help="Sort order: " + ", ".join(_SORT_ORDERS)),
    ] = None,
) -> None:
    """List content items: title, status, and ID."""
    state = get_state(ctx)
    if sort is not None and sort not in _SORT_ORDERS:
        output.error(f"Invalid --sort '{escape(sort)}'. Use one of: {', '.join(_SORT_ORDERS)}")
        raise typer.Exit(1)

    with reported_errors(), state.client() as api:
        data = api.get(
            "/org/content",
            params={"limit": limit, "offset": offset, "search": search, "sort": sort},
        )

    rows: list[dict[str, Any]] = data if isinstance(data, list) else []
    if state.output == OutputFormat.json:
        output.print_json(data)
    elif state.output == OutputFormat.table:
        output.print_table(
            [
                {"id": r.get("id") or r.get("content_id"), "title": r.get("title"), "status": r.get("status")}
                for r in rows
            ],
            ["id", "title", "status"],
        )
    elif not rows:
        output.dim("No content found.")
    else:
        for r in rows:
            title = escape(str(r.get("title") or "Untitled"))
            cid = escape(str(r.get("id") or r.get("content_id")))
            status = f" [dim]\\[{escape(str(r['status']))}][/]" if r.get("status") else ""
            output.console.print(f"  [bold]{title}[/] [dim]({cid})[/]{status}")


@content_app.command("get")
def content_get_cmd(ctx: typer.Context, content_id: str) -> None:
    """Get a content item by ID, including versions and publish status."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/content/{content_id}"))


@content_app.command("delete")
def content_delete_cmd(ctx: typer.Context, content_id: str) -> None:
    """Delete a content item. This cannot be undone."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/content/{content_id}")
    report_done(state, f"Content {content_id} deleted.", result)


@content_app.command("unpublish")
def content_unpublish_cmd(ctx: typer.Context, content_id: str) -> None:
    """Unpublish a content item and set it back to draft."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post(f"/org/content/{content_id}/unpublish")
    report_done(state, f"Content {content_id} unpublished.", result)


@content_app.command("verification")
def content_verification_cmd(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option("--limit", help="Maximum items to return.")] = None,
    offset: Annotated[int | None, typer.Option("--offset", help="Pagination offset.")] = None,
    search: Annotated[str | None, typer.Option("--search", help="Filter by title.")] = None,
    status: Annotated[
        str | None,
        typer.Option("--status", help="all, draft, review, rejected or published."),
    ] = None,
) -> None:
    """List content in the review workflow, optionally filtered by editorial status."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        data = api.get(
            "/org/content/verification",
            params={"limit": limit, "offset": offset, "search": search, "status": status},
        )
    output.print_json(data)


@content_app.command("reject")
def content_reject_cmd(
    ctx: typer.Context,
    version_id: str,
    reason: Annotated[str | None, typer.Option("--reason", help="Reason for rejection.")] = None,
) -> None:
    """Reject a content version under review."""
    state = get_state(ctx)
    body = {"reason": reason} if reason else None
    with reported_errors(), state.client() as api:
        result = api.post(f"/org/content/versions/{version_id}/reject", body)
    report_done(state, f"Version {version_id} rejected.", result)


@content_app.command("restore")
def content_restore_cmd(ctx: typer.Context, version_id: str) -> None:
    """Restore a content version to draft."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post(f"/org/content/versions/{version_id}/restore")
    report_done(state, f"Version {version_id} restored to draft.", result)


@content_app.command("owners")
def content_owners_cmd(ctx: typer.Context, content_id: str) -> None:
    """List the owners of a content item."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/content/{content_id}/owners"))


@content_app.command("set-owners")
def content_set_owners_cmd(
    ctx: typer.Context,
    content_id: str,
    user_ids: Annotated[
        list[str], typer.Option("--user-ids", help="Owner user ID; repeat for several.")
    ],
) -> None:
    """Replace the owners of a content item."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.put(f"/org/content/{content_id}/owners", {"user_ids": user_ids})
    report_done(state, f"Owners updated for content {content_id}.", result)


@content_app.command("remove-owner")
def content_remove_owner_cmd(ctx: typer.Context, content_id: str, user_id: str) -> None:
    """Remove one owner from a content item."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/content/{content_id}/owners/{user_id}")
    report_done(state, f"Owner {user_id} removed from content {content_id}.", result)


# ------------------------------------------------------------------
# prompts
# ------------------------------------------------------------------


@prompts_app.command("list")
def prompts_list_cmd(ctx: typer.Context) -> None:
    """List prompts."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/prompts"))


@prompts_app.command("get")
def prompts_get_cmd(ctx: typer.Context, prompt_id: str) -> None:
    """Get a prompt by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/prompts/{prompt_id}"))


@prompts_app.command("create")
def prompts_create_cmd(
    ctx: typer.Context,
    data: Annotated[str, typer.Option("--data", help="JSON prompt definition.")],
) -> None:
    """Create a prompt."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/prompts", body)
    report_done(state, "Prompt created.", result)


@prompts_app.command("delete")
def prompts_delete_cmd(ctx: typer.Context, prompt_id: str) -> None:
    """Delete a prompt."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/prompts/{prompt_id}")
    report_done(state, f"Prompt {prompt_id} deleted.", result)
