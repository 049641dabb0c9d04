"""senso categories / topics — taxonomy management.

Topics always live under a category, so every topics command takes the
category ID first.
"""

from __future__ import annotations

from typing import Annotated

import typer

from senso.cli import output
from senso.cli.state import get_state, parse_data, report_done, reported_errors

categories_app = typer.Typer(name="categories", help="Manage categories.", add_completion=False)
topics_app = typer.Typer(name="topics", help="Manage topics within a category.", add_completion=False)

_NameOpt = Annotated[str, typer.Option("--name", help="Name.")]
_DataOpt = Annotated[str, typer.Option("--data", help="JSON array to create.")]


@categories_app.command("list")
def categories_list_cmd(ctx: typer.Context) -> None:
    """List categories."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/categories"))


@categories_app.command("list-all")
def categories_list_all_cmd(ctx: typer.Context) -> None:
    """List all categories with their topics."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/categories/all"))


@categories_app.command("get")
def categories_get_cmd(ctx: typer.Context, category_id: str) -> None:
    """Get a category by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/categories/{category_id}"))


@categories_app.command("create")
def categories_create_cmd(ctx: typer.Context, name: str) -> None:
    """Create a category."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post("/org/categories", {"name": name})
    report_done(state, f'Category "{name}" created.', result)


@categories_app.command("update")
def categories_update_cmd(ctx: typer.Context, category_id: str, name: _NameOpt) -> None:
    """Rename a category."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.patch(f"/org/categories/{category_id}", {"name": name})
    report_done(state, f"Category {category_id} updated.", result)


@categories_app.command("delete")
def categories_delete_cmd(ctx: typer.Context, category_id: str) -> None:
    """Delete a category."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/categories/{category_id}")
    report_done(state, f"Category {category_id} deleted.", result)


@categories_app.command("batch-create")
def categories_batch_create_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Batch create categories with topics."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/categories/batch", body)
    report_done(state, "Batch create completed.", result)


# ------------------------------------------------------------------
# topics
# ------------------------------------------------------------------


def _topics_path(category_id: str, topic_id: str | None = None) -> str:
    path = f"/org/categories/{category_id}/topics"
    return f"{path}/{topic_id}" if topic_id else path


@topics_app.command("list")
def topics_list_cmd(ctx: typer.Context, category_id: str) -> None:
    """List topics in a category."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(_topics_path(category_id)))


@topics_app.command("get")
def topics_get_cmd(ctx: typer.Context, category_id: str, topic_id: str) -> None:
    """Get a topic by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(_topics_path(category_id, topic_id)))


@topics_app.command("create")
def topics_create_cmd(ctx: typer.Context, category_id: str, name: _NameOpt) -> None:
    """Create a topic in a category."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.post(_topics_path(category_id), {"name": name})
    report_done(state, f'Topic "{name}" created.', result)


@topics_app.command("update")
def topics_update_cmd(
    ctx: typer.Context, category_id: str, topic_id: str, name: _NameOpt
) -> None:
    """Rename a topic."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.patch(_topics_path(category_id, topic_id), {"name": name})
    report_done(state, f"Topic {topic_id} updated.", result)


@topics_app.command("delete")
def topics_delete_cmd(ctx: typer.Context, category_id: str, topic_id: str) -> None:
    """Delete a topic."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(_topics_path(category_id, topic_id))
    report_done(state, f"Topic {topic_id} deleted.", result)


@topics_app.command("batch-create")
def topics_batch_create_cmd(ctx: typer.Context, category_id: str, data: _DataOpt) -> None:
    """Batch create topics in a category."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post(f"{_topics_path(category_id)}/batch", body)
    report_done(state, "Batch create completed.", result)
