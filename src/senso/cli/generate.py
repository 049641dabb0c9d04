"""senso generate / engine / content-types / run-config — content generation commands."""

from __future__ import annotations

from typing import Annotated

import typer

from senso.cli import output
from senso.cli.state import get_state, parse_data, report_done, reported_errors

generate_app = typer.Typer(
    name="generate",
    help="Content generation settings, samples and runs.",
    add_completion=False,
)
engine_app = typer.Typer(
    name="engine", help="Publish or draft content through the content engine.", add_completion=False
)
content_types_app = typer.Typer(
    name="content-types",
    help="Manage content types (output format and structure for generated content).",
    add_completion=False,
)
run_config_app = typer.Typer(
    name="run-config", help="Configure which models run and on which days.", add_completion=False
)

_DataOpt = Annotated[str, typer.Option("--data", help="JSON request body.")]


# ------------------------------------------------------------------
# generate
# ------------------------------------------------------------------


@generate_app.command("settings")
def generate_settings_cmd(ctx: typer.Context) -> None:
    """Show the content generation settings."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/content-generation"))


@generate_app.command("update-settings")
def generate_update_settings_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Update content generation settings (partial update)."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.patch("/org/content-generation", body)
    report_done(state, "Content generation settings updated.", result)


@generate_app.command("sample")
def generate_sample_cmd(
    ctx: typer.Context,
    prompt_id: Annotated[str, typer.Option("--prompt-id", help="Prompt to generate for.")],
    content_type_id: Annotated[
        str, typer.Option("--content-type-id", help="Content type to generate.")
    ],
    destination: Annotated[
        str | None, typer.Option("--destination", help="Publish destination (e.g. citeables).")
    ] = None,
) -> None:
    """Generate one sample content item for a prompt."""
    state = get_state(ctx)
    body = {"geo_question_id": prompt_id, "content_type_id": content_type_id}
    if destination:
        body["publish_destination"] = destination
    with reported_errors(), state.client() as api:
        output.print_json(api.post("/org/content-generation/sample", body))


@generate_app.command("run")
def generate_run_cmd(
    ctx: typer.Context,
    prompt_ids: Annotated[
        list[str] | None,
        typer.Option("--prompt-ids", help="Prompt ID to process; repeat for several. Omit to run all."),
    ] = None,
) -> None:
    """Trigger a content generation run. Runs asynchronously on the server."""
    state = get_state(ctx)
    body = {"prompt_ids": prompt_ids} if prompt_ids else None
    with reported_errors(), state.client() as api:
        result = api.post("/org/content-generation/run", body)
    report_done(state, "Content generation run triggered.", result)


# ------------------------------------------------------------------
# engine
# ------------------------------------------------------------------


@engine_app.command("publish")
def engine_publish_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Publish content to its destinations."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/content-engine/publish", body)
    report_done(state, "Content published.", result)


@engine_app.command("draft")
def engine_draft_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Save content as a draft for review."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/content-engine/draft", body)
    report_done(state, "Content saved as draft.", result)


# ------------------------------------------------------------------
# content-types
# ------------------------------------------------------------------


@content_types_app.command("list")
def content_types_list_cmd(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option("--limit", help="Maximum items (server default 50).")] = None,
    offset: Annotated[int | None, typer.Option("--offset", help="Pagination offset.")] = None,
) -> None:
    """List content types."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/content-types", params={"limit": limit, "offset": offset}))


@content_types_app.command("create")
def content_types_create_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Create a content type."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.post("/org/content-types", body)
    report_done(state, "Content type created.", result)


@content_types_app.command("get")
def content_types_get_cmd(ctx: typer.Context, type_id: str) -> None:
    """Get a content type by ID."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get(f"/org/content-types/{type_id}"))


@content_types_app.command("update")
def content_types_update_cmd(ctx: typer.Context, type_id: str, data: _DataOpt) -> None:
    """Replace a content type."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.put(f"/org/content-types/{type_id}", body)
    report_done(state, f"Content type {type_id} updated.", result)


@content_types_app.command("delete")
def content_types_delete_cmd(ctx: typer.Context, type_id: str) -> None:
    """Delete a content type."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        result = api.delete(f"/org/content-types/{type_id}")
    report_done(state, f"Content type {type_id} deleted.", result)


# ------------------------------------------------------------------
# run-config
# ------------------------------------------------------------------


@run_config_app.command("models")
def run_config_models_cmd(ctx: typer.Context) -> None:
    """Show the models prompts are run against."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/run-models"))


@run_config_app.command("set-models")
def run_config_set_models_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Replace the model list, e.g. {"models": ["chatgpt", "gemini"]}."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.put("/org/run-models", body)
    report_done(state, "Models updated.", result)


@run_config_app.command("schedule")
def run_config_schedule_cmd(ctx: typer.Context) -> None:
    """Show the days of the week runs are scheduled on."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        output.print_json(api.get("/org/run-schedule"))


@run_config_app.command("set-schedule")
def run_config_set_schedule_cmd(ctx: typer.Context, data: _DataOpt) -> None:
    """Replace the run schedule, e.g. {"schedule": [1, 3, 5]}."""
    state = get_state(ctx)
    body = parse_data(data)
    with reported_errors(), state.client() as api:
        result = api.put("/org/run-schedule", body)
    report_done(state, "Schedule updated.", result)
