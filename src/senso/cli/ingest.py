"""senso ingest — upload local files into the knowledge base.

Commands:
  senso ingest upload FILE...               — up to 10 new files per call
  senso ingest reprocess CONTENT_ID FILE    — replace an existing item's file

Each file is hashed locally, the control plane hands back a presigned URL
(or a reason to skip), and the raw bytes are PUT straight to object storage.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from senso.cli import output
from senso.cli.state import CliState, get_state, reported_errors
from senso.ingest.uploader import MAX_BATCH_FILES, FileOutcome, IngestionUploader, UploadReport

ingest_app = typer.Typer(
    name="ingest",
    help="Content ingestion (upload, reprocess).",
    add_completion=False,
)


@ingest_app.command("upload")
def ingest_upload_cmd(
    ctx: typer.Context,
    files: Annotated[
        list[Path],
        typer.Argument(help=f"Local files to upload (at most {MAX_BATCH_FILES})."),
    ],
) -> None:
    """Upload local files: hash, request presigned URLs, PUT the bytes."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        with IngestionUploader(api, on_outcome=_progress_printer(state)) as uploader:
            report = uploader.upload_batch(files)
    _print_report(state, report)


@ingest_app.command("reprocess")
def ingest_reprocess_cmd(
    ctx: typer.Context,
    content_id: Annotated[str, typer.Argument(help="ID of the content item to replace.")],
    file: Annotated[Path, typer.Argument(help="Replacement file.")],
) -> None:
    """Re-ingest an existing content item from a new local file."""
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        with IngestionUploader(api, on_outcome=_progress_printer(state)) as uploader:
            report = uploader.reprocess(content_id, file)
    _print_report(state, report)


# ------------------------------------------------------------------
# Output
# ------------------------------------------------------------------


def _progress_printer(state: CliState):
    """Per-file progress lines; silent in JSON mode."""

    def _on_outcome(outcome: FileOutcome) -> None:
        if state.json_output:
            return
        name = escape(outcome.filename)
        if outcome.uploaded:
            output.success(f"Uploaded {name}")
            return
        detail = f" — {escape(outcome.message)}" if outcome.message else ""
        output.console.print(f"  [yellow]↷[/] Skipped {name} [dim]\\[{outcome.status}][/]{detail}")

    return _on_outcome


def _print_report(state: CliState, report: UploadReport) -> None:
    if state.json_output:
        output.print_json(report.raw)
        return
    if not report.outcomes:
        output.warn("The server returned no upload results.")
        return
    output.console.print(
        f"\n  [bold]{report.uploaded}[/] uploaded, [bold]{report.skipped}[/] skipped."
    )
    for outcome in report.outcomes:
        if outcome.content_id:
            output.dim(f"{escape(outcome.filename)}: content {outcome.content_id}")
