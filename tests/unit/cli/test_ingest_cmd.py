"""Tests for the senso ingest CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from conftest import Recorder
from senso.ingest.uploader import IngestionUploader


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------


@pytest.fixture
def storage(monkeypatch) -> Recorder:
    """Send presigned PUTs made by the CLI to a recording mock."""
    rec = Recorder(lambda r: httpx.Response(200))

    def _factory(api, on_outcome=None):
        return IngestionUploader(
            api, storage=httpx.Client(transport=rec.transport), on_outcome=on_outcome
        )

    monkeypatch.setattr("senso.cli.ingest.IngestionUploader", _factory)
    return rec


@pytest.fixture
def docs(tmp_path: Path) -> list[Path]:
    paths = []
    for name in ("report.pdf", "notes.md"):
        p = tmp_path / name
        p.write_bytes(f"body of {name}".encode())
        paths.append(p)
    return paths


def _reply(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json=[
            {
                "filename": "report.pdf",
                "status": "duplicate",
                "message": "already exists",
            },
            {
                "filename": "notes.md",
                "status": "upload_pending",
                "upload_url": "https://bucket.s3.test/notes.md?sig=1",
                "content_id": "c-9",
                "ingestion_run_id": "run-9",
            },
        ],
    )


# ------------------------------------------------------------------
# upload
# ------------------------------------------------------------------


def test_upload_reports_per_file(invoke, cli_api, storage, docs) -> None:
    control = cli_api(_reply)

    result = invoke("--api-key", "k", "ingest", "upload", *map(str, docs))

    assert result.exit_code == 0, result.output
    assert len(control.requests) == 1
    assert len(storage.requests) == 1
    assert "Uploaded notes.md" in result.output
    assert "Skipped report.pdf" in result.output
    assert "already exists" in result.output
    assert "1 uploaded, 1 skipped" in result.output


def test_upload_json_output(invoke, cli_api, storage, docs) -> None:
    cli_api(_reply)

    result = invoke("--api-key", "k", "-o", "json", "ingest", "upload", *map(str, docs))

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == _reply(None).json()
    assert "Uploaded" not in result.output


def test_upload_too_many_files_exits_1(invoke, cli_api, tmp_path) -> None:
    control = cli_api(lambda r: httpx.Response(200, json=[]))
    paths = [str(tmp_path / f"f{i}.txt") for i in range(11)]

    result = invoke("--api-key", "k", "ingest", "upload", *paths)

    assert result.exit_code == 1
    assert "at most 10" in result.output
    assert control.requests == []


def test_upload_missing_file_exits_1(invoke, cli_api, tmp_path) -> None:
    control = cli_api(lambda r: httpx.Response(200, json=[]))

    result = invoke("--api-key", "k", "ingest", "upload", str(tmp_path / "ghost.pdf"))

    assert result.exit_code == 1
    assert "ghost.pdf" in result.output
    assert control.requests == []


def test_upload_without_key_exits_1(invoke, cli_api, docs) -> None:
    control = cli_api(lambda r: httpx.Response(200, json=[]))

    result = invoke("ingest", "upload", str(docs[0]))

    assert result.exit_code == 1
    assert "senso login" in result.output
    assert control.requests == []


def test_upload_storage_failure_exits_1(invoke, cli_api, docs, monkeypatch) -> None:
    cli_api(_reply)
    failing = Recorder(lambda r: httpx.Response(500, text="InternalError"))
    monkeypatch.setattr(
        "senso.cli.ingest.IngestionUploader",
        lambda api, on_outcome=None: IngestionUploader(
            api, storage=httpx.Client(transport=failing.transport), on_outcome=on_outcome
        ),
    )

    result = invoke("--api-key", "k", "ingest", "upload", *map(str, docs))

    assert result.exit_code == 1
    assert "notes.md" in result.output
    assert "500" in result.output


# ------------------------------------------------------------------
# reprocess
# ------------------------------------------------------------------


def test_reprocess_hits_content_endpoint(invoke, cli_api, storage, docs) -> None:
    control = cli_api(
        lambda r: httpx.Response(
            200,
            json=[
                {
                    "filename": "report.pdf",
                    "status": "upload_pending",
                    "upload_url": "https://bucket.s3.test/report.pdf?sig=2",
                    "content_id": "c-1",
                }
            ],
        )
    )

    result = invoke("--api-key", "k", "ingest", "reprocess", "c-1", str(docs[0]))

    assert result.exit_code == 0, result.output
    req = control.requests[0]
    assert req.method == "PUT"
    assert req.url.path.endswith("/org/ingestion/content/c-1")
    assert json.loads(req.content)["file"]["filename"] == "report.pdf"
    assert len(storage.requests) == 1
