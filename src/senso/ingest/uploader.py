"""Ingestion upload pipeline: hash → request upload slots → PUT bytes → report.

Sequence for one batch:
  1. Validate the batch (1–10 files, unique basenames); no I/O on failure.
  2. Extract metadata for every file; any failure aborts the batch.
  3. One control-plane call requesting upload slots for all files.
  4. For each returned item, in server order:
       upload_pending + upload_url → PUT raw bytes to the presigned URL
       conflict / duplicate / invalid → skip, record status + message
  5. Aggregate a per-file report.

A failed PUT raises immediately. Files already uploaded earlier in the same
batch stay uploaded; nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from senso.api.client import REQUEST_TIMEOUT, ApiClient
from senso.api.exceptions import (
    BatchValidationError,
    NetworkUnreachableError,
    RequestTimeoutError,
    StorageUploadError,
)
from senso.api.models import (
    UPLOAD_STATUSES,
    ReprocessRequest,
    UploadRequest,
    UploadResultItem,
    parse_upload_results,
)
from senso.ingest.metadata import ExtractedFile, extract

log = logging.getLogger(__name__)

MAX_BATCH_FILES = 10

UPLOAD_PATH = "/org/ingestion/upload"
REPROCESS_PATH = "/org/ingestion/content/{content_id}"

# Outcome status for a file whose bytes reached object storage.
UPLOADED = "uploaded"


# ------------------------------------------------------------------
# Result model
# ------------------------------------------------------------------


@dataclass
class FileOutcome:
    """What happened to one file of the batch."""

    filename: str
    status: str  # "uploaded" or the server status that caused the skip
    content_id: str | None = None
    ingestion_run_id: str | None = None
    message: str | None = None

    @property
    def uploaded(self) -> bool:
        return self.status == UPLOADED


@dataclass
class UploadReport:
    """Aggregated result of one upload or reprocess call.

    Attributes:
        outcomes: One entry per server item, in server order.
        items: Parsed server verdicts, in server order.
        raw: The control-plane response body as received (printed with --output json).
    """

    outcomes: list[FileOutcome] = field(default_factory=list)
    items: list[UploadResultItem] = field(default_factory=list)
    raw: Any = None

    @property
    def uploaded(self) -> int:
        return sum(1 for o in self.outcomes if o.uploaded)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if not o.uploaded)


# ------------------------------------------------------------------
# Orchestrator
# ------------------------------------------------------------------


class IngestionUploader:
    """Run the ingestion pipeline against the control plane and object storage.

    Args:
        api: Authenticated control-plane client.
        storage: HTTP client for presigned PUTs. Created (and owned) if omitted.
        on_outcome: Called after each file is uploaded or skipped.
    """

    def __init__(
        self,
        api: ApiClient,
        storage: httpx.Client | None = None,
        on_outcome: Callable[[FileOutcome], None] | None = None,
    ) -> None:
        self._api = api
        self._owns_storage = storage is None
        self._storage = storage or httpx.Client(timeout=REQUEST_TIMEOUT)
        self._on_outcome = on_outcome

    def close(self) -> None:
        if self._owns_storage:
            self._storage.close()

    def __enter__(self) -> IngestionUploader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upload_batch(self, paths: Sequence[str | Path]) -> UploadReport:
        """Upload up to 10 new files.

        Raises:
            BatchValidationError: Empty batch, more than 10 files, or duplicate basenames.
            OSError: A file could not be read.
            SensoError: Control-plane or object-storage failure.
        """
        validate_batch(paths)
        files = [extract(p) for p in paths]
        request = UploadRequest(files=[f.meta for f in files])
        payload = self._api.post(UPLOAD_PATH, request.to_dict())
        return self._process(payload, files)

    def reprocess(self, content_id: str, path: str | Path) -> UploadReport:
        """Replace the source file of an existing content item and re-ingest it."""
        if not content_id:
            raise BatchValidationError("A content ID is required for reprocessing.")
        extracted = extract(path)
        request = ReprocessRequest(file=extracted.meta)
        payload = self._api.put(
            REPROCESS_PATH.format(content_id=content_id), request.to_dict()
        )
        return self._process(payload, [extracted])

    # ------------------------------------------------------------------
    # Per-item handling
    # ------------------------------------------------------------------

    def _process(self, payload: Any, files: list[ExtractedFile]) -> UploadReport:
        items = parse_upload_results(payload)
        report = UploadReport(items=items, raw=payload)
        by_name = {f.meta.filename: f for f in files}

        for item in items:
            local = by_name.get(item.filename)
            if item.is_pending and local is not None:
                self._put(item.upload_url or "", local)
                outcome = FileOutcome(
                    filename=item.filename,
                    status=UPLOADED,
                    content_id=item.content_id,
                    ingestion_run_id=item.ingestion_run_id,
                    message=item.message,
                )
            else:
                if item.status not in UPLOAD_STATUSES:
                    log.warning("Unknown upload status %r for %s", item.status, item.filename)
                message = item.message
                if item.is_pending and local is None:
                    message = message or "No matching local file in this batch."
                outcome = FileOutcome(
                    filename=item.filename,
                    status=item.status,
                    content_id=item.content_id,
                    ingestion_run_id=item.ingestion_run_id,
                    message=message,
                )
            report.outcomes.append(outcome)
            if self._on_outcome is not None:
                self._on_outcome(outcome)

        return report

    def _put(self, url: str, local: ExtractedFile) -> None:
        """PUT *local*'s bytes to the presigned *url*. Non-2xx raises StorageUploadError."""
        log.debug("PUT %s (%d bytes) → object storage", local.meta.filename, len(local.data))
        try:
            response = self._storage.put(
                url,
                content=local.data,
                headers={"Content-Type": local.meta.content_type},
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"Upload of {local.meta.filename} timed out after {REQUEST_TIMEOUT:.0f}s"
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkUnreachableError(
                f"Could not reach object storage for {local.meta.filename}: {exc}"
            ) from exc

        if not response.is_success:
            raise StorageUploadError(
                local.meta.filename, response.status_code, response.text[:200].strip()
            )


def validate_batch(paths: Sequence[str | Path]) -> None:
    """Reject batches the control plane would refuse, before touching the disk."""
    if not paths:
        raise BatchValidationError("No files given. Pass at least one file to upload.")
    if len(paths) > MAX_BATCH_FILES:
        raise BatchValidationError(
            f"Too many files: {len(paths)} given, at most {MAX_BATCH_FILES} per upload."
        )
    seen: set[str] = set()
    for p in paths:
        name = Path(p).name
        if name in seen:
            raise BatchValidationError(
                f"Duplicate filename in batch: {name!r}. Upload same-named files separately."
            )
        seen.add(name)
