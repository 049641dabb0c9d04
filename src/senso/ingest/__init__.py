"""Senso ingest pipeline — file metadata extraction and presigned uploads."""

from senso.ingest.metadata import ExtractedFile, content_type_for, extract
from senso.ingest.uploader import (
    MAX_BATCH_FILES,
    FileOutcome,
    IngestionUploader,
    UploadReport,
    validate_batch,
)

__all__ = [
    "ExtractedFile",
    "FileOutcome",
    "IngestionUploader",
    "MAX_BATCH_FILES",
    "UploadReport",
    "content_type_for",
    "extract",
    "validate_batch",
]
