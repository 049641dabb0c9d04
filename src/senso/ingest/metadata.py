"""File metadata extraction for ingestion uploads.

The whole file is buffered in memory: the same bytes are hashed and later
PUT to object storage, so the digest always matches what is uploaded.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from senso.api.models import FileMetadata

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Fixed lookup table, not the platform mimetypes database.
MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".html": "text/html",
    ".htm": "text/html",
    ".json": "application/json",
    ".xml": "application/xml",
    ".rtf": "application/rtf",
    ".epub": "application/epub+zip",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


@dataclass(frozen=True)
class ExtractedFile:
    """Metadata plus the exact bytes it was computed from."""

    path: Path
    meta: FileMetadata
    data: bytes


def content_type_for(filename: str) -> str:
    """Return the MIME type for *filename* based solely on its extension."""
    return MIME_TYPES.get(Path(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


def extract(path: str | Path) -> ExtractedFile:
    """Read *path* and compute its upload metadata.

    Raises:
        FileNotFoundError: *path* does not exist.
        IsADirectoryError / PermissionError: *path* is not a readable file.
    """
    resolved = Path(path).expanduser().resolve()
    data = resolved.read_bytes()
    meta = FileMetadata(
        filename=resolved.name,
        file_size_bytes=len(data),
        content_type=content_type_for(resolved.name),
        content_hash_md5=hashlib.md5(data).hexdigest(),
    )
    return ExtractedFile(path=resolved, meta=meta, data=data)
