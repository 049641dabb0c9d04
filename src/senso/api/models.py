"""Typed request/response bodies for the control-plane endpoints used by the core."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

UPLOAD_PENDING = "upload_pending"
CONFLICT = "conflict"
DUPLICATE = "duplicate"
INVALID = "invalid"

UPLOAD_STATUSES = frozenset({UPLOAD_PENDING, CONFLICT, DUPLICATE, INVALID})


@dataclass(frozen=True)
class FileMetadata:
    filename: str
    file_size_bytes: int
    content_type: str
    content_hash_md5: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class UploadResultItem:
    """One server verdict per requested file. Matched to local files by *filename*."""

    filename: str
    status: str
    content_id: str | None = None
    ingestion_run_id: str | None = None
    upload_url: str | None = None
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UploadResultItem:
        return cls(
            filename=str(data.get("filename", "")),
            status=str(data.get("status", "")),
            content_id=data.get("content_id"),
            ingestion_run_id=data.get("ingestion_run_id"),
            upload_url=data.get("upload_url") or None,
            message=data.get("message"),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == UPLOAD_PENDING and bool(self.upload_url)


@dataclass
class UploadRequest:
    """Body of POST /org/ingestion/upload."""

    files: list[FileMetadata] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"files": [f.to_dict() for f in self.files]}


@dataclass
class ReprocessRequest:
    """Body of PUT /org/ingestion/content/{id}."""

    file: FileMetadata

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file.to_dict()}


@dataclass
class OrgInfo:
    """Subset of GET /org/me used for login and whoami."""

    org_id: str
    name: str
    slug: str = ""
    is_free_tier: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrgInfo:
        return cls(
            org_id=str(data.get("org_id", "")),
            name=str(data.get("name", "")),
            slug=str(data.get("slug", "")),
            is_free_tier=bool(data.get("is_free_tier", False)),
        )


def parse_upload_results(payload: Any) -> list[UploadResultItem]:
    """Parse the UploadResultItem list returned by the ingestion endpoints.

    Accepts either a bare list or an object wrapping it under ``results``.
    """
    if isinstance(payload, dict):
        payload = payload.get("results", [])
    if not isinstance(payload, list):
        return []
    return [UploadResultItem.from_dict(item) for item in payload if isinstance(item, dict)]
