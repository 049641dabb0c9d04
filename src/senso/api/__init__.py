"""Senso control-plane API layer — request client, error taxonomy, typed bodies."""

from senso.api.client import NO_CONTENT, ApiClient
from senso.api.exceptions import (
    ApiError,
    BatchValidationError,
    InvalidResponseBodyError,
    NetworkUnreachableError,
    NotAuthenticatedError,
    RequestTimeoutError,
    SensoError,
    StorageUploadError,
)

__all__ = [
    "ApiClient",
    "NO_CONTENT",
    "ApiError",
    "BatchValidationError",
    "InvalidResponseBodyError",
    "NetworkUnreachableError",
    "NotAuthenticatedError",
    "RequestTimeoutError",
    "SensoError",
    "StorageUploadError",
]
