"""Installed package version lookup."""

from __future__ import annotations

import importlib.metadata

DIST_NAME = "senso-cli"
_FALLBACK_VERSION = "0.0.0"


def get_version() -> str:
    """Return the installed senso-cli version, or 0.0.0 when running from a checkout."""
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return _FALLBACK_VERSION
