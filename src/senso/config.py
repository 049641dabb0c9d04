"""Senso credential resolution and persisted config store.

Priority (high → low), resolved independently per field:
  1. CLI flags              (--api-key, --base-url; passed in as *explicit*)
  2. Environment variables  (SENSO_API_KEY, SENSO_BASE_URL)
  3. Persisted config file  ($XDG_CONFIG_HOME/senso/config.json)
  4. Hardcoded default      (base URL only — an absent API key stays absent)

The config file is owned exclusively by ConfigStore. It is created on login or
any partial update, read on every invocation, and deleted on logout. Writes are
read-merge-write without locking: concurrent invocations race, last writer wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://apiv2.senso.ai/api/v1"

ENV_API_KEY = "SENSO_API_KEY"
ENV_BASE_URL = "SENSO_BASE_URL"
ENV_CONFIG_DIR = "SENSO_CONFIG_DIR"
ENV_NO_UPDATE_CHECK = "SENSO_NO_UPDATE_CHECK"

_APP_DIR_NAME = "senso"
_CONFIG_FILE_NAME = "config.json"

# Python attribute → on-disk JSON key
_JSON_KEYS: dict[str, str] = {
    "api_key": "apiKey",
    "base_url": "baseUrl",
    "org_name": "orgName",
    "org_id": "orgId",
    "org_slug": "orgSlug",
    "is_free_tier": "isFreeTier",
    "last_update_check": "lastUpdateCheck",
    "latest_version": "latestVersion",
}


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class PersistedConfig:
    """On-disk config record. Every field is optional; missing means unset."""

    api_key: str | None = None
    base_url: str | None = None
    org_name: str | None = None
    org_id: str | None = None
    org_slug: str | None = None
    is_free_tier: bool | None = None
    last_update_check: str | None = None  # ISO-8601 timestamp
    latest_version: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PersistedConfig:
        """Build from the camelCase JSON record.

        Unknown keys are ignored. Values of the wrong type are treated as absent.
        """
        kwargs: dict[str, Any] = {}
        for attr, key in _JSON_KEYS.items():
            value = data.get(key)
            if attr == "is_free_tier":
                if isinstance(value, bool):
                    kwargs[attr] = value
            elif isinstance(value, str):
                kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON record, omitting unset fields."""
        return {
            _JSON_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the per-user config file path.

    SENSO_CONFIG_DIR wins; otherwise $XDG_CONFIG_HOME/senso, falling back to
    ~/.config/senso.
    """
    env = os.environ if environ is None else environ
    if override := env.get(ENV_CONFIG_DIR):
        return Path(override).expanduser() / _CONFIG_FILE_NAME
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base).expanduser() / _APP_DIR_NAME / _CONFIG_FILE_NAME


class ConfigStore:
    """Read/write access to the persisted config JSON file.

    Construct once per process with an explicit path and pass it to whoever
    needs credentials (resolver, API client, update checker, CLI commands).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> PersistedConfig:
        """Return the stored config, or an empty record if absent or unreadable."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return PersistedConfig()
        if not isinstance(raw, dict):
            return PersistedConfig()
        return PersistedConfig.from_dict(raw)

    def write(self, config: PersistedConfig) -> None:
        """Replace the config file (owner read/write only).

        The payload goes to a temp file in the same directory which is then
        renamed over the target, so readers see either the old or the new
        file, never a partial one. Creates the parent directory with mode
        0o700 if needed. Filesystem errors propagate to the caller.
        """
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        payload = json.dumps(config.to_dict(), indent=2) + "\n"
        # mkstemp creates the file with mode 0o600
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".config-", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def merge(self, **partial: Any) -> PersistedConfig:
        """Read-modify-write: apply *partial* fields over the stored config.

        Not safe against concurrent processes; the last writer wins.
        """
        unknown = set(partial) - set(_JSON_KEYS)
        if unknown:
            raise TypeError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        merged = replace(self.read(), **partial)
        self.write(merged)
        return merged

    def clear(self) -> None:
        """Delete the config file. A missing file is not an error."""
        self.path.unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------


def resolve_api_key(
    explicit: str | None = None,
    *,
    store: ConfigStore,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the API key from flag → env → config, or None if none is set."""
    env = os.environ if environ is None else environ
    return explicit or env.get(ENV_API_KEY) or store.read().api_key or None


def resolve_base_url(
    explicit: str | None = None,
    *,
    store: ConfigStore,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the API base URL from flag → env → config → default. Never empty."""
    env = os.environ if environ is None else environ
    return explicit or env.get(ENV_BASE_URL) or store.read().base_url or DEFAULT_BASE_URL
