"""Best-effort "new version available" check, cached for 24 hours.

The check never raises and never changes the exit code. The advisory goes to
stderr so `--output json` stays machine-readable.

A fresh cache is answered inline (one file read). Only the release lookup
runs on a background thread, which the CLI joins before exiting.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from packaging.version import InvalidVersion, Version
from rich.console import Console
from rich.panel import Panel

from senso.config import ENV_NO_UPDATE_CHECK, ConfigStore

log = logging.getLogger(__name__)

RELEASES_URL = "https://api.github.com/repos/AI-Template-SDK/senso-user-cli/releases/latest"
CHECK_INTERVAL = timedelta(hours=24)
CHECK_TIMEOUT = 5.0  # seconds
LOOKUP_TIMEOUT = 10.0  # seconds, interactive `senso update`
JOIN_TIMEOUT = CHECK_TIMEOUT + 1.0


def is_newer(latest: str, current: str) -> bool:
    """True if *latest* is strictly greater than *current*. Unparsable → False."""
    try:
        return Version(latest) > Version(current)
    except InvalidVersion:
        return False


def fetch_latest_release(
    client: httpx.Client | None = None, timeout: float = LOOKUP_TIMEOUT
) -> dict[str, Any]:
    """Return the latest release record with ``version`` (leading 'v' stripped) and ``notes``.

    Raises:
        httpx.HTTPError: Network failure or non-2xx response.
        ValueError: Malformed response body.
    """
    owns = client is None
    http = client or httpx.Client()
    try:
        response = http.get(
            RELEASES_URL,
            headers={"Accept": "application/vnd.github.v3+json"},
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
    finally:
        if owns:
            http.close()
    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag, str) or not tag:
        raise ValueError("Release feed response has no tag_name")
    return {"version": tag.removeprefix("v"), "notes": data.get("body") or ""}


class UpdateChecker:
    """Compare the running version against the latest release.

    Args:
        store: Config store holding the lastUpdateCheck / latestVersion cache.
        current_version: The running senso-cli version.
        client: HTTP client for the release lookup (tests inject a mock transport).
        console: Where the advisory is printed (stderr by default).
        environ: Environment mapping for SENSO_NO_UPDATE_CHECK.
    """

    def __init__(
        self,
        store: ConfigStore,
        current_version: str,
        *,
        client: httpx.Client | None = None,
        console: Console | None = None,
        environ: Mapping[str, str] | None = None,
        now: datetime | None = None,
    ) -> None:
        self._store = store
        self._current = current_version
        self._client = client
        self._console = console or Console(stderr=True)
        self._environ = os.environ if environ is None else environ
        self._now = now
        self._thread: threading.Thread | None = None

    def check(self, suppress: bool = False) -> None:
        """Run the check synchronously. Swallows every failure."""
        try:
            self._check(suppress)
        except Exception:  # noqa: BLE001
            log.debug("Update check failed", exc_info=True)

    def start_background(self, suppress: bool = False) -> threading.Thread | None:
        """Advise from a fresh cache right away, else refresh on a daemon thread.

        Returns the refresh thread, or None when nothing was started. Call
        :meth:`wait` before the process exits so the refresh can finish.
        """
        if self._suppressed(suppress):
            return None
        try:
            if self._advise_from_cache():
                return None
        except Exception:  # noqa: BLE001
            log.debug("Update check failed", exc_info=True)
            return None
        self._thread = threading.Thread(
            target=self._refresh_quietly, name="senso-update-check", daemon=True
        )
        self._thread.start()
        return self._thread

    def wait(self, timeout: float = JOIN_TIMEOUT) -> None:
        """Block until the background refresh finishes, at most *timeout* seconds."""
        if self._thread is not None:
            self._thread.join(timeout)

    # ------------------------------------------------------------------

    def _suppressed(self, suppress: bool) -> bool:
        return suppress or self._environ.get(ENV_NO_UPDATE_CHECK) == "1"

    def _check(self, suppress: bool) -> None:
        if self._suppressed(suppress):
            return
        if not self._advise_from_cache():
            self._refresh()

    def _advise_from_cache(self) -> bool:
        """Advise from the cached latest version. False if the cache is missing or stale."""
        cfg = self._store.read()
        last = _parse_timestamp(cfg.last_update_check)
        if last is None or self._clock() - last >= CHECK_INTERVAL:
            return False
        if cfg.latest_version and is_newer(cfg.latest_version, self._current):
            self._advise(cfg.latest_version)
        return True

    def _refresh(self) -> None:
        release = fetch_latest_release(self._client, timeout=CHECK_TIMEOUT)
        latest = release["version"]
        self._store.merge(
            last_update_check=self._clock().isoformat().replace("+00:00", "Z"),
            latest_version=latest,
        )
        if is_newer(latest, self._current):
            self._advise(latest)

    def _refresh_quietly(self) -> None:
        try:
            self._refresh()
        except Exception:  # noqa: BLE001
            log.debug("Update check failed", exc_info=True)

    def _clock(self) -> datetime:
        return self._now or datetime.now(timezone.utc)

    def _advise(self, latest: str) -> None:
        self._console.print(
            Panel(
                f"[yellow]Update available![/] [dim]{self._current}[/] → [green]{latest}[/]\n\n"
                "Run [cyan]senso update[/] to update",
                border_style="yellow",
                expand=False,
            )
        )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
