"""Tests for the cached update check."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from io import StringIO

import httpx
import pytest
from rich.console import Console

from conftest import Recorder
from senso.config import PersistedConfig
from senso.update_check import (
    RELEASES_URL,
    UpdateChecker,
    fetch_latest_release,
    is_newer,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, width=100, force_terminal=False), buf


def _no_network(request: httpx.Request) -> httpx.Response:
    pytest.fail(f"unexpected network call to {request.url}")


def _release(tag: str = "v1.5.0", body: str = "Bug fixes"):
    return lambda r: httpx.Response(200, json={"tag_name": tag, "body": body})


def _checker(store, handler, current="1.0.0"):
    rec = Recorder(handler)
    console, buf = _console()
    checker = UpdateChecker(
        store,
        current,
        client=httpx.Client(transport=rec.transport),
        console=console,
        environ={},
        now=NOW,
    )
    return checker, rec, buf


# ------------------------------------------------------------------
# is_newer
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    ("latest", "current", "expected"),
    [
        ("1.2.0", "1.1.9", True),
        ("1.10.0", "1.9.0", True),
        ("2.0.0", "2.0.0", False),
        ("1.0.0", "1.2.0", False),
        ("not-a-version", "1.0.0", False),
    ],
)
def test_is_newer(latest: str, current: str, expected: bool) -> None:
    assert is_newer(latest, current) is expected


# ------------------------------------------------------------------
# fetch_latest_release
# ------------------------------------------------------------------


def test_fetch_latest_release_strips_v_prefix() -> None:
    rec = Recorder(_release("v2.3.4", "Notes here"))
    release = fetch_latest_release(httpx.Client(transport=rec.transport))

    assert release == {"version": "2.3.4", "notes": "Notes here"}
    assert str(rec.requests[0].url) == RELEASES_URL


def test_fetch_latest_release_without_tag_raises() -> None:
    rec = Recorder(lambda r: httpx.Response(200, json={"name": "no tag"}))
    with pytest.raises(ValueError):
        fetch_latest_release(httpx.Client(transport=rec.transport))


def test_fetch_latest_release_http_error_raises() -> None:
    rec = Recorder(lambda r: httpx.Response(403, json={"message": "rate limited"}))
    with pytest.raises(httpx.HTTPStatusError):
        fetch_latest_release(httpx.Client(transport=rec.transport))


# ------------------------------------------------------------------
# Cache behaviour
# ------------------------------------------------------------------


def test_fresh_cache_advises_without_network(store) -> None:
    store.write(
        PersistedConfig(
            last_update_check=(NOW - timedelta(hours=1)).isoformat(),
            latest_version="1.4.0",
        )
    )
    checker, rec, buf = _checker(store, _no_network)

    checker.check()

    assert rec.requests == []
    out = buf.getvalue()
    assert "Update available!" in out
    assert "1.0.0" in out and "1.4.0" in out
    assert "senso update" in out


def test_fresh_cache_with_current_version_is_silent(store) -> None:
    store.write(
        PersistedConfig(last_update_check=(NOW - timedelta(hours=2)).isoformat(), latest_version="1.0.0")
    )
    checker, rec, buf = _checker(store, _no_network)

    checker.check()
    assert rec.requests == []
    assert buf.getvalue() == ""


def test_stale_cache_fetches_and_updates_cache(store) -> None:
    store.write(
        PersistedConfig(
            api_key="keep-me",
            last_update_check=(NOW - timedelta(hours=25)).isoformat(),
            latest_version="1.1.0",
        )
    )
    checker, rec, buf = _checker(store, _release("v1.5.0"))

    checker.check()

    assert len(rec.requests) == 1
    cfg = store.read()
    assert cfg.api_key == "keep-me"
    assert cfg.latest_version == "1.5.0"
    assert cfg.last_update_check == "2026-03-01T12:00:00Z"
    assert "1.5.0" in buf.getvalue()


def test_no_cache_fetches(store) -> None:
    checker, rec, buf = _checker(store, _release("v1.0.0"))

    checker.check()
    assert len(rec.requests) == 1
    assert store.read().latest_version == "1.0.0"
    assert buf.getvalue() == ""


def test_unparsable_cache_timestamp_refetches(store) -> None:
    store.write(PersistedConfig(last_update_check="yesterday-ish", latest_version="9.9.9"))
    checker, rec, _ = _checker(store, _release("v1.0.0"))

    checker.check()
    assert len(rec.requests) == 1


# ------------------------------------------------------------------
# Failure and suppression
# ------------------------------------------------------------------


def test_network_failure_is_swallowed(store) -> None:
    def _boom(request):
        raise httpx.ConnectError("offline", request=request)

    checker, _, buf = _checker(store, _boom)
    checker.check()  # should not raise

    assert buf.getvalue() == ""
    assert store.read().last_update_check is None


def test_malformed_release_is_swallowed(store) -> None:
    checker, _, buf = _checker(store, lambda r: httpx.Response(200, text="garbage"))
    checker.check()
    assert buf.getvalue() == ""


def test_suppress_flag_skips_everything(store) -> None:
    checker, rec, buf = _checker(store, _no_network)
    checker.check(suppress=True)
    assert rec.requests == []
    assert checker.start_background(suppress=True) is None


def test_env_var_disables_check(store) -> None:
    rec = Recorder(_no_network)
    console, buf = _console()
    checker = UpdateChecker(
        store,
        "1.0.0",
        client=httpx.Client(transport=rec.transport),
        console=console,
        environ={"SENSO_NO_UPDATE_CHECK": "1"},
        now=NOW,
    )

    checker.check()
    assert checker.start_background() is None
    assert rec.requests == []
    assert buf.getvalue() == ""


def test_background_check_runs_on_daemon_thread(store) -> None:
    checker, rec, _ = _checker(store, _release("v1.0.0"))
    thread = checker.start_background()

    assert thread is not None
    assert thread.daemon
    checker.wait()
    assert not thread.is_alive()
    assert len(rec.requests) == 1
    assert store.read().latest_version == "1.0.0"


def test_background_start_advises_from_fresh_cache_inline(store) -> None:
    store.write(
        PersistedConfig(
            last_update_check=(NOW - timedelta(hours=1)).isoformat(),
            latest_version="99.0.0",
        )
    )
    checker, rec, buf = _checker(store, _no_network)

    assert checker.start_background() is None
    # printed before start_background returned, no thread involved
    assert "99.0.0" in buf.getvalue()
    assert rec.requests == []
    checker.wait()  # nothing to wait for
