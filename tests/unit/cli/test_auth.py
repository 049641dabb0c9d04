"""Tests for senso login / logout / whoami."""

from __future__ import annotations

import json

import httpx

from senso.config import PersistedConfig

ORG = {"org_id": "org-1", "name": "Acme", "slug": "acme", "is_free_tier": True}


def _org(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=ORG)


def _offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("offline", request=request)


# ------------------------------------------------------------------
# login
# ------------------------------------------------------------------


def test_login_with_flag_verifies_and_saves(invoke, cli_api, store) -> None:
    rec = cli_api(_org)

    result = invoke("--api-key", "sk_live_12345", "login")

    assert result.exit_code == 0, result.output
    assert rec.requests[0].url.path.endswith("/org/me")
    assert rec.requests[0].headers["X-API-Key"] == "sk_live_12345"
    assert 'Authenticated as "Acme"' in result.output

    cfg = store.read()
    assert cfg.api_key == "sk_live_12345"
    assert cfg.org_id == "org-1"
    assert cfg.org_slug == "acme"
    assert cfg.is_free_tier is True
    assert cfg.base_url is None


def test_login_saves_base_url_override(invoke, cli_api, store) -> None:
    rec = cli_api(_org)

    result = invoke("--api-key", "sk_live_12345", "--base-url", "https://staging.test/v1", "login")

    assert result.exit_code == 0, result.output
    assert str(rec.requests[0].url) == "https://staging.test/v1/org/me"
    assert store.read().base_url == "https://staging.test/v1"


def test_login_prompts_for_key(invoke, cli_api, store) -> None:
    cli_api(_org)

    result = invoke("login", input="sk_prompted\n")

    assert result.exit_code == 0, result.output
    assert "Welcome to Senso CLI!" in result.output
    assert store.read().api_key == "sk_prompted"


def test_login_rejected_key_writes_nothing(invoke, cli_api, store) -> None:
    cli_api(lambda r: httpx.Response(401, json={"error": "invalid key"}))

    result = invoke("--api-key", "sk_bad_key", "login")

    assert result.exit_code == 1
    assert "Authentication failed" in result.output
    assert not store.path.exists()


def test_login_short_key_rejected(invoke, cli_api) -> None:
    rec = cli_api(_org)

    result = invoke("--api-key", "abc", "login")

    assert result.exit_code == 1
    assert rec.requests == []


# ------------------------------------------------------------------
# logout
# ------------------------------------------------------------------


def test_logout_removes_config(invoke, store) -> None:
    store.write(PersistedConfig(api_key="k", org_name="Acme"))

    result = invoke("logout")

    assert result.exit_code == 0
    assert "Credentials removed." in result.output
    assert not store.path.exists()


def test_logout_when_logged_out_succeeds(invoke, store) -> None:
    result = invoke("logout")
    assert result.exit_code == 0


# ------------------------------------------------------------------
# whoami
# ------------------------------------------------------------------


def test_whoami_not_logged_in(invoke, cli_api) -> None:
    rec = cli_api(_org)

    result = invoke("whoami")

    assert result.exit_code == 1
    assert "Not logged in" in result.output
    assert rec.requests == []


def test_whoami_plain(invoke, cli_api, store) -> None:
    store.write(PersistedConfig(api_key="sk_live_abcdefgh123"))
    cli_api(_org)

    result = invoke("whoami")

    assert result.exit_code == 0, result.output
    assert "Acme" in result.output
    assert "org-1" in result.output
    assert "Free" in result.output
    assert "sk_live_..." in result.output
    assert "abcdefgh123" not in result.output


def test_whoami_json(invoke, cli_api, store) -> None:
    store.write(PersistedConfig(api_key="sk_live_abcdefgh123"))
    cli_api(_org)

    result = invoke("-o", "json", "whoami")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "orgId": "org-1",
        "orgName": "Acme",
        "orgSlug": "acme",
        "isFreeTier": True,
        "apiKeyPrefix": "sk_live_...",
    }


def test_whoami_offline_falls_back_to_cache(invoke, cli_api, store) -> None:
    store.write(PersistedConfig(api_key="sk_live_abcdefgh123", org_name="Acme", org_id="org-1"))
    cli_api(_offline)

    result = invoke("whoami")

    assert result.exit_code == 0, result.output
    assert "Could not reach API" in result.output
    assert "(cached)" in result.output


def test_whoami_offline_without_cache_exits_1(invoke, cli_api, store) -> None:
    store.write(PersistedConfig(api_key="sk_live_abcdefgh123"))
    cli_api(_offline)

    result = invoke("whoami")

    assert result.exit_code == 1
    assert "Could not connect" in result.output
