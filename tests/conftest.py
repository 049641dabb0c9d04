"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from senso.api.client import ApiClient
from senso.cli.main import app
from senso.config import ConfigStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Strip real credentials and keep every test away from the user's config dir."""
    monkeypatch.delenv("SENSO_API_KEY", raising=False)
    monkeypatch.delenv("SENSO_BASE_URL", raising=False)
    monkeypatch.setenv("SENSO_NO_UPDATE_CHECK", "1")
    monkeypatch.setenv("SENSO_CONFIG_DIR", str(tmp_path / "senso-config"))
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    """ConfigStore backed by a not-yet-created file in tmp_path."""
    return ConfigStore(tmp_path / "cfg" / "config.json")


@pytest.fixture
def write_config(store: ConfigStore):
    """Write a raw camelCase config record straight to disk."""

    def _write(data: dict) -> None:
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps(data), encoding="utf-8")

    return _write


class Recorder:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def make_client(store: ConfigStore):
    """Build an ApiClient with key 'test-key' whose wire traffic goes to *handler*."""

    def _make(handler, **kwargs) -> tuple[ApiClient, Recorder]:
        recorder = Recorder(handler)
        kwargs.setdefault("api_key", "test-key")
        kwargs.setdefault("base_url", "https://api.test/v1")
        client = ApiClient(store, transport=recorder.transport, **kwargs)
        return client, recorder

    return _make


@pytest.fixture
def cli_api(monkeypatch):
    """Route every ApiClient the CLI builds through *handler*; returns the Recorder."""

    def _install(handler) -> Recorder:
        recorder = Recorder(handler)

        def _factory(store: ConfigStore, **kwargs) -> ApiClient:
            return ApiClient(store, transport=recorder.transport, **kwargs)

        monkeypatch.setattr("senso.cli.state.ApiClient", _factory)
        return recorder

    return _install


@pytest.fixture
def invoke(store: ConfigStore):
    """Run the senso app against the tmp config file with the update check off."""
    runner = CliRunner()

    def _invoke(*args: str, input: str | None = None):
        argv = ["--config-file", str(store.path), "--no-update-check", *args]
        return runner.invoke(app, argv, input=input)

    return _invoke
