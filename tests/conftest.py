"""
Pytest configuration and shared fixtures for linear-cli tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from linear_cli.cli.common.context import clear_cli_context
from linear_cli.cli.common.setup import settings_loader_var
from linear_cli.config import Settings
from linear_cli.shared.logging import ROOT_LOGGER_NAME


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload: Any = None, status_code: int = 200, json_error: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def json(self) -> Any:
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def issue_node(
    identifier: str,
    status: str | None = "Todo",
    priority: int | None = 2,
    **extra: Any,
) -> dict[str, Any]:
    """GraphQL issue node as Linear returns it."""
    node: dict[str, Any] = {
        "id": f"id-{identifier}",
        "identifier": identifier,
        "title": f"Issue {identifier}",
        "priority": priority,
        "url": f"https://linear.app/acme/issue/{identifier}",
        "state": {"id": f"state-{status}", "name": status, "type": "unstarted"} if status else None,
        "assignee": {"id": "user-1", "name": "Alex", "displayName": "alex"},
        "attachments": {"nodes": []},
    }
    node.update(extra)
    return node


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings.model_validate(
        {"api": {"api_token": "lin_api_test_token_1234", "default_team_id": "team-1"}}
    )


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at an isolated config file and clear token env vars."""
    path = tmp_path / "linear-cli" / "config.toml"
    monkeypatch.setenv("LINEAR_CLI_CONFIG", str(path))
    monkeypatch.delenv("LINEAR_API_KEY", raising=False)
    monkeypatch.delenv("LINEAR_CLI_API__API_TOKEN", raising=False)
    monkeypatch.chdir(tmp_path)
    return path


@pytest.fixture
def make_issue_node():
    return issue_node


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture(autouse=True)
def _reset_cli_state() -> None:
    clear_cli_context()
    settings_loader_var.set(None)
    # CLI tests configure the package logger; give caplog its records back
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
