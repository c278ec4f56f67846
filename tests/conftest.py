"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from easyredir_cli.client.transport import Request
from easyredir_cli.config.manager import ConfigManager
from easyredir_cli.config.models import CredentialProfile

API = "https://api.easyredir.com/v1"


class FakeSender:
    """Replays canned response bodies in order and records each request."""

    def __init__(self, bodies: list[Any]) -> None:
        self.bodies = list(bodies)
        self.requests: list[Request] = []

    def send(self, request: Request, *, timeout: float | None = None) -> httpx.Response:
        self.requests.append(request)
        body = self.bodies.pop(0)
        if isinstance(body, Exception):
            raise body
        http_request = httpx.Request(request.method, f"{API}{request.path}")
        if isinstance(body, str):
            return httpx.Response(200, text=body, request=http_request)
        return httpx.Response(200, json=body, request=http_request)

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.requests]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real config file and EASYREDIR_* variables."""
    for var in (
        "EASYREDIR_API_KEY",
        "EASYREDIR_API_SECRET",
        "EASYREDIR_PROFILE",
        "EASYREDIR_BASE_URL",
    ):
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / "isolated" / "config.toml"
    monkeypatch.setattr("easyredir_cli.config.manager.CONFIG_FILE", path)
    return path


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> CredentialProfile:
    """Return a sample credential profile for testing."""
    return CredentialProfile(name="test", api_key="key", api_secret="secret")


@pytest.fixture
def fake_sender() -> Callable[..., FakeSender]:
    """Factory for a FakeSender replaying the given bodies."""

    def factory(*bodies: Any) -> FakeSender:
        return FakeSender(list(bodies))

    return factory


def rule_record(rule_id: str, **attributes: Any) -> dict[str, Any]:
    record: dict[str, Any] = {"id": rule_id, "type": "rule"}
    if attributes:
        record["attributes"] = attributes
    return record


@pytest.fixture
def rules_page() -> Callable[..., dict[str, Any]]:
    """Build a rules list body: ``rules_page(["a", "b"], next_cursor="b")``."""

    def factory(ids: list[str], next_cursor: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"data": [rule_record(i) for i in ids]}
        if next_cursor is not None:
            body["meta"] = {"has_more": True}
            body["links"] = {"next": f"/v1/rules?starting_after={next_cursor}"}
        return body

    return factory


@pytest.fixture
def full_rule_body() -> dict[str, Any]:
    """A single rules page with every attribute populated."""
    return {
        "data": [
            rule_record(
                "abc-def",
                forward_params=True,
                forward_path=True,
                response_type="moved_permanently",
                source_urls=["abc.com", "abc.com/123"],
                target_url="otherdomain.com",
            ),
        ],
        "meta": {"has_more": True},
        "links": {
            "next": "/v1/rules?starting_after=abc-def",
            "prev": "/v1/rules?ending_before=abc-def",
        },
    }
