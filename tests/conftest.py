"""
tests.conftest

Shared fixtures: an in-memory stand-in for the remote billing API (served through
`httpx.MockTransport`), a synthetic clock, and the wired command service.
"""

from __future__ import annotations

import json
from datetime import UTC
from typing import Any

import httpx
import pytest

from prism_neo.billing.confirmation import ConfirmationStore
from prism_neo.commands.router import CommandRouter
from prism_neo.commands.service import CommandService
from prism_neo.settings import Settings
from prism_neo.space_api.client import SpaceApiClient

BASE_URL = "http://space.test"


class FakeSpaceApi:
    """Routes keyed by (method, path); unknown routes answer 404 with an API-style body."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, body: Any = None, *, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path), (404, {"message": "Not Found"})
        )
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def paths(self, method: str | None = None) -> list[str]:
        return [c.url.path for c in self.calls if method is None or c.method == method]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.calls[index].content)


class FakeClock:
    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, *, seconds: float = 0, ms: int = 0) -> None:
        self.now_ms += int(seconds * 1000) + ms


@pytest.fixture
def fake_api() -> FakeSpaceApi:
    return FakeSpaceApi()


@pytest.fixture
def http(fake_api: FakeSpaceApi) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def space_client(http: httpx.AsyncClient) -> SpaceApiClient:
    return SpaceApiClient(base_url=BASE_URL, http=http)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def confirmations(clock: FakeClock) -> ConfirmationStore:
    return ConfirmationStore(ttl_ms=60_000, clock=clock)


@pytest.fixture
def service(space_client: SpaceApiClient, confirmations: ConfirmationStore) -> CommandService:
    return CommandService(api=space_client, confirmations=confirmations, tz=UTC)


@pytest.fixture
def router(service: CommandService) -> CommandRouter:
    return CommandRouter(service)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        space_api_base_url=BASE_URL,
        display_timezone="UTC",
        jwt_secret="test-secret",
    )
