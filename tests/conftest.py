"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from journey_client.api.application.ports import TokenStore
from journey_client.api.infrastructure import JourneyApiClient
from journey_client.settings import Settings

API = "https://journeys.example.com/api/v1"


class RecordingTokenStore(TokenStore):
    """In-memory token store that records every write."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.sets: List[str] = []
        self.clears = 0

    def get(self) -> Optional[str]:
        return self.token

    def set(self, token: str) -> None:
        self.sets.append(token)
        self.token = token

    def clear(self) -> None:
        self.clears += 1
        self.token = None


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        api_base_url="https://journeys.example.com",
        api_prefix="/api/v1",
        request_timeout=5.0,
        max_redirects=3,
        token_key="authToken",
        upstash_redis_rest_url=None,
        upstash_redis_rest_token=None,
        token_file=None,
    )


@pytest.fixture
def token_store() -> RecordingTokenStore:
    return RecordingTokenStore()


@pytest.fixture
def logged_in_store() -> RecordingTokenStore:
    return RecordingTokenStore("abc123")


@pytest.fixture
def make_client(settings: Settings) -> Callable[..., JourneyApiClient]:
    """Factory for API clients bound to the test settings."""

    def factory(
        store: TokenStore, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> JourneyApiClient:
        return JourneyApiClient.from_settings(settings, store, transport=transport)

    return factory
