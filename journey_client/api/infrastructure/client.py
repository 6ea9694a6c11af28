"""Typed operations against the journey service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Iterable, Optional, Union

import httpx

from ...domain.progress import interpolation_eligible
from ...models.journey import Journey, JourneyCreateRequest, JourneyProgress, ProgressLocation
from ...models.run import Run, RunCreateRequest
from ...settings import Settings
from ..application.ports import (
    AuthenticationRequiredError,
    NetworkError,
    ServerError,
    TokenStore,
)
from .decoder import decode, decode_list, extract_token, load_json
from .session import AuthSession, normalize_token
from .transport import build_http_client

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"


class JourneyApiClient:
    """HTTP client for the journey service.

    Every failure is surfaced as one of ``AuthenticationRequiredError``,
    ``ServerError``, ``DecodeError`` or ``NetworkError``; nothing is retried.
    A 401 on any authenticated call clears the stored token.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_store: TokenStore,
        *,
        live_client: Optional[httpx.AsyncClient] = None,
        max_redirects: int = 5,
    ) -> None:
        self._http_client = http_client
        self._live_client = live_client or http_client
        self._token_store = token_store
        self._session = AuthSession(http_client, token_store, max_redirects=max_redirects)
        self._live_session = AuthSession(
            self._live_client, token_store, max_redirects=max_redirects
        )
        self._owned: tuple[httpx.AsyncClient, ...] = ()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        token_store: TokenStore,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "JourneyApiClient":
        """Create a client that owns (and closes) its HTTP transports."""

        http_client = build_http_client(settings, transport=transport)
        live_client = build_http_client(settings, live=True, transport=transport)
        client = cls(
            http_client,
            token_store,
            live_client=live_client,
            max_redirects=settings.max_redirects,
        )
        client._owned = (http_client, live_client)
        return client

    async def aclose(self) -> None:
        for http_client in self._owned:
            await http_client.aclose()

    async def __aenter__(self) -> "JourneyApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # Auth

    def is_logged_in(self) -> bool:
        return bool(normalize_token(self._token_store.get()))

    async def login(self, email: str, password: str) -> None:
        """Exchange credentials for a token and store it."""

        if not email or not password:
            raise ValueError("Email and password are required")

        credentials = {"email": email, "password": password}
        response = await self._send(
            "POST", LOGIN_PATH, self._http_client.post(LOGIN_PATH, json=credentials)
        )
        if response.status_code != 200:
            logger.warning("Login rejected with HTTP %s", response.status_code)
            raise ServerError(response.status_code, _error_message(response))

        token = None
        if response.content.strip():
            token = normalize_token(extract_token(load_json(response.content)))
        if not token:
            raise ServerError(response.status_code, "no access token in response")
        self._token_store.set(token)
        logger.info("Login succeeded; token stored")

    def logout(self) -> None:
        self._token_store.clear()

    # Journeys

    async def fetch_current_journey(self) -> JourneyProgress:
        response = await self._authed("GET", "/journeys/current", live=True)
        return decode(response.content, JourneyProgress)

    async def fetch_all_journeys(self) -> list[Journey]:
        response = await self._authed("GET", "/journeys")
        return decode_list(response.content, Journey)

    async def fetch_journey_progress(self, journey_id: int) -> JourneyProgress:
        path = f"/journeys/{_valid_id(journey_id)}"
        response = await self._authed("GET", path, live=True)
        return decode(response.content, JourneyProgress)

    async def fetch_progress_location(self, journey_id: int) -> ProgressLocation:
        path = f"/journeys/{_valid_id(journey_id)}/progress-location"
        response = await self._authed("GET", path, live=True)
        return decode(response.content, ProgressLocation)

    async def fetch_progress_locations(
        self, journeys: Iterable[Union[Journey, JourneyProgress]]
    ) -> dict[int, ProgressLocation]:
        """Fetch locations for every interpolation-eligible journey concurrently."""

        eligible = [journey for journey in journeys if interpolation_eligible(journey)]
        tasks = [
            asyncio.ensure_future(self.fetch_progress_location(journey.id))
            for journey in eligible
        ]
        try:
            locations = await asyncio.gather(*tasks)
        except BaseException:
            # Cancel the remaining fetches before propagating the first failure.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return {journey.id: location for journey, location in zip(eligible, locations)}

    async def create_journey(self, request: JourneyCreateRequest) -> Journey:
        response = await self._authed("POST", "/journeys", json=request.to_payload())
        return decode(response.content, Journey)

    async def delete_journey(self, journey_id: int) -> None:
        await self._authed("DELETE", f"/journeys/{_valid_id(journey_id)}")

    # Runs

    async def create_run(self, request: RunCreateRequest) -> Run:
        response = await self._authed("POST", "/runs", json=request.to_payload())
        return decode(response.content, Run)

    # Plumbing

    async def _authed(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        live: bool = False,
    ) -> httpx.Response:
        session = self._live_session if live else self._session
        # Raises AuthenticationRequiredError before any network I/O.
        request = session.build_request(method, path, json=json)
        response = await self._send(method, path, session.send(request))
        if response.status_code == 401:
            logger.warning("%s %s returned 401; clearing stored token", method, path)
            self._token_store.clear()
            raise AuthenticationRequiredError(_error_message(response))
        if not response.is_success:
            logger.warning("%s %s returned HTTP %s", method, path, response.status_code)
            raise ServerError(response.status_code, _error_message(response))
        return response

    async def _send(
        self, method: str, path: str, pending: Awaitable[httpx.Response]
    ) -> httpx.Response:
        try:
            return await pending
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"{method} {path} failed: {exc}") from exc


def _valid_id(journey_id: int) -> int:
    if isinstance(journey_id, bool) or not isinstance(journey_id, int) or journey_id <= 0:
        raise ValueError(f"Invalid journey id: {journey_id!r}")
    return journey_id


def _error_message(response: httpx.Response) -> Optional[str]:
    """Best-effort human readable error from a failed response."""

    text = response.text.strip()
    if not text:
        return None
    try:
        payload = response.json()
    except ValueError:
        return text[:500]
    if isinstance(payload, dict):
        for key in ("detail", "message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return text[:500]
