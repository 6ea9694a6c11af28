"""Authenticated request construction and redirect-safe sending."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from ..application.ports import AuthenticationRequiredError, ServerError, TokenStore

AUTHORIZATION = "Authorization"
_SCHEME_PREFIXES = ("bearer ", "token ")


def normalize_token(raw: Optional[str]) -> str:
    """Strip quotes, whitespace and any auth scheme from a stored token."""

    token = (raw or "").strip()
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        token = token[1:-1]
    lowered = token.lower()
    if lowered in ("bearer", "token"):
        return ""
    for prefix in _SCHEME_PREFIXES:
        if lowered.startswith(prefix):
            token = token[len(prefix):]
            break
    return token.strip()


def authorization_value(raw: Optional[str]) -> str:
    """Return ``"Bearer <token>"`` for ``raw``, raising if nothing usable is stored."""

    token = normalize_token(raw)
    if not token:
        raise AuthenticationRequiredError("No access token stored; log in first")
    return f"Bearer {token}"


@dataclass(frozen=True)
class PreserveHeaders:
    """Redirect interceptor: re-applies ``headers`` to each follow-up request.

    httpx drops ``Authorization`` when a redirect crosses origins.
    """

    headers: Mapping[str, str]

    def __call__(self, request: httpx.Request) -> httpx.Request:
        for name, value in self.headers.items():
            request.headers[name] = value
        return request


class AuthSession:
    """Attaches the bearer token to requests and follows redirects with it."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_store: TokenStore,
        *,
        max_redirects: int = 5,
    ) -> None:
        self._http_client = http_client
        self._token_store = token_store
        self._max_redirects = max_redirects

    def build_request(
        self, method: str, path: str, *, json: Optional[Any] = None
    ) -> httpx.Request:
        """Build an authenticated request without sending it."""

        headers = {
            AUTHORIZATION: authorization_value(self._token_store.get()),
            "Content-Type": "application/json",
        }
        return self._http_client.build_request(method, path, json=json, headers=headers)

    async def send(self, request: httpx.Request) -> httpx.Response:
        interceptor = PreserveHeaders(
            {
                name: request.headers[name]
                for name in (AUTHORIZATION, "Content-Type")
                if name in request.headers
            }
        )
        response = await self._http_client.send(request, follow_redirects=False)
        hops = 0
        while response.next_request is not None:
            hops += 1
            if hops > self._max_redirects:
                await response.aclose()
                raise ServerError(
                    response.status_code, f"Exceeded {self._max_redirects} redirects"
                )
            next_request = interceptor(response.next_request)
            await response.aclose()
            response = await self._http_client.send(next_request, follow_redirects=False)
        return response

    async def request(
        self, method: str, path: str, *, json: Optional[Any] = None
    ) -> httpx.Response:
        return await self.send(self.build_request(method, path, json=json))
