from __future__ import annotations

from typing import Optional

import httpx

from ...settings import Settings

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def build_http_client(
    settings: Settings,
    *,
    live: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the transport used by the API client.

    ``live`` clients ask every cache on the way to revalidate; they back the
    progress and progress-location reads. Redirects are never followed here
    because ``AuthSession`` follows them itself.
    """

    headers = dict(JSON_HEADERS)
    if live:
        headers.update(NO_CACHE_HEADERS)
    return httpx.AsyncClient(
        base_url=settings.api_root,
        headers=headers,
        timeout=settings.request_timeout,
        follow_redirects=False,
        transport=transport,
    )
