"""Token store adapters: process memory, a JSON file, or Upstash Redis."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from upstash_redis import Redis

from ...settings import Settings
from ..application.ports import TokenStore

logger = logging.getLogger(__name__)


def _present(token: Optional[str]) -> Optional[str]:
    if token is None or not token.strip():
        return None
    return token


class InMemoryTokenStore(TokenStore):
    """Token held for the lifetime of the process."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return _present(self._token)

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore(TokenStore):
    """Token persisted in a small JSON document under ``key``."""

    def __init__(self, path: Path, key: str) -> None:
        self._path = path
        self._key = key

    def _read(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as stream:
                data = json.load(stream)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Written to a sibling file first so the stored token is never half-written.
        scratch = self._path.with_suffix(self._path.suffix + ".tmp")
        scratch.write_text(json.dumps(data), encoding="utf-8")
        scratch.replace(self._path)

    def get(self) -> Optional[str]:
        value = self._read().get(self._key)
        return _present(value) if isinstance(value, str) else None

    def set(self, token: str) -> None:
        data = self._read()
        data[self._key] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if data.pop(self._key, None) is not None:
            self._write(data)


class RedisClient(Protocol):
    """Minimal Redis client interface used by the token store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> object:
        ...

    def delete(self, *keys: str) -> object:
        ...


class RedisTokenStore(TokenStore):
    """Token persisted in Redis under a single well-known key."""

    def __init__(self, redis: RedisClient, key: str) -> None:
        self._redis = redis
        self._key = key

    def get(self) -> Optional[str]:
        return _present(self._redis.get(self._key))

    def set(self, token: str) -> None:
        self._redis.set(self._key, token)

    def clear(self) -> None:
        self._redis.delete(self._key)


def get_redis(settings: Settings) -> RedisClient:
    """Factory helper that provides an Upstash Redis client instance."""

    return Redis(
        url=settings.upstash_redis_rest_url,
        token=settings.upstash_redis_rest_token,
    )


def create_token_store(settings: Settings) -> TokenStore:
    """Pick the token store configured by ``settings``."""

    if settings.upstash_redis_rest_url and settings.upstash_redis_rest_token:
        return RedisTokenStore(get_redis(settings), settings.token_key)
    if settings.token_file is not None:
        return FileTokenStore(settings.token_file, settings.token_key)
    return InMemoryTokenStore()
