"""Infrastructure adapters for the journey API client."""

from .client import JourneyApiClient
from .decoder import TOKEN_FIELDS, decode, decode_list, extract_token
from .session import AuthSession, PreserveHeaders, authorization_value, normalize_token
from .token_store import (
    FileTokenStore,
    InMemoryTokenStore,
    RedisTokenStore,
    create_token_store,
)
from .transport import build_http_client

__all__ = [
    "AuthSession",
    "FileTokenStore",
    "InMemoryTokenStore",
    "JourneyApiClient",
    "PreserveHeaders",
    "RedisTokenStore",
    "TOKEN_FIELDS",
    "authorization_value",
    "build_http_client",
    "create_token_store",
    "decode",
    "decode_list",
    "extract_token",
    "normalize_token",
]
