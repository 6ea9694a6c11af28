"""Application layer for the journey API client."""

from .ports import (
    AuthenticationRequiredError,
    DecodeError,
    JourneyApiError,
    NetworkError,
    ServerError,
    TokenStore,
)

__all__ = [
    "AuthenticationRequiredError",
    "DecodeError",
    "JourneyApiError",
    "NetworkError",
    "ServerError",
    "TokenStore",
]
