"""Ports and error taxonomy for the journey API client."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


class JourneyApiError(RuntimeError):
    """Base class for every failure surfaced by the API client."""


class AuthenticationRequiredError(JourneyApiError):
    """Raised when no usable token is stored or the server answers 401."""

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message
        super().__init__(message or "Authentication required")


class ServerError(JourneyApiError):
    """Raised for any non-2xx response other than 401."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"Server responded with HTTP {status_code}{detail}")


class DecodeError(JourneyApiError, ValueError):
    """Raised when a response body does not match any accepted shape.

    Also a ``ValueError`` so that pydantic validators may raise it directly.
    """

    def __init__(self, reason: str, raw_fragment: Optional[str] = None) -> None:
        self.reason = reason
        self.raw_fragment = raw_fragment[:200] if raw_fragment else raw_fragment
        super().__init__(reason)


class NetworkError(JourneyApiError):
    """Transport level failure (timeout, refused connection, no connectivity)."""

    retryable = True


@runtime_checkable
class TokenStore(Protocol):
    """Persisted bearer token, the only state shared between requests."""

    def get(self) -> Optional[str]:
        """Return the stored token, or ``None`` when logged out."""

    def set(self, token: str) -> None:
        """Overwrite the stored token."""

    def clear(self) -> None:
        """Remove the stored token."""


__all__ = [
    "AuthenticationRequiredError",
    "DecodeError",
    "JourneyApiError",
    "NetworkError",
    "ServerError",
    "TokenStore",
]
