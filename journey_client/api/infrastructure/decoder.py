"""Tolerant decoding of journey service response bodies.

Decoding is pure: it never reads or writes the token store.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..application.ports import DecodeError

M = TypeVar("M", bound=BaseModel)

RawBody = Union[bytes, str]

# Checked in order; the first non-empty string wins.
TOKEN_FIELDS = ("access_token", "accessToken", "token", "auth_token")


def load_json(raw: RawBody) -> Any:
    """Parse ``raw`` as JSON or raise ``DecodeError``."""

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}", _fragment(raw)) from exc


def decode(raw: RawBody, model: Type[M]) -> M:
    """Decode a single ``model`` record from a raw response body."""

    return decode_payload(load_json(raw), model, raw)


def decode_list(raw: RawBody, model: Type[M]) -> list[M]:
    """Decode an ordered JSON array of ``model`` records."""

    payload = load_json(raw)
    if not isinstance(payload, list):
        raise DecodeError(
            f"Expected a JSON array of {model.__name__}, got {type(payload).__name__}",
            _fragment(raw),
        )
    return [decode_payload(item, model, raw) for item in payload]


def decode_payload(payload: Any, model: Type[M], raw: Optional[RawBody] = None) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        fragment = _fragment(raw) if raw is not None else _fragment(json.dumps(payload, default=str))
        raise DecodeError(f"Invalid {model.__name__} payload: {problems}", fragment) from exc


def extract_token(payload: Any) -> Optional[str]:
    """Return the access token from a login response, whichever field carries it."""

    if not isinstance(payload, Mapping):
        return None
    for field_name in TOKEN_FIELDS:
        value = payload.get(field_name)
        # Empty or non-string values do not count as present.
        if isinstance(value, str) and value.strip():
            return value
    return None


def _fragment(raw: RawBody) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", "replace")
    return raw[:200]
