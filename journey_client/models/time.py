"""Timestamp decoding for the date encodings emitted by the journey service.

The server is not consistent: timezone-aware ISO-8601 values, naive
timestamps with micro- or millisecond precision, bare calendar dates and
Unix epoch seconds all appear in practice. Parsers are tried in the order
of ``TIMESTAMP_PARSERS``; longer and more precise formats come first so a
value is never matched by a looser format that would drop precision.
Naive values are taken to be UTC.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Pattern, Tuple

from ..api.application.ports import DecodeError

TimestampParser = Callable[[str], Optional[datetime]]

_DATE = r"\d{4}-\d{2}-\d{2}"
_TIME = r"\d{2}:\d{2}:\d{2}"
_OFFSET = r"(?:Z|[+-]\d{2}:?\d{2})"


def _strptime_parser(pattern: Pattern[str], fmt: str) -> TimestampParser:
    def parse(value: str) -> Optional[datetime]:
        if not pattern.fullmatch(value):
            return None
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return parse


def _parse_epoch(value: str) -> Optional[datetime]:
    try:
        seconds = float(value)
    except ValueError:
        return None
    return _from_epoch(seconds)


def _from_epoch(seconds: float) -> Optional[datetime]:
    if not math.isfinite(seconds):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


TIMESTAMP_PARSERS: Tuple[Tuple[str, TimestampParser], ...] = (
    (
        "iso8601 with offset and fraction",
        _strptime_parser(
            re.compile(rf"{_DATE}T{_TIME}\.\d{{1,6}}{_OFFSET}"), "%Y-%m-%dT%H:%M:%S.%f%z"
        ),
    ),
    (
        "iso8601 with offset",
        _strptime_parser(re.compile(rf"{_DATE}T{_TIME}{_OFFSET}"), "%Y-%m-%dT%H:%M:%S%z"),
    ),
    (
        "naive microseconds",
        _strptime_parser(re.compile(rf"{_DATE}T{_TIME}\.\d{{6}}"), "%Y-%m-%dT%H:%M:%S.%f"),
    ),
    (
        "naive milliseconds",
        _strptime_parser(re.compile(rf"{_DATE}T{_TIME}\.\d{{3}}"), "%Y-%m-%dT%H:%M:%S.%f"),
    ),
    ("calendar date", _strptime_parser(re.compile(_DATE), "%Y-%m-%d")),
    ("epoch seconds", _parse_epoch),
)


def parse_timestamp(value: Any) -> datetime:
    """Return a timezone-aware ``datetime`` for any supported encoding.

    Raises:
        DecodeError: if ``value`` matches none of the supported formats.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise DecodeError(f"Cannot decode timestamp from boolean {value!r}")
    if isinstance(value, (int, float)):
        try:
            seconds = float(value)
        except OverflowError as exc:
            raise DecodeError(f"Epoch value out of range: {value!r}", str(value)) from exc
        parsed = _from_epoch(seconds)
        if parsed is None:
            raise DecodeError(f"Epoch value out of range: {value!r}", str(value))
        return parsed
    if isinstance(value, str):
        text = value.strip()
        for _name, parser in TIMESTAMP_PARSERS:
            parsed = parser(text)
            if parsed is not None:
                return parsed
        raise DecodeError(f"Unrecognized date string: {value!r}", value)
    raise DecodeError(f"Cannot decode timestamp from {type(value).__name__}")


def parse_calendar_date(value: Any) -> date:
    """Return the calendar day of ``value`` as written, without time-of-day."""

    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_timestamp(value).date()


def optional_timestamp(value: Any) -> Optional[datetime]:
    return None if value is None else parse_timestamp(value)
