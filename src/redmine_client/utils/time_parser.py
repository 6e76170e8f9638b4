from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

from redmine_client.core.errors import TimeParseError

# YYYY-MM-DD with nothing trailing
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# RFC 3339 date-time; the offset is mandatory, fractional seconds optional
RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_date(value: Any) -> date:
    """
    Parse a calendar date in ``YYYY-MM-DD`` form.

    ``date`` instances pass through unchanged (``datetime`` is rejected, a
    timestamp is not a date).
    """
    if isinstance(value, datetime):
        raise TimeParseError(value, "expected a date, got a timestamp")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise TimeParseError(value, f"expected a string, got {type(value).__name__}")
    if not DATE_RE.match(value):
        raise TimeParseError(value, "expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise TimeParseError(value, str(exc)) from exc


def format_date(value: date) -> str:
    return value.isoformat()


def parse_rfc3339(value: Any) -> datetime:
    """
    Parse an RFC 3339 timestamp such as ``2024-03-01T12:30:00Z``.

    Rules:
    - The UTC offset is required; naive timestamps are rejected.
    - ``Z``/``z`` is accepted for UTC.
    - Aware ``datetime`` instances pass through unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise TimeParseError(value, "timestamp has no UTC offset")
        return value
    if not isinstance(value, str):
        raise TimeParseError(value, f"expected a string, got {type(value).__name__}")
    if not RFC3339_RE.match(value):
        raise TimeParseError(value, "expected an RFC 3339 timestamp with offset")

    normalized = value.replace("t", "T").replace(" ", "T")
    if normalized[-1] in "Zz":
        normalized = normalized[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise TimeParseError(value, str(exc)) from exc


def format_rfc3339(value: datetime) -> str:
    """Format an aware timestamp as RFC 3339, using ``Z`` for UTC."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise TimeParseError(value, "cannot format a timestamp without UTC offset")
    text = value.isoformat()
    if value.utcoffset() == timezone.utc.utcoffset(None) and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


__all__ = ["parse_date", "format_date", "parse_rfc3339", "format_rfc3339"]
