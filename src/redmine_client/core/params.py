"""
Query-string and request-body encoding for endpoint definitions.

Values are turned into plain strings here; percent-encoding happens only
when the pairs are written into a URL.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from redmine_client.core.errors import ParamValueError, RedmineParseError
from redmine_client.utils.time_parser import format_date, format_rfc3339

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"


def encode_param_value(value: Any) -> str:
    """
    Encode a single query parameter value.

    - bool -> "true"/"false"
    - int -> decimal
    - float -> shortest round-trip decimal (finite only)
    - datetime -> RFC 3339 with offset (naive values are rejected)
    - date -> YYYY-MM-DD
    - list/tuple -> comma-joined encoding of the elements
    - objects with ``as_param_value()`` and Enum members -> their own value
    """
    # bool first: it is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return encode_param_value(value.value)
    if isinstance(value, str):
        return value
    if hasattr(value, "as_param_value"):
        return value.as_param_value()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParamValueError(f"Cannot encode non-finite float {value!r}")
        return repr(value)
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ParamValueError(
                f"Cannot encode timestamp without UTC offset: {value.isoformat()}"
            )
        return format_rfc3339(value)
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, (list, tuple)):
        return ",".join(encode_param_value(v) for v in value)
    raise ParamValueError(
        f"Unsupported query parameter type: {type(value).__name__}"
    )


class QueryParams:
    """Ordered (key, value) string pairs; duplicate keys are kept."""

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None):
        self._pairs: List[Tuple[str, str]] = []
        if pairs is not None:
            self.extend(pairs)

    def push(self, key: str, value: Any) -> "QueryParams":
        self._pairs.append((key, encode_param_value(value)))
        return self

    def push_opt(self, key: str, value: Any) -> "QueryParams":
        """Push only when ``value`` is not None."""
        if value is not None:
            self.push(key, value)
        return self

    def extend(self, pairs: Iterable[Tuple[str, Any]]) -> "QueryParams":
        for key, value in pairs:
            self.push(key, value)
        return self

    def copy(self) -> "QueryParams":
        clone = QueryParams()
        clone._pairs = list(self._pairs)
        return clone

    def items(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def to_query_string(self) -> str:
        # httpx.QueryParams groups repeated keys, so encode the pairs in order here
        return urlencode(self._pairs)

    def add_to_url(self, url: httpx.URL) -> httpx.URL:
        """Append the pairs after any query the URL already carries, leaving it untouched."""
        if not self._pairs:
            return url
        encoded = self.to_query_string().encode("ascii")
        query = url.query + b"&" + encoded if url.query else encoded
        return url.copy_with(query=query)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"QueryParams({self._pairs!r})"


def json_body(payload: Any) -> Tuple[str, bytes]:
    """
    Build an ``application/json`` request body.

    Pydantic models are dumped in JSON mode with None fields elided; dicts
    may nest models.
    """
    try:
        data = json.dumps(_jsonable(payload), separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise RedmineParseError(f"Could not serialize request body: {exc}") from exc
    return JSON_CONTENT_TYPE, data.encode("utf-8")


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True, by_alias=True)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


__all__ = [
    "QueryParams",
    "encode_param_value",
    "json_body",
    "JSON_CONTENT_TYPE",
    "OCTET_STREAM_CONTENT_TYPE",
]
