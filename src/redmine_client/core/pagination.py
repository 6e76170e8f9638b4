"""
Response decoding and the offset/limit page loop.

Everything here is transport-agnostic: the blocking and async clients only
supply a function that fetches one page.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Deque,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    TypeVar,
)

from pydantic import TypeAdapter, ValidationError

from redmine_client.core.errors import (
    EmptyResponseBodyError,
    NonObjectResponseBodyError,
    PaginationKeyMissingError,
    PaginationKeyTypeError,
    RedmineModelValidationError,
    RedmineParseError,
    TimeParseError,
)
from redmine_client.core.logging import TRACE

T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 100
PAGINATION_KEYS = ("total_count", "offset", "limit")


@dataclass(frozen=True)
class ResponsePage(Generic[T]):
    """One page of a paginated response plus the pagination data echoed by Redmine."""

    values: List[T] = field(default_factory=list)
    total_count: int = 0
    offset: int = 0
    limit: int = 0


def _load_json(status_code: int, body: bytes) -> Any:
    if not body:
        raise EmptyResponseBodyError(status_code)
    try:
        return json.loads(body)
    except ValueError as exc:
        snippet = body[:500].decode("utf-8", errors="replace")
        raise RedmineParseError(
            f"Expected JSON (status {status_code}), got body snippet: {snippet!r}"
        ) from exc


def _validate(model: Any, data: Any) -> Any:
    if model is None:
        return data
    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as exc:
        time_error = _find_time_error(exc)
        if time_error is not None:
            raise time_error from exc
        name = getattr(model, "__name__", repr(model))
        raise RedmineModelValidationError(
            f"Response did not match model {name}: {exc}"
        ) from exc


def _find_time_error(exc: ValidationError) -> Optional[TimeParseError]:
    for err in exc.errors():
        cause = (err.get("ctx") or {}).get("error")
        if isinstance(cause, TimeParseError):
            return cause
    return None


def decode_json(status_code: int, body: bytes, model: Any = None) -> Any:
    """Decode a non-paginated JSON response; ``model=None`` returns the raw JSON."""
    return _validate(model, _load_json(status_code, body))


def _pagination_int(payload: Dict[str, Any], key: str) -> int:
    if key not in payload:
        raise PaginationKeyMissingError(key)
    value = payload[key]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PaginationKeyTypeError(key)
    return value


def decode_page(
    status_code: int,
    body: bytes,
    wrapper_key: str,
    model: Any = None,
    logger: Optional[logging.Logger] = None,
) -> ResponsePage[Any]:
    """Decode one page: pagination keys first, then the records under ``wrapper_key``."""
    payload = _load_json(status_code, body)
    if not isinstance(payload, dict):
        raise NonObjectResponseBodyError(status_code)

    total_count, offset, limit = (_pagination_int(payload, k) for k in PAGINATION_KEYS)

    if wrapper_key not in payload:
        raise PaginationKeyMissingError(wrapper_key)
    raw_values = payload[wrapper_key]
    if not isinstance(raw_values, list):
        raise PaginationKeyTypeError(wrapper_key)

    values = _validate(List[model] if model is not None else None, raw_values)
    if logger is not None:
        logger.log(
            TRACE,
            "redmine.page",
            extra={
                "wrapper_key": wrapper_key,
                "total_count": total_count,
                "offset": offset,
                "limit": limit,
            },
        )
    return ResponsePage(
        values=list(values), total_count=total_count, offset=offset, limit=limit
    )


class PageCursor:
    """
    Loop state for a full traversal.

    The requested offset advances by the requested limit; termination uses
    the values Redmine echoed back (total_count < offset + limit).
    """

    def __init__(self, limit: int = DEFAULT_PAGE_LIMIT):
        if limit <= 0:
            raise ValueError("limit must be > 0")
        self.offset = 0
        self.limit = limit
        self.finished = False

    def advance(self, page: ResponsePage[Any]) -> None:
        if page.total_count < page.offset + page.limit:
            self.finished = True
        else:
            self.offset += self.limit


class AllPagesIterator(Generic[T]):
    """Lazily yields records across pages; finite and not restartable."""

    def __init__(
        self,
        fetch_page: Callable[[int, int], ResponsePage[T]],
        *,
        limit: int = DEFAULT_PAGE_LIMIT,
    ):
        self._fetch_page = fetch_page
        self._cursor = PageCursor(limit)
        self._buffer: Deque[T] = deque()

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        while not self._buffer:
            if self._cursor.finished:
                raise StopIteration
            try:
                page = self._fetch_page(self._cursor.offset, self._cursor.limit)
            except BaseException:
                self._cursor.finished = True
                raise
            self._cursor.advance(page)
            self._buffer = deque(page.values)
        return self._buffer.popleft()


class AsyncAllPagesIterator(Generic[T]):
    """Async counterpart of AllPagesIterator; each step may await one round-trip."""

    def __init__(
        self,
        fetch_page: Callable[[int, int], Awaitable[ResponsePage[T]]],
        *,
        limit: int = DEFAULT_PAGE_LIMIT,
    ):
        self._fetch_page = fetch_page
        self._cursor = PageCursor(limit)
        self._buffer: Deque[T] = deque()

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        while not self._buffer:
            if self._cursor.finished:
                raise StopAsyncIteration
            try:
                page = await self._fetch_page(self._cursor.offset, self._cursor.limit)
            except BaseException:
                # error or cancellation ends the stream; the in-flight page is dropped
                self._cursor.finished = True
                raise
            self._cursor.advance(page)
            self._buffer = deque(page.values)
        return self._buffer.popleft()

    async def flatten(self) -> List[T]:
        """Consume the remaining records into a list."""
        result: List[T] = []
        async for item in self:
            result.append(item)
        return result


__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "ResponsePage",
    "PageCursor",
    "AllPagesIterator",
    "AsyncAllPagesIterator",
    "decode_json",
    "decode_page",
]
