import logging
import time
from typing import Any, List, Optional, Tuple, Type, TypeVar

import httpx

from redmine_client.core.endpoint import (
    Endpoint,
    NoPagination,
    Pageable,
    RequestBody,
    ReturnsJsonResponse,
    require_capabilities,
)
from redmine_client.core.errors import (
    RedmineConfigError,
    RedmineHTTPError,
    RedmineTransportError,
    RedmineURLError,
)
from redmine_client.core.logging import TRACE
from redmine_client.core.pagination import (
    DEFAULT_PAGE_LIMIT,
    AllPagesIterator,
    AsyncAllPagesIterator,
    ResponsePage,
    decode_json,
    decode_page,
)
from redmine_client.core.params import QueryParams

API_KEY_HEADER = "x-redmine-api-key"
SWITCH_USER_HEADER = "X-Redmine-Switch-User"

C = TypeVar("C", bound="_RedmineClientBase")


def _parse_base_url(base_url: str) -> httpx.URL:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise RedmineURLError(f"Invalid base URL {base_url!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise RedmineURLError(
            f"Base URL must be an absolute http(s) URL, got {base_url!r}"
        )
    # keep the path prefix when joining relative suffixes
    if not url.path.endswith("/"):
        url = url.copy_with(path=url.path + "/")
    return url


def _body_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return repr(data)


class _RedmineClientBase:
    """
    State and request assembly shared by the blocking and async clients.
    - Holds base URL, API key and the optional impersonation identity
    - Builds URLs and headers, emits diagnostics
    - Subclasses only implement the send/receive step (rest)
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        strict_status: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        base_url = (base_url or "").strip()
        api_key = api_key or ""

        if not base_url:
            raise RedmineConfigError("base_url must be provided.")
        if not api_key:
            raise RedmineConfigError("api_key must be provided.")

        self.base_url = _parse_base_url(base_url)
        self._api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.strict_status = strict_status
        self.impersonate_user_id: Optional[int] = None
        self.log = logger or logging.getLogger("redmine_client.client")

    @classmethod
    def from_env(cls: Type[C], **kwargs: Any) -> C:
        from redmine_client.core.config import require_env_config

        base_url, api_key = require_env_config()
        return cls(base_url=base_url, api_key=api_key, **kwargs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_url={str(self.base_url)!r}, "
            f"impersonate_user_id={self.impersonate_user_id!r})"
        )

    def impersonate_user(self, user_id: int) -> None:
        """Send all following requests on behalf of ``user_id`` (needs admin rights)."""
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id < 0:
            raise ValueError("user_id must be a non-negative integer")
        self.impersonate_user_id = user_id

    def reset_impersonation(self) -> None:
        self.impersonate_user_id = None

    def issue_url(self, issue_id: int) -> str:
        """Browser URL of an issue, computed client-side."""
        return str(self.base_url.join(f"issues/{issue_id}"))

    def _build_url(self, path_suffix: str, parameters: QueryParams) -> httpx.URL:
        try:
            url = self.base_url.join(path_suffix)
        except httpx.InvalidURL as exc:
            raise RedmineURLError(
                f"Could not join {path_suffix!r} to the base URL: {exc}"
            ) from exc
        return parameters.add_to_url(url)

    def _headers(self, body: Optional[RequestBody]) -> dict:
        headers = {API_KEY_HEADER: self._api_key}
        if self.impersonate_user_id is not None:
            headers[SWITCH_USER_HEADER] = str(self.impersonate_user_id)
        if body is not None:
            headers["Content-Type"] = body[0]
        return headers

    def _log_request(
        self, method: str, url: httpx.URL, body: Optional[RequestBody]
    ) -> None:
        self.log.debug("redmine.request", extra={"method": method, "url": str(url)})
        if body is not None and self.log.isEnabledFor(TRACE):
            self.log.log(
                TRACE,
                "Request body (Content-Type: %s):\n%s",
                body[0],
                _body_text(body[1]),
                extra={"content_type": body[0]},
            )

    def _log_send_error(self, method: str, url: httpx.URL, exc: Exception) -> None:
        self.log.error(
            "redmine.send_error",
            extra={
                "method": method,
                "url": str(url),
                "error_type": type(exc).__name__,
            },
        )

    def _log_response(
        self, method: str, url: httpx.URL, status: int, body: bytes, start: float
    ) -> None:
        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "redmine.response",
            extra={
                "method": method,
                "url": str(url),
                "status": status,
                "duration_ms": duration_ms,
            },
        )
        if self.log.isEnabledFor(TRACE):
            self.log.log(TRACE, "Response body:\n%s", _body_text(body))
        if status >= 400:
            event = "redmine.client_error" if status < 500 else "redmine.server_error"
            self.log.error(
                event, extra={"method": method, "url": str(url), "status": status}
            )

    def _to_http_error(
        self, method: str, url: str, status: int, body: bytes
    ) -> RedmineHTTPError:
        # Redmine reports validation failures as {"errors": ["..."]}
        errors: List[str] = []
        response_text: Optional[str] = None
        message = "request failed"
        try:
            parsed = decode_json(status, body)
            if isinstance(parsed, dict) and isinstance(parsed.get("errors"), list):
                errors = [str(e) for e in parsed["errors"]]
                message = "; ".join(errors) or message
        except Exception:
            response_text = body[:500].decode("utf-8", errors="replace")

        return RedmineHTTPError(
            status_code=status,
            method=method,
            url=url,
            message=message,
            errors=errors,
            response_text=response_text,
        )

    def _check_status(
        self, endpoint: Endpoint, parameters: QueryParams, status: int, body: bytes
    ) -> None:
        if not self.strict_status or 200 <= status < 300:
            return
        url = str(self._build_url(endpoint.path_suffix(), parameters))
        raise self._to_http_error(endpoint.method().upper(), url, status, body)

    @staticmethod
    def _page_parameters(endpoint: Endpoint, offset: int, limit: int) -> QueryParams:
        parameters = endpoint.parameters()
        parameters.push("offset", offset)
        parameters.push("limit", limit)
        return parameters


class RedmineClient(_RedmineClientBase):
    """
    Blocking client for the Redmine JSON REST API.
    - ignore_response_body: any endpoint, body discarded
    - json_response_body: ReturnsJsonResponse + NoPagination endpoints
    - json_response_body_page / _all_pages / _all_pages_iter: ReturnsJsonResponse + Pageable
    HTTP error statuses are returned to the decoders unless strict_status is set.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        strict_status: bool = False,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.Client] = None,
    ):
        super().__init__(
            base_url=base_url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            strict_status=strict_status,
            logger=logger,
        )
        self._owns_http = http is None
        self.http = http or httpx.Client(timeout=timeout_seconds)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "RedmineClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def rest(
        self,
        method: str,
        path_suffix: str,
        parameters: QueryParams,
        body: Optional[RequestBody] = None,
    ) -> Tuple[int, bytes]:
        """
        Send one request and return (status, raw body).
        Raises RedmineTransportError on network failures; the status is not inspected.
        """
        method = method.upper()
        url = self._build_url(path_suffix, parameters)
        headers = self._headers(body)
        self._log_request(method, url, body)

        start = time.perf_counter()
        try:
            resp = self.http.request(
                method,
                url,
                headers=headers,
                content=body[1] if body is not None else None,
            )
        except httpx.HTTPError as exc:
            self._log_send_error(method, url, exc)
            raise RedmineTransportError(
                f"Transport error calling {method} {url}: {exc}"
            ) from exc

        self._log_response(method, url, resp.status_code, resp.content, start)
        return resp.status_code, resp.content

    def _call(self, endpoint: Endpoint, parameters: QueryParams) -> Tuple[int, bytes]:
        body = endpoint.body()
        status, raw = self.rest(endpoint.method(), endpoint.path_suffix(), parameters, body)
        self._check_status(endpoint, parameters, status, raw)
        return status, raw

    def ignore_response_body(self, endpoint: Endpoint) -> None:
        """Use with endpoints that have no response body, e.g. deletes."""
        require_capabilities(endpoint)
        self._call(endpoint, endpoint.parameters())

    def json_response_body(self, endpoint: Endpoint, model: Any = None) -> Any:
        """Decode a non-paginated JSON response into ``model`` (raw JSON if None)."""
        require_capabilities(endpoint, ReturnsJsonResponse, NoPagination)
        status, raw = self._call(endpoint, endpoint.parameters())
        return decode_json(status, raw, model)

    def json_response_body_page(
        self, endpoint: Endpoint, offset: int, limit: int, model: Any = None
    ) -> ResponsePage[Any]:
        """Fetch a single page starting at ``offset``."""
        require_capabilities(endpoint, ReturnsJsonResponse, Pageable)
        return self._fetch_page(endpoint, offset, limit, model)

    def _fetch_page(
        self, endpoint: Endpoint, offset: int, limit: int, model: Any
    ) -> ResponsePage[Any]:
        parameters = self._page_parameters(endpoint, offset, limit)
        status, raw = self._call(endpoint, parameters)
        return decode_page(
            status, raw, endpoint.response_wrapper_key(), model, logger=self.log
        )

    def json_response_body_all_pages_iter(
        self, endpoint: Endpoint, model: Any = None, *, limit: int = DEFAULT_PAGE_LIMIT
    ) -> AllPagesIterator[Any]:
        """Lazily iterate the records of every page, fetching a page when the buffer runs dry."""
        require_capabilities(endpoint, ReturnsJsonResponse, Pageable)
        return AllPagesIterator(
            lambda offset, page_limit: self._fetch_page(
                endpoint, offset, page_limit, model
            ),
            limit=limit,
        )

    def json_response_body_all_pages(
        self, endpoint: Endpoint, model: Any = None, *, limit: int = DEFAULT_PAGE_LIMIT
    ) -> List[Any]:
        """Fetch every page and return all records in order."""
        return list(self.json_response_body_all_pages_iter(endpoint, model, limit=limit))


class AsyncRedmineClient(_RedmineClientBase):
    """
    Async client with the same dispatch modes as RedmineClient.
    Suspension happens only inside the transport send/receive.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        strict_status: bool = False,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            base_url=base_url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            strict_status=strict_status,
            logger=logger,
        )
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "AsyncRedmineClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def rest(
        self,
        method: str,
        path_suffix: str,
        parameters: QueryParams,
        body: Optional[RequestBody] = None,
    ) -> Tuple[int, bytes]:
        method = method.upper()
        url = self._build_url(path_suffix, parameters)
        headers = self._headers(body)
        self._log_request(method, url, body)

        start = time.perf_counter()
        try:
            resp = await self.http.request(
                method,
                url,
                headers=headers,
                content=body[1] if body is not None else None,
            )
        except httpx.HTTPError as exc:
            self._log_send_error(method, url, exc)
            raise RedmineTransportError(
                f"Transport error calling {method} {url}: {exc}"
            ) from exc

        self._log_response(method, url, resp.status_code, resp.content, start)
        return resp.status_code, resp.content

    async def _call(
        self, endpoint: Endpoint, parameters: QueryParams
    ) -> Tuple[int, bytes]:
        body = endpoint.body()
        status, raw = await self.rest(
            endpoint.method(), endpoint.path_suffix(), parameters, body
        )
        self._check_status(endpoint, parameters, status, raw)
        return status, raw

    async def ignore_response_body(self, endpoint: Endpoint) -> None:
        require_capabilities(endpoint)
        await self._call(endpoint, endpoint.parameters())

    async def json_response_body(self, endpoint: Endpoint, model: Any = None) -> Any:
        require_capabilities(endpoint, ReturnsJsonResponse, NoPagination)
        status, raw = await self._call(endpoint, endpoint.parameters())
        return decode_json(status, raw, model)

    async def json_response_body_page(
        self, endpoint: Endpoint, offset: int, limit: int, model: Any = None
    ) -> ResponsePage[Any]:
        require_capabilities(endpoint, ReturnsJsonResponse, Pageable)
        return await self._fetch_page(endpoint, offset, limit, model)

    async def _fetch_page(
        self, endpoint: Endpoint, offset: int, limit: int, model: Any
    ) -> ResponsePage[Any]:
        parameters = self._page_parameters(endpoint, offset, limit)
        status, raw = await self._call(endpoint, parameters)
        return decode_page(
            status, raw, endpoint.response_wrapper_key(), model, logger=self.log
        )

    def json_response_body_all_pages_stream(
        self, endpoint: Endpoint, model: Any = None, *, limit: int = DEFAULT_PAGE_LIMIT
    ) -> AsyncAllPagesIterator[Any]:
        """Async iterator over the records of every page."""
        require_capabilities(endpoint, ReturnsJsonResponse, Pageable)

        async def fetch(offset: int, page_limit: int) -> ResponsePage[Any]:
            return await self._fetch_page(endpoint, offset, page_limit, model)

        return AsyncAllPagesIterator(fetch, limit=limit)

    async def json_response_body_all_pages(
        self, endpoint: Endpoint, model: Any = None, *, limit: int = DEFAULT_PAGE_LIMIT
    ) -> List[Any]:
        stream = self.json_response_body_all_pages_stream(endpoint, model, limit=limit)
        return await stream.flatten()


__all__ = [
    "RedmineClient",
    "AsyncRedmineClient",
    "API_KEY_HEADER",
    "SWITCH_USER_HEADER",
]
