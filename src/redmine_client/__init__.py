"""Typed client for the Redmine JSON REST API."""

from .core import (
    API_KEY_HEADER,
    DEFAULT_PAGE_LIMIT,
    SWITCH_USER_HEADER,
    AllPagesIterator,
    AsyncAllPagesIterator,
    AsyncRedmineClient,
    EmptyResponseBodyError,
    Endpoint,
    EndpointCapabilityError,
    NoPagination,
    NonObjectResponseBodyError,
    Pageable,
    PaginationKeyMissingError,
    PaginationKeyTypeError,
    ParamValueError,
    QueryParams,
    RedmineClient,
    RedmineClientError,
    RedmineConfigError,
    RedmineHTTPError,
    RedmineModelValidationError,
    RedmineParseError,
    RedmineTransportError,
    RedmineURLError,
    ResponsePage,
    ReturnsJsonResponse,
    TimeParseError,
    UploadFileError,
    create_async_client_from_env,
    create_client_from_env,
    load_env_config,
)

__version__ = "0.3.0"

__all__ = [
    "RedmineClient",
    "AsyncRedmineClient",
    "API_KEY_HEADER",
    "SWITCH_USER_HEADER",
    "Endpoint",
    "ReturnsJsonResponse",
    "Pageable",
    "NoPagination",
    "QueryParams",
    "DEFAULT_PAGE_LIMIT",
    "ResponsePage",
    "AllPagesIterator",
    "AsyncAllPagesIterator",
    "create_client_from_env",
    "create_async_client_from_env",
    "load_env_config",
    "RedmineClientError",
    "RedmineTransportError",
    "RedmineURLError",
    "RedmineConfigError",
    "EndpointCapabilityError",
    "ParamValueError",
    "EmptyResponseBodyError",
    "NonObjectResponseBodyError",
    "PaginationKeyMissingError",
    "PaginationKeyTypeError",
    "RedmineParseError",
    "RedmineModelValidationError",
    "UploadFileError",
    "TimeParseError",
    "RedmineHTTPError",
]
