"""Request dispatch and pagination engine (transport details stay in the clients)."""

from .client import API_KEY_HEADER, SWITCH_USER_HEADER, AsyncRedmineClient, RedmineClient
from .config import (
    create_async_client_from_env,
    create_client_from_env,
    load_env_config,
)
from .endpoint import (
    Endpoint,
    NoPagination,
    Pageable,
    ReturnsJsonResponse,
    require_capabilities,
)
from .errors import (
    EmptyResponseBodyError,
    EndpointCapabilityError,
    NonObjectResponseBodyError,
    PaginationKeyMissingError,
    PaginationKeyTypeError,
    ParamValueError,
    RedmineClientError,
    RedmineConfigError,
    RedmineHTTPError,
    RedmineModelValidationError,
    RedmineParseError,
    RedmineTransportError,
    RedmineURLError,
    TimeParseError,
    UploadFileError,
)
from .pagination import (
    DEFAULT_PAGE_LIMIT,
    AllPagesIterator,
    AsyncAllPagesIterator,
    ResponsePage,
)
from .params import QueryParams, encode_param_value, json_body

__all__ = [
    # Clients
    "RedmineClient",
    "AsyncRedmineClient",
    "API_KEY_HEADER",
    "SWITCH_USER_HEADER",
    # Endpoint contract
    "Endpoint",
    "ReturnsJsonResponse",
    "Pageable",
    "NoPagination",
    "require_capabilities",
    # Encoding
    "QueryParams",
    "encode_param_value",
    "json_body",
    # Pagination
    "DEFAULT_PAGE_LIMIT",
    "ResponsePage",
    "AllPagesIterator",
    "AsyncAllPagesIterator",
    # Config helpers
    "create_client_from_env",
    "create_async_client_from_env",
    "load_env_config",
    # Exceptions
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
