from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional


class RedmineClientError(Exception):
    """Base error for client failures."""


class RedmineTransportError(RedmineClientError):
    """Connect, TLS, timeout or body-read failure in the HTTP transport."""


class RedmineURLError(RedmineClientError, ValueError):
    pass


class RedmineConfigError(RedmineClientError, ValueError):
    pass


class EndpointCapabilityError(RedmineClientError, TypeError):
    """An endpoint was dispatched in a mode its capabilities do not allow."""


class ParamValueError(RedmineClientError, ValueError):
    pass


class EmptyResponseBodyError(RedmineClientError):
    def __init__(self, status_code: int):
        super().__init__(f"Empty response body with status {status_code}")
        self.status_code = status_code


class NonObjectResponseBodyError(RedmineClientError):
    def __init__(self, status_code: int):
        super().__init__(
            f"Expected a JSON object at the root of the response "
            f"(status {status_code})"
        )
        self.status_code = status_code


class PaginationKeyMissingError(RedmineClientError):
    def __init__(self, key: str):
        super().__init__(f"Pagination key missing from response: {key!r}")
        self.key = key


class PaginationKeyTypeError(RedmineClientError):
    def __init__(self, key: str):
        super().__init__(f"Pagination key has the wrong type: {key!r}")
        self.key = key


class RedmineParseError(RedmineClientError):
    pass


class RedmineModelValidationError(RedmineParseError):
    pass


class UploadFileError(RedmineClientError):
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Could not read upload file {str(path)!r}: {cause}")
        self.path = path
        self.cause = cause


class TimeParseError(RedmineClientError, ValueError):
    def __init__(self, value: Any, reason: str):
        super().__init__(f"Could not parse time value {value!r}: {reason}")
        self.value = value
        self.reason = reason


class RedmineHTTPError(RedmineClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        errors: Optional[List[str]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.errors = errors or []
        self.response_text = response_text


__all__ = [
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
