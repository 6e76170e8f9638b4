"""
Endpoint contract shared by every API definition.

An endpoint describes exactly one HTTP call. The marker mixins declare
which dispatch modes the client may use with it:

- ReturnsJsonResponse: the response body is JSON
- Pageable: the JSON is paginated, records live under response_wrapper_key()
- NoPagination: the endpoint does not accept offset/limit

Pageable and NoPagination are mutually exclusive; combining them fails at
class-definition time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Type

from redmine_client.core.errors import EndpointCapabilityError
from redmine_client.core.params import QueryParams

RequestBody = Tuple[str, bytes]


class ReturnsJsonResponse:
    """Marker: the endpoint responds with a JSON document."""


class NoPagination:
    """Marker: the endpoint rejects offset/limit parameters."""


class Pageable(ABC):
    """Marker: the endpoint pages its records via offset/limit/total_count."""

    @abstractmethod
    def response_wrapper_key(self) -> str:
        """JSON key holding the page's records, e.g. ``issues``."""


class Endpoint(ABC):
    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if issubclass(cls, Pageable) and issubclass(cls, NoPagination):
            raise EndpointCapabilityError(
                f"{cls.__name__} cannot be both Pageable and NoPagination"
            )

    @abstractmethod
    def method(self) -> str:
        """HTTP verb, upper case."""

    @abstractmethod
    def path_suffix(self) -> str:
        """Path relative to the base URL, e.g. ``issues/42.json``."""

    def parameters(self) -> QueryParams:
        return QueryParams()

    def body(self) -> Optional[RequestBody]:
        """
        Content type and bytes of the request body, or None.

        May raise (e.g. UploadFileError); the error aborts dispatch before
        any request is sent.
        """
        return None


def require_capabilities(endpoint: Endpoint, *capabilities: Type) -> None:
    """Reject dispatch of ``endpoint`` unless it carries every capability."""
    if not isinstance(endpoint, Endpoint):
        raise EndpointCapabilityError(
            f"Expected an Endpoint, got {type(endpoint).__name__}"
        )
    missing = [c.__name__ for c in capabilities if not isinstance(endpoint, c)]
    if missing:
        raise EndpointCapabilityError(
            f"{type(endpoint).__name__} lacks required capability: "
            f"{', '.join(missing)}"
        )


__all__ = [
    "Endpoint",
    "ReturnsJsonResponse",
    "Pageable",
    "NoPagination",
    "RequestBody",
    "require_capabilities",
]
