"""
Shared base for endpoint definitions.
"""

from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict

from redmine_client.core.endpoint import Endpoint, RequestBody
from redmine_client.core.params import json_body


class EndpointModel(BaseModel, Endpoint):
    """Immutable endpoint value; fields are validated at construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # fields that only appear in the URL, never in a JSON body
    url_fields: ClassVar[Tuple[str, ...]] = ()

    def _payload(self) -> Dict[str, Any]:
        return self.model_dump(
            mode="json", exclude_none=True, exclude=set(self.url_fields)
        )

    def _wrapped_json_body(self, wrapper_key: str) -> RequestBody:
        return json_body({wrapper_key: self._payload()})
