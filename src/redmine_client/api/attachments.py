from __future__ import annotations

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, ReturnsJsonResponse


class GetAttachment(EndpointModel, ReturnsJsonResponse, NoPagination):
    id: int

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"attachments/{self.id}.json"


class DeleteAttachment(EndpointModel):
    id: int

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"attachments/{self.id}.json"


__all__ = ["GetAttachment", "DeleteAttachment"]
