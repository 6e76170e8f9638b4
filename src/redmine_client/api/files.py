from __future__ import annotations

from typing import Optional

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, ReturnsJsonResponse


class ListProjectFiles(EndpointModel, ReturnsJsonResponse, NoPagination):
    """All files of a project; decode with models.FilesWrapper."""

    project_id_or_name: str

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}/files.json"


class CreateFile(EndpointModel):
    url_fields = ("project_id_or_name",)

    project_id_or_name: str
    token: str
    version_id: Optional[int] = None
    filename: Optional[str] = None
    description: Optional[str] = None

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}/files.json"

    def body(self):
        return self._wrapped_json_body("file")


__all__ = ["ListProjectFiles", "CreateFile"]
