from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, Pageable, ReturnsJsonResponse
from redmine_client.core.params import QueryParams


class ProjectsInclude(str, Enum):
    TRACKERS = "trackers"
    ISSUE_CATEGORIES = "issue_categories"
    ENABLED_MODULES = "enabled_modules"


class ProjectInclude(str, Enum):
    TRACKERS = "trackers"
    ISSUE_CATEGORIES = "issue_categories"
    ENABLED_MODULES = "enabled_modules"
    TIME_ENTRY_ACTIVITIES = "time_entry_activities"


class ListProjects(EndpointModel, ReturnsJsonResponse, Pageable):
    include: Optional[List[ProjectsInclude]] = None

    def response_wrapper_key(self) -> str:
        return "projects"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return "projects.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("include", self.include)
        return params


class GetProject(EndpointModel, ReturnsJsonResponse, NoPagination):
    """A project by numeric id or identifier (the URL slug)."""

    project_id_or_name: str
    include: Optional[List[ProjectInclude]] = None

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("include", self.include)
        return params


class ArchiveProject(EndpointModel):
    project_id_or_name: str

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}/archive.json"


class UnarchiveProject(EndpointModel):
    project_id_or_name: str

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}/unarchive.json"


class _ProjectFields(EndpointModel):
    description: Optional[str] = None
    homepage: Optional[str] = None
    is_public: Optional[bool] = None
    parent_id: Optional[int] = None
    inherit_members: Optional[bool] = None
    default_assigned_to_id: Optional[int] = None
    default_version_id: Optional[int] = None
    tracker_ids: Optional[List[int]] = None
    enabled_module_names: Optional[List[str]] = None
    issue_custom_field_ids: Optional[List[int]] = None
    custom_field_values: Optional[Dict[int, str]] = None


class CreateProject(_ProjectFields, ReturnsJsonResponse, NoPagination):
    name: str
    identifier: str

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return "projects.json"

    def body(self):
        return self._wrapped_json_body("project")


class UpdateProject(_ProjectFields):
    url_fields = ("project_id_or_name",)

    project_id_or_name: str
    name: Optional[str] = None
    identifier: Optional[str] = None

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}.json"

    def body(self):
        return self._wrapped_json_body("project")


class DeleteProject(EndpointModel):
    project_id_or_name: str

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}.json"


__all__ = [
    "ProjectsInclude",
    "ProjectInclude",
    "ListProjects",
    "GetProject",
    "ArchiveProject",
    "UnarchiveProject",
    "CreateProject",
    "UpdateProject",
    "DeleteProject",
]
