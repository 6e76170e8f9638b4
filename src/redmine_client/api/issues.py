"""
Issue endpoints, including watchers.

Journals (notes and change history) come back through GetIssue with
``include=[IssueInclude.JOURNALS]``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, Pageable, ReturnsJsonResponse
from redmine_client.core.params import QueryParams, json_body
from redmine_client.models import CustomFieldValue


class SortByColumn(BaseModel):
    """Sort key for issue lists; ``descending`` appends ``:desc``."""

    model_config = ConfigDict(frozen=True)

    column_name: str
    descending: bool = False

    def as_param_value(self) -> str:
        if self.descending:
            return f"{self.column_name}:desc"
        return self.column_name


class IssueListInclude(str, Enum):
    ATTACHMENTS = "attachments"
    RELATIONS = "relations"


class IssueInclude(str, Enum):
    CHILDREN = "children"
    ATTACHMENTS = "attachments"
    RELATIONS = "relations"
    CHANGESETS = "changesets"
    JOURNALS = "journals"
    WATCHERS = "watchers"
    ALLOWED_STATUSES = "allowed_statuses"


class UploadedAttachment(BaseModel):
    """A token from UploadFile, attached when creating or updating an issue."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str
    filename: str
    content_type: str
    description: Optional[str] = None


class ListIssues(EndpointModel, ReturnsJsonResponse, Pageable):
    include: Optional[List[IssueListInclude]] = None
    sort: Optional[List[SortByColumn]] = None
    issue_id: Optional[List[int]] = None
    project_id: Optional[List[int]] = None
    tracker_id: Optional[List[int]] = None
    category_id: Optional[List[int]] = None
    status_id: Optional[List[int]] = None

    def response_wrapper_key(self) -> str:
        return "issues"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return "issues.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("include", self.include)
        params.push_opt("sort", self.sort)
        params.push_opt("issue_id", self.issue_id)
        params.push_opt("project_id", self.project_id)
        params.push_opt("tracker_id", self.tracker_id)
        params.push_opt("category_id", self.category_id)
        params.push_opt("status_id", self.status_id)
        return params


class GetIssue(EndpointModel, ReturnsJsonResponse, NoPagination):
    id: int
    include: Optional[List[IssueInclude]] = None

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"issues/{self.id}.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("include", self.include)
        return params


class _IssueFields(EndpointModel):
    tracker_id: Optional[int] = None
    status_id: Optional[int] = None
    priority_id: Optional[int] = None
    subject: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    # "Target version" in the UI, still fixed_version_id in the API
    fixed_version_id: Optional[int] = Field(default=None, alias="version_id")
    assigned_to_id: Optional[int] = None
    parent_issue_id: Optional[int] = None
    custom_fields: Optional[List[CustomFieldValue]] = None
    watcher_user_ids: Optional[List[int]] = None
    is_private: Optional[bool] = None
    estimated_hours: Optional[float] = None
    uploads: Optional[List[UploadedAttachment]] = None

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class CreateIssue(_IssueFields, ReturnsJsonResponse, NoPagination):
    project_id: int

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return "issues.json"

    def body(self):
        return self._wrapped_json_body("issue")


class UpdateIssue(_IssueFields):
    url_fields = ("id",)

    id: int
    project_id: Optional[int] = None
    notes: Optional[str] = None
    private_notes: Optional[bool] = None

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"issues/{self.id}.json"

    def body(self):
        return self._wrapped_json_body("issue")


class DeleteIssue(EndpointModel):
    id: int

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"issues/{self.id}.json"


class AddWatcher(EndpointModel):
    issue_id: int
    user_id: int

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return f"issues/{self.issue_id}/watchers.json"

    def body(self):
        return json_body({"user_id": self.user_id})


class RemoveWatcher(EndpointModel):
    issue_id: int
    user_id: int

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"issues/{self.issue_id}/watchers/{self.user_id}.json"


__all__ = [
    "SortByColumn",
    "IssueListInclude",
    "IssueInclude",
    "UploadedAttachment",
    "ListIssues",
    "GetIssue",
    "CreateIssue",
    "UpdateIssue",
    "DeleteIssue",
    "AddWatcher",
    "RemoveWatcher",
]
