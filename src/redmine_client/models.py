from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

from redmine_client.utils.time_parser import (
    format_date,
    format_rfc3339,
    parse_date,
    parse_rfc3339,
)

# Redmine sends timestamps as RFC 3339 and dates as YYYY-MM-DD
Rfc3339DateTime = Annotated[
    datetime,
    BeforeValidator(parse_rfc3339),
    PlainSerializer(format_rfc3339, return_type=str, when_used="json"),
]
RedmineDate = Annotated[
    date,
    BeforeValidator(parse_date),
    PlainSerializer(format_date, return_type=str, when_used="json"),
]


class RedmineModel(BaseModel):
    """
    Base for records returned by Redmine.
    Unknown fields are ignored so callers can decode into the subset they need.
    """

    model_config = ConfigDict(extra="ignore")

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict with None fields elided."""
        return self.model_dump(mode="json", exclude_none=True)


# --- Lightweight reference models ---


class UserEssentials(RedmineModel):
    id: int
    name: str


class ProjectEssentials(RedmineModel):
    id: int
    name: str


class TrackerRef(RedmineModel):
    id: int
    name: str


class StatusRef(RedmineModel):
    id: int
    name: str
    is_closed: Optional[bool] = None


class PriorityRef(RedmineModel):
    id: int
    name: str


class ActivityRef(RedmineModel):
    id: int
    name: str


class VersionRef(RedmineModel):
    id: int
    name: str


class IssueRef(RedmineModel):
    id: int


class CustomFieldValue(RedmineModel):
    id: int
    name: Optional[str] = None
    value: Any = None


# --- Records ---


class User(RedmineModel):
    id: int
    login: Optional[str] = None
    admin: Optional[bool] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    mail: Optional[str] = None
    status: Optional[int] = None
    created_on: Optional[Rfc3339DateTime] = None
    updated_on: Optional[Rfc3339DateTime] = None
    last_login_on: Optional[Rfc3339DateTime] = None
    passwd_changed_on: Optional[Rfc3339DateTime] = None
    custom_fields: Optional[List[CustomFieldValue]] = None


class Project(RedmineModel):
    id: int
    name: str
    identifier: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    is_public: Optional[bool] = None
    parent: Optional[ProjectEssentials] = None
    inherit_members: Optional[bool] = None
    status: Optional[int] = None
    created_on: Optional[Rfc3339DateTime] = None
    updated_on: Optional[Rfc3339DateTime] = None
    trackers: Optional[List[TrackerRef]] = None
    custom_fields: Optional[List[CustomFieldValue]] = None


class Issue(RedmineModel):
    id: int
    subject: str
    project: Optional[ProjectEssentials] = None
    tracker: Optional[TrackerRef] = None
    status: Optional[StatusRef] = None
    priority: Optional[PriorityRef] = None
    author: Optional[UserEssentials] = None
    assigned_to: Optional[UserEssentials] = None
    fixed_version: Optional[VersionRef] = None
    parent: Optional[IssueRef] = None
    description: Optional[str] = None
    start_date: Optional[RedmineDate] = None
    due_date: Optional[RedmineDate] = None
    done_ratio: Optional[int] = None
    is_private: Optional[bool] = None
    estimated_hours: Optional[float] = None
    custom_fields: Optional[List[CustomFieldValue]] = None
    created_on: Optional[Rfc3339DateTime] = None
    updated_on: Optional[Rfc3339DateTime] = None
    closed_on: Optional[Rfc3339DateTime] = None


class News(RedmineModel):
    id: int
    title: str
    project: Optional[ProjectEssentials] = None
    author: Optional[UserEssentials] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    created_on: Optional[Rfc3339DateTime] = None


class Attachment(RedmineModel):
    id: int
    filename: str
    filesize: int
    content_type: Optional[str] = None
    description: Optional[str] = None
    content_url: str
    author: Optional[UserEssentials] = None
    created_on: Optional[Rfc3339DateTime] = None


class File(RedmineModel):
    id: int
    filename: str
    filesize: int
    content_type: Optional[str] = None
    description: Optional[str] = None
    content_url: Optional[str] = None
    token: Optional[str] = None
    author: Optional[UserEssentials] = None
    version: Optional[VersionRef] = None
    digest: Optional[str] = None
    downloads: Optional[int] = None
    created_on: Optional[Rfc3339DateTime] = None


class TimeEntry(RedmineModel):
    id: int
    hours: float
    spent_on: RedmineDate
    project: Optional[ProjectEssentials] = None
    issue: Optional[IssueRef] = None
    user: Optional[UserEssentials] = None
    activity: Optional[ActivityRef] = None
    comments: Optional[str] = None
    created_on: Optional[Rfc3339DateTime] = None
    updated_on: Optional[Rfc3339DateTime] = None


class FileUploadToken(RedmineModel):
    token: str
    id: Optional[int] = None


# --- Single-key wrappers used by non-paginated responses ---


class UserWrapper(RedmineModel):
    user: User


class ProjectWrapper(RedmineModel):
    project: Project


class IssueWrapper(RedmineModel):
    issue: Issue


class AttachmentWrapper(RedmineModel):
    attachment: Attachment


class TimeEntryWrapper(RedmineModel):
    time_entry: TimeEntry


class UploadWrapper(RedmineModel):
    upload: FileUploadToken


class FilesWrapper(RedmineModel):
    files: List[File]


__all__ = [
    "Rfc3339DateTime",
    "RedmineDate",
    "RedmineModel",
    "UserEssentials",
    "ProjectEssentials",
    "TrackerRef",
    "StatusRef",
    "PriorityRef",
    "ActivityRef",
    "VersionRef",
    "IssueRef",
    "CustomFieldValue",
    "User",
    "Project",
    "Issue",
    "News",
    "Attachment",
    "File",
    "TimeEntry",
    "FileUploadToken",
    "UserWrapper",
    "ProjectWrapper",
    "IssueWrapper",
    "AttachmentWrapper",
    "TimeEntryWrapper",
    "UploadWrapper",
    "FilesWrapper",
]
