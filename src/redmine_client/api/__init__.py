"""Endpoint definitions for the Redmine REST API."""

from .attachments import DeleteAttachment, GetAttachment
from .files import CreateFile, ListProjectFiles
from .issues import (
    AddWatcher,
    CreateIssue,
    DeleteIssue,
    GetIssue,
    IssueInclude,
    IssueListInclude,
    ListIssues,
    RemoveWatcher,
    SortByColumn,
    UpdateIssue,
    UploadedAttachment,
)
from .news import ListNews, ListProjectNews
from .projects import (
    ArchiveProject,
    CreateProject,
    DeleteProject,
    GetProject,
    ListProjects,
    ProjectInclude,
    ProjectsInclude,
    UnarchiveProject,
    UpdateProject,
)
from .time_entries import (
    CreateTimeEntry,
    DeleteTimeEntry,
    GetTimeEntry,
    ListTimeEntries,
    UpdateTimeEntry,
)
from .uploads import UploadFile
from .users import (
    CreateUser,
    DeleteUser,
    GetUser,
    ListUsers,
    MailNotification,
    UpdateUser,
    UserInclude,
    UserStatus,
)

__all__ = [
    # Attachments
    "GetAttachment",
    "DeleteAttachment",
    # Files
    "ListProjectFiles",
    "CreateFile",
    # Issues
    "ListIssues",
    "GetIssue",
    "CreateIssue",
    "UpdateIssue",
    "DeleteIssue",
    "AddWatcher",
    "RemoveWatcher",
    "IssueInclude",
    "IssueListInclude",
    "SortByColumn",
    "UploadedAttachment",
    # News
    "ListNews",
    "ListProjectNews",
    # Projects
    "ListProjects",
    "GetProject",
    "CreateProject",
    "UpdateProject",
    "ArchiveProject",
    "UnarchiveProject",
    "DeleteProject",
    "ProjectInclude",
    "ProjectsInclude",
    # Time entries
    "ListTimeEntries",
    "GetTimeEntry",
    "CreateTimeEntry",
    "UpdateTimeEntry",
    "DeleteTimeEntry",
    # Uploads
    "UploadFile",
    # Users
    "ListUsers",
    "GetUser",
    "CreateUser",
    "UpdateUser",
    "DeleteUser",
    "UserStatus",
    "UserInclude",
    "MailNotification",
]
