"""
Time entry endpoints.

Date filters (spent_on, from, to) are sent as YYYY-MM-DD.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import model_validator

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, Pageable, ReturnsJsonResponse
from redmine_client.core.params import QueryParams


class ListTimeEntries(EndpointModel, ReturnsJsonResponse, Pageable):
    user_id: Optional[int] = None
    project_id_or_name: Optional[str] = None
    issue_id: Optional[int] = None
    activity_id: Optional[int] = None
    spent_on: Optional[date] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    def response_wrapper_key(self) -> str:
        return "time_entries"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return "time_entries.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("user_id", self.user_id)
        params.push_opt("project_id", self.project_id_or_name)
        params.push_opt("issue_id", self.issue_id)
        params.push_opt("activity_id", self.activity_id)
        params.push_opt("spent_on", self.spent_on)
        params.push_opt("from", self.from_date)
        params.push_opt("to", self.to_date)
        return params


class GetTimeEntry(EndpointModel, ReturnsJsonResponse, NoPagination):
    id: int

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"time_entries/{self.id}.json"


class CreateTimeEntry(EndpointModel, ReturnsJsonResponse, NoPagination):
    """Either issue_id or project_id is required; spent_on defaults to today on the server."""

    issue_id: Optional[int] = None
    project_id: Optional[int] = None
    spent_on: Optional[date] = None
    hours: Optional[float] = None
    activity_id: Optional[int] = None
    comments: Optional[str] = None
    user_id: Optional[int] = None

    @model_validator(mode="after")
    def _require_issue_or_project(self) -> "CreateTimeEntry":
        if self.issue_id is None and self.project_id is None:
            raise ValueError("Either issue_id or project_id need to be specified")
        return self

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return "time_entries.json"

    def body(self):
        return self._wrapped_json_body("time_entry")


class UpdateTimeEntry(EndpointModel):
    url_fields = ("id",)

    id: int
    issue_id: Optional[int] = None
    project_id: Optional[int] = None
    spent_on: Optional[date] = None
    hours: Optional[float] = None
    activity_id: Optional[int] = None
    comments: Optional[str] = None
    user_id: Optional[int] = None

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"time_entries/{self.id}.json"

    def body(self):
        return self._wrapped_json_body("time_entry")


class DeleteTimeEntry(EndpointModel):
    id: int

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"time_entries/{self.id}.json"


__all__ = [
    "ListTimeEntries",
    "GetTimeEntry",
    "CreateTimeEntry",
    "UpdateTimeEntry",
    "DeleteTimeEntry",
]
