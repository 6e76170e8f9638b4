"""
Users endpoints.

- all users (pageable, wrapper key "users"): status, name, group_id filters
- specific user by id or the current user
- create, update, delete user
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, Pageable, ReturnsJsonResponse
from redmine_client.core.params import QueryParams, json_body


class UserStatus(Enum):
    ACTIVE = 1
    REGISTERED = 2
    LOCKED = 3
    # Redmine treats an empty status as "any"
    ANY = ""


class UserInclude(str, Enum):
    MEMBERSHIPS = "memberships"
    GROUPS = "groups"


class MailNotification(str, Enum):
    ALL = "all"
    SELECTED = "selected"
    ONLY_MY_EVENTS = "only_my_events"
    ONLY_ASSIGNED = "only_assigned"
    ONLY_OWNER = "only_owner"
    NONE = "none"


class ListUsers(EndpointModel, ReturnsJsonResponse, Pageable):
    status: Optional[UserStatus] = None
    name: Optional[str] = None
    group_id: Optional[int] = None

    def response_wrapper_key(self) -> str:
        return "users"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return "users.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("status", self.status)
        params.push_opt("name", self.name)
        params.push_opt("group_id", self.group_id)
        return params


class GetUser(EndpointModel, ReturnsJsonResponse, NoPagination):
    """A specific user; without an id the user owning the API key."""

    id: Optional[int] = None
    include: Optional[List[UserInclude]] = None

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        if self.id is None:
            return "users/current.json"
        return f"users/{self.id}.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("include", self.include)
        return params


class _UserFields(EndpointModel):
    password: Optional[str] = None
    auth_source_id: Optional[int] = None
    mail_notification: Optional[MailNotification] = None
    must_change_passwd: Optional[bool] = None
    generate_password: Optional[bool] = None
    admin: Optional[bool] = None
    send_information: Optional[bool] = None

    def _user_body(self):
        payload = self._payload()
        # send_information is a top-level parameter, not part of the user hash
        send_information = payload.pop("send_information", None)
        body = {"user": payload}
        if send_information is not None:
            body["send_information"] = send_information
        return json_body(body)


class CreateUser(_UserFields, ReturnsJsonResponse, NoPagination):
    login: str
    firstname: str
    lastname: str
    mail: str

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return "users.json"

    def body(self):
        return self._user_body()


class UpdateUser(_UserFields):
    url_fields = ("id",)

    id: int
    login: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    mail: Optional[str] = None

    def method(self) -> str:
        return "PUT"

    def path_suffix(self) -> str:
        return f"users/{self.id}.json"

    def body(self):
        return self._user_body()


class DeleteUser(EndpointModel):
    id: int

    def method(self) -> str:
        return "DELETE"

    def path_suffix(self) -> str:
        return f"users/{self.id}.json"


__all__ = [
    "UserStatus",
    "UserInclude",
    "MailNotification",
    "ListUsers",
    "GetUser",
    "CreateUser",
    "UpdateUser",
    "DeleteUser",
]
