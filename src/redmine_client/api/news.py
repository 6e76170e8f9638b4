from __future__ import annotations

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import Pageable, ReturnsJsonResponse


class ListNews(EndpointModel, ReturnsJsonResponse, Pageable):
    """News across all visible projects."""

    def response_wrapper_key(self) -> str:
        return "news"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return "news.json"


class ListProjectNews(EndpointModel, ReturnsJsonResponse, Pageable):
    project_id_or_name: str

    def response_wrapper_key(self) -> str:
        return "news"

    def method(self) -> str:
        return "GET"

    def path_suffix(self) -> str:
        return f"projects/{self.project_id_or_name}/news.json"


__all__ = ["ListNews", "ListProjectNews"]
