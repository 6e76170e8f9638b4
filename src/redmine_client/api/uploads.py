"""
File uploads.

Uploading returns a token (see models.UploadWrapper); the file only shows up
in Redmine once that token is passed to CreateIssue/UpdateIssue or
CreateFile.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from redmine_client.api._base import EndpointModel
from redmine_client.core.endpoint import NoPagination, RequestBody, ReturnsJsonResponse
from redmine_client.core.errors import UploadFileError
from redmine_client.core.params import OCTET_STREAM_CONTENT_TYPE, QueryParams


class UploadFile(EndpointModel, ReturnsJsonResponse, NoPagination):
    file: Path
    # defaults to the basename of ``file``
    filename: Optional[str] = None

    def method(self) -> str:
        return "POST"

    def path_suffix(self) -> str:
        return "uploads.json"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("filename", self.filename or self.file.name or None)
        return params

    def body(self) -> Optional[RequestBody]:
        # read fully at body-construction time; streaming uploads are not supported
        try:
            content = self.file.read_bytes()
        except OSError as exc:
            raise UploadFileError(self.file, exc) from exc
        return OCTET_STREAM_CONTENT_TYPE, content


__all__ = ["UploadFile"]
