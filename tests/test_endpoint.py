import pytest
import respx
from redmine_client.api import DeleteIssue, GetIssue, ListIssues, ListProjectFiles
from redmine_client.api._base import EndpointModel
from redmine_client.core.client import AsyncRedmineClient, RedmineClient
from redmine_client.core.endpoint import (
    Endpoint,
    NoPagination,
    Pageable,
    ReturnsJsonResponse,
    require_capabilities,
)
from redmine_client.core.errors import EndpointCapabilityError
from redmine_client.core.params import QueryParams


def test_pageable_and_no_pagination_cannot_be_combined():
    with pytest.raises(EndpointCapabilityError):

        class Broken(Endpoint, ReturnsJsonResponse, Pageable, NoPagination):
            def method(self):
                return "GET"

            def path_suffix(self):
                return "broken.json"


def test_pageable_without_wrapper_key_cannot_be_created():
    class ListThings(EndpointModel, ReturnsJsonResponse, Pageable):
        def method(self):
            return "GET"

        def path_suffix(self):
            return "things.json"

    with pytest.raises(TypeError):
        ListThings()


def test_endpoint_defaults():
    class Ping(Endpoint):
        def method(self):
            return "GET"

        def path_suffix(self):
            return "ping.json"

    ping = Ping()
    assert ping.parameters() == QueryParams()
    assert ping.body() is None


def test_require_capabilities_names_what_is_missing():
    with pytest.raises(EndpointCapabilityError) as exc:
        require_capabilities(DeleteIssue(id=1), ReturnsJsonResponse, NoPagination)
    assert "ReturnsJsonResponse" in str(exc.value)
    assert "NoPagination" in str(exc.value)

    require_capabilities(GetIssue(id=1), ReturnsJsonResponse, NoPagination)
    require_capabilities(ListIssues(), ReturnsJsonResponse, Pageable)


def test_non_endpoint_is_rejected():
    with pytest.raises(EndpointCapabilityError):
        require_capabilities("issues.json")


def test_endpoint_values_are_immutable():
    endpoint = GetIssue(id=1)
    with pytest.raises(Exception):
        endpoint.id = 2


@pytest.fixture
def client():
    return RedmineClient(base_url="https://svc.example/", api_key="k")


def test_wrong_dispatch_mode_fails_before_any_request(client):
    # no routes registered: any request would fail the test with a respx error
    with respx.mock:
        with pytest.raises(EndpointCapabilityError):
            client.json_response_body(ListIssues())
        with pytest.raises(EndpointCapabilityError):
            client.json_response_body_page(ListProjectFiles(project_id_or_name="p"), 0, 100)
        with pytest.raises(EndpointCapabilityError):
            client.json_response_body_all_pages(GetIssue(id=1))
        with pytest.raises(EndpointCapabilityError):
            client.json_response_body_all_pages_iter(DeleteIssue(id=1))
        with pytest.raises(EndpointCapabilityError):
            client.json_response_body(DeleteIssue(id=1))


@pytest.mark.asyncio
async def test_async_wrong_dispatch_mode_fails_before_any_request():
    async with respx.mock:
        async with AsyncRedmineClient(base_url="https://svc.example/", api_key="k") as cl:
            with pytest.raises(EndpointCapabilityError):
                await cl.json_response_body(ListIssues())
            with pytest.raises(EndpointCapabilityError):
                await cl.json_response_body_page(GetIssue(id=1), 0, 100)
            with pytest.raises(EndpointCapabilityError):
                cl.json_response_body_all_pages_stream(GetIssue(id=1))
