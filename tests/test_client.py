import json
import logging

import httpx
import pytest
import respx
from httpx import Response
from redmine_client.api import (
    CreateIssue,
    DeleteIssue,
    GetUser,
    ListIssues,
    ListProjectFiles,
    UpdateIssue,
)
from redmine_client.core.client import RedmineClient
from redmine_client.core.errors import (
    EmptyResponseBodyError,
    RedmineConfigError,
    RedmineHTTPError,
    RedmineModelValidationError,
    RedmineParseError,
    RedmineTransportError,
    RedmineURLError,
)
from redmine_client.core.logging import TRACE
from redmine_client.core.params import QueryParams
from redmine_client.models import FilesWrapper, UserWrapper


@pytest.fixture
def client():
    return RedmineClient(base_url="https://svc.example/", api_key="k")


@respx.mock
def test_single_object_dispatch(client):
    route = respx.get("https://svc.example/users/1.json").mock(
        return_value=Response(200, json={"user": {"id": 1, "login": "a", "admin": True}})
    )

    with client:
        wrapper = client.json_response_body(GetUser(id=1), UserWrapper)

    assert route.call_count == 1
    request = route.calls[0].request
    assert str(request.url) == "https://svc.example/users/1.json"
    assert request.method == "GET"
    assert request.headers["x-redmine-api-key"] == "k"
    assert "X-Redmine-Switch-User" not in request.headers
    assert wrapper.user.id == 1
    assert wrapper.user.login == "a"
    assert wrapper.user.admin is True


@respx.mock
def test_impersonation_header(client):
    route = respx.get("https://svc.example/users/1.json").mock(
        return_value=Response(200, json={"user": {"id": 1, "login": "a", "admin": True}})
    )

    client.impersonate_user(42)
    client.json_response_body(GetUser(id=1), UserWrapper)
    client.reset_impersonation()
    client.json_response_body(GetUser(id=1), UserWrapper)

    first, second = route.calls[0].request, route.calls[1].request
    assert first.headers["X-Redmine-Switch-User"] == "42"
    assert first.headers["x-redmine-api-key"] == "k"
    assert "X-Redmine-Switch-User" not in second.headers


def test_impersonation_rejects_non_integer_ids(client):
    with pytest.raises(ValueError):
        client.impersonate_user("42")
    with pytest.raises(ValueError):
        client.impersonate_user(True)


@respx.mock
def test_raw_json_when_no_model_given(client):
    respx.get("https://svc.example/users/current.json").mock(
        return_value=Response(200, json={"user": {"id": 5, "login": "me"}})
    )

    data = client.json_response_body(GetUser())

    assert data == {"user": {"id": 5, "login": "me"}}


@respx.mock
def test_base_url_path_prefix_is_kept():
    route = respx.get("https://svc.example/redmine/projects/web/files.json").mock(
        return_value=Response(200, json={"files": []})
    )
    client = RedmineClient(base_url="https://svc.example/redmine", api_key="k")

    result = client.json_response_body(
        ListProjectFiles(project_id_or_name="web"), FilesWrapper
    )

    assert route.called
    assert result.files == []


def test_issue_url(client):
    assert client.issue_url(42) == "https://svc.example/issues/42"
    prefixed = RedmineClient(base_url="https://svc.example/redmine/", api_key="k")
    assert prefixed.issue_url(7) == "https://svc.example/redmine/issues/7"


@pytest.mark.parametrize("base_url", ["not a url", "ftp://svc.example/", "/relative"])
def test_invalid_base_url(base_url):
    with pytest.raises(RedmineURLError):
        RedmineClient(base_url=base_url, api_key="k")


def test_missing_credentials():
    with pytest.raises(RedmineConfigError):
        RedmineClient(base_url="", api_key="k")
    with pytest.raises(RedmineConfigError):
        RedmineClient(base_url="https://svc.example/", api_key="")


def test_repr_hides_api_key():
    client = RedmineClient(base_url="https://svc.example/", api_key="secret-key")
    assert "secret-key" not in repr(client)


@respx.mock
def test_rest_returns_status_and_raw_body(client):
    route = respx.get("https://svc.example/custom.json").mock(
        return_value=Response(418, content=b"teapot")
    )

    status, body = client.rest(
        "get", "custom.json", QueryParams([("a", 1), ("a", 2)])
    )

    assert status == 418
    assert body == b"teapot"
    assert str(route.calls[0].request.url) == "https://svc.example/custom.json?a=1&a=2"


@respx.mock
def test_repeated_keys_keep_their_position_on_the_wire(client):
    route = respx.get("https://svc.example/issues.json").mock(
        return_value=Response(200, json={})
    )

    client.rest("GET", "issues.json", QueryParams([("a", 1), ("b", 2), ("a", 3)]))

    assert route.calls[0].request.url.query == b"a=1&b=2&a=3"


@respx.mock
def test_paging_parameters_stay_last_after_repeated_filters(client):
    route = respx.get("https://svc.example/issues.json").mock(
        return_value=Response(
            200, json={"issues": [], "total_count": 0, "offset": 0, "limit": 100}
        )
    )

    client.json_response_body_page(
        ListIssues(project_id=[1], status_id=[2]), 0, 100
    )

    assert (
        route.calls[0].request.url.query
        == b"project_id=1&status_id=2&offset=0&limit=100"
    )


@respx.mock
def test_ignore_response_body_does_not_raise_on_error_status(client):
    route = respx.delete("https://svc.example/issues/9.json").mock(
        return_value=Response(404, json={"errors": ["Not found"]})
    )

    assert client.ignore_response_body(DeleteIssue(id=9)) is None
    assert route.called


@respx.mock
def test_json_body_is_sent_with_content_type(client):
    route = respx.put("https://svc.example/issues/3.json").mock(
        return_value=Response(204)
    )

    client.ignore_response_body(UpdateIssue(id=3, subject="New subject", notes="done"))

    request = route.calls[0].request
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "issue": {"subject": "New subject", "notes": "done"}
    }


@respx.mock
def test_empty_body_with_json_decoder(client):
    respx.get("https://svc.example/users/1.json").mock(return_value=Response(204))

    with pytest.raises(EmptyResponseBodyError) as exc:
        client.json_response_body(GetUser(id=1), UserWrapper)

    assert exc.value.status_code == 204


@respx.mock
def test_non_json_body_raises_parse_error(client):
    respx.get("https://svc.example/users/1.json").mock(
        return_value=Response(200, text="<html>Not JSON</html>")
    )

    with pytest.raises(RedmineParseError) as exc:
        client.json_response_body(GetUser(id=1), UserWrapper)

    assert "Expected JSON" in str(exc.value)


@respx.mock
def test_error_payload_fails_typed_decode_by_default(client):
    respx.post("https://svc.example/issues.json").mock(
        return_value=Response(422, json={"errors": ["Subject cannot be blank"]})
    )

    with pytest.raises(RedmineModelValidationError):
        client.json_response_body(CreateIssue(project_id=1), UserWrapper)


@respx.mock
def test_strict_status_raises_http_error():
    respx.post("https://svc.example/issues.json").mock(
        return_value=Response(422, json={"errors": ["Subject cannot be blank"]})
    )
    client = RedmineClient(
        base_url="https://svc.example/", api_key="secret-key", strict_status=True
    )

    with pytest.raises(RedmineHTTPError) as exc:
        client.json_response_body(CreateIssue(project_id=1))

    err = exc.value
    assert err.status_code == 422
    assert err.method == "POST"
    assert err.errors == ["Subject cannot be blank"]
    assert "Subject cannot be blank" in str(err)
    assert "secret-key" not in str(err)


@respx.mock
def test_strict_status_applies_to_ignore_body():
    respx.delete("https://svc.example/issues/9.json").mock(
        return_value=Response(500, text="boom")
    )
    client = RedmineClient(
        base_url="https://svc.example/", api_key="k", strict_status=True
    )

    with pytest.raises(RedmineHTTPError) as exc:
        client.ignore_response_body(DeleteIssue(id=9))

    assert exc.value.status_code == 500
    assert exc.value.response_text == "boom"


@respx.mock
def test_transport_error_is_wrapped(client):
    respx.get("https://svc.example/users/1.json").mock(
        side_effect=httpx.ConnectTimeout("boom")
    )

    with pytest.raises(RedmineTransportError) as exc:
        client.json_response_body(GetUser(id=1))

    assert isinstance(exc.value.__cause__, httpx.ConnectTimeout)


def test_injected_transport_is_not_closed():
    http = httpx.Client()
    client = RedmineClient(base_url="https://svc.example/", api_key="k", http=http)
    with client:
        pass
    assert not http.is_closed
    http.close()


@respx.mock
def test_diagnostics_never_contain_api_key(caplog):
    respx.get("https://svc.example/users/1.json").mock(
        return_value=Response(403, json={"errors": ["forbidden"]})
    )
    client = RedmineClient(base_url="https://svc.example/", api_key="secret-key")
    caplog.set_level(TRACE, logger="redmine_client.client")

    client.json_response_body(GetUser(id=1))

    request_record = next(r for r in caplog.records if r.getMessage() == "redmine.request")
    assert request_record.method == "GET"
    assert request_record.url == "https://svc.example/users/1.json"

    error_record = next(
        r for r in caplog.records if r.getMessage() == "redmine.client_error"
    )
    assert error_record.levelno == logging.ERROR
    assert error_record.status == 403

    assert any(r.levelno == TRACE and "forbidden" in r.getMessage() for r in caplog.records)
    assert "secret-key" not in caplog.text
