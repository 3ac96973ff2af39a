"""Unit tests for the SonarHttpxAdapter class and related SonarQube API operations."""

import base64
import json
from typing import Callable

import httpx
import pytest

from sonar_scan_manager.configuration.models import SonarAuthenticationType
from sonar_scan_manager.sonar.adapter import SonarHttpxAdapter
from sonar_scan_manager.sonar.exceptions import SonarDecodeError, SonarTransportError


def make_adapter(handler: Callable[[httpx.Request], httpx.Response]) -> SonarHttpxAdapter:
    """Build an adapter whose requests are answered by the given handler."""
    client = httpx.AsyncClient(base_url="http://sonar.test", transport=httpx.MockTransport(handler))
    return SonarHttpxAdapter(client)


def issue_payload(component: str = "bu-project:main.go", line: int = 8) -> dict[str, object]:
    """Build one issue as returned by the issue search API."""
    return {
        "key": "AXa1",
        "component": component,
        "line": line,
        "severity": "MAJOR",
        "rule": "go:S1186",
        "type": "CODE_SMELL",
        "message": "Add a nested comment explaining why this function is empty.",
        "effort": "5min",
        "debt": "5min",
    }


@pytest.mark.asyncio
async def test_get_health_status_returns_body() -> None:
    """Test that get_health_status returns the raw health body."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"health": "GREEN", "causes": []})

    adapter = make_adapter(handler)
    body = await adapter.get_health_status()
    assert "GREEN" in body
    assert requests[0].method == "GET"
    assert requests[0].url.path == "/api/system/health"


@pytest.mark.asyncio
async def test_get_health_status_connection_error() -> None:
    """Test that a connection failure is raised as SonarTransportError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    adapter = make_adapter(handler)
    with pytest.raises(SonarTransportError) as exc_info:
        await adapter.get_health_status()
    assert "Connection refused" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [204, 404])
async def test_delete_project_accepts_any_response(status_code: int) -> None:
    """Test that delete_project posts the project key and does not check the status."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    adapter = make_adapter(handler)
    response = await adapter.delete_project("bu-project")
    assert response.status_code == status_code
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/api/projects/delete"
    assert requests[0].url.params["project"] == "bu-project"


@pytest.mark.asyncio
async def test_delete_project_connection_error() -> None:
    """Test that delete_project wraps transport failures."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    adapter = make_adapter(handler)
    with pytest.raises(SonarTransportError):
        await adapter.delete_project("bu-project")


@pytest.mark.asyncio
async def test_search_issues_decodes_page() -> None:
    """Test that search_issues sends the query parameters and decodes the page."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "total": 1,
                "p": 1,
                "ps": 500,
                "paging": {"pageIndex": 1, "pageSize": 500, "total": 1},
                "issues": [issue_payload()],
                "components": [],
            },
        )

    adapter = make_adapter(handler)
    page = await adapter.search_issues("bu-project", "go", 500, 1)

    assert requests[0].method == "POST"
    assert requests[0].url.path == "/api/issues/search"
    assert dict(requests[0].url.params) == {"componentKeys": "bu-project", "languages": "go", "ps": "500", "p": "1"}
    assert page.total == 1
    assert page.paging is not None and page.paging.page_size == 500
    issue = page.issues[0]
    assert issue.component == "bu-project:main.go"
    assert issue.line == 8
    assert issue.rule == "go:S1186"
    assert issue.effort == "5min"
    assert issue.file_path is None and issue.function is None


@pytest.mark.asyncio
async def test_search_issues_defaults_missing_line() -> None:
    """Test that a file-level issue without a line decodes with line 0."""
    payload = issue_payload()
    del payload["line"]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"total": 1, "issues": [payload]})

    page = await make_adapter(handler).search_issues("bu-project", "go", 500, 1)
    assert page.issues[0].line == 0


@pytest.mark.asyncio
async def test_search_issues_malformed_body() -> None:
    """Test that a non-JSON body raises SonarDecodeError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(SonarDecodeError):
        await make_adapter(handler).search_issues("bu-project", "go", 500, 1)


@pytest.mark.asyncio
async def test_search_issues_unexpected_structure() -> None:
    """Test that JSON of the wrong shape raises SonarDecodeError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps({"issues": "nope"}).encode())

    with pytest.raises(SonarDecodeError):
        await make_adapter(handler).search_issues("bu-project", "go", 500, 1)


@pytest.mark.asyncio
async def test_search_issues_error_status() -> None:
    """Test that an HTTP error status raises SonarTransportError with the status code."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"errors": [{"msg": "Unauthorized"}]})

    with pytest.raises(SonarTransportError) as exc_info:
        await make_adapter(handler).search_issues("bu-project", "go", 500, 1)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_create_uses_token_as_basic_auth_user() -> None:
    """Test that token authentication sends the token as the basic auth user."""
    adapter = SonarHttpxAdapter.create(
        sonar_auth_type=SonarAuthenticationType.TOKEN,
        sonar_token="squ_token",
        sonar_url="http://sonar.test",
    )
    try:
        request = adapter.client.build_request("GET", "/api/system/health")
        assert isinstance(adapter.client.auth, httpx.BasicAuth)
        authenticated = next(adapter.client.auth.sync_auth_flow(request))
        expected = base64.b64encode(b"squ_token:").decode()
        assert authenticated.headers["Authorization"] == f"Basic {expected}"
        assert str(adapter.client.base_url) == "http://sonar.test"
    finally:
        await adapter.aclose()


@pytest.mark.asyncio
async def test_create_requires_credentials() -> None:
    """Test that creating a basic-auth adapter without a password fails."""
    with pytest.raises(RuntimeError):
        SonarHttpxAdapter.create(sonar_auth_type=SonarAuthenticationType.BASIC, sonar_user="admin", sonar_url="http://sonar.test")
