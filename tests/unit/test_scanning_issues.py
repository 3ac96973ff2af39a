"""Unit tests for fetching SonarQube issues across result pages."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sonar_scan_manager.scanning.issues import fetch_issues
from sonar_scan_manager.schemas.issues import IssueSearchPageModel, SonarIssueModel
from sonar_scan_manager.sonar.exceptions import SonarDecodeError


def make_page(total: int, start: int, count: int) -> IssueSearchPageModel:
    """Build a search page holding issues numbered from start."""
    issues = [SonarIssueModel(component=f"bu-project:file{i}.go", line=i, rule="go:S100") for i in range(start, start + count)]
    return IssueSearchPageModel(total=total, issues=issues)


@pytest.mark.asyncio
async def test_fetch_issues_single_short_page() -> None:
    """Test that a short first page ends the fetch."""
    client = MagicMock()
    client.search_issues = AsyncMock(return_value=make_page(total=2, start=0, count=2))

    result = await fetch_issues(client, "bu-project", "go", page_size=500)

    assert result.total == 2
    assert [issue.line for issue in result.issues] == [0, 1]
    client.search_issues.assert_awaited_once_with("bu-project", "go", 500, 1)


@pytest.mark.asyncio
async def test_fetch_issues_accumulates_pages_in_order() -> None:
    """Test that two full pages and a short page are accumulated in order."""
    client = MagicMock()
    client.search_issues = AsyncMock(
        side_effect=[
            make_page(total=5, start=0, count=2),
            make_page(total=5, start=2, count=2),
            make_page(total=5, start=4, count=1),
        ]
    )

    result = await fetch_issues(client, "bu-project", "go", page_size=2)

    assert result.total == 5
    assert [issue.line for issue in result.issues] == [0, 1, 2, 3, 4]
    assert [call.args[3] for call in client.search_issues.await_args_list] == [1, 2, 3]


@pytest.mark.asyncio
async def test_fetch_issues_stops_when_total_reached() -> None:
    """Test that no extra page is requested once the reported total is collected."""
    client = MagicMock()
    client.search_issues = AsyncMock(side_effect=[make_page(total=4, start=0, count=2), make_page(total=4, start=2, count=2)])

    result = await fetch_issues(client, "bu-project", "go", page_size=2)

    assert len(result.issues) == 4
    assert client.search_issues.await_count == 2


@pytest.mark.asyncio
async def test_fetch_issues_stops_at_search_result_limit() -> None:
    """Test that paging stops at the server's 10,000 result limit."""
    client = MagicMock()
    client.search_issues = AsyncMock(
        side_effect=[make_page(total=12000, start=page * 500, count=500) for page in range(25)],
    )

    result = await fetch_issues(client, "bu-project", "go", page_size=500)

    assert client.search_issues.await_count == 20
    assert len(result.issues) == 10000
    assert result.total == 12000


@pytest.mark.asyncio
async def test_fetch_issues_propagates_decode_error() -> None:
    """Test that a decode failure on any page fails the whole fetch."""
    client = MagicMock()
    client.search_issues = AsyncMock(side_effect=[make_page(total=4, start=0, count=2), SonarDecodeError("bad page")])

    with pytest.raises(SonarDecodeError):
        await fetch_issues(client, "bu-project", "go", page_size=2)
