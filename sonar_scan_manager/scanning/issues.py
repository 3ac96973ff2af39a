"""Fetches the issues of a SonarQube project."""

import structlog

from sonar_scan_manager.schemas.issues import AnalysisResultModel, SonarIssueModel
from sonar_scan_manager.sonar.abc import SonarClientBase
from sonar_scan_manager.utils.constants import DEFAULT_ISSUES_PAGE_SIZE, SONAR_MAX_SEARCH_RESULTS

logger = structlog.get_logger(__name__)


async def fetch_issues(
    sonar_client: SonarClientBase,
    project_key: str,
    language: str,
    page_size: int = DEFAULT_ISSUES_PAGE_SIZE,
) -> AnalysisResultModel:
    """Fetch every issue of a project for one language, following pagination.

    Pages are requested until one comes back short or the reported total has
    been collected. SonarQube does not serve results past the 10,000th; any
    issues beyond that are dropped with a warning.

    Raises:
        SonarTransportError: If a page cannot be fetched.
        SonarDecodeError: If a page does not match the expected structure.
    """
    issues: list[SonarIssueModel] = []
    total = 0
    page = 1
    while True:
        search_page = await sonar_client.search_issues(project_key, language, page_size, page)
        total = search_page.total
        issues.extend(search_page.issues)
        logger.info(
            "Fetched page of SonarQube issues",
            project_key=project_key,
            page=page,
            page_issue_count=len(search_page.issues),
            fetched=len(issues),
            total=total,
        )
        if len(search_page.issues) < page_size or len(issues) >= total:
            break
        if (page + 1) * page_size > SONAR_MAX_SEARCH_RESULTS:
            logger.warning(
                "SonarQube search result limit reached, remaining issues are not fetched",
                project_key=project_key,
                fetched=len(issues),
                total=total,
                dropped=total - len(issues),
            )
            break
        page += 1
    return AnalysisResultModel(total=total, issues=issues)
