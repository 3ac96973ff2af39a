"""Orchestrates a SonarQube analysis run: scan, fetch issues and resolve their functions."""

import asyncio
import time
from pathlib import Path

import structlog

from sonar_scan_manager.configuration.models import AnalysisConfig
from sonar_scan_manager.lifecycle.server import start_and_wait_ready
from sonar_scan_manager.resolve.functions import resolve_function
from sonar_scan_manager.scanning.issues import fetch_issues
from sonar_scan_manager.scanning.scanner import run_scan
from sonar_scan_manager.schemas.issues import AnalysisResultModel, SonarIssueModel
from sonar_scan_manager.sonar.abc import SonarClientBase
from sonar_scan_manager.sonar.adapter import SonarHttpxAdapter

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def component_to_path(component: str, project_key: str, source_path: Path) -> Path:
    """Map a SonarQube component key such as ``bu-project:pkg/file.go`` to a path under the source tree."""
    file_name = component.removeprefix(f"{project_key}:")
    return source_path / file_name


def resolve_issues(
    issues: list[SonarIssueModel],
    project_key: str,
    source_path: Path,
    function_keyword: str,
) -> list[SonarIssueModel]:
    """Return copies of the issues carrying their file path and enclosing function.

    The first file that cannot be read aborts the whole batch.
    """
    resolved: list[SonarIssueModel] = []
    for issue in issues:
        path = component_to_path(issue.component, project_key, source_path)
        function = resolve_function(path, issue.line, function_keyword)
        resolved.append(issue.with_resolution(str(path), function))
    return resolved


async def run_analysis_workflow(
    sonar_client: SonarClientBase,
    source_path: Path,
    config: AnalysisConfig,
) -> AnalysisResultModel:
    """Run the analysis workflow: scan the source tree, fetch its issues and resolve their functions.

    Any failure aborts the run; a partially resolved result is never returned.
    """
    source_path = Path(source_path)

    await run_scan(sonar_client, source_path, config)

    start_time = time.time()
    logger.info("Fetching issues", project_key=config.project_key, language=config.language)
    result = await fetch_issues(sonar_client, config.project_key, config.language, config.page_size)
    logger.info("Fetched issues", total=result.total, issue_count=len(result.issues), duration=round(time.time() - start_time, 2))

    issues = resolve_issues(result.issues, config.project_key, source_path, config.function_keyword)
    logger.info("Resolved issue functions", issue_count=len(issues))
    return AnalysisResultModel(total=result.total, issues=issues)


async def analyze(
    source_path: Path,
    config: AnalysisConfig,
    start_server: bool = False,
    ready_timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> AnalysisResultModel:
    """Analyze a source tree with SonarQube and return its issues resolved to functions.

    When ``start_server`` is set, the SonarQube server is launched first and the
    run waits until it is ready.
    """
    sonar_client = SonarHttpxAdapter.create(
        sonar_auth_type=config.sonar_authentication_type,
        sonar_token=config.sonar_token,
        sonar_user=config.sonar_user,
        sonar_password=config.sonar_password,
        sonar_url=config.sonar_url,
    )
    async with sonar_client:
        if start_server:
            await start_and_wait_ready(sonar_client, config, timeout=ready_timeout, cancel_event=cancel_event)
        return await run_analysis_workflow(sonar_client, source_path, config)
