"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from sonar_scan_manager.configuration import reconcile
from sonar_scan_manager.configuration.models import AnalysisConfig


def get_analysis_config(
    debug: bool | None = None,
    sonar_url: str | None = None,
    sonar_token: str | None = None,
    sonar_user: str | None = None,
    sonar_password: str | None = None,
    project_key: str | None = None,
    language: str | None = None,
    page_size: int | None = None,
    function_keyword: str | None = None,
    ready_timeout: float | None = None,
    scanner_properties: dict[str, str] | None = None,
) -> AnalysisConfig:
    """Synchronously get the reconciled analysis configuration."""
    return asyncio.run(
        reconcile.reconcile_analysis_configuration(
            cli_debug=debug,
            cli_sonar_url=sonar_url,
            cli_sonar_token=sonar_token,
            cli_sonar_user=sonar_user,
            cli_sonar_password=sonar_password,
            cli_project_key=project_key,
            cli_language=language,
            cli_page_size=page_size,
            cli_function_keyword=function_keyword,
            cli_ready_timeout=ready_timeout,
            cli_scanner_properties=scanner_properties,
        )
    )
