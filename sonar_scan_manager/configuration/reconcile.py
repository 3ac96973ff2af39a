"""Reconcile SonarQube configuration between CLI arguments and environment variables."""

from typing import TypeVar

from sonar_scan_manager.configuration.env import Settings
from sonar_scan_manager.configuration.exceptions import (
    RequiredConfigurationElementError,
    SonarAuthenticationConfigurationUndefinedError,
)
from sonar_scan_manager.configuration.models import AnalysisConfig, SonarAuthenticationType

T = TypeVar("T")


async def validate_sonar_authentication_configuration(
    sonar_token: str | None,
    sonar_user: str | None,
    sonar_password: str | None,
) -> SonarAuthenticationType:
    """Validates the SonarQube authentication configuration.

    Args:
        sonar_token (str | None): The SonarQube user token.
        sonar_user (str | None): The SonarQube user name.
        sonar_password (str | None): The SonarQube user password.

    Raises:
        SonarAuthenticationConfigurationUndefinedError: If both token and user/password
            configurations are defined, if the user/password configuration is
            incomplete, or if neither is defined.

    Returns:
        SonarAuthenticationType: The type of SonarQube authentication used.
    """
    if sonar_token and (sonar_user or sonar_password):
        raise SonarAuthenticationConfigurationUndefinedError(
            "Both token and user/password configurations are defined. Please use one or the other."
        )

    if sonar_token:
        return SonarAuthenticationType.TOKEN

    if sonar_user and sonar_password:
        return SonarAuthenticationType.BASIC
    elif sonar_user or sonar_password:
        missing_settings: list[dict[str, str]] = []
        if not sonar_user:
            missing_settings.append({"name": "SonarQube user", "cli_name": "sonar_user", "env_name": "SONAR_USER"})
        if not sonar_password:
            missing_settings.append({"name": "SonarQube password", "cli_name": "sonar_password", "env_name": "SONAR_PASSWORD"})
        msg = "Incomplete SonarQube user/password configuration - missing settings include " + ", ".join(
            f"{setting['name']} (command line option {setting['cli_name']}, environment variable {setting['env_name']})"
            for setting in missing_settings
        )
        raise SonarAuthenticationConfigurationUndefinedError(msg)
    else:
        raise SonarAuthenticationConfigurationUndefinedError(
            "No SonarQube authentication configuration provided. Please provide either a token or a user and password."
        )


def _prefer_cli(cli_value: T | None, env_value: T) -> T:
    """Return the CLI value when one was given, otherwise the environment value."""
    return env_value if cli_value is None else cli_value


async def reconcile_analysis_configuration(
    cli_debug: bool | None = None,
    cli_sonar_url: str | None = None,
    cli_sonar_token: str | None = None,
    cli_sonar_user: str | None = None,
    cli_sonar_password: str | None = None,
    cli_project_key: str | None = None,
    cli_language: str | None = None,
    cli_page_size: int | None = None,
    cli_function_keyword: str | None = None,
    cli_ready_timeout: float | None = None,
    cli_scanner_properties: dict[str, str] | None = None,
    env_settings: Settings | None = None,
) -> AnalysisConfig:
    """Reconciles CLI arguments with environment settings into an analysis configuration.

    Values passed on the command line take precedence over values read from the
    environment (or the .env file).
    """
    env = env_settings if env_settings is not None else Settings()

    sonar_url = _prefer_cli(cli_sonar_url, env.SONAR_URL)
    if not sonar_url:
        raise RequiredConfigurationElementError(name="SonarQube URL", cli_name="sonar_url", env_name="SONAR_URL")

    project_key = _prefer_cli(cli_project_key, env.SONAR_PROJECT_KEY)
    if not project_key:
        raise RequiredConfigurationElementError(name="SonarQube project key", cli_name="project_key", env_name="SONAR_PROJECT_KEY")

    sonar_token = _prefer_cli(cli_sonar_token, env.SONAR_TOKEN)
    sonar_user = _prefer_cli(cli_sonar_user, env.SONAR_USER)
    sonar_password = _prefer_cli(cli_sonar_password, env.SONAR_PASSWORD)
    auth_type = await validate_sonar_authentication_configuration(
        sonar_token=sonar_token,
        sonar_user=sonar_user,
        sonar_password=sonar_password,
    )

    page_size = _prefer_cli(cli_page_size, env.SONAR_PAGE_SIZE)
    if page_size <= 0:
        raise ValueError(f"Issue search page size must be positive, got {page_size}")

    return AnalysisConfig(
        sonar_authentication_type=auth_type,
        sonar_token=sonar_token,
        sonar_user=sonar_user,
        sonar_password=sonar_password,
        sonar_url=sonar_url.rstrip("/"),
        project_key=project_key,
        language=_prefer_cli(cli_language, env.SONAR_LANGUAGE),
        page_size=page_size,
        function_keyword=_prefer_cli(cli_function_keyword, env.SONAR_FUNCTION_KEYWORD),
        server_image=env.SONAR_SERVER_IMAGE,
        server_port=env.SONAR_SERVER_PORT,
        scanner_image=env.SONAR_SCANNER_IMAGE,
        health_poll_interval=env.SONAR_HEALTH_POLL_INTERVAL,
        ready_timeout=_prefer_cli(cli_ready_timeout, env.SONAR_READY_TIMEOUT),
        scanner_properties=dict(cli_scanner_properties or {}),
        debug=_prefer_cli(cli_debug, env.DEBUG),
    )
