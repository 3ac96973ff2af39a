"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sonar_scan_manager.utils.constants import (
    DEFAULT_FUNCTION_KEYWORD,
    DEFAULT_HEALTH_POLL_INTERVAL,
    DEFAULT_ISSUES_PAGE_SIZE,
    DEFAULT_LANGUAGE,
    DEFAULT_PROJECT_KEY,
    DEFAULT_SONAR_SCANNER_IMAGE,
    DEFAULT_SONAR_SERVER_IMAGE,
    DEFAULT_SONAR_SERVER_PORT,
    DEFAULT_SONAR_URL,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # SonarQube server settings
    SONAR_URL: str = DEFAULT_SONAR_URL
    SONAR_PROJECT_KEY: str = DEFAULT_PROJECT_KEY
    SONAR_LANGUAGE: str = DEFAULT_LANGUAGE
    SONAR_PAGE_SIZE: int = DEFAULT_ISSUES_PAGE_SIZE

    # SonarQube token settings
    SONAR_TOKEN: str | None = None

    # SonarQube user/password settings
    SONAR_USER: str | None = None
    SONAR_PASSWORD: str | None = None

    # Docker images and server lifecycle
    SONAR_SERVER_IMAGE: str = DEFAULT_SONAR_SERVER_IMAGE
    SONAR_SERVER_PORT: int = DEFAULT_SONAR_SERVER_PORT
    SONAR_SCANNER_IMAGE: str = DEFAULT_SONAR_SCANNER_IMAGE
    SONAR_HEALTH_POLL_INTERVAL: float = DEFAULT_HEALTH_POLL_INTERVAL
    SONAR_READY_TIMEOUT: float | None = None

    # Function resolution
    SONAR_FUNCTION_KEYWORD: str = DEFAULT_FUNCTION_KEYWORD
