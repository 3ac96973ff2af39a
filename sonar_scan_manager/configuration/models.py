"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from enum import Enum

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


class SonarAuthenticationType(str, Enum):
    """Enum for SonarQube authentication types."""

    TOKEN = "token"
    BASIC = "basic"


@dataclass
class AnalysisConfig:
    """Configuration class for a SonarQube analysis run."""

    sonar_authentication_type: SonarAuthenticationType
    sonar_token: str | None = None
    sonar_user: str | None = None
    sonar_password: str | None = None
    sonar_url: str = DEFAULT_SONAR_URL
    project_key: str = DEFAULT_PROJECT_KEY
    language: str = DEFAULT_LANGUAGE
    page_size: int = DEFAULT_ISSUES_PAGE_SIZE
    function_keyword: str = DEFAULT_FUNCTION_KEYWORD
    server_image: str = DEFAULT_SONAR_SERVER_IMAGE
    server_port: int = DEFAULT_SONAR_SERVER_PORT
    scanner_image: str = DEFAULT_SONAR_SCANNER_IMAGE
    health_poll_interval: float = DEFAULT_HEALTH_POLL_INTERVAL
    ready_timeout: float | None = None
    scanner_properties: dict[str, str] = field(default_factory=dict)
    debug: bool = False
