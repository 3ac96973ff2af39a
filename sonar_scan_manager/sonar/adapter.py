"""SonarQube client adapter for the httpx library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from sonar_scan_manager.configuration.models import SonarAuthenticationType
from sonar_scan_manager.schemas.issues import IssueSearchPageModel
from sonar_scan_manager.utils.constants import (
    DELETE_PROJECT_API_PATH,
    HEALTH_API_PATH,
    SEARCH_ISSUES_API_PATH,
)

from .abc import SonarClientBase
from .client import get_sonar_client
from .exceptions import SonarDecodeError, SonarTransportError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_transport_errors(func: F) -> F:
    """Decorator to translate httpx transport failures into SonarTransportError, logging details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(
                "SonarQube API request failed",
                function=func.__name__,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise SonarTransportError(f"SonarQube API error in {func.__name__}, reason: {exc}") from exc

    return wrapper  # type: ignore


class SonarHttpxAdapter(SonarClientBase):
    """SonarQube client adapter for the httpx library."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the SonarQube client adapter with an already-initialized client."""
        self.client = client

    @classmethod
    def create(
        cls,
        sonar_auth_type: SonarAuthenticationType,
        sonar_token: str | None = None,
        sonar_user: str | None = None,
        sonar_password: str | None = None,
        sonar_url: str = "http://localhost:9000",
    ) -> Self:
        """Create a new SonarQube client adapter.

        Args:
            sonar_auth_type: Type of authentication (TOKEN or BASIC)
            sonar_token: User token (required for TOKEN auth)
            sonar_user: User name (required for BASIC auth)
            sonar_password: User password (required for BASIC auth)
            sonar_url: SonarQube server URL (defaults to http://localhost:9000)

        Returns:
            Configured SonarHttpxAdapter instance
        """
        logger.info("Creating client for SonarQube server", sonar_url=sonar_url, auth_type=sonar_auth_type.value)
        client = get_sonar_client(
            sonar_auth_type=sonar_auth_type,
            sonar_token=sonar_token,
            sonar_user=sonar_user,
            sonar_password=sonar_password,
            sonar_url=sonar_url,
        )
        return cls(client)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self.client.aclose()

    # Server health
    @handle_transport_errors
    async def get_health_status(self) -> str:
        """Get the raw body of the server health API."""
        response = await self.client.get(HEALTH_API_PATH)
        return response.text

    # Project CRUD
    @handle_transport_errors
    async def delete_project(self, project_key: str) -> httpx.Response:
        """Delete a project.

        The server answers 404 when the project does not exist; any completed
        response is returned to the caller unchecked.
        """
        response = await self.client.post(DELETE_PROJECT_API_PATH, params={"project": project_key})
        logger.info(
            "SonarQube delete project API response",
            project_key=project_key,
            status_code=response.status_code,
            body=response.text,
        )
        return response

    # Issue search
    @handle_transport_errors
    async def search_issues(self, project_key: str, language: str, page_size: int, page: int) -> IssueSearchPageModel:
        """Search one page of issues for a project, restricted to one language."""
        response = await self.client.post(
            SEARCH_ISSUES_API_PATH,
            params={
                "componentKeys": project_key,
                "languages": language,
                "ps": page_size,
                "p": page,
            },
        )
        if response.is_error:
            raise SonarTransportError(
                f"SonarQube search issues API returned status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return IssueSearchPageModel.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Failed to decode SonarQube search issues response", page=page, error=str(exc))
            raise SonarDecodeError(f"failed to decode API response, reason: {exc}") from exc
