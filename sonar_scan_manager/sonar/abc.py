"""Base ABC for SonarQube clients."""

from abc import ABC, abstractmethod
from typing import Any

from sonar_scan_manager.schemas.issues import IssueSearchPageModel


class SonarClientBase(ABC):
    """Base ABC for SonarQube clients."""

    # Server health
    @abstractmethod
    async def get_health_status(self) -> str:
        """Get the raw body of the server health API."""
        pass

    # Project CRUD
    @abstractmethod
    async def delete_project(self, project_key: str) -> Any:
        """Delete a project, whether or not it exists."""
        pass

    # Issue search
    @abstractmethod
    async def search_issues(self, project_key: str, language: str, page_size: int, page: int) -> IssueSearchPageModel:
        """Search one page of issues for a project."""
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying transport."""
        pass
