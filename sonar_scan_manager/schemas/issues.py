"""Pydantic schemas for SonarQube issues and analysis results."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class SonarIssueModel(BaseModel):
    """Pydantic model for a single SonarQube issue.

    The first eight fields are populated from the issue search API. The
    ``file_path`` and ``function`` fields are populated locally once the issue
    has been resolved against the scanned source tree.
    """

    model_config = ConfigDict(frozen=True)

    component: str
    line: int = 0
    severity: str | None = None
    rule: str
    type: str | None = None
    message: str | None = None
    effort: str | None = None
    debt: str | None = None

    # Resolved locally
    file_path: str | None = None
    function: str | None = None

    @property
    def is_resolved(self) -> bool:
        """Whether the issue carries its resolved file path and function name."""
        return self.file_path is not None and self.function is not None

    def with_resolution(self, file_path: str, function: str) -> Self:
        """Return a copy of the issue carrying both resolved fields."""
        return self.model_copy(update={"file_path": file_path, "function": function})


class PagingModel(BaseModel):
    """Pydantic model for the paging block of a SonarQube search response."""

    page_index: int = Field(alias="pageIndex")
    page_size: int = Field(alias="pageSize")
    total: int


class IssueSearchPageModel(BaseModel):
    """Pydantic model for one page of the issue search API response."""

    total: int
    issues: list[SonarIssueModel]
    paging: PagingModel | None = None


class AnalysisResultModel(BaseModel):
    """Pydantic model for the result of one analysis run."""

    model_config = ConfigDict(frozen=True)

    total: int
    issues: list[SonarIssueModel] = Field(default_factory=list)
