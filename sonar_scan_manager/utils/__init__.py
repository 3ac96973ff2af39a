"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_FUNCTION_KEYWORD,
    DEFAULT_ISSUES_PAGE_SIZE,
    DEFAULT_PROJECT_KEY,
    DEFAULT_SONAR_URL,
    GLOBAL_FUNCTION_SENTINEL,
)

__all__ = [
    "DEFAULT_SONAR_URL",
    "DEFAULT_PROJECT_KEY",
    "DEFAULT_ISSUES_PAGE_SIZE",
    "DEFAULT_FUNCTION_KEYWORD",
    "GLOBAL_FUNCTION_SENTINEL",
]
