"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless SONAR_INTEGRATION is set."""
    project_root = Path(__file__).parent.parent.parent
    integration_env = project_root / ".env.integration"
    if integration_env.exists():
        load_dotenv(dotenv_path=integration_env)
    if os.getenv("SONAR_INTEGRATION"):
        return
    skip = pytest.mark.skip(reason="set SONAR_INTEGRATION=1 and point SONAR_URL at a running SonarQube server to run")
    for item in items:
        if item.path.is_relative_to(Path(__file__).parent):
            item.add_marker(skip)
