"""Resets the SonarQube project so every scan starts from a clean slate."""

import structlog

from sonar_scan_manager.sonar.abc import SonarClientBase

logger = structlog.get_logger(__name__)


async def reset_project(sonar_client: SonarClientBase, project_key: str) -> None:
    """Delete the project and its previous analyses from the server.

    A project that does not exist yet is not an error; the call succeeds as
    long as the server answers.

    Raises:
        SonarTransportError: If the delete request cannot be sent.
    """
    logger.info("Deleting SonarQube project before scanning", project_key=project_key)
    await sonar_client.delete_project(project_key)
