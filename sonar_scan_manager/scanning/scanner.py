"""Runs the SonarQube scanner against a source tree."""

import asyncio
import time
from pathlib import Path

import structlog

from sonar_scan_manager.configuration.models import AnalysisConfig, SonarAuthenticationType
from sonar_scan_manager.scanning.exceptions import ScannerSubprocessError
from sonar_scan_manager.scanning.project import reset_project
from sonar_scan_manager.sonar.abc import SonarClientBase
from sonar_scan_manager.utils.constants import DEFAULT_SONAR_SCANNER_IMAGE, DEFAULT_SONAR_URL, SCANNER_SOURCE_MOUNT

logger = structlog.get_logger(__name__)


def build_scanner_command(
    source_path: Path,
    project_key: str,
    scanner_image: str = DEFAULT_SONAR_SCANNER_IMAGE,
    sonar_url: str = DEFAULT_SONAR_URL,
    sonar_token: str | None = None,
    extra_properties: dict[str, str] | None = None,
) -> list[str]:
    """Build the docker command that scans a source tree into a SonarQube project.

    The source tree is bind-mounted into the scanner container, so the path
    must be absolute. The container shares the host network in order to reach
    a server published on localhost.
    """
    command = [
        "docker",
        "run",
        "--rm",
        f"-v={source_path}:{SCANNER_SOURCE_MOUNT}",
        "--network=host",
        scanner_image,
        "-D",
        f"sonar.projectKey={project_key}",
    ]
    if sonar_url.rstrip("/") != DEFAULT_SONAR_URL:
        command += ["-D", f"sonar.host.url={sonar_url}"]
    if sonar_token:
        command += ["-D", f"sonar.login={sonar_token}"]
    for name, value in (extra_properties or {}).items():
        command += ["-D", f"{name}={value}"]
    return command


async def run_scan(sonar_client: SonarClientBase, source_path: Path, config: AnalysisConfig) -> None:
    """Reset the project and scan the source tree, waiting for the scanner to exit.

    The scanner's output goes straight to this process's stdout and stderr.

    Raises:
        NotADirectoryError: If the source path is not a directory.
        SonarTransportError: If the project cannot be reset.
        ScannerSubprocessError: If the scanner cannot be started or exits with a non-zero code.
    """
    source_path = Path(source_path).resolve()
    if not source_path.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {source_path}")

    # Delete the project before running a new scan.
    await reset_project(sonar_client, config.project_key)

    command = build_scanner_command(
        source_path=source_path,
        project_key=config.project_key,
        scanner_image=config.scanner_image,
        sonar_url=config.sonar_url,
        sonar_token=config.sonar_token if config.sonar_authentication_type == SonarAuthenticationType.TOKEN else None,
        extra_properties=config.scanner_properties,
    )
    start_time = time.time()
    logger.info("Running SonarQube scanner", source_path=str(source_path), project_key=config.project_key, image=config.scanner_image)
    try:
        process = await asyncio.create_subprocess_exec(*command)
    except OSError as exc:
        logger.error("SonarQube scanner could not be started", error=str(exc), image=config.scanner_image)
        raise ScannerSubprocessError(None, command, reason=str(exc)) from exc
    returncode = await process.wait()
    duration = round(time.time() - start_time, 2)
    if returncode != 0:
        logger.error("SonarQube scanner failed", returncode=returncode, duration=duration)
        raise ScannerSubprocessError(returncode, command)
    logger.info("SonarQube scanner finished", duration=duration)
