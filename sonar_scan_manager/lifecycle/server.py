"""Launches the SonarQube server and waits for it to become ready."""

import asyncio

import structlog

from sonar_scan_manager.configuration.models import AnalysisConfig
from sonar_scan_manager.lifecycle.readiness import wait_until_ready
from sonar_scan_manager.sonar.abc import SonarClientBase
from sonar_scan_manager.utils.constants import DEFAULT_SONAR_SERVER_IMAGE, DEFAULT_SONAR_SERVER_PORT

logger = structlog.get_logger(__name__)

# Watcher tasks are referenced here so they are not garbage collected while running.
_server_watchers: set[asyncio.Task[None]] = set()


def build_server_command(image: str = DEFAULT_SONAR_SERVER_IMAGE, port: int = DEFAULT_SONAR_SERVER_PORT) -> list[str]:
    """Build the docker command that runs the SonarQube server."""
    return ["docker", "run", "--rm", f"-p={port}:{port}", image]


async def _log_server_exit(process: asyncio.subprocess.Process) -> None:
    returncode = await process.wait()
    if returncode != 0:
        logger.error("SonarQube server exited with an error", returncode=returncode, pid=process.pid)
    else:
        logger.info("SonarQube server exited", pid=process.pid)


async def launch_sonar_server(
    image: str = DEFAULT_SONAR_SERVER_IMAGE,
    port: int = DEFAULT_SONAR_SERVER_PORT,
) -> asyncio.subprocess.Process:
    """Start the SonarQube server container in the background.

    The server's output goes straight to this process's stdout and stderr. The
    server keeps running after this returns; it is never stopped here.
    """
    command = build_server_command(image, port)
    logger.info("Launching SonarQube server", image=image, port=port, command=" ".join(command))
    process = await asyncio.create_subprocess_exec(*command)
    watcher = asyncio.create_task(_log_server_exit(process))
    _server_watchers.add(watcher)
    watcher.add_done_callback(_server_watchers.discard)
    return process


async def start_and_wait_ready(
    sonar_client: SonarClientBase,
    config: AnalysisConfig,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> asyncio.subprocess.Process:
    """Launch the SonarQube server and block until its health API reports GREEN.

    Raises:
        SonarServerNotReadyError: If the timeout expires or the cancel event is set first.
    """
    process = await launch_sonar_server(config.server_image, config.server_port)
    await wait_until_ready(
        sonar_client,
        poll_interval=config.health_poll_interval,
        timeout=timeout if timeout is not None else config.ready_timeout,
        cancel_event=cancel_event,
    )
    return process
