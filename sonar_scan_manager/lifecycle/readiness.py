"""Waits for the SonarQube server to report a healthy state."""

import asyncio
import time

import structlog

from sonar_scan_manager.sonar.abc import SonarClientBase
from sonar_scan_manager.sonar.exceptions import SonarServerNotReadyError, SonarTransportError
from sonar_scan_manager.utils.constants import DEFAULT_HEALTH_POLL_INTERVAL, HEALTHY_STATUS_TOKEN

logger = structlog.get_logger(__name__)


async def is_server_healthy(sonar_client: SonarClientBase) -> bool:
    """Poll the health API once; transport errors count as unhealthy."""
    try:
        body = await sonar_client.get_health_status()
    except SonarTransportError as exc:
        logger.info("SonarQube health API error", error=str(exc))
        return False
    logger.info("SonarQube health API response", body=body)
    return HEALTHY_STATUS_TOKEN in body


async def wait_until_ready(
    sonar_client: SonarClientBase,
    poll_interval: float = DEFAULT_HEALTH_POLL_INTERVAL,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Block until the SonarQube server reports a healthy state.

    Without a timeout or a cancel event this waits forever.

    Raises:
        SonarServerNotReadyError: If the timeout expires or the cancel event is set first.
    """
    start_time = time.monotonic()
    deadline = None if timeout is None else start_time + timeout
    attempt = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise SonarServerNotReadyError("Waiting for the SonarQube server was cancelled")
        attempt += 1
        if await is_server_healthy(sonar_client):
            logger.info("SonarQube server is ready", attempts=attempt, duration=round(time.monotonic() - start_time, 2))
            return

        wait_time = poll_interval
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.error("SonarQube server did not become ready in time", timeout=timeout, attempts=attempt)
                raise SonarServerNotReadyError(f"SonarQube server did not become ready within {timeout} seconds")
            wait_time = min(wait_time, remaining)
        logger.info("SonarQube server not ready yet, waiting", attempt=attempt, wait_time=wait_time)

        if cancel_event is None:
            await asyncio.sleep(wait_time)
        else:
            try:
                await asyncio.wait_for(cancel_event.wait(), timeout=wait_time)
            except asyncio.TimeoutError:
                pass
