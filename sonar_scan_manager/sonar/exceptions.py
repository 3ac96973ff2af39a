"""Contains exceptions raised when talking to the SonarQube server."""


class SonarScanManagerError(Exception):
    """Base class for errors raised by the SonarQube scan manager."""

    pass


class SonarTransportError(SonarScanManagerError):
    """Raised when the SonarQube server cannot be reached or answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with an optional HTTP status code."""
        super().__init__(message)
        self.status_code = status_code


class SonarDecodeError(SonarScanManagerError):
    """Raised when a SonarQube API response does not match the expected structure."""

    pass


class SonarServerNotReadyError(SonarScanManagerError):
    """Raised when the SonarQube server did not become ready before the deadline or the wait was cancelled."""

    pass
