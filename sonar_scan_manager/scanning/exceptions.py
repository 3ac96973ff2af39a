"""Custom exceptions for the scanning module."""

from sonar_scan_manager.sonar.exceptions import SonarScanManagerError

SECRET_SCANNER_PROPERTIES = ("sonar.login=", "sonar.password=", "sonar.token=")


def redact_scanner_command(command: list[str]) -> str:
    """Join a scanner command for display, masking credential property values."""
    redacted = []
    for argument in command:
        for prefix in SECRET_SCANNER_PROPERTIES:
            if argument.startswith(prefix):
                argument = f"{prefix}***"
                break
        redacted.append(argument)
    return " ".join(redacted)


class ScannerSubprocessError(SonarScanManagerError):
    """Raised when the scanner subprocess cannot be started or exits with a non-zero code.

    ``returncode`` is None when the process could not be started at all. The
    message never contains credential values; the full command is kept on
    ``command``.
    """

    def __init__(self, returncode: int | None, command: list[str], reason: str | None = None) -> None:
        if returncode is None:
            message = f"sonar run scanner error, reason: {reason}: {redact_scanner_command(command)}"
        else:
            message = f"SonarQube scanner exited with code {returncode}: {redact_scanner_command(command)}"
        super().__init__(message)
        self.returncode = returncode
        self.command = command
        self.reason = reason
