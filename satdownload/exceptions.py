"""
Defines custom exceptions for the application to allow for more specific error handling.

Each exception carries the process exit status the CLI reports when it ends a run.
"""

from enum import IntEnum


class ExitStatus(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1
    UNKNOWN_OPTION = 1
    INVALID_FILE_NUM = 2
    COUNTER_READ_ERROR = 3
    INVALID_DATE = 4
    CONFIG_ERROR = 5


class SatDownloadError(Exception):
    """Base exception for all application-specific errors."""

    exit_status = ExitStatus.FAILURE


class ConfigurationError(SatDownloadError):
    """Raised for issues related to configuration loading or validation."""

    exit_status = ExitStatus.CONFIG_ERROR


class InvalidFileNumberError(SatDownloadError):
    """Raised when the starting file number is negative or not a number."""

    exit_status = ExitStatus.INVALID_FILE_NUM


class InvalidDateError(SatDownloadError):
    """Raised when the reference date cannot be parsed."""

    exit_status = ExitStatus.INVALID_DATE


class CounterReadError(SatDownloadError):
    """Raised when an existing counter file cannot be read or parsed."""

    exit_status = ExitStatus.COUNTER_READ_ERROR


class CounterWriteError(SatDownloadError):
    """Raised when progress cannot be written to the counter file."""


class LinkResolutionError(SatDownloadError):
    """
    Raised when the API refuses to issue a download link.

    This is how the server reports that a file does not exist, which also
    marks the end of a consecutive sequence.
    """

    def __init__(self, file_name: str, status: int, reason: str = ""):
        self.file_name = file_name
        self.status = status
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Download link for '{file_name}' was refused with status {status}{detail}."
        )


class DownloadRefusedError(SatDownloadError):
    """Raised when the file host answers a download link with a non-200 status."""

    def __init__(self, remote_file_path: str, status: int):
        self.remote_file_path = remote_file_path
        self.status = status
        super().__init__(
            f"Download of '{remote_file_path}' failed with status code {status}."
        )


class RequestTimeoutError(SatDownloadError):
    """Raised when a request is aborted after its timeout elapses."""


class TransportError(SatDownloadError):
    """Raised when the connection to the server fails below the HTTP layer."""


class LocalStorageError(SatDownloadError):
    """Raised when a downloaded file cannot be written to the local directory."""
