"""releasegit exception hierarchy."""

from typing import Any


class ReleaseGitError(Exception):
    """Base exception for all releasegit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(ReleaseGitError):
    """Error in releasegit configuration."""

    pass


class GitError(ReleaseGitError):
    """Error in git operations.

    Keeps the failed command line along with its exit code and captured
    output so callers can report the underlying stderr.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
