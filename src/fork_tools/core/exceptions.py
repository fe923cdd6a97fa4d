"""Exception hierarchy for fork-tools."""

from typing import Any


class ForkToolsError(Exception):
    """Base exception for all fork-tools errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ForkToolsError):
    """Raised when settings or command-line input are invalid."""


class GitCommandError(ForkToolsError):
    """Raised when a git invocation exits non-zero, times out or cannot start."""

    def __init__(
        self,
        command: list[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"git command failed: {' '.join(command)}",
            details={"returncode": returncode, "stderr": stderr.strip()},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class InvalidRepositoryPathError(ForkToolsError):
    """Raised when a path handed to the core is not a directory."""
