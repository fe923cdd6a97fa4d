"""Core domain models and exceptions for fork-tools."""

from fork_tools.core.exceptions import (
    ConfigurationError,
    ForkToolsError,
    GitCommandError,
    InvalidRepositoryPathError,
)
from fork_tools.core.models import (
    CheckOutcome,
    CheckResult,
    CycleResult,
    DiscoveredRepository,
    ForkUpdate,
    RemoteSet,
    Report,
    ReportSummary,
    RepositoryHandle,
    StatusRecord,
    WatchState,
    WatchTarget,
    WorkingCopyState,
)

__all__ = [
    # Models
    "RepositoryHandle",
    "RemoteSet",
    "DiscoveredRepository",
    "StatusRecord",
    "WorkingCopyState",
    "ReportSummary",
    "Report",
    "WatchState",
    "WatchTarget",
    "ForkUpdate",
    "CheckOutcome",
    "CheckResult",
    "CycleResult",
    # Exceptions
    "ForkToolsError",
    "ConfigurationError",
    "GitCommandError",
    "InvalidRepositoryPathError",
]
