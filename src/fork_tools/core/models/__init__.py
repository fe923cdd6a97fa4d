"""Domain models for fork-tools."""

from fork_tools.core.models.repository import (
    DiscoveredRepository,
    RemoteSet,
    RepositoryHandle,
)
from fork_tools.core.models.status import (
    Report,
    ReportSummary,
    StatusRecord,
    WorkingCopyState,
)
from fork_tools.core.models.watch import (
    CheckOutcome,
    CheckResult,
    CycleResult,
    ForkUpdate,
    WatchState,
    WatchTarget,
)

__all__ = [
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
]
