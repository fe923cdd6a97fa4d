"""Services for fork-tools."""

from fork_tools.services.aggregator import aggregate
from fork_tools.services.report import ReportService
from fork_tools.services.watcher import ForkWatcher

__all__ = [
    "ForkWatcher",
    "ReportService",
    "aggregate",
]
