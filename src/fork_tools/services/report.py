"""Report service: discovery, status checks and aggregation."""

import concurrent.futures

import structlog

from fork_tools import __version__
from fork_tools.core.models.repository import DiscoveredRepository
from fork_tools.core.models.status import Report, StatusRecord
from fork_tools.git.discovery import DiscoveryWalker
from fork_tools.git.oracle import GitStatusOracle
from fork_tools.services.aggregator import aggregate

logger = structlog.get_logger(__name__)


class ReportService:
    """Builds a fork status report for everything the walker accepts."""

    def __init__(
        self,
        walker: DiscoveryWalker,
        oracle: GitStatusOracle,
        max_workers: int = 1,
    ) -> None:
        self._walker = walker
        self._oracle = oracle
        self._max_workers = max_workers

    def build_report(self) -> Report:
        """Scan, check and summarise.

        Records keep discovery order even when checks run in parallel.
        """
        candidates = list(self._walker.discover())
        logger.info(
            "discovery finished",
            scanned=self._walker.scanned,
            forks=len(candidates),
        )

        records = self.collect_statuses(candidates)
        summary = aggregate(records, total_scanned=self._walker.scanned)
        return Report(records=records, summary=summary, version=__version__)

    def collect_statuses(self, candidates: list[DiscoveredRepository]) -> list[StatusRecord]:
        if self._max_workers <= 1 or len(candidates) <= 1:
            return [self._check(candidate) for candidate in candidates]
        with concurrent.futures.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(executor.map(self._check, candidates))

    def _check(self, candidate: DiscoveredRepository) -> StatusRecord:
        return self._oracle.get_status(candidate.handle, candidate.remotes)
