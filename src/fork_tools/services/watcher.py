"""Polling watcher that reports new upstream commits."""

import threading
from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from fork_tools.core.models.repository import RepositoryHandle
from fork_tools.core.models.watch import (
    CheckOutcome,
    CheckResult,
    CycleResult,
    ForkUpdate,
    WatchState,
    WatchTarget,
)
from fork_tools.git.discovery import DiscoveryWalker
from fork_tools.git.oracle import GitStatusOracle
from fork_tools.notify.base import Notifier

logger = structlog.get_logger(__name__)


class ForkWatcher:
    """Polls a fixed set of repositories for upstream advances.

    Each cycle fetches every target's reference remote and compares the
    remote commit to the one seen on the previous cycle. When it moved and
    HEAD is missing commits from it, one :class:`ForkUpdate` is sent to
    every notifier. Targets are checked one at a time; a failing target
    or notifier never stops the rest of the cycle. A target whose remote
    cannot be fetched counts as failed, not as unchanged.
    """

    def __init__(
        self,
        targets: Iterable[WatchTarget],
        oracle: GitStatusOracle,
        notifiers: Sequence[Notifier] = (),
    ) -> None:
        self._targets = list(targets)
        self._oracle = oracle
        self._notifiers = list(notifiers)
        self._state = WatchState.IDLE
        self._stop = threading.Event()

    @classmethod
    def from_discovery(
        cls,
        walker: DiscoveryWalker,
        oracle: GitStatusOracle,
        notifiers: Sequence[Notifier] = (),
    ) -> "ForkWatcher":
        """Build the target set once from a discovery pass."""
        targets = [
            WatchTarget(handle=found.handle, upstream_url=found.remotes.tracked_url)
            for found in walker.discover()
        ]
        logger.info("watch targets discovered", scanned=walker.scanned, targets=len(targets))
        return cls(targets, oracle, notifiers)

    @classmethod
    def from_paths(
        cls,
        paths: Iterable[Path | str],
        oracle: GitStatusOracle,
        notifiers: Sequence[Notifier] = (),
    ) -> "ForkWatcher":
        """Build targets for explicitly configured repository paths.

        Raises InvalidRepositoryPathError for any path that is not a
        directory, before git is run anywhere.
        """
        handles = [RepositoryHandle.from_path(path) for path in paths]
        targets = [
            WatchTarget(handle=handle, upstream_url=oracle.get_remotes(handle.path).tracked_url)
            for handle in handles
        ]
        return cls(targets, oracle, notifiers)

    @property
    def targets(self) -> list[WatchTarget]:
        return list(self._targets)

    @property
    def state(self) -> WatchState:
        return self._state

    def stop(self) -> None:
        """Ask the loop to stop before the next cycle."""
        self._stop.set()

    def run(self, interval: float | None = None) -> CycleResult:
        """Poll until stopped, or run one cycle when ``interval`` is None.

        The first cycle starts immediately. Returns the last completed cycle.
        """
        last = CycleResult()
        try:
            while not self._stop.is_set():
                last = self.run_cycle()
                if interval is None or self._stop.wait(interval):
                    break
        finally:
            self._state = WatchState.STOPPED
        return last

    def run_cycle(self) -> CycleResult:
        """Check every target once, in order."""
        self._state = WatchState.CHECKING
        results = []
        try:
            for index, target in enumerate(self._targets):
                result = self._check_isolated(target)
                self._targets[index] = result.target
                if result.update is not None:
                    self._deliver(result.update)
                results.append(result)
        finally:
            self._state = WatchState.IDLE
        return CycleResult(results=results)

    def _check_isolated(self, target: WatchTarget) -> CheckResult:
        try:
            return self.check_target(target)
        except Exception as e:
            logger.exception("check failed", repository=target.name, path=str(target.path))
            return CheckResult(target=target, outcome=CheckOutcome.FAILED, error=str(e))

    def check_target(self, target: WatchTarget) -> CheckResult:
        """Check one target and return its result with the updated target."""
        path = target.path
        if not path.is_dir():
            return self._failed(target, "repository not found")

        remotes = self._oracle.get_remotes(path)
        remote = remotes.reference_remote
        if remote is None:
            return self._failed(target, "no upstream or origin reference branch")

        # Fetched regardless of the oracle's fetch setting
        if not self._oracle.refresh(path, remote):
            return self._failed(target, f"cannot fetch {remote}")

        reference = self._oracle.get_default_branch(path, remote)
        if reference is None:
            return self._failed(target, f"no default branch for {remote}")

        remote_id = self._oracle.resolve_ref(path, reference)
        if remote_id is None:
            return self._failed(target, f"cannot resolve {reference}")

        observed = target.observed(remote_id)
        if remote_id == target.last_seen:
            return CheckResult(target=observed, outcome=CheckOutcome.UNCHANGED)

        new_commits = self._oracle.count_commits(path, f"HEAD..{reference}")
        if not new_commits:
            return CheckResult(target=observed, outcome=CheckOutcome.UNCHANGED)

        update = ForkUpdate(
            repository_name=target.name,
            ahead_count=new_commits,
            upstream_url=target.upstream_url or remotes.tracked_url,
            path=path,
        )
        logger.info(
            "new upstream commits",
            repository=target.name,
            reference=reference,
            commits=new_commits,
        )
        return CheckResult(target=observed, outcome=CheckOutcome.NEW_COMMITS, update=update)

    def _failed(self, target: WatchTarget, reason: str) -> CheckResult:
        logger.warning("cannot check repository", repository=target.name, reason=reason)
        return CheckResult(target=target, outcome=CheckOutcome.FAILED, error=reason)

    def _deliver(self, update: ForkUpdate) -> None:
        for notifier in self._notifiers:
            try:
                notifier.notify(update)
            except Exception:
                logger.warning(
                    "notification delivery failed",
                    repository=update.repository_name,
                    notifier=type(notifier).__name__,
                    exc_info=True,
                )
