"""Models used by the upstream watcher."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from fork_tools.core.models.repository import RepositoryHandle


class WatchState(str, Enum):
    """Watcher lifecycle states."""

    IDLE = "idle"
    CHECKING = "checking"
    STOPPED = "stopped"


class WatchTarget(BaseModel):
    """A repository under watch and the last upstream commit seen for it."""

    model_config = ConfigDict(frozen=True)

    handle: RepositoryHandle
    upstream_url: str | None = None
    last_seen: str | None = None

    @property
    def name(self) -> str:
        return self.handle.name

    @property
    def path(self) -> Path:
        return self.handle.path

    def observed(self, commit_id: str) -> "WatchTarget":
        return self.model_copy(update={"last_seen": commit_id})


class ForkUpdate(BaseModel):
    """Notification event for an upstream that advanced.

    ``ahead_count`` is the number of commits on the upstream reference that
    the local HEAD does not have yet.
    """

    model_config = ConfigDict(frozen=True)

    repository_name: str
    ahead_count: int = Field(gt=0)
    upstream_url: str | None = None
    path: Path | None = None


class CheckOutcome(str, Enum):
    """Result of checking a single watch target."""

    NEW_COMMITS = "new_commits"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class CheckResult(BaseModel):
    """Outcome of one target's check within a poll cycle."""

    model_config = ConfigDict(frozen=True)

    target: WatchTarget
    outcome: CheckOutcome
    update: ForkUpdate | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.outcome is CheckOutcome.FAILED


class CycleResult(BaseModel):
    """All check results of one poll cycle, in target order."""

    model_config = ConfigDict(frozen=True)

    results: list[CheckResult] = Field(default_factory=list)

    @property
    def updates(self) -> list[ForkUpdate]:
        return [result.update for result in self.results if result.update is not None]

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if result.failed)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed_count else 0
