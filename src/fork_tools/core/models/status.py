"""Per-repository status records and report aggregates."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class WorkingCopyState(str, Enum):
    """Coarse state of a working copy, as shown by renderers."""

    CLEAN = "clean"
    DIRTY = "dirty"
    UNKNOWN = "unknown"


class StatusRecord(BaseModel):
    """Sync state of one working copy, computed once per scan.

    ``ahead`` counts commits on HEAD missing from ``reference_ref``;
    ``behind`` counts commits on ``reference_ref`` missing from HEAD.
    Both are ``None`` when the comparison could not be made. ``branch`` is
    ``None`` when unknown and ``"HEAD"`` when detached.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    branch: str | None = None
    head_commit: str | None = None
    dirty: bool | None = None
    ahead: int | None = Field(default=None, ge=0)
    behind: int | None = Field(default=None, ge=0)
    origin_url: str | None = None
    upstream_url: str | None = None
    reference_ref: str | None = None

    @property
    def has_upstream(self) -> bool:
        return bool(self.upstream_url)

    @property
    def needs_update(self) -> bool:
        """True when the reference ref has commits HEAD does not."""
        return self.behind is not None and self.behind > 0

    @property
    def state(self) -> WorkingCopyState:
        if self.dirty is None:
            return WorkingCopyState.UNKNOWN
        return WorkingCopyState.DIRTY if self.dirty else WorkingCopyState.CLEAN


class ReportSummary(BaseModel):
    """Counters derived from a sequence of status records."""

    model_config = ConfigDict(frozen=True)

    total_scanned: int = 0
    forks: int = 0
    dirty: int = 0
    needs_update: int = 0
    has_upstream: int = 0


class Report(BaseModel):
    """Ordered status records plus their summary."""

    model_config = ConfigDict(frozen=True)

    records: list[StatusRecord] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    generated_at: datetime = Field(default_factory=lambda: datetime.now().astimezone())
    version: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.records
