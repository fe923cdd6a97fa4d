"""Summary counters over status records."""

from collections.abc import Sequence

from fork_tools.core.models.status import ReportSummary, StatusRecord


def aggregate(records: Sequence[StatusRecord], total_scanned: int | None = None) -> ReportSummary:
    """Compute the summary of ``records`` in a single pass.

    ``total_scanned`` is the number of working copies inspected before
    fork classification; it defaults to the number of records.
    """
    dirty = needs_update = has_upstream = 0
    for record in records:
        if record.dirty:
            dirty += 1
        if record.needs_update:
            needs_update += 1
        if record.has_upstream:
            has_upstream += 1

    return ReportSummary(
        total_scanned=len(records) if total_scanned is None else total_scanned,
        forks=len(records),
        dirty=dirty,
        needs_update=needs_update,
        has_upstream=has_upstream,
    )
