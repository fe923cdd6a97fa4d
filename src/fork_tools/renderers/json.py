"""JSON report renderer."""

import json
from typing import Any

from fork_tools.core.models.status import Report, StatusRecord


def record_to_dict(record: StatusRecord) -> dict[str, Any]:
    return {
        "name": record.name,
        "path": str(record.path),
        "status": record.state.value,
        "branch": record.branch,
        "ahead": record.ahead,
        "behind": record.behind,
        "latest_commit": record.head_commit,
        "origin": record.origin_url,
        "upstream": record.upstream_url,
        "reference": record.reference_ref,
    }


def render_json(report: Report) -> str:
    """Render a report as a JSON document. Unknown values become null."""
    payload = {
        "version": report.version,
        "generated_at": report.generated_at.isoformat(timespec="seconds"),
        "summary": report.summary.model_dump(),
        "forks": [record_to_dict(record) for record in report.records],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
