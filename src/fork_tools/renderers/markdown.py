"""Markdown report renderer."""

from pathlib import Path

from fork_tools.core.models.status import Report, StatusRecord

COMMIT_WIDTH = 60
UNKNOWN = "?"

LEGEND = [
    ("✅", "Clean, up to date"),
    ("🔴", "Dirty working copy (uncommitted changes)"),
    ("⬆️", "Ahead of upstream (commits to push)"),
    ("⬇️", "Behind upstream (new commits available)"),
]


def escape_cell(text: str) -> str:
    """Escape characters that would break a table cell or code span."""
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("`", "\\`")


def status_icon(record: StatusRecord) -> str:
    icon = "✅"
    if record.dirty:
        icon = "🔴"
    if record.ahead:
        icon = "⬆️"
    if record.behind:
        icon = "⬇️"
    return icon


def display_path(path: Path, home: Path | None = None) -> str:
    home = home if home is not None else Path.home()
    if path == home:
        return "~"
    try:
        return "~/" + path.relative_to(home).as_posix()
    except ValueError:
        return path.as_posix()


def _count(value: int | None) -> str:
    return UNKNOWN if value is None else str(value)


def render_markdown(report: Report, home: Path | None = None) -> str:
    """Render a report as a Markdown document."""
    summary = report.summary
    timestamp = report.generated_at.strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        "# Repo Status Report",
        "",
        f"**Generated:** {timestamp}  |  **fork-tools v{report.version}**",
        "",
        "---",
        "",
        "## Summary",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Total Repos Scanned | {summary.total_scanned} |",
        f"| Your Forks | {summary.forks} |",
        f"| With Upstream | {summary.has_upstream} |",
        f"| Dirty Working Copy | {summary.dirty} |",
        f"| Needs Update | {summary.needs_update} |",
        "",
        "---",
        "",
        "## Your Forks",
        "",
        "| Repo | Path | Branch | Status | Behind | Ahead | Latest Commit |",
        "|------|------|--------|--------|--------|-------|---------------|",
    ]

    for record in report.records:
        commit = (record.head_commit or "unknown")[:COMMIT_WIDTH]
        cells = [
            escape_cell(record.name),
            f"`{escape_cell(display_path(record.path, home))}`",
            f"`{escape_cell(record.branch or 'unknown')}`",
            status_icon(record),
            _count(record.behind),
            _count(record.ahead),
            f"`{escape_cell(commit)}`",
        ]
        lines.append("| " + " | ".join(cells) + " |")

    lines += ["", "---", "", "## Legend", "", "| Icon | Meaning |", "|------|---------|"]
    lines += [f"| {icon} | {meaning} |" for icon, meaning in LEGEND]
    lines += ["", "<!-- END OF REPORT -->"]
    return "\n".join(lines) + "\n"
