"""Markdown and Confluence-wiki rendering of report aggregates."""

from __future__ import annotations

from collections.abc import Iterable

from jira_reports.core.config import WIKI_TABLE_HEADER, OutputMode
from jira_reports.core.mappers import browse_url
from jira_reports.core.models import Issue, IssueRecord, SprintData, SprintReport


def _heading(text: str, level: int, mode: OutputMode) -> str:
    if mode is OutputMode.MARKDOWN:
        return f"{'#' * level} {text}"
    return f"h{level}. {text}"


def _section(title: str, records: Iterable[IssueRecord], level: int, mode: OutputMode) -> list[str]:
    lines = [_heading(title, level, mode), ""]
    if mode is OutputMode.WIKI:
        lines.append(WIKI_TABLE_HEADER)
    lines.extend(r.line for r in records)
    lines.append("")
    return lines


def render_sprint_data(data: SprintData, mode: OutputMode, *, group_by_type: bool = False) -> str:
    lines = [_heading(data.name, 1, mode), ""]
    if data.total > data.visible:
        lines += [f"Showing {data.visible} of {data.total} issues", ""]

    if group_by_type:
        lines += [_heading("Done", 2, mode), ""]
        for issue_type in data.issue_types:
            records = [r for r in data.completed if r.issue.issue_type == issue_type]
            if records:
                lines += _section(issue_type, records, 3, mode)
    else:
        lines += _section("Done", data.completed, 2, mode)
    lines += _section("Incomplete", data.incomplete, 2, mode)
    return "\n".join(lines) + "\n"


def render_sprint_report(
    report: SprintReport,
    mode: OutputMode,
    *,
    separate: bool = False,
    group_by_type: bool = False,
) -> str:
    parts = report.sprints if separate else [report.combined]
    return "\n".join(render_sprint_data(p, mode, group_by_type=group_by_type) for p in parts)


def render_assigned(issues: Iterable[Issue], base_url: str) -> str:
    lines = [
        f"- [{i.key}] {i.summary} ({i.issue_type}) -- {i.status}\n\t({browse_url(base_url, i.key)})"
        for i in issues
    ]
    return "\n".join(lines)


def render_issue_ref(issue: Issue, base_url: str) -> str:
    return f"[{issue.key}] {issue.summary} - {browse_url(base_url, issue.key)}"

