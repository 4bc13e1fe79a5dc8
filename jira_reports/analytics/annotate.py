"""Release-label emphasis and per-issue line rendering."""

from __future__ import annotations

from collections.abc import Iterable

from jira_reports.core.config import UNASSIGNED_LABEL, OutputMode
from jira_reports.core.mappers import browse_url
from jira_reports.core.models import Issue, IssueRecord
from jira_reports.core.status import clean_status_name


def is_emphasized(labels: Iterable[str], release_label: str, active_filter_label: str = "") -> bool:
    """Return True if an issue should be highlighted in public release notes.

    When the release label is also the active filter every visible issue
    carries it, so emphasis is suppressed.
    """
    if not release_label or release_label == active_filter_label:
        return False
    return release_label in labels


def render_line(issue: Issue, *, mode: OutputMode, base_url: str, emphasized: bool = False) -> str:
    link = browse_url(base_url, issue.key)
    assignee = issue.assignee or UNASSIGNED_LABEL
    status = clean_status_name(issue.status)
    if mode is OutputMode.MARKDOWN:
        head = f"[{issue.key}]({link}) {issue.summary}"
        if emphasized:
            head = f"**{head}**"
        return f"  * {head} -- {assignee} -- {status}"
    key_cell = f"[{issue.key}|{link}]"
    summary_cell = issue.summary
    if emphasized:
        key_cell = f"*{key_cell}*"
        summary_cell = f"*{summary_cell}*"
    return f"|{key_cell}|{summary_cell}|{assignee}|{status}|"


def annotate(
    issue: Issue,
    release_label: str,
    active_filter_label: str = "",
    *,
    mode: OutputMode = OutputMode.WIKI,
    base_url: str = "",
) -> IssueRecord:
    emphasized = is_emphasized(issue.labels, release_label, active_filter_label)
    return IssueRecord(
        issue=issue,
        line=render_line(issue, mode=mode, base_url=base_url, emphasized=emphasized),
        emphasized=emphasized,
    )


class ReleaseAnnotator:
    """Bind the rendering options of one run so callers annotate issue by issue."""

    def __init__(
        self,
        base_url: str = "",
        mode: OutputMode = OutputMode.WIKI,
        release_label: str = "",
        filter_label: str = "",
    ):
        self.base_url = base_url
        self.mode = mode
        self.release_label = release_label
        self.filter_label = filter_label

    def annotate(self, issue: Issue) -> IssueRecord:
        return annotate(
            issue,
            self.release_label,
            self.filter_label,
            mode=self.mode,
            base_url=self.base_url,
        )
