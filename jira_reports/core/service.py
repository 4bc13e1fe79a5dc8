"""ReportService: orchestrates fetching, classification, and annotation per report."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from jira_reports.analytics.annotate import ReleaseAnnotator
from jira_reports.analytics.blocking import BlockingStatusResolver
from jira_reports.analytics.classify import build_sprint_data, combined_name, merge_sprint_data

from .config import OPEN_ISSUE_SEARCH_LIMIT, ReportOptions
from .errors import NoBoardFound
from .models import ActionableLinkedIssues, Issue, SprintData, SprintReport
from .pager import SearchPager
from .source import IssueSource
from .sprints import SprintResolver

logger = logging.getLogger(__name__)

SkipCallback = Callable[[NoBoardFound], None]


def _jql_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def sprint_issues_jql(sprint_id: int, label: str = "") -> str:
    label_clause = f" AND labels = {_jql_string(label)}" if label else ""
    return f"sprint = {sprint_id}{label_clause} ORDER BY issuetype ASC, key ASC"


def assigned_jql(include: Sequence[str] = (), exclude: Sequence[str] = ()) -> str:
    jql = "assignee = currentUser() AND resolution IS EMPTY"
    if include:
        jql += f" AND project in ({','.join(include)})"
    elif exclude:
        jql += f" AND project NOT in ({','.join(exclude)})"
    return jql


def service_desk_jql(project_key: str, days: int) -> str:
    date_clause = f" and createdDate > startOfDay(-{days}d)" if days > 0 else ""
    return f"project={project_key}{date_clause} ORDER BY createdDate DESC"


class ReportService:
    def __init__(self, source: IssueSource, options: ReportOptions | None = None):
        self.source = source
        self.options = options or ReportOptions()
        self.annotator = ReleaseAnnotator(
            base_url=self.options.base_url,
            mode=self.options.output_mode,
            release_label=self.options.release_label,
            filter_label=self.options.filter_label,
        )
        self.sprints = SprintResolver(source, self.annotator)
        self.pager = SearchPager(source, self.options.page_size)

    # ------------------ Sprint Reports ------------------
    def sprint_report(
        self,
        project_keys: Sequence[str],
        *,
        on_skip: SkipCallback | None = None,
    ) -> SprintReport:
        """Summarize the selected sprint of every project, then combine them."""
        return self._collect(project_keys, self._sprint_summary, on_skip)

    def release_notes(
        self,
        project_keys: Sequence[str],
        *,
        on_skip: SkipCallback | None = None,
    ) -> SprintReport:
        """Like ``sprint_report`` but ordered by issue type and optionally label-filtered."""
        return self._collect(project_keys, self._release_notes_for, on_skip)

    def _sprint_summary(self, project_key: str) -> SprintData:
        return self.sprints.resolve(project_key, self.options.sprint_state, self.options.look_back)

    def _release_notes_for(self, project_key: str) -> SprintData:
        _, sprint = self.sprints.select_sprint(project_key, self.options.sprint_state, self.options.look_back)
        # Two independent pagination runs; the filtered one is what gets rendered
        all_issues = self.pager.fetch_all(sprint_issues_jql(sprint.id))
        visible = all_issues
        if self.options.filter_label:
            visible = self.pager.fetch_all(sprint_issues_jql(sprint.id, self.options.filter_label))
        return build_sprint_data(
            sprint.name,
            visible,
            self.annotator,
            total=len(all_issues),
            project_key=project_key,
        )

    def _collect(
        self,
        project_keys: Sequence[str],
        build: Callable[[str], SprintData],
        on_skip: SkipCallback | None,
    ) -> SprintReport:
        sprints: list[SprintData] = []
        skipped: list[str] = []
        for key in project_keys:
            try:
                sprints.append(build(key))
            except NoBoardFound as exc:
                logger.warning("Skipping %s: %s", key, exc)
                skipped.append(key)
                if on_skip:
                    on_skip(exc)
        combined = merge_sprint_data(combined_name(project_keys), sprints)
        return SprintReport(sprints=sprints, combined=combined, skipped=skipped)

    # ------------------ Issue Listings ------------------
    def blocking_status(self, project_key: str) -> ActionableLinkedIssues:
        return BlockingStatusResolver(self.source).resolve(project_key)

    def assigned_issues(self, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> list[Issue]:
        return self.pager.fetch_all(assigned_jql(include, exclude))

    def service_desk_issues(self, project_key: str, days: int) -> list[Issue]:
        page = self.source.search(service_desk_jql(project_key, days), 0, OPEN_ISSUE_SEARCH_LIMIT)
        return list(page.issues)
