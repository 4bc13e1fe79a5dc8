"""Find open issues whose linked issues changed state.

For every unresolved issue in a project the embedded inward and outward link
snapshots are scanned. An issue is reported as *resolved* when all of its
links have left "To Do"/"In Progress", and as *in progress* when one of its
links started work while the issue itself has not. The two verdicts are
independent, so an issue may appear in both lists.

Issues are scanned in a thread pool. Workers only compute a verdict; the
calling thread is the single writer of the result lists and returns only
after every submitted task has completed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from jira_reports.core.config import BLOCKING_MAX_WORKERS, OPEN_ISSUE_SEARCH_LIMIT
from jira_reports.core.models import ActionableLinkedIssues, Issue, LinkVerdict
from jira_reports.core.source import IssueSource
from jira_reports.core.status import is_in_progress, is_pending_link, is_self_in_progress

logger = logging.getLogger(__name__)


def open_issues_jql(project_key: str) -> str:
    return f"project={project_key} and resolved is EMPTY"


def classify_links(issue: Issue) -> LinkVerdict:
    linked = tuple(issue.linked_issues())
    logger.debug("[%s] %s -- %d linked issues", issue.key, issue.summary, len(linked))
    still_pending = False
    link_started = False
    for other in linked:
        logger.debug(" -- [%s] %s = %s", other.key, other.summary, other.status)
        if is_pending_link(other.status):
            still_pending = True
        if is_in_progress(other.status):
            link_started = True
    has_links = bool(linked)
    return LinkVerdict(
        issue=issue,
        linked=linked,
        resolved=has_links and not still_pending,
        in_progress=has_links and link_started and not is_self_in_progress(issue.status),
    )


class BlockingStatusResolver:
    def __init__(
        self,
        source: IssueSource,
        *,
        max_workers: int = BLOCKING_MAX_WORKERS,
        search_limit: int = OPEN_ISSUE_SEARCH_LIMIT,
    ):
        self.source = source
        self.max_workers = max_workers
        self.search_limit = search_limit

    def fetch_open_issues(self, project_key: str) -> list[Issue]:
        # Single page: projects with more open issues than search_limit are truncated
        page = self.source.search(open_issues_jql(project_key), 0, self.search_limit)
        if page.total > len(page.issues):
            logger.warning(
                "Project %s has %s open issues; only the first %s were scanned",
                project_key,
                page.total,
                len(page.issues),
            )
        return list(page.issues)

    def resolve(self, project_key: str) -> ActionableLinkedIssues:
        issues = self.fetch_open_issues(project_key)
        result = ActionableLinkedIssues()
        if not issues:
            return result

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(classify_links, issue) for issue in issues]
            for fut in as_completed(futures):
                verdict = fut.result()
                result.scanned += 1
                if verdict.resolved:
                    result.resolved.append(verdict.issue)
                if verdict.in_progress:
                    result.in_progress.append(verdict.issue)

        logger.debug(
            "Scanned %s open issues in %s: %s resolved, %s in progress",
            result.scanned,
            project_key,
            len(result.resolved),
            len(result.in_progress),
        )
        return result
