"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import jira_reports` works. Shared fakes live here too.
"""

from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jira_reports.core.errors import SourceError  # noqa: E402
from jira_reports.core.models import Board, Issue, IssueLink, SearchPage, Sprint  # noqa: E402


def build_issue(key, status="To Do", *, issue_type="Task", summary=None, labels=(), links=(), assignee=None):
    """Issue factory; ``links`` holds ``(direction, Issue)`` pairs or bare linked issues."""
    built = []
    for link in links:
        if isinstance(link, Issue):
            built.append(IssueLink("outward", "Blocks", link))
        else:
            direction, other = link
            built.append(IssueLink(direction, "Blocks", other))
    return Issue(
        key=key,
        summary=summary or f"Summary {key}",
        status=status,
        issue_type=issue_type,
        assignee=assignee,
        labels=tuple(labels),
        links=tuple(built),
    )


class FakeSource:
    """In-memory IssueSource recording every call."""

    def __init__(
        self,
        issues=(),
        *,
        search_results=None,
        boards=None,
        sprints=None,
        sprint_issues=None,
        fail_search=False,
    ):
        self.issues = list(issues)
        self.search_results = search_results or {}
        self.boards = boards or {}
        self.sprints = sprints or {}
        self.sprint_issues = sprint_issues or {}
        self.fail_search = fail_search
        self.base_url = "https://jira.example.com"
        self.search_calls: list[tuple[str, int, int]] = []
        self.sprint_calls: list[tuple[int, str]] = []
        self._lock = threading.Lock()

    def search(self, jql, start_at, page_size):
        with self._lock:
            self.search_calls.append((jql, start_at, page_size))
        if self.fail_search:
            raise SourceError("search failed", status_code=500)
        results = self.search_results.get(jql, self.issues)
        return SearchPage(
            issues=tuple(results[start_at : start_at + page_size]),
            total=len(results),
            start_at=start_at,
            max_results=page_size,
        )

    def list_boards(self, project_key):
        return list(self.boards.get(project_key, []))

    def list_sprints(self, board_id, state):
        self.sprint_calls.append((board_id, state))
        return [s for s in self.sprints.get(board_id, []) if s.state == state]

    def issues_for_sprint(self, sprint_id):
        return list(self.sprint_issues.get(sprint_id, []))


def board_with_sprints(board_id, count, state="closed", prefix="S"):
    sprints = [Sprint(id=board_id * 100 + n, name=f"{prefix}{n}", state=state, board_id=board_id) for n in range(count)]
    return Board(id=board_id, name=f"Board {board_id}"), sprints


@pytest.fixture
def make_issue():
    return build_issue


@pytest.fixture
def fake_source_cls():
    return FakeSource


@pytest.fixture
def make_board():
    return board_with_sprints
