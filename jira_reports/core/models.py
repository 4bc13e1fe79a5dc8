"""Domain data models for Jira issues, boards, sprints, and report aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Issue:
    key: str
    summary: str
    status: str
    issue_type: str
    assignee: str | None = None
    reporter: str | None = None
    created: datetime | None = None
    labels: tuple[str, ...] = ()
    links: tuple[IssueLink, ...] = ()

    def linked_issues(self) -> list[Issue]:
        """Embedded snapshots of both outward and inward links."""
        return [link.issue for link in self.links]


@dataclass(slots=True, frozen=True)
class IssueLink:
    direction: str  # "outward" | "inward"
    link_type: str | None
    issue: Issue


@dataclass(slots=True, frozen=True)
class Board:
    id: int
    name: str
    board_type: str | None = None


@dataclass(slots=True, frozen=True)
class Sprint:
    id: int
    name: str
    state: str
    board_id: int | None = None


@dataclass(slots=True, frozen=True)
class SearchPage:
    issues: tuple[Issue, ...]
    total: int
    start_at: int
    max_results: int


@dataclass(slots=True, frozen=True)
class IssueRecord:
    issue: Issue
    line: str
    emphasized: bool = False


@dataclass(slots=True)
class SprintData:
    name: str
    completed: list[IssueRecord] = field(default_factory=list)
    incomplete: list[IssueRecord] = field(default_factory=list)
    issue_types: list[str] = field(default_factory=list)
    # Issue count before any label filter
    total: int = 0
    project_key: str | None = None

    @property
    def visible(self) -> int:
        return len(self.completed) + len(self.incomplete)


@dataclass(slots=True)
class SprintReport:
    sprints: list[SprintData]
    combined: SprintData
    skipped: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class LinkVerdict:
    issue: Issue
    linked: tuple[Issue, ...]
    resolved: bool
    in_progress: bool


@dataclass(slots=True)
class ActionableLinkedIssues:
    resolved: list[Issue] = field(default_factory=list)
    in_progress: list[Issue] = field(default_factory=list)
    scanned: int = 0
