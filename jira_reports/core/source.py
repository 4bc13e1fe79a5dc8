"""The read-only capability the report engine consumes from the issue tracker."""

from __future__ import annotations

from typing import Protocol

from .models import Board, Issue, SearchPage, Sprint


class IssueSource(Protocol):
    """Anything that can answer paged searches and agile board queries.

    Every method raises ``SourceError`` on failure. Implementations must be
    safe to call from several threads at once.
    """

    def search(self, jql: str, start_at: int, page_size: int) -> SearchPage: ...

    def list_boards(self, project_key: str) -> list[Board]: ...

    def list_sprints(self, board_id: int, state: str) -> list[Sprint]: ...

    def issues_for_sprint(self, sprint_id: int) -> list[Issue]: ...
