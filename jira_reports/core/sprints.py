"""Locate a project's board and pick a sprint by state and look-back."""

from __future__ import annotations

import logging

from jira_reports.analytics.annotate import ReleaseAnnotator
from jira_reports.analytics.classify import build_sprint_data

from .config import SPRINT_STATES
from .errors import LookBackOutOfRange, NoBoardFound
from .models import Board, Sprint, SprintData
from .source import IssueSource

logger = logging.getLogger(__name__)


class SprintResolver:
    def __init__(self, source: IssueSource, annotator: ReleaseAnnotator | None = None):
        self.source = source
        self.annotator = annotator or ReleaseAnnotator()

    def select_sprint(self, project_key: str, state: str, look_back: int = 0) -> tuple[Board, Sprint]:
        """Return the board and sprint ``look_back`` steps before the most recent one.

        Parameters
        ----------
        project_key : str
            Jira project key used to scope the board listing.
        state : str
            "active" or "closed".
        look_back : int
            0 selects the most recent sprint in ``state``.

        Raises
        ------
        NoBoardFound
            The project has no board. Recoverable: callers may skip the project.
        LookBackOutOfRange
            Fewer than ``look_back + 1`` sprints exist in ``state``.
        """
        if state not in SPRINT_STATES:
            raise ValueError(f"Unsupported sprint state {state!r}; expected one of {', '.join(SPRINT_STATES)}")
        if look_back < 0:
            raise ValueError(f"look_back must be non-negative, got {look_back}")

        boards = self.source.list_boards(project_key)
        if not boards:
            raise NoBoardFound(project_key)
        # First listed board wins when several match the project
        board = boards[0]
        if len(boards) > 1:
            logger.debug("%s boards match %s; using %s (%s)", len(boards), project_key, board.name, board.id)

        sprints = self.source.list_sprints(board.id, state)
        if look_back > len(sprints) - 1:
            raise LookBackOutOfRange(look_back, len(sprints), project_key)
        sprint = sprints[len(sprints) - 1 - look_back]
        logger.info("Selected sprint %s (%s) on board %s for %s", sprint.name, sprint.id, board.name, project_key)
        return board, sprint

    def resolve(self, project_key: str, state: str, look_back: int = 0) -> SprintData:
        _, sprint = self.select_sprint(project_key, state, look_back)
        issues = self.source.issues_for_sprint(sprint.id)
        return build_sprint_data(sprint.name, issues, self.annotator, project_key=project_key)
