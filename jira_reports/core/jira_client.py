"""Jira API client wrapper (REST v2 search + agile boards/sprints)."""

from __future__ import annotations

import logging
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import JIRA_FETCH_BASE_FIELDS
from .errors import SourceError
from .mappers import map_board, map_search_page, map_sprint
from .models import Board, Issue, SearchPage, Sprint
from .pager import collect_pages

logger = logging.getLogger(__name__)


class JiraAPI:
    """``IssueSource`` backed by a Jira server.

    The underlying client is only read after construction, so one instance is
    shared by every worker thread.
    """

    def __init__(self, server: str, username: str, token: str):
        self.server = server.rstrip("/")
        try:
            self.client = JIRA(basic_auth=(username, token), options={"server": self.server})
        except (JIRAError, requests.RequestException) as exc:
            raise SourceError(
                f"Couldn't log on to the Jira server {self.server}: {exc}",
                status_code=getattr(exc, "status_code", None),
            ) from exc

    @property
    def base_url(self) -> str:
        return self.server

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise SourceError("JIRA session unavailable")
        url = f"{self.server}/{path.lstrip('/')}"
        try:
            resp = session.get(url, params=params)
        except JIRAError as exc:
            raise SourceError(f"Request to {path} failed: {exc.text or exc}", exc.status_code) from exc
        except requests.RequestException as exc:
            raise SourceError(f"Request to {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise SourceError(
                f"Request to {path} failed {resp.status_code}: {resp.text[:200]}",
                resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            # e.g. an SSO login page served with 200
            raise SourceError(
                f"Request to {path} returned a non-JSON body: {resp.text[:200]}",
                resp.status_code,
            ) from exc

    def search(self, jql: str, start_at: int, page_size: int) -> SearchPage:
        params = {
            "jql": jql,
            "startAt": start_at,
            "maxResults": page_size,
            "fields": ",".join(JIRA_FETCH_BASE_FIELDS),
        }
        data = self._get_json("rest/api/2/search", params)
        return map_search_page(data, page_size)

    def list_boards(self, project_key: str) -> list[Board]:
        try:
            boards = self.client.boards(projectKeyOrID=project_key)
        except JIRAError as exc:
            raise SourceError(f"Failed to list boards for {project_key}: {exc.text or exc}", exc.status_code) from exc
        except requests.RequestException as exc:
            raise SourceError(f"Failed to list boards for {project_key}: {exc}") from exc
        return [map_board(b.raw) for b in boards]

    def list_sprints(self, board_id: int, state: str) -> list[Sprint]:
        try:
            sprints = self.client.sprints(board_id, state=state, maxResults=False)
        except JIRAError as exc:
            raise SourceError(f"Failed to list sprints for board {board_id}: {exc.text or exc}", exc.status_code) from exc
        except requests.RequestException as exc:
            raise SourceError(f"Failed to list sprints for board {board_id}: {exc}") from exc
        return [map_sprint(s.raw, board_id) for s in sprints]

    def _sprint_issue_page(self, sprint_id: int, start_at: int, page_size: int) -> SearchPage:
        params = {
            "startAt": start_at,
            "maxResults": page_size,
            "fields": ",".join(JIRA_FETCH_BASE_FIELDS),
        }
        data = self._get_json(f"rest/agile/1.0/sprint/{sprint_id}/issue", params)
        return map_search_page(data, page_size)

    def issues_for_sprint(self, sprint_id: int) -> list[Issue]:
        return collect_pages(lambda start_at, size: self._sprint_issue_page(sprint_id, start_at, size))
