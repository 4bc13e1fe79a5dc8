"""Mapping raw Jira JSON payloads into model instances and DataFrames."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd
import pytz

from .config import CSV_COLUMNS, CSV_UNASSIGNED_LABEL, TIMEZONE
from .errors import ConfigurationError
from .models import Board, Issue, IssueLink, SearchPage, Sprint


def _name(value: Any, attr: str = "name") -> str | None:
    if isinstance(value, dict):
        return value.get(attr)
    return None


def parse_dt(val):
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _map_linked(raw: dict[str, Any]) -> Issue:
    # Embedded link snapshots carry a reduced field set and never nested links
    fields = raw.get("fields") or {}
    return Issue(
        key=raw.get("key") or "",
        summary=fields.get("summary") or "",
        status=_name(fields.get("status")) or "",
        issue_type=_name(fields.get("issuetype")) or "",
    )


def map_links(raw_links: Iterable[dict[str, Any]] | None) -> tuple[IssueLink, ...]:
    links: list[IssueLink] = []
    for link in raw_links or []:
        link_type = _name(link.get("type"))
        if link.get("outwardIssue"):
            links.append(IssueLink("outward", link_type, _map_linked(link["outwardIssue"])))
        if link.get("inwardIssue"):
            links.append(IssueLink("inward", link_type, _map_linked(link["inwardIssue"])))
    return tuple(links)


def map_issue(raw: dict[str, Any]) -> Issue:
    fields = raw.get("fields") or {}
    return Issue(
        key=raw.get("key") or "",
        summary=fields.get("summary") or "",
        status=_name(fields.get("status")) or "",
        issue_type=_name(fields.get("issuetype")) or "",
        assignee=_name(fields.get("assignee"), "displayName"),
        reporter=_name(fields.get("reporter"), "displayName"),
        created=parse_dt(fields.get("created")),
        labels=tuple(fields.get("labels") or ()),
        links=map_links(fields.get("issuelinks")),
    )


def map_search_page(data: dict[str, Any], requested_page_size: int) -> SearchPage:
    """Map a ``startAt``-paged search envelope.

    ``maxResults`` is what the server actually granted, which may be lower than
    the requested page size; it falls back to the request when absent.
    """
    issues = tuple(map_issue(r) for r in data.get("issues") or [])
    return SearchPage(
        issues=issues,
        total=int(data.get("total") or 0),
        start_at=int(data.get("startAt") or 0),
        max_results=int(data.get("maxResults") or requested_page_size),
    )


def map_board(raw: dict[str, Any]) -> Board:
    return Board(id=raw["id"], name=raw.get("name") or "", board_type=raw.get("type"))


def map_sprint(raw: dict[str, Any], board_id: int | None = None) -> Sprint:
    return Sprint(
        id=raw["id"],
        name=raw.get("name") or "",
        state=raw.get("state") or "",
        board_id=raw.get("originBoardId", board_id),
    )


def browse_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/browse/{key}"


def issues_to_dataframe(
    issues: Iterable[Issue],
    base_url: str,
    timezone: str = TIMEZONE,
) -> pd.DataFrame:
    try:
        tz = pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError as exc:
        raise ConfigurationError(f"Unknown timezone {timezone!r}") from exc
    rows = []
    for i in issues:
        created = i.created.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %Z") if i.created else ""
        rows.append(
            {
                "Type": i.issue_type,
                "Key": i.key,
                "Summary": i.summary,
                "Status": i.status,
                "Assignee": i.assignee or CSV_UNASSIGNED_LABEL,
                "Reporter": i.reporter or "",
                "Created": created,
                "Link": browse_url(base_url, i.key),
            }
        )
    # Keep the header even when there are no rows
    return pd.DataFrame(rows, columns=list(CSV_COLUMNS))
