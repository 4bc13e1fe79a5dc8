"""Central configuration, constants, and per-invocation report options."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# =============================================================================
# Jira Connection Settings
# =============================================================================
ENV_JIRA_URL = "JIRA_URL"
ENV_JIRA_USERNAME = "JIRA_USERNAME"
ENV_JIRA_API_KEY = "JIRA_API_KEY"

# YAML file holding jira_url / jira_username / jira_api_key
CONFIG_FILE_NAME = ".jira-tools.yaml"
DEFAULT_CONFIG_PATH = Path.home() / CONFIG_FILE_NAME

CONFIG_KEY_URL = "jira_url"
CONFIG_KEY_USERNAME = "jira_username"
CONFIG_KEY_API_KEY = "jira_api_key"

TIMEZONE = "UTC"

# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Literal status names; matching is exact string equality, no aliasing.
STATUS_TO_DO = "To Do"
STATUS_IN_PROGRESS = "In Progress"
STATUS_WORK_IN_PROGRESS = "Work in progress"

# Issues in these statuses land in the "Incomplete" bucket of a sprint report
INCOMPLETE_STATUSES: frozenset[str] = frozenset({STATUS_TO_DO, STATUS_IN_PROGRESS})

# A linked issue in one of these statuses still blocks its parent
PENDING_LINK_STATUSES: frozenset[str] = frozenset({STATUS_TO_DO, STATUS_IN_PROGRESS})

# An issue already in one of these statuses does not need escalation
SELF_IN_PROGRESS_STATUSES: frozenset[str] = frozenset({STATUS_IN_PROGRESS, STATUS_WORK_IN_PROGRESS})

SPRINT_STATE_ACTIVE = "active"
SPRINT_STATE_CLOSED = "closed"
SPRINT_STATES: Sequence[str] = (SPRINT_STATE_ACTIVE, SPRINT_STATE_CLOSED)

# =============================================================================
# Search / Pagination
# =============================================================================
DEFAULT_PAGE_SIZE: int = 100
# Jira Cloud grants at most this many results per search page
MAX_PAGE_SIZE: int = 100

# Single-page cap used for "all open issues" style searches. Larger projects
# are truncated with a warning.
OPEN_ISSUE_SEARCH_LIMIT: int = 999

DEFAULT_SERVICEDESK_DAYS: int = 7

# Canonical field list for issue searches
JIRA_FETCH_BASE_FIELDS = [
    "summary",
    "created",
    "assignee",
    "reporter",
    "status",
    "issuetype",
    "labels",
    "issuelinks",
]

# =============================================================================
# Concurrency
# =============================================================================
# Threads, because jira client calls are I/O bound and the library is
# synchronous.
BLOCKING_MAX_WORKERS = 8

# =============================================================================
# Rendering
# =============================================================================
UNASSIGNED_LABEL = "UNASSIGNED"
CSV_UNASSIGNED_LABEL = "Unassigned"

CSV_COLUMNS: Sequence[str] = (
    "Type",
    "Key",
    "Summary",
    "Status",
    "Assignee",
    "Reporter",
    "Created",
    "Link",
)

WIKI_TABLE_HEADER = "||Key||Summary||Assignee||Status||"


class OutputMode(str, Enum):
    MARKDOWN = "markdown"
    WIKI = "wiki"


@dataclass(slots=True)
class ReportOptions:
    """Options for a single report run, built once by the CLI."""

    base_url: str = ""
    output_mode: OutputMode = OutputMode.WIKI
    release_label: str = ""
    filter_label: str = ""
    sprint_state: str = SPRINT_STATE_CLOSED
    look_back: int = 0
    separate_projects: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
