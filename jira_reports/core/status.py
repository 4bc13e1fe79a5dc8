"""Status-name predicates shared by sprint classification and link scanning.

Every predicate compares the literal Jira status name against the sets defined
in config.py. Workflow category metadata is intentionally not consulted, so a
custom status such as "Code Review" counts as complete and as a resolved link.
"""

from __future__ import annotations

from .config import (
    INCOMPLETE_STATUSES,
    PENDING_LINK_STATUSES,
    SELF_IN_PROGRESS_STATUSES,
    STATUS_IN_PROGRESS,
)


def is_incomplete(status: str | None) -> bool:
    """Return True if a sprint issue with this status is not done yet.

    Examples
    --------
    >>> is_incomplete("To Do")
    True
    >>> is_incomplete("Code Review")
    False
    """
    return status in INCOMPLETE_STATUSES


def is_pending_link(status: str | None) -> bool:
    """Return True if a linked issue in this status still blocks its parent."""
    return status in PENDING_LINK_STATUSES


def is_in_progress(status: str | None) -> bool:
    return status == STATUS_IN_PROGRESS


def is_self_in_progress(status: str | None) -> bool:
    """Return True if the issue itself is already being worked on.

    Parameters
    ----------
    status : str | None
        Status name of the parent issue.

    Returns
    -------
    bool
        True for "In Progress" and "Work in progress".
    """
    return status in SELF_IN_PROGRESS_STATUSES


def clean_status_name(value: str | None) -> str:
    """Sanitize a status string for display, converting empty values to "Unknown"."""
    if not value:
        return "Unknown"
    text = str(value).strip()
    return text or "Unknown"
