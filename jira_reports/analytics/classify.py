"""Partition sprint issues into complete/incomplete buckets and build SprintData."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from jira_reports.core.models import Issue, SprintData
from jira_reports.core.status import is_incomplete

from .annotate import ReleaseAnnotator


@dataclass(slots=True)
class Classification:
    complete: list[Issue] = field(default_factory=list)
    incomplete: list[Issue] = field(default_factory=list)
    issue_types: list[str] = field(default_factory=list)


def _distinct(values: Iterable[str]) -> list[str]:
    # Deduplicate preserve order
    seen = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            out.append(v)
            seen.add(v)
    return out


def classify(issues: Iterable[Issue]) -> Classification:
    """Split issues by literal status name, preserving input order.

    "To Do" and "In Progress" are incomplete; every other status, custom
    workflow statuses included, is complete.
    """
    result = Classification()
    types: list[str] = []
    for issue in issues:
        if is_incomplete(issue.status):
            result.incomplete.append(issue)
        else:
            result.complete.append(issue)
        types.append(issue.issue_type)
    result.issue_types = _distinct(types)
    return result


def build_sprint_data(
    name: str,
    issues: Sequence[Issue],
    annotator: ReleaseAnnotator,
    *,
    total: int | None = None,
    project_key: str | None = None,
) -> SprintData:
    parts = classify(issues)
    return SprintData(
        name=name,
        completed=[annotator.annotate(i) for i in parts.complete],
        incomplete=[annotator.annotate(i) for i in parts.incomplete],
        issue_types=parts.issue_types,
        total=len(issues) if total is None else total,
        project_key=project_key,
    )


def combined_name(project_keys: Iterable[str]) -> str:
    return f"Combined Data for {','.join(project_keys)} Projects"


def merge_sprint_data(name: str, parts: Iterable[SprintData]) -> SprintData:
    """Concatenate per-project sprint data in the order given."""
    merged = SprintData(name=name)
    types: list[str] = []
    for part in parts:
        merged.completed.extend(part.completed)
        merged.incomplete.extend(part.incomplete)
        types.extend(part.issue_types)
        merged.total += part.total
    merged.issue_types = _distinct(types)
    return merged
