"""Aggregate reports over Jira: release notes, sprint summaries, blocking audits."""

__version__ = "0.1.0"
