"""Command line entry point: one command per report."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console

from jira_reports.core.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SERVICEDESK_DAYS,
    MAX_PAGE_SIZE,
    SPRINT_STATE_ACTIVE,
    SPRINT_STATE_CLOSED,
    TIMEZONE,
    OutputMode,
    ReportOptions,
)
from jira_reports.core.credentials import load_credentials
from jira_reports.core.errors import ConfigurationError, JiraReportsError, NoBoardFound
from jira_reports.core.jira_client import JiraAPI
from jira_reports.core.mappers import issues_to_dataframe
from jira_reports.core.service import ReportService
from jira_reports.core.source import IssueSource
from jira_reports.visual.tables import to_csv, write_csv
from jira_reports.visual.text import render_assigned, render_issue_ref, render_sprint_report

app = typer.Typer(
    name="jira-reports",
    help="Release notes, sprint summaries and blocking audits from Jira",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
RULE = "-" * 54

# Shared options
BOARDS_OPTION = typer.Option(..., "--boards", "-b", help="Comma-separated list of Jira projects/boards to evaluate")
ACTIVE_OPTION = typer.Option(False, "--active", "-a", help="Use the active sprint instead of the last closed one")
SEPARATE_OPTION = typer.Option(False, "--separate", "-s", help="Render each project separately")
MARKDOWN_OPTION = typer.Option(False, "--markdown", "-m", help="Output Markdown instead of Confluence wiki")
LOOK_BACK_OPTION = typer.Option(0, "--look-back", "-l", min=0, help="Number of sprints to look back (0 = most recent)")
PROJECT_OPTION = typer.Option(..., "--project", "-p", help="Jira project key")
PAGE_SIZE_OPTION = typer.Option(
    DEFAULT_PAGE_SIZE, "--page-size", min=1, max=MAX_PAGE_SIZE, help="Search page size"
)


def split_keys(value: str | None) -> list[str]:
    return [k.strip() for k in (value or "").split(",") if k.strip()]


def _connect(ctx: typer.Context) -> IssueSource:
    creds = load_credentials(ctx.obj.get("config_path") if ctx.obj else None)
    return JiraAPI(creds.url, creds.username, creds.api_key)


@contextmanager
def _fail_fast() -> Iterator[None]:
    """Print any fatal report error and exit non-zero."""
    try:
        yield
    except JiraReportsError as exc:
        err_console.print(f"Error: {exc}", style="bold red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc


def _report_skip(exc: NoBoardFound) -> None:
    err_console.print(f"Skipping {exc.project_key}: no board found", style="yellow", markup=False, soft_wrap=True)


def _build_options(
    source: IssueSource,
    *,
    active: bool = False,
    markdown: bool = False,
    separate: bool = False,
    look_back: int = 0,
    page_size: int = DEFAULT_PAGE_SIZE,
    release_label: str = "",
    filter_label: str = "",
) -> ReportOptions:
    return ReportOptions(
        base_url=getattr(source, "base_url", ""),
        output_mode=OutputMode.MARKDOWN if markdown else OutputMode.WIKI,
        release_label=release_label,
        filter_label=filter_label,
        sprint_state=SPRINT_STATE_ACTIVE if active else SPRINT_STATE_CLOSED,
        look_back=look_back,
        separate_projects=separate,
        page_size=page_size,
    )


def _echo(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    config: Path | None = typer.Option(None, "--config", help="Credentials file (default ~/.jira-tools.yaml)"),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    ctx.obj = {"config_path": config, "verbose": verbose}


@app.command()
def releasenotes(
    ctx: typer.Context,
    boards: str = BOARDS_OPTION,
    active: bool = ACTIVE_OPTION,
    separate: bool = SEPARATE_OPTION,
    markdown: bool = MARKDOWN_OPTION,
    look_back: int = LOOK_BACK_OPTION,
    release_label: str = typer.Option("", "--release-label", "-r", help="Label that marks public release issues"),
    filter_label: str = typer.Option("", "--filter-label", "-f", help="Only include issues carrying this label"),
    page_size: int = PAGE_SIZE_OPTION,
) -> None:
    """Generate release notes for the selected sprint of each project."""
    keys = split_keys(boards)
    with _fail_fast():
        if not keys:
            raise ConfigurationError("You must include at least one project in --boards")
        source = _connect(ctx)
        options = _build_options(
            source,
            active=active,
            markdown=markdown,
            separate=separate,
            look_back=look_back,
            page_size=page_size,
            release_label=release_label,
            filter_label=filter_label,
        )
        report = ReportService(source, options).release_notes(keys, on_skip=_report_skip)
    _echo(render_sprint_report(report, options.output_mode, separate=options.separate_projects, group_by_type=True))


@app.command()
def sprint(
    ctx: typer.Context,
    boards: str = BOARDS_OPTION,
    active: bool = ACTIVE_OPTION,
    separate: bool = SEPARATE_OPTION,
    markdown: bool = MARKDOWN_OPTION,
    look_back: int = LOOK_BACK_OPTION,
) -> None:
    """Summarize completed and incomplete issues of the selected sprints."""
    keys = split_keys(boards)
    with _fail_fast():
        if not keys:
            raise ConfigurationError("You must include at least one project in --boards")
        source = _connect(ctx)
        options = _build_options(source, active=active, markdown=markdown, separate=separate, look_back=look_back)
        report = ReportService(source, options).sprint_report(keys, on_skip=_report_skip)
    _echo(render_sprint_report(report, options.output_mode, separate=options.separate_projects))


def _banner(message: str, style: str, lines: list[str] | None = None) -> None:
    console.print(RULE, style=style)
    console.print(message, style=style, markup=False, soft_wrap=True)
    console.print(RULE, style=style)
    for line in lines or []:
        console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)
    if lines:
        console.print(RULE, style=style)


@app.command()
def unblocked(ctx: typer.Context, project: str = PROJECT_OPTION) -> None:
    """Find open issues whose linked issues are resolved or newly in progress."""
    with _fail_fast():
        source = _connect(ctx)
        result = ReportService(source).blocking_status(project)
    base_url = getattr(source, "base_url", "")
    if result.resolved:
        _banner(
            f"   The following {len(result.resolved)} issues have completed linked issues",
            "red",
            [render_issue_ref(i, base_url) for i in result.resolved],
        )
    else:
        _banner("  All issues seem to still have pending linked issues. ", "green")
    if result.in_progress:
        _banner(
            f"   The following {len(result.in_progress)} issues have linked issues in progress",
            "blue",
            [render_issue_ref(i, base_url) for i in result.in_progress],
        )


@app.command()
def mine(
    ctx: typer.Context,
    include_projects: str = typer.Option(
        "", "--include-projects", "-i", help="Comma-separated list of Jira projects to include"
    ),
    exclude_projects: str = typer.Option(
        "", "--exclude-projects", "-x", help="Comma-separated list of Jira projects to exclude"
    ),
) -> None:
    """List unresolved issues assigned to the current user."""
    with _fail_fast():
        source = _connect(ctx)
        issues = ReportService(source).assigned_issues(split_keys(include_projects), split_keys(exclude_projects))
    if issues:
        _echo(render_assigned(issues, getattr(source, "base_url", "")))


@app.command()
def servicedesk(
    ctx: typer.Context,
    project: str = PROJECT_OPTION,
    days: int = typer.Option(DEFAULT_SERVICEDESK_DAYS, "--days", "-d", help="Days of history to retrieve"),
    output: Path | None = typer.Option(None, "--output", "-o", help="CSV file to write"),
    timezone: str = typer.Option(TIMEZONE, "--timezone", help="Timezone for the Created column"),
) -> None:
    """Export recent service desk issues as CSV."""
    with _fail_fast():
        source = _connect(ctx)
        issues = ReportService(source).service_desk_issues(project, days)
        df = issues_to_dataframe(issues, getattr(source, "base_url", ""), timezone)
    if output is None:
        typer.echo(to_csv(df), nl=False)
        return
    try:
        write_csv(df, output)
    except OSError as exc:
        err_console.print(f"Cannot create file {output}: {exc}", style="bold red", markup=False)
        raise typer.Exit(code=1) from exc
    err_console.print(f"Wrote {len(issues)} issues to {output}", markup=False, soft_wrap=True)


@app.command()
def version() -> None:
    """Show version information."""
    from jira_reports import __version__

    console.print(f"jira-reports v{__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
