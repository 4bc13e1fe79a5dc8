"""Tests for the command line entry point."""

from types import SimpleNamespace

import pytest
import requests
from typer.testing import CliRunner

from jira_reports import app as cli
from jira_reports.core.errors import SourceError
from jira_reports.core.jira_client import JiraAPI


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"NO_COLOR": "1", "FORCE_COLOR": "0", "TERM": "dumb"})


@pytest.fixture
def connect_to(monkeypatch):
    def _install(source):
        monkeypatch.setattr(cli, "_connect", lambda ctx: source)
        return source

    return _install


def test_split_keys():
    assert cli.split_keys(" A, B,,C ") == ["A", "B", "C"]
    assert cli.split_keys(None) == []


def test_releasenotes_markdown(runner, connect_to, fake_source_cls, make_board, make_issue):
    board, sprints = make_board(1, 2)
    issues = [make_issue("A-1", "Done", summary="Ship it", labels=["release"]), make_issue("A-2", "To Do")]
    connect_to(fake_source_cls(issues, boards={"A": [board]}, sprints={1: sprints}))
    result = runner.invoke(cli.app, ["releasenotes", "-b", "A", "-m", "--release-label", "release"])
    assert result.exit_code == 0, result.output
    assert "# Combined Data for A Projects" in result.output
    assert "**[A-1](https://jira.example.com/browse/A-1) Ship it**" in result.output
    assert "## Incomplete" in result.output


def test_sprint_skips_missing_board(runner, connect_to, fake_source_cls, make_board, make_issue):
    board, sprints = make_board(1, 1, state="active")
    source = fake_source_cls(
        boards={"A": [board]},
        sprints={1: sprints},
        sprint_issues={sprints[0].id: [make_issue("A-5", "Done")]},
    )
    connect_to(source)
    result = runner.invoke(cli.app, ["sprint", "-b", "A,GHOST", "--active", "--separate"])
    assert result.exit_code == 0, result.output
    assert "Skipping GHOST: no board found" in result.output
    assert "h1. S0" in result.output
    assert "[A-5|https://jira.example.com/browse/A-5]" in result.output


def test_look_back_out_of_range_exits_non_zero(runner, connect_to, fake_source_cls, make_board):
    board, sprints = make_board(1, 2)
    connect_to(fake_source_cls(boards={"A": [board]}, sprints={1: sprints}))
    result = runner.invoke(cli.app, ["sprint", "-b", "A", "-l", "5"])
    assert result.exit_code == 1
    assert "Look-back of 5" in result.output


def test_unblocked(runner, connect_to, fake_source_cls, make_issue):
    issues = [
        make_issue("P-1", "To Do", summary="Ready now", links=[make_issue("Q-1", "Done")]),
        make_issue("P-2", "To Do", summary="Escalate", links=[make_issue("Q-2", "In Progress")]),
    ]
    connect_to(fake_source_cls(issues))
    result = runner.invoke(cli.app, ["unblocked", "-p", "P"])
    assert result.exit_code == 0, result.output
    assert "The following 1 issues have completed linked issues" in result.output
    assert "[P-1] Ready now - https://jira.example.com/browse/P-1" in result.output
    assert "[P-2] Escalate" in result.output


def test_unblocked_nothing_resolved(runner, connect_to, fake_source_cls, make_issue):
    connect_to(fake_source_cls([make_issue("P-1", "To Do", links=[make_issue("Q-1", "To Do")])]))
    result = runner.invoke(cli.app, ["unblocked", "-p", "P"])
    assert result.exit_code == 0
    assert "All issues seem to still have pending linked issues." in result.output


def test_source_error_is_fatal(runner, connect_to, fake_source_cls):
    connect_to(fake_source_cls(fail_search=True))
    result = runner.invoke(cli.app, ["unblocked", "-p", "P"])
    assert result.exit_code == 1
    assert "search failed" in result.output


def test_page_size_above_server_limit_is_rejected(runner, connect_to, fake_source_cls):
    connect_to(fake_source_cls())
    result = runner.invoke(cli.app, ["releasenotes", "-b", "A", "--page-size", "250"])
    assert result.exit_code == 2


def test_board_listing_connection_error_is_fatal(runner, connect_to):
    class Unreachable(JiraAPI):
        def __init__(self):
            self.server = "https://jira.example.com"
            self.client = SimpleNamespace(boards=self._down)

        def _down(self, **kwargs):
            raise requests.ConnectionError("down")

    connect_to(Unreachable())
    result = runner.invoke(cli.app, ["sprint", "-b", "A"])
    assert result.exit_code == 1
    assert "Failed to list boards for A" in result.output


def test_connection_failure_is_fatal(runner, monkeypatch):
    def _fail(ctx):
        raise SourceError("Couldn't log on to the Jira server https://jira.example.com")

    monkeypatch.setattr(cli, "_connect", _fail)
    result = runner.invoke(cli.app, ["mine"])
    assert result.exit_code == 1
    assert "Couldn't log on" in result.output


def test_mine(runner, connect_to, fake_source_cls, make_issue):
    source = connect_to(fake_source_cls([make_issue("A-1", "In Progress", issue_type="Bug", summary="Mine")]))
    result = runner.invoke(cli.app, ["mine", "-x", "OLD"])
    assert result.exit_code == 0, result.output
    assert "- [A-1] Mine (Bug) -- In Progress" in result.output
    assert source.search_calls[0][0].endswith("AND project NOT in (OLD)")


def test_servicedesk_to_file(runner, connect_to, fake_source_cls, make_issue, tmp_path):
    connect_to(fake_source_cls([make_issue("SD-1", "To Do", summary="Printer")]))
    out = tmp_path / "sd.csv"
    result = runner.invoke(cli.app, ["servicedesk", "-p", "SD", "-d", "3", "-o", str(out)])
    assert result.exit_code == 0, result.output
    lines = out.read_text().splitlines()
    assert lines[0] == "Type,Key,Summary,Status,Assignee,Reporter,Created,Link"
    assert lines[1].startswith("Task,SD-1,Printer,To Do,Unassigned,")


def test_servicedesk_stdout(runner, connect_to, fake_source_cls, make_issue):
    connect_to(fake_source_cls([make_issue("SD-2", "Done")]))
    result = runner.invoke(cli.app, ["servicedesk", "-p", "SD"])
    assert result.exit_code == 0, result.output
    assert "SD-2" in result.output
    assert result.output.startswith("Type,Key,Summary")


def test_version(runner):
    result = runner.invoke(cli.app, ["version"])
    assert result.exit_code == 0
    assert "jira-reports v" in result.output
