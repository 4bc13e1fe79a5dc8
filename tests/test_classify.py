from jira_reports.analytics.annotate import ReleaseAnnotator
from jira_reports.analytics.classify import build_sprint_data, classify, combined_name, merge_sprint_data

STATUSES = ["To Do", "In Progress", "Done", "Closed", "Code Review", "Work in progress", "to do", ""]


def test_partition_is_exact(make_issue):
    issues = [make_issue(f"ABC-{n}", status) for n, status in enumerate(STATUSES)]
    result = classify(issues)
    complete = {i.key for i in result.complete}
    incomplete = {i.key for i in result.incomplete}
    assert complete.isdisjoint(incomplete)
    assert complete | incomplete == {i.key for i in issues}
    assert len(result.incomplete) == sum(1 for s in STATUSES if s in {"To Do", "In Progress"})


def test_custom_and_case_variant_statuses_are_complete(make_issue):
    result = classify([make_issue("A-1", "to do"), make_issue("A-2", "Work in progress")])
    assert [i.key for i in result.complete] == ["A-1", "A-2"]
    assert result.incomplete == []


def test_order_and_types_preserved(make_issue):
    issues = [
        make_issue("A-1", "Done", issue_type="Bug"),
        make_issue("A-2", "To Do", issue_type="Story"),
        make_issue("A-3", "Done", issue_type="Story"),
        make_issue("A-4", "In Progress", issue_type="Bug"),
        make_issue("A-5", "Done", issue_type="Epic"),
    ]
    result = classify(issues)
    assert [i.key for i in result.complete] == ["A-1", "A-3", "A-5"]
    assert [i.key for i in result.incomplete] == ["A-2", "A-4"]
    assert result.issue_types == ["Bug", "Story", "Epic"]


def test_empty_input():
    result = classify([])
    assert result.complete == [] and result.incomplete == [] and result.issue_types == []


def test_merge_sprint_data(make_issue):
    annotator = ReleaseAnnotator(base_url="https://jira.example.com")
    first = build_sprint_data("S1", [make_issue("A-1", "Done", issue_type="Bug")], annotator, project_key="A")
    second = build_sprint_data(
        "S9",
        [make_issue("B-1", "To Do", issue_type="Story"), make_issue("B-2", "Done", issue_type="Bug")],
        annotator,
        total=5,
        project_key="B",
    )
    merged = merge_sprint_data(combined_name(["A", "B"]), [first, second])
    assert merged.name == "Combined Data for A,B Projects"
    assert [r.issue.key for r in merged.completed] == ["A-1", "B-2"]
    assert [r.issue.key for r in merged.incomplete] == ["B-1"]
    assert merged.issue_types == ["Bug", "Story"]
    assert merged.total == 6
