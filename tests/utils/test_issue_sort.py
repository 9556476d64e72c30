"""Tests for status/priority ordering of issue lists."""

from __future__ import annotations

import pytest

from linear_cli.services.models import Issue
from linear_cli.utils.sort import issue_status_name, sort_issues_by_status, status_rank


@pytest.mark.parametrize(
    ("status", "rank"),
    [
        ("In Progress", 1),
        ("in_progress", 1),
        ("In Review", 2),
        ("Todo", 3),
        ("BACKLOG", 3),
        ("Done", 4),
        ("completed", 4),
        ("Canceled", 5),
        ("cancelled", 5),
        ("Triage", 6),
        ("", 6),
        (None, 6),
    ],
)
def test_status_rank(status, rank):
    assert status_rank(status) == rank


@pytest.mark.parametrize("status", ["TODO", "Todo", "todo"])
def test_status_rank_ignores_case(status):
    assert status_rank(status) == 3


def _ids(issues):
    return [issue["identifier"] for issue in issues]


def test_orders_by_status_then_priority():
    issues = [
        {"identifier": "A", "state": {"name": "Done"}, "priority": 1},
        {"identifier": "B", "state": {"name": "Todo"}, "priority": 3},
        {"identifier": "C", "state": {"name": "In Progress"}, "priority": 2},
        {"identifier": "D", "state": {"name": "Todo"}, "priority": 1},
        {"identifier": "E", "state": {"name": "In Review"}, "priority": 4},
    ]

    assert _ids(sort_issues_by_status(issues)) == ["C", "E", "D", "B", "A"]


def test_missing_priority_sorts_last_within_status():
    issues = [
        {"identifier": "A", "state": {"name": "Todo"}, "priority": None},
        {"identifier": "B", "state": {"name": "Todo"}},
        {"identifier": "C", "state": {"name": "Todo"}, "priority": 4},
    ]

    assert _ids(sort_issues_by_status(issues))[0] == "C"


def test_urgent_priority_zero_sorts_first():
    issues = [
        {"identifier": "A", "state": {"name": "Todo"}, "priority": 2},
        {"identifier": "B", "state": {"name": "Todo"}, "priority": 0},
    ]

    assert _ids(sort_issues_by_status(issues)) == ["B", "A"]


def test_ties_keep_input_order():
    issues = [
        {"identifier": name, "state": {"name": "Todo"}, "priority": 2}
        for name in ("X", "Y", "Z")
    ]

    assert _ids(sort_issues_by_status(issues)) == ["X", "Y", "Z"]


def test_input_is_not_modified():
    issues = [
        {"identifier": "A", "state": {"name": "Done"}, "priority": 1},
        {"identifier": "B", "state": {"name": "In Progress"}, "priority": 1},
    ]

    result = sort_issues_by_status(issues)

    assert _ids(issues) == ["A", "B"]
    assert result is not issues


def test_missing_state_ranks_as_other():
    issues = [
        {"identifier": "A", "state": None, "priority": 1},
        {"identifier": "B", "state": {"name": "Canceled"}, "priority": 1},
    ]

    assert _ids(sort_issues_by_status(issues)) == ["B", "A"]


def test_orders_flat_status_records():
    issues = [
        {"status": "Done", "priority": 1},
        {"status": "In Progress", "priority": 2},
        {"status": "Todo", "priority": 0},
        {"status": "In Review", "priority": 1},
        {"status": "In Progress", "priority": 0},
        {"status": "Cancelled", "priority": 3},
        {"status": "Todo", "priority": 2},
    ]

    ordered = sort_issues_by_status(issues)

    assert [(issue["status"], issue["priority"]) for issue in ordered] == [
        ("In Progress", 0),
        ("In Progress", 2),
        ("In Review", 1),
        ("Todo", 0),
        ("Todo", 2),
        ("Done", 1),
        ("Cancelled", 3),
    ]


def test_flat_status_field_is_used():
    assert issue_status_name({"status": "In Review"}) == "In Review"
    assert issue_status_name({"state": {"name": 7}}) == ""


def test_sorts_issue_models(make_issue_node):
    issues = [
        Issue.from_api(make_issue_node("ENG-1", status="Done", priority=1)),
        Issue.from_api(make_issue_node("ENG-2", status="in progress", priority=3)),
        Issue.from_api(make_issue_node("ENG-3", status=None, priority=None)),
    ]

    ordered = sort_issues_by_status(issues)

    assert [issue.identifier for issue in ordered] == ["ENG-2", "ENG-1", "ENG-3"]


def test_empty_input():
    assert sort_issues_by_status([]) == []
