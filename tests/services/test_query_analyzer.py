"""Tests for the static GraphQL query analyzer."""

from __future__ import annotations

from pathlib import Path

import pytest

import linear_cli
from linear_cli.services.query_analyzer import QuerySourceAnalyzer, Severity
from linear_cli.shared.errors import ErrorCode, InfrastructureError

BAD_SOURCE = '''
ISSUES_QUERY = """query Issues($filter: IssueFilter) {
  issues(filter: $filter) { nodes { id } }
}"""
'''

GOOD_SOURCE = '''
ISSUES_QUERY = """query Issues($filter: IssueFilter, $includeArchived: Boolean) {
  issues(filter: $filter, includeArchived: $includeArchived) { nodes { id } }
}"""
'''


def test_flags_filter_without_include_archived():
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(BAD_SOURCE, "queries.py")

    assert analyzer.has_errors
    [error] = analyzer.errors
    assert error.location == "queries.py:2"
    assert "$includeArchived parameter is not defined" in error.message


def test_clean_query():
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(GOOD_SOURCE)

    assert analyzer.findings == []


def test_resolves_concatenated_constants():
    source = '''
FIELDS = "nodes { id }"
ISSUES_QUERY = (
    """query Issues($filter: IssueFilter, $first: Int) {
  issues(filter: $filter) { """
    + FIELDS
    + " } }"
)
'''
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(source)

    assert len(analyzer.errors) == 1
    assert [w.message for w in analyzer.warnings] == [
        "Query 'Issues': $first parameter is defined but not used in the query"
    ]


def test_unresolvable_query_constant_warns():
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source("ISSUES_QUERY = build_query()\n")

    [warning] = analyzer.findings
    assert warning.severity is Severity.WARNING
    assert "could not be resolved" in warning.message


def test_include_archived_not_passed_to_issues_field():
    source = '''
ISSUES_QUERY = """query Issues($filter: IssueFilter, $includeArchived: Boolean) {
  issues(filter: $filter, includeArchived:$includeArchived) { nodes { id } }
}"""
'''
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(source)

    assert not analyzer.has_errors
    assert any("not passed to the issues field" in w.message for w in analyzer.warnings)


def test_queries_without_parameters_are_skipped():
    source = 'VIEWER_QUERY = """query Viewer {\n  viewer { id }\n}"""\n'
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(source)

    assert analyzer.findings == []


def test_raw_request_with_filter_only():
    source = 'client.raw_request(QUERY, {"filter": {}, "first": 10})\n'
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(source, "app.py")

    [error] = analyzer.errors
    assert error.message == "raw_request call has filter but missing includeArchived"
    assert error.line == 1


def test_raw_request_with_both_keys():
    source = 'client.raw_request(QUERY, {"filter": {}, "includeArchived": False})\n'
    analyzer = QuerySourceAnalyzer()

    analyzer.analyze_source(source)

    assert analyzer.findings == []


def test_analyze_paths_skips_test_modules(tmp_path: Path):
    (tmp_path / "queries.py").write_text(BAD_SOURCE, encoding="utf-8")
    (tmp_path / "test_queries.py").write_text(BAD_SOURCE, encoding="utf-8")
    cache_dir = tmp_path / "__pycache__"
    cache_dir.mkdir()
    (cache_dir / "stale.py").write_text(BAD_SOURCE, encoding="utf-8")
    analyzer = QuerySourceAnalyzer()

    count = analyzer.analyze_paths([tmp_path])

    assert count == 1
    assert len(analyzer.errors) == 1


def test_missing_path(tmp_path: Path):
    analyzer = QuerySourceAnalyzer()

    with pytest.raises(InfrastructureError) as exc_info:
        analyzer.analyze_paths([tmp_path / "nope"])

    assert exc_info.value.code is ErrorCode.FILE_NOT_FOUND


def test_unparsable_file(tmp_path: Path):
    broken = tmp_path / "broken.py"
    broken.write_text("def broken(:\n", encoding="utf-8")
    analyzer = QuerySourceAnalyzer()

    with pytest.raises(InfrastructureError) as exc_info:
        analyzer.analyze_file(broken)

    assert exc_info.value.code is ErrorCode.FILE_READ_ERROR


def test_package_queries_pass():
    analyzer = QuerySourceAnalyzer()

    count = analyzer.analyze_paths([Path(linear_cli.__file__).parent])

    assert count > 0
    assert analyzer.errors == []
