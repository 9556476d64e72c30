"""Tests for the interactive view stack and prompt loop."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from linear_cli.cli.interactive import InteractiveApp, View, ViewStack
from linear_cli.services.models import Issue
from linear_cli.shared.errors import ApplicationError, ErrorCode, create_api_error


class ScriptedInput:
    """Returns canned answers, then raises EOFError like a closed terminal."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def issue(make_issue_node):
    return Issue.from_api(
        make_issue_node(
            "ENG-5",
            status="In Progress",
            attachments={
                "nodes": [
                    {"title": "Fix", "url": "https://github.com/acme/app/pull/9", "sourceType": "github"}
                ]
            },
        )
    )


@pytest.fixture
def service(mocker, issue):
    service = mocker.MagicMock(name="LinearService")
    service.get_my_issues.return_value = [issue]
    return service


@pytest.fixture
def output():
    return io.StringIO()


def make_app(service, output, *answers, **kwargs):
    read_input = ScriptedInput(*answers)
    app = InteractiveApp(
        service,
        console=Console(file=output, width=120),
        read_input=read_input,
        **kwargs,
    )
    return app, read_input


class TestViewStack:
    def test_starts_on_my_issues(self):
        views = ViewStack()

        assert views.current is View.MINE
        assert views.previous is View.MENU

    def test_back_from_list_goes_to_menu(self):
        views = ViewStack()

        views.go_back()

        assert views.current is View.MENU
        assert views.previous is None

    def test_back_from_detail_returns_to_list(self, issue):
        views = ViewStack()
        views.select_view(View.CYCLE)
        views.select_issue(issue, View.CYCLE)

        views.go_back()

        assert views.current is View.CYCLE
        assert views.previous is View.MENU
        assert views.selected_issue is None

    def test_back_on_menu_stays(self):
        views = ViewStack()
        views.show_menu()

        views.go_back()

        assert views.current is View.MENU


class TestInteractiveApp:
    def test_open_copy_and_back_out(self, service, output, issue):
        opened: list[str] = []
        copied: list[str] = []
        app, _ = make_app(
            service,
            output,
            "1",  # open ENG-5
            "2",  # open the PR link
            "c",
            "q",  # back to the list
            "q",  # back to the menu
            "q",  # exit
            open_url=opened.append,
            copy=copied.append,
        )

        app.run()

        service.get_my_issues.assert_called_with(in_current_cycle=True)
        assert opened == ["https://github.com/acme/app/pull/9"]
        assert copied[0].startswith("Linear Issue: ENG-5")
        assert "Copied to clipboard" in output.getvalue()
        assert "PR #9 (GitHub)" in output.getvalue()
        assert app.views.current is View.MENU

    def test_menu_search(self, service, output, issue):
        service.search_issues.return_value = [issue]
        app, _ = make_app(service, output, "4", "login", "q", "6")
        app.views.show_menu()

        app.run()

        service.search_issues.assert_called_once_with("login")
        assert "ENG-5" in output.getvalue()

    def test_empty_search_stays_on_menu(self, service, output):
        app, _ = make_app(service, output, "4", "")
        app.views.show_menu()

        assert app.step() is True
        assert app.views.current is View.MENU
        service.search_issues.assert_not_called()

    def test_menu_views(self, service, output):
        service.get_cycle_issues.return_value = []
        app, _ = make_app(service, output, "3", "")
        app.views.show_menu()

        app.step()
        app.step()

        assert app.views.current is View.CYCLE
        service.get_cycle_issues.assert_called_once_with()
        assert "No issues found" in output.getvalue()

    def test_create_from_menu(self, service, output, issue):
        service.create_issue.return_value = issue
        app, _ = make_app(service, output, "5", "Write docs", "", "2")
        app.views.show_menu()

        app.step()

        service.create_issue.assert_called_once_with("Write docs", description=None, priority=2)
        assert "Created ENG-5" in output.getvalue()

    def test_create_with_invalid_priority(self, service, output, issue):
        service.create_issue.return_value = issue
        app, _ = make_app(service, output, "5", "Write docs", "Body", "urgent")
        app.views.show_menu()

        app.step()

        service.create_issue.assert_called_once_with("Write docs", description="Body", priority=None)

    def test_load_error_returns_to_menu(self, service, output):
        service.get_my_issues.side_effect = create_api_error("Linear API rate limit exceeded")
        app, _ = make_app(service, output)

        app.step()

        assert app.views.current is View.MENU
        assert "rate limit exceeded" in output.getvalue()

    def test_copy_failure_is_reported(self, service, output, issue):
        def broken_copy(text: str) -> None:
            raise ApplicationError(ErrorCode.CLIPBOARD_UNAVAILABLE, "No clipboard command found")

        app, _ = make_app(service, output, "c", copy=broken_copy)
        app.views.select_issue(issue, View.MINE)

        app.step()

        assert "No clipboard command found" in output.getvalue()
        assert app.views.current is View.ISSUE_DETAIL

    def test_out_of_range_selection_is_ignored(self, service, output):
        app, _ = make_app(service, output, "7")

        app.step()

        assert app.views.current is View.MINE

    def test_superscript_digits_are_ignored(self, service, output, issue):
        opened: list[str] = []
        app, read_input = make_app(
            service,
            output,
            "\u00b2",  # list
            "1",
            "\u00b2",  # detail
            "q",
            "q",
            "\u00b2",  # menu
            "q",
            open_url=opened.append,
        )

        app.run()

        assert opened == []
        assert read_input.answers == []
        assert app.views.current is View.MENU

    def test_superscript_priority_is_ignored(self, service, output, issue):
        service.create_issue.return_value = issue
        app, _ = make_app(service, output, "5", "Write docs", "", "\u00b3")
        app.views.show_menu()

        app.step()

        service.create_issue.assert_called_once_with("Write docs", description=None, priority=None)

    def test_eof_exits(self, service, output):
        app, read_input = make_app(service, output)

        app.run()

        assert read_input.prompts == ["> "]
