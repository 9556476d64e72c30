"""Interactive terminal mode.

A prompt-driven loop over a small view stack: a menu, issue lists (my
issues in the current cycle, all my issues, the team cycle, search results)
and an issue detail view. ``q`` (or Esc) goes back one level; from the menu
it exits.
"""

from __future__ import annotations

import logging
import webbrowser
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from prompt_toolkit import prompt
from rich.console import Console
from rich.markup import escape

from linear_cli.cli.rendering import issue_detail, issue_table
from linear_cli.services.linear_service import LinearService
from linear_cli.services.models import Issue
from linear_cli.shared.constants import CLIMessages, InteractiveLabels, IssueDetail, Priority
from linear_cli.shared.errors import LinearCliError
from linear_cli.utils.clipboard import copy_to_clipboard
from linear_cli.utils.format import format_issue_for_clipboard, issue_links
from linear_cli.utils.sort import sort_issues_by_status

logger = logging.getLogger(__name__)


class View(str, Enum):
    MENU = "menu"
    MINE = "mine"
    MINE_ALL = "mine-all"
    CYCLE = "cycle"
    SEARCH = "search"
    ISSUE_DETAIL = "issue-detail"


LIST_VIEWS = frozenset({View.MINE, View.MINE_ALL, View.CYCLE, View.SEARCH})


@dataclass
class ViewStack:
    """Current view, the view ``go_back`` returns to and the open issue.

    Starts on ``mine`` with the menu behind it.
    """

    current: View = View.MINE
    previous: View | None = View.MENU
    selected_issue: Issue | None = None

    def show_menu(self) -> None:
        self.current = View.MENU
        self.previous = None
        self.selected_issue = None

    def select_view(self, view: View) -> None:
        self.current = view
        self.previous = View.MENU

    def select_issue(self, issue: Issue, from_view: View) -> None:
        self.current = View.ISSUE_DETAIL
        self.previous = from_view
        self.selected_issue = issue

    def go_back(self) -> None:
        """Detail returns to the list it was opened from; a list returns to the menu."""
        if self.current is View.ISSUE_DETAIL and self.previous is not None:
            self.current = self.previous
            self.previous = View.MENU
            self.selected_issue = None
        elif self.current is not View.MENU:
            self.show_menu()


MENU_ITEMS: tuple[tuple[str, str], ...] = (
    (InteractiveLabels.MENU_MINE, View.MINE.value),
    (InteractiveLabels.MENU_MINE_ALL, View.MINE_ALL.value),
    (InteractiveLabels.MENU_CYCLE, View.CYCLE.value),
    (InteractiveLabels.MENU_SEARCH, View.SEARCH.value),
    (InteractiveLabels.MENU_CREATE, "create"),
    (InteractiveLabels.MENU_EXIT, "exit"),
)


class InteractiveApp:
    """Prompt loop driving a ViewStack.

    Args:
        service: Source of issues
        console: Rich console for output
        read_input: Prompt function (prompt_toolkit's ``prompt`` by default)
        open_url: Opens a link (``webbrowser.open`` by default)
        copy: Copies text to the clipboard
    """

    def __init__(
        self,
        service: LinearService,
        console: Console | None = None,
        read_input: Callable[[str], str] | None = None,
        open_url: Callable[[str], object] | None = None,
        copy: Callable[[str], None] | None = None,
    ) -> None:
        self.service = service
        self.console = console or Console()
        self.views = ViewStack()
        self.search_term = ""
        self._read_input = read_input or prompt
        self._open_url = open_url or webbrowser.open
        self._copy = copy or copy_to_clipboard
        self._issues: list[Issue] = []

    def _ask(self, message: str) -> str:
        return self._read_input(message).strip()

    def run(self) -> None:
        """Run until the user exits from the menu or sends EOF/Ctrl-C."""
        try:
            while self.step():
                pass
        except (EOFError, KeyboardInterrupt):
            logger.debug("Interactive mode closed by user")

    def step(self) -> bool:
        """Render the current view and handle one input. False means exit."""
        view = self.views.current
        if view is View.MENU:
            return self._menu_step()
        if view is View.ISSUE_DETAIL:
            self._detail_step()
            return True
        self._list_step(view)
        return True

    def _menu_step(self) -> bool:
        self.console.print(f"\n[dim]{InteractiveLabels.MENU_TITLE}[/dim]")
        for number, (label, _) in enumerate(MENU_ITEMS, start=1):
            self.console.print(f"  [cyan]{number}[/cyan] {label}")

        choice = self._ask(InteractiveLabels.SELECTION_PROMPT)
        if choice in InteractiveLabels.QUIT_KEYS:
            return False
        if not choice.isdecimal() or not 1 <= int(choice) <= len(MENU_ITEMS):
            return True

        action = MENU_ITEMS[int(choice) - 1][1]
        if action == "exit":
            return False
        if action == "create":
            self._create_issue()
            return True
        if action == View.SEARCH.value:
            self.search_term = self._ask(InteractiveLabels.SEARCH_PROMPT)
            if not self.search_term:
                return True
        self.views.select_view(View(action))
        return True

    def _load_issues(self, view: View) -> list[Issue]:
        if view is View.MINE:
            issues = self.service.get_my_issues(in_current_cycle=True)
        elif view is View.MINE_ALL:
            issues = self.service.get_my_issues()
        elif view is View.CYCLE:
            issues = self.service.get_cycle_issues()
        else:
            issues = self.service.search_issues(self.search_term)
        return sort_issues_by_status(issues)

    def _list_step(self, view: View) -> None:
        try:
            with self.console.status(CLIMessages.Info.LOADING, spinner="dots"):
                self._issues = self._load_issues(view)
        except LinearCliError as e:
            self.console.print(f"[red]❌ Error: {escape(e.message)}[/red]")
            self.views.go_back()
            return

        if self._issues:
            self.console.print(issue_table(self._issues, numbered=True))
        else:
            self.console.print(f"[dim]{CLIMessages.Info.NO_ISSUES}[/dim]")
        self.console.print(f"[dim]{InteractiveLabels.LIST_HINT}[/dim]")

        choice = self._ask(InteractiveLabels.SELECTION_PROMPT)
        if choice in InteractiveLabels.QUIT_KEYS:
            self.views.go_back()
            return
        if choice.isdecimal() and 1 <= int(choice) <= len(self._issues):
            self.views.select_issue(self._issues[int(choice) - 1], view)

    def _detail_step(self) -> None:
        issue = self.views.selected_issue
        if issue is None:
            self.views.go_back()
            return

        self.console.print(issue_detail(issue))
        choice = self._ask(InteractiveLabels.SELECTION_PROMPT)

        if choice in InteractiveLabels.QUIT_KEYS:
            self.views.go_back()
        elif choice == "c":
            self._copy_issue(issue)
        elif len(choice) == 1 and choice.isdecimal() and choice != "0":
            links = issue_links(issue)[: IssueDetail.MAX_LINK_SHORTCUTS]
            index = int(choice) - 1
            if index < len(links):
                self._open_url(links[index].url)

    def _copy_issue(self, issue: Issue) -> None:
        try:
            self._copy(format_issue_for_clipboard(issue))
        except LinearCliError as e:
            self.console.print(f"[red]Error: {escape(e.message)}[/red]")
            return
        self.console.print(InteractiveLabels.COPIED)

    def _create_issue(self) -> None:
        title = self._ask(InteractiveLabels.TITLE_PROMPT)
        if not title:
            return
        description = self._ask(InteractiveLabels.DESCRIPTION_PROMPT) or None
        priority_text = self._ask(InteractiveLabels.PRIORITY_PROMPT)
        priority = (
            int(priority_text)
            if priority_text.isdecimal() and Priority.URGENT <= int(priority_text) <= Priority.NONE
            else None
        )

        try:
            with self.console.status(CLIMessages.Info.CREATING, spinner="dots"):
                issue = self.service.create_issue(title, description=description, priority=priority)
        except LinearCliError as e:
            self.console.print(f"[red]❌ Error: {escape(e.message)}[/red]")
            return

        self.console.print(
            CLIMessages.Success.ISSUE_CREATED.format(
                identifier=issue.identifier,
                title=escape(issue.title),
            )
        )
