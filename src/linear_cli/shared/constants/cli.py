"""
CLI Configuration Constants

This module contains all constants related to command-line interface
configuration, default values, and user interaction messages.
"""

from .system import Application


class CLICommands:
    """Command and sub-command names."""

    ISSUE = "issue"
    CONFIG = "config"
    VALIDATE_QUERIES = "validate-queries"

    # issue sub-commands
    LIST = "list"
    MINE = "mine"
    CYCLE = "cycle"
    SEARCH = "search"
    CREATE = "create"

    # config sub-commands
    SET_TOKEN = "set-token"
    SHOW = "show"
    SET_TEAM = "set-team"
    SET_PROJECT = "set-project"


class CLIDefaults:
    """Default values and exit codes."""

    VERSION = Application.VERSION
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130
    TOKEN_VISIBLE_CHARS = 4


class CLIHelp:
    """Help texts."""

    APP_NAME = "linear"
    APP_DESCRIPTION = "Linear CLI - manage Linear issues from the terminal"
    APP_STYLE = "rich"
    VERSION_TEXT = "Linear CLI v{version}"

    ISSUE_HELP = "Issue-related commands"
    CONFIG_HELP = "Configuration commands"

    LIST_HELP = "Display issue list"
    LIST_STATUS_HELP = "Filter by status name (e.g. Todo, In Progress, Done)"
    LIST_ASSIGNEE_HELP = "Filter by assignee ID"
    LIST_PROJECT_HELP = "Filter by project ID"

    MINE_HELP = "Display issues assigned to you"
    MINE_CYCLE_HELP = "Only issues in the current cycle"
    MINE_COMPLETED_HELP = "Include completed issues"

    CYCLE_HELP = "Display issues in the team's current cycle"
    SEARCH_HELP = "Search issues by text"
    SEARCH_QUERY_HELP = "Search text"

    CREATE_HELP = "Create new issue"
    CREATE_TITLE_HELP = "Issue title"
    CREATE_DESCRIPTION_HELP = "Issue description"
    CREATE_PRIORITY_HELP = "Priority (0=Urgent, 1=High, 2=Medium, 3=Low, 4=None)"
    CREATE_PROJECT_HELP = "Project ID"
    CREATE_TEAM_HELP = "Team ID"

    SET_TOKEN_HELP = "Save the Linear API token"
    SET_TOKEN_ARG_HELP = "Linear API token"
    SHOW_HELP = "Show current configuration"
    SET_TEAM_HELP = "Set the default team ID"
    SET_PROJECT_HELP = "Set the default project ID"

    VALIDATE_QUERIES_HELP = (
        "Check GraphQL query constants for missing includeArchived arguments"
    )
    VALIDATE_PATHS_HELP = (
        "Python files or directories to scan (default: the installed linear_cli package)"
    )


class CLIMessages:
    """CLI message templates."""

    class Error:
        """Error message templates."""

        TOKEN_NOT_CONFIGURED = (
            "Linear API token is not configured. Please run `linear config set-token`."
        )
        INTERACTIVE_REQUIRES_TTY = (
            "Interactive mode is only available in a TTY. Please specify a command."
        )

    class Success:
        """Success message templates."""

        TOKEN_SAVED = "[green]✅ Linear API token saved[/green]"
        TEAM_SAVED = "[green]✅ Default team set to {team_id}[/green]"
        PROJECT_SAVED = "[green]✅ Default project set to {project_id}[/green]"
        ISSUE_CREATED = "[green]✅ Created {identifier}: {title}[/green]"
        QUERIES_VALID = "[green]✅ All GraphQL queries are properly configured![/green]"

    class Info:
        """Info message templates."""

        TOKEN_MASKED = "Linear API token: ****{suffix}"
        TOKEN_MISSING = "Linear API token is not set"
        NO_ISSUES = "No issues found"
        NO_CYCLE = "No active cycle found"
        LOADING = "Loading issues..."
        CREATING = "Creating issue..."
        SEARCHING = "Searching..."
        REPORT_TITLE = "🔍 GraphQL Query Validation Report"
        REPORT_SUMMARY = "Errors: {errors}  Warnings: {warnings}"


class InteractiveLabels:
    """Labels and hints for the interactive terminal UI."""

    MENU_TITLE = "What would you like to do? (enter a number, q to quit)"
    MENU_MINE = "📋 My issues (current cycle)"
    MENU_MINE_ALL = "📁 All my issues"
    MENU_CYCLE = "🔄 Team cycle issues"
    MENU_SEARCH = "🔍 Search issues"
    MENU_CREATE = "➕ Create issue"
    MENU_EXIT = "🚪 Exit"

    LIST_HINT = "Enter a number to view details, q to go back"
    DETAIL_HINT = "1-9 open link · c copy to clipboard · q back"
    SEARCH_PROMPT = "Search: "
    TITLE_PROMPT = "Title: "
    DESCRIPTION_PROMPT = "Description (optional): "
    PRIORITY_PROMPT = "Priority (0=Urgent, 1=High, 2=Medium, 3=Low, 4=None, optional): "
    SELECTION_PROMPT = "> "

    COPIED = "[green]✓ Copied to clipboard![/green]"
    LINKS_TITLE = "Links:"
    DESCRIPTION_TITLE = "Description:"
    QUIT_KEYS = ("q", "Q", "\x1b")
