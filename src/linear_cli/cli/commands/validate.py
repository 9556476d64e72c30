"""``linear validate-queries``: static check of GraphQL query constants."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

import linear_cli
from linear_cli.cli.common.context import is_json_output
from linear_cli.cli.common.error_handler import handle_cli_errors
from linear_cli.cli.json_formatter import format_json_output, write_json_output
from linear_cli.services.query_analyzer import Finding, QuerySourceAnalyzer
from linear_cli.shared.constants import CLIDefaults, CLIHelp, CLIMessages

console = Console()


def default_source_paths() -> list[Path]:
    """The installed linear_cli package."""
    return [Path(linear_cli.__file__).parent]


def _print_findings(title: str, style: str, findings: list[Finding]) -> None:
    console.print(f"[{style}]{title}[/{style}]")
    for finding in findings:
        console.print(f"  {escape(finding.location)}")
        console.print(f"    {escape(finding.message)}\n")


def print_report(analyzer: QuerySourceAnalyzer) -> None:
    console.print(f"{CLIMessages.Info.REPORT_TITLE}\n")

    if not analyzer.findings:
        console.print(CLIMessages.Success.QUERIES_VALID)
        return

    if analyzer.errors:
        _print_findings("❌ Errors:", "red", analyzer.errors)
    if analyzer.warnings:
        _print_findings("⚠️  Warnings:", "yellow", analyzer.warnings)

    console.print(
        CLIMessages.Info.REPORT_SUMMARY.format(
            errors=len(analyzer.errors),
            warnings=len(analyzer.warnings),
        )
    )


@handle_cli_errors("validate-queries")
def validate_queries_command(
    paths: Optional[List[Path]] = typer.Argument(None, help=CLIHelp.VALIDATE_PATHS_HELP),
) -> None:
    """
    Check GraphQL query constants for filter/includeArchived pairing.

    Every module-level ``*_QUERY`` string is checked: a ``$filter``
    parameter needs an ``$includeArchived`` parameter, and declared
    parameters should be used. ``raw_request`` calls passing a literal
    variables dict are checked the same way. Exits with 1 on errors.

    Examples:
        # Check the installed package
        linear validate-queries

        # Check your own modules
        linear validate-queries src/ scripts/report.py
    """
    analyzer = QuerySourceAnalyzer()
    analyzer.analyze_paths(paths or default_source_paths())

    if is_json_output():
        write_json_output(
            format_json_output(
                success=not analyzer.has_errors,
                command="validate-queries",
                data={"findings": [asdict(finding) for finding in analyzer.findings]},
                errors=[f"{f.location}: {f.message}" for f in analyzer.errors],
                warnings=[f"{f.location}: {f.message}" for f in analyzer.warnings],
            )
        )
    else:
        print_report(analyzer)

    if analyzer.has_errors:
        raise typer.Exit(CLIDefaults.EXIT_ERROR)
