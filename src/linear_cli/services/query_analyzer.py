"""Static checks for GraphQL documents defined in Python source.

The analyzer parses modules with ``ast``, resolves module-level string
constants whose names end in ``_QUERY`` (including ``+`` concatenation of
other module-level strings) and runs the GraphQL variable rules on them.
It also flags ``raw_request(...)`` calls whose literal variables dict has
a ``filter`` key without ``includeArchived``.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from linear_cli.services import graphql_validator
from linear_cli.shared.constants import Encoding, GraphQLArguments
from linear_cli.shared.errors import ErrorCode, ErrorContext, InfrastructureError

logger = logging.getLogger(__name__)

QUERY_CONSTANT_SUFFIX = "_QUERY"
RAW_REQUEST_METHOD = "raw_request"
SKIPPED_DIRECTORIES = frozenset({"__pycache__", ".venv", "venv", ".git", "build", "dist"})


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """A problem found at ``file:line``."""

    file: str
    line: int
    message: str
    severity: Severity

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"


def _resolve_string(node: ast.expr, constants: dict[str, str]) -> str | None:
    """Evaluate a string literal, a known constant or a ``+`` chain of those."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    if isinstance(node, ast.Name):
        return constants.get(node.id)
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Add):
        left = _resolve_string(node.left, constants)
        right = _resolve_string(node.right, constants)
        if left is None or right is None:
            return None
        return left + right
    return None


def _assignment_targets(node: ast.stmt) -> tuple[list[str], ast.expr | None]:
    if isinstance(node, ast.Assign):
        names = [t.id for t in node.targets if isinstance(t, ast.Name)]
        return names, node.value
    if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        return [node.target.id], node.value
    return [], None


def _is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name.endswith("_test.py")


@dataclass
class QuerySourceAnalyzer:
    """Collects findings over any number of files.

    Example:
        >>> analyzer = QuerySourceAnalyzer()
        >>> analyzer.analyze_paths([Path("src")])
        >>> analyzer.has_errors
        False
    """

    findings: list[Finding] = field(default_factory=list)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(f.severity is Severity.ERROR for f in self.findings)

    def _add(self, file: str, line: int, message: str, severity: Severity) -> None:
        self.findings.append(Finding(file, line, message, severity))

    def analyze_source(self, source: str, file: str = "<string>") -> None:
        """Analyze one module's source text.

        Raises:
            SyntaxError: the source is not valid Python
        """
        tree = ast.parse(source, filename=file)

        constants: dict[str, str] = {}
        for node in tree.body:
            names, value = _assignment_targets(node)
            if not names or value is None:
                continue

            text = _resolve_string(value, constants)
            for name in names:
                if text is not None:
                    constants[name] = text

                if not name.endswith(QUERY_CONSTANT_SUFFIX):
                    continue
                if text is None:
                    self._add(
                        file,
                        node.lineno,
                        f"{name} could not be resolved to a string and was not checked",
                        Severity.WARNING,
                    )
                    continue
                self._check_query(file, node.lineno, text)

        for node in ast.walk(tree):
            if isinstance(node, ast.Call):
                self._check_raw_request_call(file, node)

    def _check_query(self, file: str, line: int, query_text: str) -> None:
        declared = graphql_validator.extract_declared_parameters(query_text)
        # Documents without a parameter list (mutations included) are skipped
        if not declared:
            return

        query_name = graphql_validator.extract_query_name(query_text)
        result = graphql_validator.validate(query_name, query_text, dev_mode=False)
        for message in result.errors:
            self._add(file, line, message, Severity.ERROR)
        for message in result.warnings:
            self._add(file, line, message, Severity.WARNING)

        body = "\n".join(query_text.split("\n")[1:])
        declares_archived = any(
            name.lower() == GraphQLArguments.INCLUDE_ARCHIVED.lower() for name in declared
        )
        if (
            declares_archived
            and "issues(" in body
            and "includeArchived: $includeArchived" not in body
        ):
            self._add(
                file,
                line,
                f"Query '{query_name}': $includeArchived parameter is defined "
                "but not passed to the issues field",
                Severity.WARNING,
            )

    def _check_raw_request_call(self, file: str, node: ast.Call) -> None:
        func = node.func
        if not (isinstance(func, ast.Attribute) and func.attr == RAW_REQUEST_METHOD):
            return
        if len(node.args) < 2 or not isinstance(node.args[1], ast.Dict):
            return

        keys = {
            key.value.lower()
            for key in node.args[1].keys
            if isinstance(key, ast.Constant) and isinstance(key.value, str)
        }
        if (
            GraphQLArguments.FILTER.lower() in keys
            and GraphQLArguments.INCLUDE_ARCHIVED.lower() not in keys
        ):
            self._add(
                file,
                node.lineno,
                "raw_request call has filter but missing includeArchived",
                Severity.ERROR,
            )

    def analyze_file(self, path: Path) -> None:
        """Analyze one Python file.

        Raises:
            InfrastructureError: the file cannot be read or parsed
        """
        try:
            source = path.read_text(encoding=Encoding.DEFAULT)
            self.analyze_source(source, str(path))
        except OSError as e:
            raise InfrastructureError(
                ErrorCode.FILE_READ_ERROR,
                f"Cannot read {path}: {e}",
                ErrorContext(file_path=str(path), operation="analyze_file"),
                original_error=e,
            ) from e
        except SyntaxError as e:
            raise InfrastructureError(
                ErrorCode.FILE_READ_ERROR,
                f"Cannot parse {path}: {e.msg} (line {e.lineno})",
                ErrorContext(file_path=str(path), operation="analyze_file"),
                original_error=e,
            ) from e

    def iter_source_files(self, paths: Iterable[Path]) -> Iterable[Path]:
        """Python files under ``paths``; test modules are skipped in directories."""
        for path in paths:
            if path.is_file():
                yield path
                continue
            if not path.exists():
                raise InfrastructureError(
                    ErrorCode.FILE_NOT_FOUND,
                    f"Path not found: {path}",
                    ErrorContext(file_path=str(path), operation="analyze_paths"),
                )
            for candidate in sorted(path.rglob("*.py")):
                if SKIPPED_DIRECTORIES.intersection(candidate.parts):
                    continue
                if _is_test_file(candidate):
                    continue
                yield candidate

    def analyze_paths(self, paths: Iterable[Path]) -> int:
        """Analyze every Python file under ``paths``; return the file count."""
        count = 0
        for source_file in self.iter_source_files(paths):
            logger.debug("Analyzing %s", source_file)
            self.analyze_file(source_file)
            count += 1
        return count


__all__ = [
    "Finding",
    "QuerySourceAnalyzer",
    "Severity",
]
