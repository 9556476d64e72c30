"""
linear-cli Constants Module

This module provides centralized constants for the linear-cli application.
All magic values and configuration constants are defined here to ensure
consistency across the codebase.
"""

from .api import CacheKeys, GraphQLArguments, HTTPStatusCodes, LinearAPI
from .cli import (
    CLICommands,
    CLIDefaults,
    CLIHelp,
    CLIMessages,
    InteractiveLabels,
)
from .issues import IssueDetail, Priority, StateType, StatusRank, StatusStyle
from .system import Application, Cache, Encoding, FileSystem

__all__ = [
    "Application",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "Cache",
    "CacheKeys",
    "Encoding",
    "FileSystem",
    "GraphQLArguments",
    "HTTPStatusCodes",
    "InteractiveLabels",
    "IssueDetail",
    "LinearAPI",
    "Priority",
    "StateType",
    "StatusRank",
    "StatusStyle",
]
