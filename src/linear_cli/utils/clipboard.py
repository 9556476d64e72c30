"""System clipboard access through the platform's copy command."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

from linear_cli.shared.constants import Encoding
from linear_cli.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

# Tried in order; the first one found on PATH is used
_CLIPBOARD_COMMANDS: dict[str, list[list[str]]] = {
    "darwin": [["pbcopy"]],
    "win32": [["clip"]],
    "linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}


def _find_command(platform: str) -> list[str] | None:
    for command in _CLIPBOARD_COMMANDS.get(platform, _CLIPBOARD_COMMANDS["linux"]):
        if shutil.which(command[0]):
            return command
    return None


def copy_to_clipboard(text: str, platform: str | None = None) -> None:
    """Copy ``text`` to the system clipboard.

    Raises:
        ApplicationError: no clipboard command is available or it failed
    """
    platform = platform or sys.platform
    command = _find_command(platform)
    if command is None:
        raise ApplicationError(
            ErrorCode.CLIPBOARD_UNAVAILABLE,
            "No clipboard command found (install pbcopy, wl-copy, xclip or xsel)",
            ErrorContext(operation="copy_to_clipboard", additional_data={"platform": platform}),
        )

    try:
        subprocess.run(  # noqa: S603
            command,
            input=text.encode(Encoding.DEFAULT),
            check=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise ApplicationError(
            ErrorCode.CLIPBOARD_UNAVAILABLE,
            f"Failed to copy to clipboard: {e}",
            ErrorContext(operation="copy_to_clipboard", additional_data={"command": command[0]}),
            original_error=e,
        ) from e

    logger.debug("Copied %d characters with %s", len(text), command[0])
