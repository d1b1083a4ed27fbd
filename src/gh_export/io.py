"""Console I/O helpers for user-facing messages."""

from __future__ import annotations

import sys
from pathlib import Path


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def note(message: str) -> None:
    """Print a status message to stderr, keeping stdout for command output."""
    print(message, file=sys.stderr)


def die(message: str, code: int = 1) -> None:
    """Print an error message and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.

    Returns:
        None. Exits the process via ``sys.exit``.
    """
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(code)


def write_text(path: Path, content: str) -> Path:
    """Write ``content`` to ``path`` and return the resolved location.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     write_text(Path(tmp) / "issues.md", "ok").read_text(encoding="utf-8")
        'ok'
    """
    resolved = path.expanduser().resolve()
    resolved.write_text(content, encoding="utf-8")
    return resolved
