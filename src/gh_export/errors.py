"""Failure contracts for gh-export.

Operations return plain values on success and raise ``GhExportError`` on
expected failures: a missing or unauthenticated ``gh``, a failed export, a
failed mutation, or an invalid config file. Programmer bugs raise normal
exceptions. The CLI layer catches ``GhExportError`` once and reports it.
"""

from __future__ import annotations

from typing import Literal

ErrorCode = Literal[
    "tool_not_found",
    "not_authenticated",
    "export_failed",
    "command_failed",
    "project_status_failed",
    "config_invalid",
    "invalid_option",
]

GH_INSTALL_HINT = "Install it from https://cli.github.com/"
GH_AUTH_HINT = "Run: gh auth login"


class GhExportError(Exception):
    """Expected failure carrying a code and an optional recovery hint."""

    code: ErrorCode = "command_failed"

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__(message)
        self.recovery_hint = recovery_hint

    def user_message(self) -> str:
        """Return the message with the recovery hint appended.

        Example:
            >>> ToolNotFoundError("gh is missing.").user_message()
            'gh is missing. Install it from https://cli.github.com/'
        """
        message = str(self)
        if self.recovery_hint:
            return f"{message} {self.recovery_hint}"
        return message


class ToolNotFoundError(GhExportError):
    """The gh executable could not be started."""

    code: ErrorCode = "tool_not_found"

    def __init__(self, message: str, *, recovery_hint: str | None = GH_INSTALL_HINT) -> None:
        super().__init__(message, recovery_hint=recovery_hint)


class NotAuthenticatedError(GhExportError):
    """gh reported that no account is logged in."""

    code: ErrorCode = "not_authenticated"

    def __init__(self, message: str, *, recovery_hint: str | None = GH_AUTH_HINT) -> None:
        super().__init__(message, recovery_hint=recovery_hint)


class ExportFailedError(GhExportError):
    """Listing issues failed or returned output that could not be parsed."""

    code: ErrorCode = "export_failed"


class CommandFailedError(GhExportError):
    """A gh mutation or query command exited non-zero."""

    code: ErrorCode = "command_failed"


class ProjectStatusError(GhExportError):
    """A project board, status field, or status option could not be resolved."""

    code: ErrorCode = "project_status_failed"


class ConfigError(GhExportError):
    """The user config file is unreadable or fails validation."""

    code: ErrorCode = "config_invalid"


class InvalidOptionError(GhExportError):
    """Command-line options failed validation."""

    code: ErrorCode = "invalid_option"
