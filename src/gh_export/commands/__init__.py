"""Command implementations exposed by the gh-export CLI."""

from .export import run_export
from .issues import (
    assign_issue,
    close_issue,
    comment_issue,
    label_issue,
    reopen_issue,
    view_issue,
)
from .list import list_issues
from .stats import show_stats
from .status import move_status

__all__ = [
    "assign_issue",
    "close_issue",
    "comment_issue",
    "label_issue",
    "list_issues",
    "move_status",
    "reopen_issue",
    "run_export",
    "show_stats",
    "view_issue",
]
