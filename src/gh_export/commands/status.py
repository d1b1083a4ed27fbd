"""Implementation for the ``gh-export status`` command."""

from __future__ import annotations

from ..io import say
from ..project_status import set_project_status
from .context import load_context, resolve_repo


def move_status(args: object) -> None:
    """Move an issue to another column of its project board.

    Example:
        $ gh-export status 12 "In Progress" --repo org/repo
    """
    settings, gh = load_context(args)
    change = set_project_status(
        gh,
        int(getattr(args, "number")),
        str(getattr(args, "status")),
        repo=resolve_repo(args, settings),
        field_name=getattr(args, "field", None) or settings.status_field,
    )
    say(change.describe())
