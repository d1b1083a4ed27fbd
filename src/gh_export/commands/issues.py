"""Implementations for the single-issue commands: close, reopen, assign,
label, comment, and view."""

from __future__ import annotations

from .. import actions
from ..io import say
from .context import load_context, resolve_repo


def _report(output: str, fallback: str) -> None:
    text = output.strip()
    say(text or fallback)


def close_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    output = actions.close_issue(
        gh,
        number,
        repo=resolve_repo(args, settings),
        comment=getattr(args, "comment", None),
        reason=getattr(args, "reason", None),
    )
    _report(output, f"Closed #{number}")


def reopen_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    output = actions.reopen_issue(
        gh,
        number,
        repo=resolve_repo(args, settings),
        comment=getattr(args, "comment", None),
    )
    _report(output, f"Reopened #{number}")


def assign_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    users = list(getattr(args, "assignees", None) or [])
    remove = bool(getattr(args, "remove", False))
    output = actions.assign_issue(
        gh, number, users, repo=resolve_repo(args, settings), remove=remove
    )
    verb = "Unassigned" if remove else "Assigned"
    handles = ", ".join(f"@{user}" for user in users)
    _report(output, f"{verb} {handles} on #{number}")


def label_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    labels = list(getattr(args, "labels", None) or [])
    remove = bool(getattr(args, "remove", False))
    output = actions.label_issue(
        gh, number, labels, repo=resolve_repo(args, settings), remove=remove
    )
    verb = "Removed" if remove else "Added"
    _report(output, f"{verb} labels {', '.join(labels)} on #{number}")


def comment_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    output = actions.comment_issue(
        gh, number, str(getattr(args, "body")), repo=resolve_repo(args, settings)
    )
    _report(output, f"Commented on #{number}")


def view_issue(args: object) -> None:
    settings, gh = load_context(args)
    number = int(getattr(args, "number"))
    output = actions.view_issue(
        gh,
        number,
        repo=resolve_repo(args, settings),
        comments=bool(getattr(args, "comments", False)),
    )
    say(output.rstrip("\n"))
