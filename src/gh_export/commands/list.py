"""Implementation for the ``gh-export list`` command."""

from __future__ import annotations

from ..exporter import export_issues
from ..io import note, say
from ..models import NormalizedIssue
from .context import build_export_options, load_context


def compact_line(issue: NormalizedIssue) -> str:
    """Return ``#N (O|C) title [labels]``.

    Example:
        >>> issue = NormalizedIssue(
        ...     number=2, title="Crash", state="OPEN", labels=("bug",),
        ...     created_at="", updated_at="", url="",
        ... )
        >>> compact_line(issue)
        '#2 (O) Crash [bug]'
    """
    labels = f" [{', '.join(issue.labels)}]" if issue.labels else ""
    state = "O" if issue.state == "OPEN" else "C"
    return f"#{issue.number} ({state}) {issue.title}{labels}"


def list_issues(args: object) -> None:
    """Print one compact line per issue and the total to stderr."""
    settings, gh = load_context(args)
    options = build_export_options(
        args,
        settings,
        state=getattr(args, "state", None) or "open",
        limit=getattr(args, "limit", None) or settings.list_limit,
    )
    issues = export_issues(options, gh=gh)
    for issue in issues:
        say(compact_line(issue))
    note(f"\nTotal: {len(issues)} issues")
