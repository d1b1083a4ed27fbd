"""Implementation for the ``gh-export stats`` command."""

from __future__ import annotations

from ..exporter import export_issues
from ..io import say
from ..stats import compute_stats, render_stats
from .context import build_export_options, load_context


def show_stats(args: object) -> None:
    """Print issue counts by state, label, milestone, and assignee."""
    settings, gh = load_context(args)
    options = build_export_options(
        args, settings, state="all", limit=settings.stats_limit
    )
    issues = export_issues(options, gh=gh)
    say(render_stats(compute_stats(issues)))
