"""Issue statistics: counts by state, label, assignee, and milestone."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from .models import NormalizedIssue

NO_MILESTONE = "No milestone"
STATS_TITLE = "=== GitHub Issues Statistics ==="


@dataclass
class IssueStats:
    """Aggregate counts for one command invocation.

    Counters keep first-seen insertion order, which breaks ties when sorted.
    """

    total: int = 0
    open: int = 0
    closed: int = 0
    by_label: Counter[str] = field(default_factory=Counter)
    by_assignee: Counter[str] = field(default_factory=Counter)
    by_milestone: Counter[str] = field(default_factory=Counter)


def compute_stats(issues: Iterable[NormalizedIssue]) -> IssueStats:
    """Count issues in a single pass.

    Example:
        >>> compute_stats([]).total
        0
    """
    stats = IssueStats()
    for issue in issues:
        stats.total += 1
        if issue.state == "OPEN":
            stats.open += 1
        elif issue.state == "CLOSED":
            stats.closed += 1
        stats.by_label.update(issue.labels)
        stats.by_assignee.update(issue.assignees)
        stats.by_milestone[issue.milestone or NO_MILESTONE] += 1
    return stats


def _section(title: str, counts: Counter[str]) -> list[str]:
    if not counts:
        return []
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ["", f"{title}:", *(f"  {key}: {count}" for key, count in ordered)]


def render_stats(stats: IssueStats) -> str:
    lines = [
        "",
        STATS_TITLE,
        "",
        f"Total: {stats.total}",
        f"Open: {stats.open}",
        f"Closed: {stats.closed}",
    ]
    lines.extend(_section("By Label", stats.by_label))
    lines.extend(_section("By Milestone", stats.by_milestone))
    lines.extend(_section("By Assignee", stats.by_assignee))
    lines.append("")
    return "\n".join(lines)
