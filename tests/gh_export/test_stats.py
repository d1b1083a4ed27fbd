from __future__ import annotations

from gh_export.models import NormalizedIssue
from gh_export.stats import NO_MILESTONE, compute_stats, render_stats


def make_issue(number: int, state: str = "OPEN", **overrides: object) -> NormalizedIssue:
    data: dict[str, object] = {
        "number": number,
        "title": f"Issue {number}",
        "state": state,
        "created_at": "2024-01-05T10:00:00Z",
        "updated_at": "2024-01-05T10:00:00Z",
        "url": f"https://x/{number}",
    }
    data.update(overrides)
    return NormalizedIssue(**data)


def sample_issues() -> list[NormalizedIssue]:
    return [
        make_issue(1, labels=("bug", "ui"), assignees=("alice",), milestone="v1"),
        make_issue(2, "CLOSED", labels=("bug",), assignees=("bob", "alice")),
        make_issue(3, labels=("docs",), milestone="v1"),
        make_issue(4, "CLOSED"),
    ]


def test_compute_stats_counts_everything() -> None:
    stats = compute_stats(sample_issues())

    assert stats.total == 4
    assert stats.open == 2
    assert stats.closed == 2
    assert dict(stats.by_label) == {"bug": 2, "ui": 1, "docs": 1}
    assert dict(stats.by_assignee) == {"alice": 2, "bob": 1}
    assert dict(stats.by_milestone) == {"v1": 2, NO_MILESTONE: 2}


def test_render_stats_sorts_by_count_keeping_first_seen_ties() -> None:
    output = render_stats(compute_stats(sample_issues()))

    assert output == "\n".join(
        [
            "",
            "=== GitHub Issues Statistics ===",
            "",
            "Total: 4",
            "Open: 2",
            "Closed: 2",
            "",
            "By Label:",
            "  bug: 2",
            "  ui: 1",
            "  docs: 1",
            "",
            "By Milestone:",
            "  v1: 2",
            f"  {NO_MILESTONE}: 2",
            "",
            "By Assignee:",
            "  alice: 2",
            "  bob: 1",
            "",
        ]
    )


def test_render_stats_skips_empty_sections() -> None:
    output = render_stats(compute_stats([make_issue(1)]))

    assert "By Label:" not in output
    assert "By Assignee:" not in output
    assert f"  {NO_MILESTONE}: 1" in output


def test_render_stats_for_no_issues() -> None:
    output = render_stats(compute_stats([]))

    assert "Total: 0" in output
    assert "By Milestone:" not in output
