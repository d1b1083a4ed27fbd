"""Render normalized issues as JSON, a Markdown document, or plain text."""

from __future__ import annotations

import datetime as dt
import json
from typing import Callable, Sequence

from . import log
from .models import FormatOptions, NormalizedIssue, OutputFormat

EXPORT_TITLE = "GitHub Issues Export"
TEXT_RULE_WIDTH = 50
BODY_EXCERPT_LIMIT = 200
ELLIPSIS = "..."

Renderer = Callable[[Sequence[NormalizedIssue], FormatOptions, dt.datetime], str]


def utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def export_timestamp(moment: dt.datetime) -> str:
    """Return an ISO-8601 UTC timestamp with milliseconds.

    Example:
        >>> export_timestamp(dt.datetime(2024, 1, 5, 9, 30, tzinfo=dt.timezone.utc))
        '2024-01-05T09:30:00.000Z'
    """
    utc = moment.astimezone(dt.timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date(value: str) -> str:
    """Format an ISO-8601 timestamp as ``Mon D, YYYY`` in UTC.

    Unparseable values are returned unchanged.

    Example:
        >>> format_date("2024-01-05T23:10:00Z")
        'Jan 5, 2024'
    """
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def truncate_body(body: str, limit: int = BODY_EXCERPT_LIMIT) -> str:
    """Cut ``body`` to ``limit`` characters, marking the cut with an ellipsis.

    Example:
        >>> truncate_body("abcdef", limit=3)
        'abc...'
        >>> truncate_body("abc", limit=3)
        'abc'
    """
    if len(body) <= limit:
        return body
    return f"{body[:limit]}{ELLIPSIS}"


def issue_to_dict(issue: NormalizedIssue, options: FormatOptions) -> dict[str, object]:
    """Return the structured-data record for one issue."""
    record: dict[str, object] = {
        "number": issue.number,
        "title": issue.title,
        "state": issue.state,
        "labels": list(issue.labels),
        "assignees": list(issue.assignees),
        "milestone": issue.milestone,
        "url": issue.url,
        "createdAt": issue.created_at,
        "updatedAt": issue.updated_at,
    }
    if issue.project_status:
        record["projectStatus"] = issue.project_status
    if not options.titles_only:
        record["body"] = issue.body
    if options.include_comments:
        record["comments"] = list(issue.comments)
    return record


def render_json(
    issues: Sequence[NormalizedIssue],
    options: FormatOptions,
    now: dt.datetime,
) -> str:
    del now
    payload = [issue_to_dict(issue, options) for issue in issues]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _render_markdown_issue(issue: NormalizedIssue, options: FormatOptions) -> str:
    lines = [f"### #{issue.number} {issue.title}", "", f"**URL:** {issue.url}"]
    if issue.labels:
        quoted = " ".join(f"`{label}`" for label in issue.labels)
        lines.append(f"**Labels:** {quoted}")
    if issue.assignees:
        handles = " ".join(f"@{login}" for login in issue.assignees)
        lines.append(f"**Assignees:** {handles}")
    if issue.milestone:
        lines.append(f"**Milestone:** [{issue.milestone}]")
    lines.append(f"**Created:** {format_date(issue.created_at)}")
    lines.append(f"**Updated:** {format_date(issue.updated_at)}")
    if not options.titles_only and issue.body:
        lines.extend(["", "**Description:**", "", issue.body])
    lines.extend(["", "---", "", ""])
    return "\n".join(lines)


def render_markdown(
    issues: Sequence[NormalizedIssue],
    options: FormatOptions,
    now: dt.datetime,
) -> str:
    open_issues = [issue for issue in issues if issue.state == "OPEN"]
    closed_issues = [issue for issue in issues if issue.state == "CLOSED"]
    parts = [
        f"# {EXPORT_TITLE}\n\n",
        f"**Total issues:** {len(issues)}\n",
        f"**Export date:** {export_timestamp(now)}\n\n",
    ]
    for heading, group in (("Open Issues", open_issues), ("Closed Issues", closed_issues)):
        if not group:
            continue
        parts.append(f"## {heading} ({len(group)})\n\n")
        parts.extend(_render_markdown_issue(issue, options) for issue in group)
    return "".join(parts)


def render_text(
    issues: Sequence[NormalizedIssue],
    options: FormatOptions,
    now: dt.datetime,
) -> str:
    lines = [
        EXPORT_TITLE,
        "=" * TEXT_RULE_WIDTH,
        f"Total: {len(issues)} issues",
        f"Date: {export_timestamp(now)}",
        "",
    ]
    for issue in issues:
        state = "[OPEN]" if issue.state == "OPEN" else "[CLOSED]"
        labels = f" [{', '.join(issue.labels)}]" if issue.labels else ""
        lines.append(f"#{issue.number} {state} {issue.title}{labels}")
        lines.append(f"  URL: {issue.url}")
        if issue.assignees:
            lines.append(f"  Assignees: {', '.join(issue.assignees)}")
        if issue.milestone:
            lines.append(f"  Milestone: {issue.milestone}")
        if not options.titles_only and issue.body:
            lines.append(f"  Description: {truncate_body(issue.body)}")
        lines.append("")
    return "\n".join(lines) + "\n"


RENDERERS: dict[OutputFormat, Renderer] = {
    OutputFormat.JSON: render_json,
    OutputFormat.MARKDOWN: render_markdown,
    OutputFormat.TEXT: render_text,
}


def format_output(
    issues: Sequence[NormalizedIssue],
    output_format: str | OutputFormat | None,
    options: FormatOptions | None = None,
    *,
    now: dt.datetime | None = None,
) -> str:
    """Render ``issues`` with the renderer named by ``output_format``.

    Unknown selectors render as Markdown.
    """
    selected = OutputFormat.parse(output_format)
    if not isinstance(output_format, OutputFormat) and selected.value != output_format:
        log.debug(f"unknown format {output_format!r}; using {selected.value}")
    renderer = RENDERERS[selected]
    return renderer(issues, options or FormatOptions(), now or utc_now())
