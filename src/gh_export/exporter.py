"""Export issues through ``gh issue list`` and normalize the records."""

from __future__ import annotations

from . import log
from .errors import ExportFailedError
from .exec import (
    CommandExecutionError,
    CommandParseError,
    CommandResult,
    CommandSpec,
    parse_json_model_list,
)
from .gh import GhCli, classify_failure, repo_args
from .models import ISSUE_FIELDS, ExportOptions, NormalizedIssue, RawIssueRecord


def build_list_args(options: ExportOptions) -> list[str]:
    """Translate export filters into ``gh issue list`` arguments.

    Example:
        >>> build_list_args(ExportOptions(state="open", labels="bug,ui", limit=5))[:8]
        ['issue', 'list', '--state', 'open', '--label', 'bug', '--label', 'ui']
    """
    args = ["issue", "list", *repo_args(options.repo), "--state", options.state]
    for label in options.label_filters():
        args.extend(["--label", label])
    if options.milestone:
        args.extend(["--milestone", options.milestone])
    if options.assignee:
        args.extend(["--assignee", options.assignee])
    args.extend(["--limit", str(options.limit)])
    args.extend(["--json", ",".join(ISSUE_FIELDS)])
    return args


def normalize_issues(records: list[RawIssueRecord]) -> list[NormalizedIssue]:
    return [NormalizedIssue.from_raw(record) for record in records]


def _parse_issue_list(result: CommandResult) -> list[NormalizedIssue]:
    records = parse_json_model_list(
        result, model_type=RawIssueRecord, context="gh issue list"
    )
    return normalize_issues(records)


def export_issues(
    options: ExportOptions, *, gh: GhCli | None = None
) -> list[NormalizedIssue]:
    """Fetch issues matching ``options`` and return them normalized.

    The whole list is returned or an error is raised; there are no retries.

    Raises:
        ToolNotFoundError: gh is not installed.
        NotAuthenticatedError: gh has no logged-in account.
        ExportFailedError: gh failed or printed output that does not parse.
    """
    client = gh or GhCli()
    spec = CommandSpec(
        request=client.request(build_list_args(options)),
        parser=_parse_issue_list,
        context="gh issue list",
    )
    try:
        issues = client.run_spec(spec)
    except CommandExecutionError as exc:
        raise classify_failure(exc.detail, default=ExportFailedError) from exc
    except CommandParseError as exc:
        raise ExportFailedError(exc.detail) from exc
    log.debug(f"exported {len(issues)} issues")
    return issues
