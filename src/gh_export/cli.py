"""Typer entry point for the gh-export CLI.

Each command only parses its flags, packs them into a ``SimpleNamespace``,
and hands them to the implementation in ``gh_export.commands``.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Annotated, Callable, Optional

import typer

from . import __version__
from . import log as gh_export_log
from .actions import CLOSE_REASON_VALUES
from .commands import assign_issue as assign_cmd
from .commands import close_issue as close_cmd
from .commands import comment_issue as comment_cmd
from .commands import label_issue as label_cmd
from .commands import list_issues as list_cmd
from .commands import move_status as status_cmd
from .commands import reopen_issue as reopen_cmd
from .commands import run_export as export_cmd
from .commands import show_stats as stats_cmd
from .commands import view_issue as view_cmd
from .errors import GhExportError
from .io import die
from .models import STATE_FILTER_VALUES

app = typer.Typer(
    name="gh-export",
    help="Export GitHub Issues to analyzable formats.",
    add_completion=False,
    no_args_is_help=True,
)

RepoOption = Annotated[
    Optional[str],
    typer.Option(
        "--repo",
        "-r",
        help="Repository in owner/repo format (uses current repo if not specified).",
    ),
]
LabelsOption = Annotated[
    Optional[str],
    typer.Option("--labels", "-l", help="Filter by labels (comma-separated)."),
]
MilestoneOption = Annotated[
    Optional[str], typer.Option("--milestone", "-m", help="Filter by milestone.")
]
AssigneeOption = Annotated[
    Optional[str], typer.Option("--assignee", "-a", help="Filter by assignee.")
]
NumberArgument = Annotated[int, typer.Argument(min=1, help="Issue number.")]


def _choice(name: str, allowed: tuple[str, ...]) -> Callable[[Optional[str]], Optional[str]]:
    def validate(value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        normalized = value.strip().lower()
        if normalized not in allowed:
            raise typer.BadParameter(
                f"expected one of: {', '.join(allowed)}", param_hint=name
            )
        return normalized

    return validate


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _dispatch(
    ctx: typer.Context,
    handler: Callable[[SimpleNamespace], None],
    **values: object,
) -> None:
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    args = SimpleNamespace(config_path=obj.get("config_path"), **values)
    try:
        handler(args)
    except GhExportError as exc:
        die(exc.user_message())


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Log level: trace, debug, info, warning, error.",
            callback=_choice("--log-level", gh_export_log.LEVEL_NAMES),
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colored log output.")
    ] = False,
    config_path: Annotated[
        Optional[str],
        typer.Option("--config", help="Path to a config.user.json file."),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Export, summarize, and manage GitHub issues through the gh CLI."""
    del version
    if log_level:
        gh_export_log.set_level(log_level)
    if no_color:
        gh_export_log.set_no_color(True)
    ctx.obj = {"config_path": config_path}


@app.command("export")
def export_command(
    ctx: typer.Context,
    repo: RepoOption = None,
    state: Annotated[
        str,
        typer.Option(
            "--state",
            "-s",
            help="Filter by state: open, closed, all.",
            callback=_choice("--state", STATE_FILTER_VALUES),
        ),
    ] = "all",
    labels: LabelsOption = None,
    milestone: MilestoneOption = None,
    assignee: AssigneeOption = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: json, markdown, text."),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output", "-o", help="Output file (prints to stdout if not specified)."
        ),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", min=1, help="Maximum number of issues to fetch."),
    ] = None,
    titles_only: Annotated[
        bool, typer.Option("--titles-only", help="Omit issue bodies.")
    ] = False,
    include_comments: Annotated[
        bool,
        typer.Option("--include-comments", help="Include issue comments in JSON output."),
    ] = False,
) -> None:
    """Export issues from a repository."""
    _dispatch(
        ctx,
        export_cmd,
        repo=repo,
        state=state,
        labels=labels,
        milestone=milestone,
        assignee=assignee,
        format=output_format,
        output=output,
        limit=limit,
        titles_only=titles_only,
        include_comments=include_comments,
    )


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    repo: RepoOption = None,
    labels: LabelsOption = None,
    milestone: MilestoneOption = None,
) -> None:
    """Show statistics for repository issues."""
    _dispatch(ctx, stats_cmd, repo=repo, labels=labels, milestone=milestone)


@app.command("list")
def list_command(
    ctx: typer.Context,
    repo: RepoOption = None,
    state: Annotated[
        str,
        typer.Option(
            "--state",
            "-s",
            help="Filter by state: open, closed, all.",
            callback=_choice("--state", STATE_FILTER_VALUES),
        ),
    ] = "open",
    labels: LabelsOption = None,
    milestone: MilestoneOption = None,
    assignee: AssigneeOption = None,
    limit: Annotated[
        Optional[int], typer.Option("--limit", min=1, help="Maximum number of issues.")
    ] = None,
) -> None:
    """Quick list of issues (compact format)."""
    _dispatch(
        ctx,
        list_cmd,
        repo=repo,
        state=state,
        labels=labels,
        milestone=milestone,
        assignee=assignee,
        limit=limit,
    )


@app.command("close")
def close_command(
    ctx: typer.Context,
    number: NumberArgument,
    repo: RepoOption = None,
    comment: Annotated[
        Optional[str], typer.Option("--comment", "-c", help="Leave a closing comment.")
    ] = None,
    reason: Annotated[
        Optional[str],
        typer.Option(
            "--reason",
            help="Reason for closing: completed, not planned.",
            callback=_choice("--reason", CLOSE_REASON_VALUES),
        ),
    ] = None,
) -> None:
    """Close an issue."""
    _dispatch(ctx, close_cmd, number=number, repo=repo, comment=comment, reason=reason)


@app.command("reopen")
def reopen_command(
    ctx: typer.Context,
    number: NumberArgument,
    repo: RepoOption = None,
    comment: Annotated[
        Optional[str], typer.Option("--comment", "-c", help="Leave a comment.")
    ] = None,
) -> None:
    """Reopen a closed issue."""
    _dispatch(ctx, reopen_cmd, number=number, repo=repo, comment=comment)


@app.command("assign")
def assign_command(
    ctx: typer.Context,
    number: NumberArgument,
    assignees: Annotated[list[str], typer.Argument(help="User logins.")],
    repo: RepoOption = None,
    remove: Annotated[
        bool, typer.Option("--remove", help="Remove the users instead of adding them.")
    ] = False,
) -> None:
    """Add or remove issue assignees."""
    _dispatch(ctx, assign_cmd, number=number, assignees=assignees, repo=repo, remove=remove)


@app.command("label")
def label_command(
    ctx: typer.Context,
    number: NumberArgument,
    labels: Annotated[list[str], typer.Argument(help="Label names.")],
    repo: RepoOption = None,
    remove: Annotated[
        bool, typer.Option("--remove", help="Remove the labels instead of adding them.")
    ] = False,
) -> None:
    """Add or remove issue labels."""
    _dispatch(ctx, label_cmd, number=number, labels=labels, repo=repo, remove=remove)


@app.command("view")
def view_command(
    ctx: typer.Context,
    number: NumberArgument,
    repo: RepoOption = None,
    comments: Annotated[
        bool, typer.Option("--comments", help="Show issue comments.")
    ] = False,
) -> None:
    """Show an issue."""
    _dispatch(ctx, view_cmd, number=number, repo=repo, comments=comments)


@app.command("comment")
def comment_command(
    ctx: typer.Context,
    number: NumberArgument,
    body: Annotated[str, typer.Argument(help="Comment text.")],
    repo: RepoOption = None,
) -> None:
    """Comment on an issue."""
    _dispatch(ctx, comment_cmd, number=number, body=body, repo=repo)


@app.command("status")
def status_command(
    ctx: typer.Context,
    number: NumberArgument,
    status: Annotated[str, typer.Argument(help="Target board column, e.g. 'In Progress'.")],
    repo: RepoOption = None,
    field: Annotated[
        Optional[str],
        typer.Option("--field", help="Single-select project field to update."),
    ] = None,
) -> None:
    """Move an issue to another project board column."""
    _dispatch(ctx, status_cmd, number=number, status=status, repo=repo, field=field)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
