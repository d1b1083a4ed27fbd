"""Issue actions that shell out to ``gh issue <verb>``.

Each action builds one argv and runs it once. Failures surface gh's own
message unchanged through ``CommandFailedError``.
"""

from __future__ import annotations

from typing import Literal, Sequence

from .gh import GhCli, repo_args

CloseReason = Literal["completed", "not planned"]
CLOSE_REASON_VALUES = ("completed", "not planned")


def close_args(
    number: int,
    *,
    repo: str | None = None,
    comment: str | None = None,
    reason: CloseReason | None = None,
) -> list[str]:
    """Return ``gh issue close`` arguments.

    Example:
        >>> close_args(4, repo="org/repo", reason="not planned")
        ['issue', 'close', '4', '--repo', 'org/repo', '--reason', 'not planned']
    """
    args = ["issue", "close", str(number), *repo_args(repo)]
    if comment:
        args.extend(["--comment", comment])
    if reason:
        args.extend(["--reason", reason])
    return args


def reopen_args(
    number: int, *, repo: str | None = None, comment: str | None = None
) -> list[str]:
    args = ["issue", "reopen", str(number), *repo_args(repo)]
    if comment:
        args.extend(["--comment", comment])
    return args


def assign_args(
    number: int,
    assignees: Sequence[str],
    *,
    repo: str | None = None,
    remove: bool = False,
) -> list[str]:
    """Return ``gh issue edit`` arguments that add or remove assignees.

    Example:
        >>> assign_args(3, ["alice", "bob"])
        ['issue', 'edit', '3', '--add-assignee', 'alice,bob']
    """
    flag = "--remove-assignee" if remove else "--add-assignee"
    return ["issue", "edit", str(number), *repo_args(repo), flag, ",".join(assignees)]


def label_args(
    number: int,
    labels: Sequence[str],
    *,
    repo: str | None = None,
    remove: bool = False,
) -> list[str]:
    flag = "--remove-label" if remove else "--add-label"
    return ["issue", "edit", str(number), *repo_args(repo), flag, ",".join(labels)]


def comment_args(number: int, body: str, *, repo: str | None = None) -> list[str]:
    return ["issue", "comment", str(number), *repo_args(repo), "--body", body]


def view_args(
    number: int, *, repo: str | None = None, comments: bool = False
) -> list[str]:
    args = ["issue", "view", str(number), *repo_args(repo)]
    if comments:
        args.append("--comments")
    return args


def close_issue(
    gh: GhCli,
    number: int,
    *,
    repo: str | None = None,
    comment: str | None = None,
    reason: CloseReason | None = None,
) -> str:
    return gh.run(close_args(number, repo=repo, comment=comment, reason=reason))


def reopen_issue(
    gh: GhCli, number: int, *, repo: str | None = None, comment: str | None = None
) -> str:
    return gh.run(reopen_args(number, repo=repo, comment=comment))


def assign_issue(
    gh: GhCli,
    number: int,
    assignees: Sequence[str],
    *,
    repo: str | None = None,
    remove: bool = False,
) -> str:
    return gh.run(assign_args(number, assignees, repo=repo, remove=remove))


def label_issue(
    gh: GhCli,
    number: int,
    labels: Sequence[str],
    *,
    repo: str | None = None,
    remove: bool = False,
) -> str:
    return gh.run(label_args(number, labels, repo=repo, remove=remove))


def comment_issue(gh: GhCli, number: int, body: str, *, repo: str | None = None) -> str:
    return gh.run(comment_args(number, body, repo=repo))


def view_issue(
    gh: GhCli, number: int, *, repo: str | None = None, comments: bool = False
) -> str:
    return gh.run(view_args(number, repo=repo, comments=comments))
