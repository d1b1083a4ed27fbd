from __future__ import annotations

import json

import pytest

from gh_export.config import ExportConfig
from gh_export.exec import CommandRequest, CommandResult
from gh_export.errors import (
    CommandFailedError,
    ExportFailedError,
    NotAuthenticatedError,
    ToolNotFoundError,
)
from gh_export.gh import GhCli, classify_failure, repo_args


def test_repo_args() -> None:
    assert repo_args("org/repo") == ["--repo", "org/repo"]
    assert repo_args("") == []


@pytest.mark.parametrize(
    ("detail", "expected"),
    [
        ("To get started with GitHub CLI, please run:  gh auth login", NotAuthenticatedError),
        ("error: not logged in", NotAuthenticatedError),
        ("/bin/sh: 1: gh: not found", ToolNotFoundError),
        ("HTTP 404: Not Found", CommandFailedError),
    ],
)
def test_classify_failure(detail: str, expected: type[Exception]) -> None:
    assert type(classify_failure(detail)) is expected


def test_classify_failure_uses_default_type() -> None:
    error = classify_failure("boom", default=ExportFailedError)

    assert isinstance(error, ExportFailedError)
    assert str(error) == "boom"


def test_from_config() -> None:
    gh = GhCli.from_config(ExportConfig(gh_path="/usr/local/bin/gh", timeout_seconds=5))

    request = gh.request(["issue", "list"])

    assert request.argv == ("/usr/local/bin/gh", "issue", "list")
    assert request.timeout_seconds == 5


def test_run_returns_stdout(runner) -> None:
    runner.queue((0, "closed\n", ""))

    assert GhCli(runner=runner).run(["issue", "close", "1"]) == "closed\n"
    assert runner.argvs == [("gh", "issue", "close", "1")]


def test_run_reports_stderr_verbatim(runner) -> None:
    runner.queue((1, "", "GraphQL: Could not resolve to an issue with the number of 99.\n"))

    with pytest.raises(CommandFailedError) as excinfo:
        GhCli(runner=runner).run(["issue", "close", "99"])

    assert str(excinfo.value) == "GraphQL: Could not resolve to an issue with the number of 99."


def test_run_does_not_classify_auth_text(runner) -> None:
    runner.queue((1, "", "error: not logged in to github.com; run gh auth login\n"))

    with pytest.raises(CommandFailedError) as excinfo:
        GhCli(runner=runner).graphql("query { viewer { login } }")

    assert type(excinfo.value) is CommandFailedError
    assert str(excinfo.value) == "error: not logged in to github.com; run gh auth login"


def test_run_reports_timeout() -> None:
    class SlowRunner:
        def run(self, request: CommandRequest) -> CommandResult:
            return CommandResult(request.argv, 124, "", "", timed_out=True)

    with pytest.raises(CommandFailedError, match="timed out after 3s: gh issue view 1"):
        GhCli(timeout_seconds=3, runner=SlowRunner()).run(["issue", "view", "1"])


def test_run_falls_back_to_command_text(runner) -> None:
    runner.queue((2, "", ""))

    with pytest.raises(CommandFailedError, match="command failed: gh issue view 1"):
        GhCli(runner=runner).run(["issue", "view", "1"])


def test_run_missing_executable(runner) -> None:
    runner.queue(None)

    with pytest.raises(ToolNotFoundError):
        GhCli(runner=runner).run(["issue", "view", "1"])


def test_run_json_parses_output(runner) -> None:
    runner.queue((0, '{"nameWithOwner": "org/repo"}', ""), (0, "  ", ""), (0, "{", ""))
    gh = GhCli(runner=runner)

    assert gh.run_json(["repo", "view"]) == {"nameWithOwner": "org/repo"}
    assert gh.run_json(["repo", "view"]) is None
    with pytest.raises(CommandFailedError, match="failed to parse gh output"):
        gh.run_json(["repo", "view"])


def test_graphql_passes_typed_variables(runner) -> None:
    runner.queue((0, json.dumps({"data": {"viewer": {"login": "alice"}}}), ""))

    data = GhCli(runner=runner).graphql("query { viewer { login } }", {"owner": "org", "number": 7})

    assert data == {"viewer": {"login": "alice"}}
    assert runner.argvs[0] == (
        "gh",
        "api",
        "graphql",
        "-f",
        "query=query { viewer { login } }",
        "-f",
        "owner=org",
        "-F",
        "number=7",
    )


def test_graphql_surfaces_errors(runner) -> None:
    payload = {"data": None, "errors": [{"message": "Field 'nope' doesn't exist"}]}
    runner.queue((0, json.dumps(payload), ""))

    with pytest.raises(CommandFailedError, match="Field 'nope' doesn't exist"):
        GhCli(runner=runner).graphql("query { nope }")


def test_graphql_requires_data(runner) -> None:
    runner.queue((0, "[]", ""))

    with pytest.raises(CommandFailedError, match="unexpected gh api graphql output"):
        GhCli(runner=runner).graphql("query { viewer { login } }")
