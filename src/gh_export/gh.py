"""Adapter around the gh CLI: argv construction, execution, and failure mapping."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence, TypeVar

from . import log
from .config import ExportConfig
from .errors import (
    CommandFailedError,
    GhExportError,
    NotAuthenticatedError,
    ToolNotFoundError,
)
from .exec import (
    CommandExecutionError,
    CommandRequest,
    CommandResult,
    CommandRunner,
    CommandSpec,
    run_typed,
)

ParsedT = TypeVar("ParsedT")

GH_MISSING_MESSAGE = "GitHub CLI (gh) is not installed."
GH_AUTH_MESSAGE = "Not logged in to GitHub."
_AUTH_MARKERS = ("not logged in", "gh auth login", "authentication required")
_MISSING_MARKERS = ("gh: command not found", "gh: not found")


def repo_args(repo: str | None) -> list[str]:
    """Return ``--repo`` arguments, or nothing to use the ambient repository.

    Example:
        >>> repo_args("org/repo")
        ['--repo', 'org/repo']
        >>> repo_args(None)
        []
    """
    if not repo:
        return []
    return ["--repo", repo]


def _stdout(result: CommandResult) -> str:
    return result.stdout


def classify_failure(
    detail: str,
    *,
    default: type[GhExportError] = CommandFailedError,
) -> GhExportError:
    """Map a failed export's gh diagnostic text onto the matching error type.

    Mutating commands do not use this; they report gh's text verbatim.

    Example:
        >>> type(classify_failure("You are not logged in to any GitHub hosts.")).__name__
        'NotAuthenticatedError'
    """
    lowered = detail.lower()
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return NotAuthenticatedError(GH_AUTH_MESSAGE)
    if any(marker in lowered for marker in _MISSING_MARKERS):
        return ToolNotFoundError(GH_MISSING_MESSAGE)
    return default(detail)


@dataclass(frozen=True)
class GhCli:
    """Blocking gh invocations. Exactly one subprocess runs per call."""

    gh_path: str = "gh"
    timeout_seconds: float | None = None
    runner: CommandRunner | None = None

    @classmethod
    def from_config(
        cls, config: ExportConfig, *, runner: CommandRunner | None = None
    ) -> GhCli:
        return cls(
            gh_path=config.gh_path,
            timeout_seconds=config.timeout_seconds,
            runner=runner,
        )

    def request(self, args: Sequence[str]) -> CommandRequest:
        return CommandRequest(
            argv=(self.gh_path, *args),
            timeout_seconds=self.timeout_seconds,
        )

    def run_spec(self, spec: CommandSpec[ParsedT]) -> ParsedT:
        """Run ``spec``; raise ``ToolNotFoundError`` when gh cannot start.

        Other execution and parse failures propagate unchanged so each caller
        can decide how to report them.
        """
        log.debug(f"running: {spec.request.display}")
        try:
            return run_typed(spec, runner=self.runner)
        except CommandExecutionError as exc:
            if exc.missing:
                raise ToolNotFoundError(GH_MISSING_MESSAGE) from exc
            raise

    def run(self, args: Sequence[str]) -> str:
        """Run gh and return stdout.

        A failed run raises ``CommandFailedError`` carrying gh's diagnostic
        text verbatim. No attempt is made to classify it.
        """
        spec = CommandSpec(request=self.request(args), parser=_stdout)
        try:
            return self.run_spec(spec)
        except CommandExecutionError as exc:
            raise CommandFailedError(exc.detail) from exc

    def run_json(self, args: Sequence[str]) -> object:
        output = self.run(args)
        if not output.strip():
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise CommandFailedError(f"failed to parse gh output: {exc}") from exc

    def graphql(
        self, query: str, variables: Mapping[str, object] | None = None
    ) -> dict:
        """Run a GraphQL document through ``gh api graphql`` and return ``data``.

        String variables are passed with ``-f``; everything else with ``-F`` so
        gh sends them as typed JSON values.
        """
        args = ["api", "graphql", "-f", f"query={query}"]
        for key, value in (variables or {}).items():
            if isinstance(value, str):
                args.extend(["-f", f"{key}={value}"])
            else:
                args.extend(["-F", f"{key}={json.dumps(value)}"])
        payload = self.run_json(args)
        if not isinstance(payload, dict):
            raise CommandFailedError("unexpected gh api graphql output")
        errors = payload.get("errors")
        if errors:
            messages = [
                str(entry.get("message"))
                for entry in errors
                if isinstance(entry, dict) and entry.get("message")
            ]
            raise CommandFailedError("; ".join(messages) or "GraphQL request failed")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise CommandFailedError("GraphQL response did not include data")
        return data
