"""Subprocess layer for the gh executable.

Requests and results are frozen dataclasses so tests can substitute a runner
that replays canned output. Failures surface as ``CommandExecutionError``
(gh could not start, timed out, or exited non-zero) or ``CommandParseError``
(gh succeeded but printed something unusable).
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

ParsedT = TypeVar("ParsedT")
ModelT = TypeVar("ModelT", bound=BaseModel)

TIMEOUT_RETURNCODE = 124


@dataclass(frozen=True)
class CommandRequest:
    argv: tuple[str, ...]
    env: Mapping[str, str] | None = None
    timeout_seconds: float | None = None

    @property
    def display(self) -> str:
        """Command line as shown in diagnostics.

        Example:
            >>> CommandRequest(argv=("gh", "issue", "list")).display
            'gh issue list'
        """
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def diagnostic(self) -> str:
        """gh's own failure text: stderr, or stdout when stderr is empty."""
        return (self.stderr or self.stdout or "").strip()


class CommandRunner(Protocol):
    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Run requests with ``subprocess.run``, capturing text output.

    A missing executable yields ``None``; an expired timeout yields a result
    flagged ``timed_out`` with whatever output arrived before the deadline.
    """

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "env": request.env,
            "check": False,
            "capture_output": True,
            "text": True,
        }
        if request.timeout_seconds is not None:
            run_kwargs["timeout"] = request.timeout_seconds
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                argv=request.argv,
                returncode=TIMEOUT_RETURNCODE,
                stdout=_text(exc.stdout),
                stderr=_text(exc.stderr),
                timed_out=True,
            )
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=_text(completed.stdout),
            stderr=_text(completed.stderr),
        )


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


@dataclass(frozen=True)
class CommandSpec(Generic[ParsedT]):
    """A request paired with the parser for its successful output."""

    request: CommandRequest
    parser: Callable[[CommandResult], ParsedT]
    context: str | None = None


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    @property
    def missing(self) -> bool:
        """True when the executable could not be started at all."""
        return self.result is None

    def __str__(self) -> str:
        return self.detail


@dataclass(frozen=True)
class CommandParseError(RuntimeError):
    argv: tuple[str, ...]
    detail: str
    context: str | None = None

    def __str__(self) -> str:
        return self.detail


def failure_detail(request: CommandRequest, result: CommandResult | None) -> str:
    """Describe why ``request`` did not succeed.

    gh's diagnostic text is returned unchanged when there is any.

    Example:
        >>> request = CommandRequest(argv=("gh", "issue", "list"))
        >>> failure_detail(request, None)
        'missing required command: gh'
        >>> failure_detail(request, CommandResult(request.argv, 1, "", ""))
        'command failed: gh issue list'
    """
    if result is None:
        return f"missing required command: {request.argv[0]}"
    if result.timed_out:
        return f"timed out after {request.timeout_seconds}s: {request.display}"
    return result.diagnostic or f"command failed: {request.display}"


def run_typed(
    spec: CommandSpec[ParsedT], *, runner: CommandRunner | None = None
) -> ParsedT:
    """Execute ``spec`` once and parse its output into a typed value."""
    result = (runner or _DEFAULT_COMMAND_RUNNER).run(spec.request)
    if result is None or not result.ok:
        raise CommandExecutionError(
            request=spec.request,
            detail=failure_detail(spec.request, result),
            result=result,
        )
    try:
        return spec.parser(result)
    except CommandParseError:
        raise
    except Exception as exc:
        raise _parse_error(result, spec.context, str(exc)) from exc


def _parse_error(
    result: CommandResult, context: str | None, reason: str, *, verb: str = "parse"
) -> CommandParseError:
    suffix = f" ({context})" if context else ""
    return CommandParseError(
        argv=result.argv,
        detail=f"failed to {verb} command output{suffix}: {reason}",
        context=context,
    )


def parse_json_model_list(
    result: CommandResult, *, model_type: type[ModelT], context: str | None = None
) -> list[ModelT]:
    """Decode stdout as a JSON array and validate every element.

    The whole list validates or a ``CommandParseError`` naming the first bad
    index is raised.
    """
    raw = result.stdout.strip()
    if not raw:
        raise _parse_error(result, context, "empty output")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise _parse_error(result, context, str(exc)) from exc
    if not isinstance(payload, list):
        raise _parse_error(result, context, "expected a JSON list")
    models: list[ModelT] = []
    for index, item in enumerate(payload):
        try:
            models.append(model_type.model_validate(item))
        except ValidationError as exc:
            raise _parse_error(
                result, context, f"at index {index}: {exc}", verb="validate"
            ) from exc
    return models
