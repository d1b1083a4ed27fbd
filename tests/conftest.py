# ruff: noqa: E402

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import gh_export.log as gh_export_log
from gh_export.exec import CommandRequest, CommandResult

class FakeRunner:
    """Command runner that replays canned results and records requests.

    Each queued entry is ``None`` (executable missing) or a
    ``(returncode, stdout, stderr)`` tuple.
    """

    def __init__(self, *results: tuple[int, str, str] | None) -> None:
        self.results = list(results)
        self.requests: list[CommandRequest] = []

    def queue(self, *results: tuple[int, str, str] | None) -> None:
        self.results.extend(results)

    def run(self, request: CommandRequest) -> CommandResult | None:
        self.requests.append(request)
        if not self.results:
            raise AssertionError(f"unexpected command: {request.argv}")
        entry = self.results.pop(0)
        if entry is None:
            return None
        returncode, stdout, stderr = entry
        return CommandResult(
            argv=request.argv, returncode=returncode, stdout=stdout, stderr=stderr
        )

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    config_path = tmp_path_factory.mktemp("config") / "config.user.json"
    monkeypatch.setenv("GH_EXPORT_CONFIG", str(config_path))
    monkeypatch.delenv("GH_EXPORT_LOG_LEVEL", raising=False)
    gh_export_log.reset()
    yield
    gh_export_log.reset()

