"""Shared setup for command implementations."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from ..config import ExportConfig, load_config
from ..errors import InvalidOptionError
from ..gh import GhCli
from ..models import ExportOptions


def load_context(args: object) -> tuple[ExportConfig, GhCli]:
    """Load config (honoring ``--config``) and build the gh adapter."""
    raw_path = getattr(args, "config_path", None)
    settings = load_config(Path(raw_path) if raw_path else None)
    return settings, GhCli.from_config(settings)


def resolve_repo(args: object, settings: ExportConfig) -> str | None:
    return getattr(args, "repo", None) or settings.repo


def build_export_options(
    args: object,
    settings: ExportConfig,
    *,
    state: str | None = None,
    limit: int | None = None,
) -> ExportOptions:
    """Merge CLI filters with config defaults into validated options."""
    try:
        return ExportOptions(
            repo=resolve_repo(args, settings),
            state=state or getattr(args, "state", None) or "all",
            labels=getattr(args, "labels", None),
            milestone=getattr(args, "milestone", None),
            assignee=getattr(args, "assignee", None),
            limit=limit or getattr(args, "limit", None) or settings.limit,
        )
    except ValidationError as exc:
        raise InvalidOptionError(f"invalid options:\n{exc}") from exc
