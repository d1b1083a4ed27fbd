"""User configuration for gh-export.

Defaults live in an optional ``config.user.json`` validated with Pydantic.
A missing file means built-in defaults; explicit CLI flags always win.

Example:
    >>> from gh_export.config import ExportConfig
    >>> ExportConfig().limit
    500
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import paths
from .errors import ConfigError


class ExportConfig(BaseModel):
    """Defaults applied when a flag is not given on the command line.

    Attributes:
        repo: Repository used when ``--repo`` is absent (``owner/name``).
        format: Default export format.
        limit: Default ``export`` record cap.
        list_limit: Default ``list`` record cap.
        stats_limit: Record cap used by ``stats``.
        gh_path: gh executable to invoke.
        status_field: Project field updated by ``status``.
        timeout_seconds: Per-invocation timeout; ``None`` waits forever.
    """

    model_config = ConfigDict(extra="ignore")

    repo: str | None = None
    format: str = "markdown"
    limit: int = Field(default=500, gt=0)
    list_limit: int = Field(default=50, gt=0)
    stats_limit: int = Field(default=1000, gt=0)
    gh_path: str = "gh"
    status_field: str = "Status"
    timeout_seconds: float | None = Field(default=None, gt=0)

    @field_validator("gh_path", mode="before")
    @classmethod
    def normalize_gh_path(cls, value: object) -> object:
        if value is None:
            return "gh"
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or "gh"
        return value

    @field_validator("repo", mode="before")
    @classmethod
    def normalize_repo(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Example:
        >>> from pathlib import Path
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"failed to read config at {path}: {exc}") from exc


def parse_config(payload: object, source: Path | str | None = None) -> ExportConfig:
    """Validate a config payload."""
    location = f" at {source}" if source else ""
    if not isinstance(payload, dict):
        raise ConfigError(f"invalid config{location}: root must be a JSON object")
    try:
        return ExportConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config{location}:\n{exc}") from exc


def load_config(path: Path | None = None) -> ExportConfig:
    """Load the user config, falling back to defaults when it is absent."""
    config_path = path or paths.user_config_path()
    payload = load_json(config_path)
    if payload is None:
        return ExportConfig()
    return parse_config(payload, config_path)
