from __future__ import annotations

import json
from pathlib import Path

import pytest

from gh_export import config, paths
from gh_export.errors import ConfigError


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    settings = config.load_config(tmp_path / "absent.json")

    assert settings == config.ExportConfig()
    assert settings.format == "markdown"
    assert settings.limit == 500
    assert settings.list_limit == 50
    assert settings.stats_limit == 1000
    assert settings.gh_path == "gh"
    assert settings.status_field == "Status"
    assert settings.timeout_seconds is None


def test_loads_values_from_file(tmp_path: Path) -> None:
    path = tmp_path / "config.user.json"
    path.write_text(
        json.dumps({"repo": " org/repo ", "format": "json", "limit": 20, "gh_path": ""}),
        encoding="utf-8",
    )

    settings = config.load_config(path)

    assert settings.repo == "org/repo"
    assert settings.format == "json"
    assert settings.limit == 20
    assert settings.gh_path == "gh"


def test_env_var_selects_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"stats_limit": 250}), encoding="utf-8")
    monkeypatch.setenv(paths.CONFIG_ENV_VAR, str(path))

    assert paths.user_config_path() == path
    assert config.load_config().stats_limit == 250


def test_default_path_lives_in_user_config_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(paths.CONFIG_ENV_VAR, raising=False)

    assert paths.user_config_path() == paths.config_dir() / paths.CONFIG_USER_FILENAME


@pytest.mark.parametrize(
    "content",
    ['{"limit": 0}', '["not", "an", "object"]', "{broken", '{"timeout_seconds": -1}'],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.user.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        config.load_config(path)

    assert str(path) in str(excinfo.value)
