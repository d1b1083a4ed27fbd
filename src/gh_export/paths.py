"""Path helpers for locating gh-export configuration files."""

import os
from pathlib import Path

from platformdirs import user_config_dir

GH_EXPORT_APP_NAME = "gh-export"
CONFIG_USER_FILENAME = "config.user.json"
CONFIG_ENV_VAR = "GH_EXPORT_CONFIG"


def config_dir() -> Path:
    """Return the base gh-export config directory.

    Example:
        >>> isinstance(config_dir(), Path)
        True
    """
    return Path(user_config_dir(GH_EXPORT_APP_NAME))


def user_config_path() -> Path:
    """Return the config file path, honoring ``$GH_EXPORT_CONFIG``.

    Example:
        >>> user_config_path().suffix
        '.json'
    """
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return config_dir() / CONFIG_USER_FILENAME
