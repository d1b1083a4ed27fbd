"""Leveled diagnostics for gh-export, rendered with rich on stderr.

stdout carries exported issues and is often piped into files or other
tools, so nothing in this module writes to it.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LOG_LEVEL_ENV_VAR = "GH_EXPORT_LOG_LEVEL"
NO_COLOR_ENV_VARS = ("NO_COLOR", "GH_EXPORT_NO_COLOR")


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)
_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}

_level: LogLevel | None = None
_no_color: bool | None = None


def parse_level(value: str | None, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Resolve a level name, ignoring case and surrounding whitespace.

    Example:
        >>> parse_level(" Debug ")
        <LogLevel.DEBUG: 20>
        >>> parse_level("warn")
        <LogLevel.WARNING: 40>
        >>> parse_level("loud")
        <LogLevel.INFO: 30>
    """
    name = (value or "").strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return LogLevel[name.upper()]
    except KeyError:
        return default


def configured_level() -> LogLevel:
    global _level
    if _level is None:
        _level = parse_level(os.environ.get(LOG_LEVEL_ENV_VAR))
    return _level


def set_level(value: str | None) -> None:
    """Set the active log level; unknown names select the default."""
    global _level
    _level = parse_level(value)


def set_no_color(value: bool) -> None:
    global _no_color
    _no_color = value


def reset() -> None:
    """Forget explicit settings so the environment is consulted again."""
    global _level, _no_color
    _level = None
    _no_color = None


def _color_disabled() -> bool:
    if _no_color is not None:
        return _no_color
    return any(os.environ.get(name) for name in NO_COLOR_ENV_VARS)


def emit(level: LogLevel, message: str) -> None:
    if level < configured_level():
        return
    console = Console(
        file=sys.stderr,
        soft_wrap=True,
        highlight=False,
        no_color=_color_disabled(),
    )
    console.print(Text(message, style=_STYLES.get(level, "")))


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)
