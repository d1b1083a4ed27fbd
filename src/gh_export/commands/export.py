"""Implementation for the ``gh-export export`` command."""

from __future__ import annotations

from pathlib import Path

from .. import log
from ..errors import ExportFailedError
from ..exporter import export_issues
from ..formatter import format_output
from ..io import note, say, write_text
from ..models import FormatOptions
from .context import build_export_options, load_context


def run_export(args: object) -> None:
    """Export issues and print them or write them to ``--output``.

    Args:
        args: CLI argument object with filter, format, and output fields.

    Example:
        $ gh-export export --state open --format json -o issues.json
    """
    settings, gh = load_context(args)
    options = build_export_options(args, settings)
    issues = export_issues(options, gh=gh)
    output = format_output(
        issues,
        getattr(args, "format", None) or settings.format,
        FormatOptions(
            titles_only=bool(getattr(args, "titles_only", False)),
            include_comments=bool(getattr(args, "include_comments", False)),
        ),
    )
    output_path = getattr(args, "output", None)
    if not output_path:
        say(output)
        return
    try:
        resolved = write_text(Path(output_path), output)
    except OSError as exc:
        raise ExportFailedError(f"failed to write {output_path}: {exc}") from exc
    log.debug(f"wrote {len(output)} characters")
    note(f"Exported {len(issues)} issues to {resolved}")
