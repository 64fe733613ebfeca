"""Expand asset path patterns into the ordered list of files to upload."""

from __future__ import annotations

import glob
import os
from pathlib import Path

__all__ = ["expand_asset_paths"]


def _pattern_lines(pattern: str) -> list[str]:
    lines: list[str] = []
    for raw in pattern.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


def _matches(pattern: str, base: Path) -> list[Path]:
    expanded = os.path.expanduser(pattern)
    if not os.path.isabs(expanded):
        expanded = str(base / expanded)
    # Dotfiles are release assets too (".env" publishes as "default.env").
    found = glob.glob(expanded, recursive=True, include_hidden=True)
    return [Path(p) for p in sorted(found)]


def expand_asset_paths(pattern: str, base: Path | None = None) -> list[Path]:
    """Return the regular files matched by `pattern`.

    `pattern` holds one glob per line, applied top to bottom. A line starting
    with `!` drops the files it matches from what earlier lines selected; a
    later line can select them again. Blank lines and `#` comments are
    ignored. `**` matches across directories, and hidden files and
    directories are matched like any other.

    Files keep pattern order (and sorted order within one pattern); a file
    matched by several lines is listed once, at its first match.

    Args:
        pattern: Newline-separated glob patterns
        base: Directory relative patterns are resolved against (default: cwd)
    """
    root = base if base is not None else Path.cwd()

    selected: dict[Path, Path] = {}
    for line in _pattern_lines(pattern):
        if line.startswith("!"):
            for path in _matches(line[1:].strip(), root):
                selected.pop(path.resolve(), None)
            continue
        for path in _matches(line, root):
            key = path.resolve()
            if key not in selected and path.is_file():
                selected[key] = path
    return list(selected.values())
