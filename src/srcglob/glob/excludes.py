"""Exclusion patterns and tool-specific ignore files, using pathspec."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import pathspec


def _clean_lines(lines: Iterable[str]) -> list[str]:
    return [line for line in lines if line.strip() and not line.strip().startswith("#")]


def build_exclude_spec(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    """Compile gitignore-style patterns, or return `None` if there are none."""
    lines = _clean_lines(patterns)
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def load_ignore_file(tool_name: str, start_dir: Path) -> pathspec.PathSpec | None:
    """
    Walk up from `start_dir` looking for `.{tool_name}ignore` (e.g., `.srcglobignore`).
    Returns compiled `PathSpec` from first found, or `None`.
    """
    ignore_name = f".{tool_name}ignore"
    current = start_dir.resolve()
    while True:
        candidate = current / ignore_name
        if candidate.is_file():
            return build_exclude_spec(candidate.read_text().splitlines())
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def is_excluded(spec: pathspec.PathSpec, path: str, anchor: str) -> bool:
    """
    Check a resolved path against `spec`, relative to the pattern's anchor.
    Directories are matched with a trailing `/` so `build/` style patterns apply.
    """
    if path == anchor:
        return False
    prefix = anchor + "/"
    rel = path[len(prefix) :] if path.startswith(prefix) else path.lstrip("/")
    if not rel:
        return False
    if os.path.isdir(path):
        rel += "/"
    return spec.match_file(rel)
