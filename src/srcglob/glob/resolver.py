"""
GlobResolver: main entry point for path-pattern resolution.

Expands a pattern such as `src/**/*.cpp` into the concrete paths on disk that match it.
Patterns always use `/` as the separator. Results are absolute and come back in
directory-enumeration order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

from srcglob.glob.dir_reader import DirectoryReader, get_reader
from srcglob.glob.excludes import build_exclude_spec, is_excluded, load_ignore_file
from srcglob.glob.matcher import first_wildcard_index, has_wildcard
from srcglob.glob.types import MatchFilters, ResolverConfig
from srcglob.glob.walker import PatternWalker, fs_path

logger = logging.getLogger(__name__)


def to_absolute(pattern: str) -> str:
    """Join a relative pattern onto the current directory. No normalization is done."""
    if os.path.isabs(pattern):
        return pattern
    cwd = os.getcwd().replace(os.sep, "/").rstrip("/")
    return f"{cwd}/{pattern}"


def compute_anchor(abs_pattern: str) -> tuple[str, str]:
    """
    Split an absolute pattern into its wildcard-free leading directory (the anchor)
    and the remainder after the anchor's trailing `/`.

    `"/src/*/a.c"` -> `("/src", "*/a.c")`. The pattern must contain a wildcard.
    """
    index = first_wildcard_index(abs_pattern)
    if index < 0:
        raise ValueError(f"Pattern has no wildcard: {abs_pattern!r}")
    slash = abs_pattern.rfind("/", 0, index)
    if slash < 0:
        return "", abs_pattern
    return abs_pattern[:slash], abs_pattern[slash + 1 :]


def resolve(
    pattern: str,
    include_dirs: bool = False,
    include_files: bool = True,
    include_hidden: bool = False,
    *,
    reader: DirectoryReader | None = None,
) -> list[str]:
    """
    Resolve `pattern` into the list of matching absolute paths.

    A pattern with no `*` or `?` is returned as-is without touching the filesystem;
    checking that it exists is the caller's job. An unreadable directory stream raises
    `DirectoryReadError`; a directory that cannot be opened is logged and skipped.
    """
    if not has_wildcard(pattern):
        return [pattern]

    filters = MatchFilters(
        include_dirs=include_dirs, include_files=include_files, include_hidden=include_hidden
    )
    anchor, remaining = compute_anchor(to_absolute(pattern))
    walker = PatternWalker(reader if reader is not None else get_reader(), filters)
    return walker.walk(anchor, remaining)


class GlobResolver:
    """
    Reusable resolver applying a `ResolverConfig`: kind/hidden filters, a reader
    backend, and gitignore-style exclusions (explicit patterns plus `.srcglobignore`).

    Exclusions apply only to wildcard matches. A literal pattern is passed through
    unchanged, the same way a file named explicitly is never filtered.
    """

    def __init__(
        self, config: ResolverConfig | None = None, reader: DirectoryReader | None = None
    ) -> None:
        self._config: ResolverConfig = config if config is not None else ResolverConfig()
        self._reader: DirectoryReader = (
            reader if reader is not None else get_reader(self._config.backend)
        )
        self._walker = PatternWalker(self._reader, self._config.filters)
        self._exclude_spec: pathspec.PathSpec | None = build_exclude_spec(
            self._config.effective_exclude
        )
        # Cache ignore files per anchor directory to avoid re-reading from disk.
        self._ignore_cache: dict[str, pathspec.PathSpec | None] = {}

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve(self, pattern: str) -> list[str]:
        """Resolve one pattern, then drop excluded matches."""
        if not has_wildcard(pattern):
            return [pattern]

        anchor, remaining = compute_anchor(to_absolute(pattern))
        found = self._walker.walk(anchor, remaining)
        specs = self._specs_for(anchor)
        if not specs:
            return found

        kept = [path for path in found if not any(is_excluded(s, path, anchor) for s in specs)]
        if len(kept) != len(found):
            logger.debug(
                "Excluded %d of %d matches for %s", len(found) - len(kept), len(found), pattern
            )
        return kept

    def resolve_all(self, patterns: Iterable[str]) -> list[str]:
        """
        Resolve several patterns in order into one deduplicated list. Sorted only when
        the config asks for it; otherwise first-seen order is kept.
        """
        seen: set[str] = set()
        result: list[str] = []
        for pattern in patterns:
            for path in self.resolve(pattern):
                if path not in seen:
                    seen.add(path)
                    result.append(path)
        if self._config.sort:
            result.sort()
        return result

    def _specs_for(self, anchor: str) -> list[pathspec.PathSpec]:
        specs: list[pathspec.PathSpec] = []
        if self._exclude_spec is not None:
            specs.append(self._exclude_spec)
        if self._config.respect_ignore_file:
            ignore = self._get_ignore_file(anchor)
            if ignore is not None:
                specs.append(ignore)
        return specs

    def _get_ignore_file(self, anchor: str) -> pathspec.PathSpec | None:
        """Lazily load the tool ignore file, cached per anchor."""
        if anchor not in self._ignore_cache:
            self._ignore_cache[anchor] = load_ignore_file(
                self._config.tool_name, Path(fs_path(anchor))
            )
        return self._ignore_cache[anchor]
