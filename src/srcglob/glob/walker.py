"""
Recursive descent over a pattern, one `/`-segment at a time.

The walker keeps a single path buffer holding the anchor plus every segment matched so
far. Each step grows the buffer, recurses, and truncates it back to its entry length,
so sibling branches never observe each other's segments.
"""

from __future__ import annotations

import os

from srcglob.glob.dir_reader import DirectoryReader
from srcglob.glob.matcher import has_wildcard, match_segment
from srcglob.glob.types import MatchFilters

DOUBLE_STAR = "**"


def _split_segment(pattern: str) -> tuple[str, str]:
    """Split off the first segment: `"a/b/c"` -> `("a", "b/c")`, `"a"` -> `("a", "")`."""
    segment, _, rest = pattern.partition("/")
    return segment, rest


def fs_path(path: str) -> str:
    """
    Path to hand to the OS for a buffer value. An empty buffer is the filesystem root,
    and a bare drive (`C:`) means that drive's root.
    """
    if not path:
        return "/"
    if len(path) == 2 and path[1] == ":":
        return path + "/"
    return path


class PatternWalker:
    """
    Expands the wildcard segments of a pattern against the filesystem.

    Not thread-safe: the path buffer is per-instance state. Separate instances may run
    concurrently.
    """

    def __init__(self, reader: DirectoryReader, filters: MatchFilters) -> None:
        self._reader = reader
        self._filters = filters
        self._path = ""
        self._results: list[str] = []

    @property
    def path(self) -> str:
        """Current path buffer. Equals the anchor whenever a walk is not in progress."""
        return self._path

    def walk(self, anchor: str, remaining: str) -> list[str]:
        """Resolve `remaining` relative to `anchor`, returning matches in reader order."""
        self._path = anchor
        self._results = []
        self._step(remaining)
        return self._results

    def _step(self, pattern: str) -> None:
        segment, rest = _split_segment(pattern)
        self._step_segment(segment, rest)

    def _step_segment(self, segment: str, rest: str) -> None:
        if not has_wildcard(segment):
            self._step_literal(segment, rest)
        elif segment == DOUBLE_STAR:
            self._step_double_star_zero(rest)
            self._step_double_star_expand(rest)
        else:
            self._step_wildcard(segment, rest)

    def _step_literal(self, name: str, rest: str) -> None:
        old_size = len(self._path)
        if name:
            self._path += "/" + name
        try:
            if rest:
                self._step(rest)
            else:
                path = fs_path(self._path)
                if self._wanted(path):
                    self._results.append(path)
        finally:
            self._path = self._path[:old_size]

    def _step_double_star_zero(self, rest: str) -> None:
        # `**` consumes no path levels.
        self._step(rest)

    def _step_double_star_expand(self, rest: str) -> None:
        # `**` consumes one more level, then stays in effect below it.
        directory = fs_path(self._path)
        if not os.path.isdir(directory):
            return
        with self._reader.open(directory) as handle:
            for entry in handle:
                if self._skip_hidden(entry):
                    continue
                old_size = len(self._path)
                self._path += "/" + entry
                try:
                    self._step_segment(DOUBLE_STAR, rest)
                finally:
                    self._path = self._path[:old_size]

    def _step_wildcard(self, segment: str, rest: str) -> None:
        directory = fs_path(self._path)
        if not os.path.isdir(directory):
            return
        with self._reader.open(directory) as handle:
            for entry in handle:
                if self._skip_hidden(entry):
                    continue
                if match_segment(entry, segment):
                    # Entry names are literal even if they contain `*` or `?`.
                    self._step_literal(entry, rest)

    def _skip_hidden(self, entry: str) -> bool:
        return not self._filters.include_hidden and entry.startswith(".")

    def _wanted(self, path: str) -> bool:
        return (self._filters.include_files and os.path.isfile(path)) or (
            self._filters.include_dirs and os.path.isdir(path)
        )
