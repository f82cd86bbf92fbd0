"""Exceptions raised by path-pattern resolution."""

from __future__ import annotations


class GlobError(Exception):
    """Base class for errors that abort a glob resolution."""


class DirectoryReadError(GlobError):
    """
    Raised when reading an already-open directory stream fails.

    Failing to *open* a directory is not an error: the reader reports a warning and
    the branch yields no entries. A failure mid-enumeration aborts the whole resolve.
    """

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        message = f"error reading directory entries: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
