"""
Directory enumeration behind one interface, with a POSIX and a Windows backend.

Both backends yield entry names one at a time, in whatever order the OS returns them,
and never yield `.` or `..`. They share one failure policy:

- Failing to *open* a directory (missing, permission denied, not a directory) is soft.
  The reader calls its `warn` hook and the handle simply yields no entries, pruning that
  branch of a walk.
- Failing while *reading* an open stream is hard: the handle closes itself and raises
  `DirectoryReadError`, aborting the whole resolve.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import Protocol

from srcglob.glob.errors import DirectoryReadError

logger = logging.getLogger(__name__)

WarnFn = Callable[[str], None]

BACKENDS = ("auto", "posix", "windows")


class DirectoryHandle:
    """
    An open (or failed-to-open) directory stream. Use as a context manager so the
    underlying stream is closed even when a walk unwinds with an error.
    """

    def __init__(self, path: str, stream: Iterator[os.DirEntry[str]] | None) -> None:
        self.path = path
        self._stream = stream
        self._done = stream is None

    def __enter__(self) -> DirectoryHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        name = self.next_entry()
        if name is None:
            raise StopIteration
        return name

    @property
    def closed(self) -> bool:
        return self._done

    def _ensure_stream(self) -> Iterator[os.DirEntry[str]] | None:
        return self._stream

    def next_entry(self) -> str | None:
        """Return the next entry name, or `None` once the directory is exhausted."""
        if self._done:
            return None
        stream = self._ensure_stream()
        if stream is None:
            self._done = True
            return None

        while True:
            try:
                entry = next(stream)
            except StopIteration:
                self.close()
                return None
            except OSError as e:
                self.close()
                raise DirectoryReadError(self.path, e.strerror or str(e)) from e

            if entry.name in (".", ".."):
                continue
            return entry.name

    def close(self) -> None:
        stream = self._stream
        self._stream = None
        self._done = True
        if stream is not None:
            close = getattr(stream, "close", None)
            if close is not None:
                close()


class _DeferredDirectoryHandle(DirectoryHandle):
    """Handle that opens its stream on the first read, reporting open failure then."""

    def __init__(self, path: str, native_path: str, warn: WarnFn) -> None:
        super().__init__(path, None)
        self._native_path = native_path
        self._warn = warn
        self._opened = False
        self._done = False

    def _ensure_stream(self) -> Iterator[os.DirEntry[str]] | None:
        if not self._opened:
            self._opened = True
            self._stream = _open_stream(self.path, self._native_path, self._warn)
        return self._stream


class DirectoryReader(Protocol):
    """Opens directories for enumeration. `warn` receives open-failure diagnostics."""

    warn: WarnFn

    def open(self, path: str) -> DirectoryHandle: ...


def _open_stream(path: str, native_path: str, warn: WarnFn) -> Iterator[os.DirEntry[str]] | None:
    try:
        return os.scandir(native_path)
    except OSError as e:
        warn(f"cannot open directory {path}: {e.strerror or e}")
        return None


class PosixDirectoryReader:
    """Unix-family backend: `os.scandir` over `opendir`/`readdir`, opened eagerly."""

    def __init__(self, warn: WarnFn | None = None) -> None:
        self.warn: WarnFn = warn if warn is not None else logger.warning

    def open(self, path: str) -> DirectoryHandle:
        return DirectoryHandle(path, _open_stream(path, path, self.warn))


class WindowsDirectoryReader:
    """
    Windows-family backend. Paths are converted to the native separator and the
    directory is not opened until the first entry is requested, matching the
    find-first/find-next API where opening and fetching the first entry are one call.
    """

    def __init__(self, warn: WarnFn | None = None) -> None:
        self.warn: WarnFn = warn if warn is not None else logger.warning

    def open(self, path: str) -> DirectoryHandle:
        native = path.replace("/", os.sep)
        return _DeferredDirectoryHandle(path, native, self.warn)


def get_reader(backend: str = "auto", warn: WarnFn | None = None) -> DirectoryReader:
    """Select a reader backend by name. `"auto"` picks one from `os.name`."""
    if backend == "auto":
        backend = "windows" if os.name == "nt" else "posix"
    if backend == "posix":
        return PosixDirectoryReader(warn)
    if backend == "windows":
        return WindowsDirectoryReader(warn)
    raise ValueError(f"Unknown directory reader backend: {backend!r} (expected one of {BACKENDS})")
