"""
Self-contained path-pattern resolution: wildcard matching, recursive descent over path
segments, and a cross-platform directory reader.

No imports from `srcglob` outside this package.

Usage::

    from srcglob.glob import GlobResolver, ResolverConfig, resolve

    files = resolve("src/**/*.cpp")

    resolver = GlobResolver(ResolverConfig(include_dirs=True, extend_exclude=["build/"]))
    paths = resolver.resolve_all(["src/**/*.cpp", "include/**/*.h"])
"""

from srcglob.glob.dir_reader import (
    DirectoryHandle,
    DirectoryReader,
    PosixDirectoryReader,
    WindowsDirectoryReader,
    get_reader,
)
from srcglob.glob.errors import DirectoryReadError, GlobError
from srcglob.glob.matcher import has_wildcard, match_segment
from srcglob.glob.resolver import GlobResolver, compute_anchor, resolve
from srcglob.glob.types import MatchFilters, ResolverConfig
from srcglob.glob.walker import PatternWalker

__all__ = [
    "DirectoryHandle",
    "DirectoryReadError",
    "DirectoryReader",
    "GlobError",
    "GlobResolver",
    "MatchFilters",
    "PatternWalker",
    "PosixDirectoryReader",
    "ResolverConfig",
    "WindowsDirectoryReader",
    "compute_anchor",
    "get_reader",
    "has_wildcard",
    "match_segment",
    "resolve",
]
