"""Filter and configuration types for glob resolution."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MatchFilters:
    """
    Which kinds of entries a resolve should report.

    Hidden entries are those whose name starts with `.`. The anchor of a pattern is
    never filtered, only entries produced by wildcard expansion.
    """

    include_dirs: bool = False
    include_files: bool = True
    include_hidden: bool = False


@dataclass
class ResolverConfig:
    """
    Configuration for a reusable `GlobResolver`.

    `tool_name` determines the ignore file name (e.g., `.srcglobignore`).
    `backend` is one of `"auto"`, `"posix"`, or `"windows"`.
    `sort=False` keeps directory-enumeration order.
    """

    tool_name: str = "srcglob"
    include_dirs: bool = False
    include_files: bool = True
    include_hidden: bool = False
    exclude: list[str] = field(default_factory=list)
    extend_exclude: list[str] = field(default_factory=list)
    respect_ignore_file: bool = True
    backend: str = "auto"
    sort: bool = False

    @property
    def filters(self) -> MatchFilters:
        return MatchFilters(
            include_dirs=self.include_dirs,
            include_files=self.include_files,
            include_hidden=self.include_hidden,
        )

    @property
    def effective_exclude(self) -> list[str]:
        """Combined exclude patterns: `exclude + extend_exclude`."""
        return self.exclude + self.extend_exclude
