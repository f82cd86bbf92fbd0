"""
Project-level srcglob settings from TOML.

The nearest of `.srcglob.toml`, `srcglob.toml`, or a `pyproject.toml` carrying a
`[tool.srcglob]` table is used. Keys may sit at the top level or under `[matching]`
and `[discovery]`. Values are type-checked when loaded, so a typo in the file is
reported against the file rather than surfacing later as a resolver error.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from srcglob.glob.dir_reader import BACKENDS

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)

_SECTIONS = ("matching", "discovery")

_BOOL_KEYS = {"include_dirs", "include_files", "include_hidden", "respect_ignore_file", "sort"}
_LIST_KEYS = {"exclude", "extend_exclude"}


class ConfigError(ValueError):
    """A config file could not be parsed or holds a value of the wrong kind."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


@dataclass
class SrcglobConfig:
    """Settings read from a config file. `None` means the file did not set the key."""

    include_dirs: bool | None = None
    include_files: bool | None = None
    include_hidden: bool | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_ignore_file: bool | None = None
    backend: str | None = None
    sort: bool | None = None

    def settings(self) -> dict[str, Any]:
        """Only the keys the file actually set."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None
        }


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, f"invalid TOML: {e}") from e


def _srcglob_table(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    if path.name != "pyproject.toml":
        return data
    return data.get("tool", {}).get("srcglob")


def find_config_file(start_dir: Path) -> Path | None:
    """Nearest config file at or above `start_dir`, or `None`."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for name in (".srcglob.toml", "srcglob.toml"):
            if (directory / name).is_file():
                return directory / name
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _srcglob_table(pyproject, _read_toml(pyproject)) is not None:
                    return pyproject
            except (ConfigError, OSError):
                # Somebody else's broken pyproject.toml is not our config.
                pass
    return None


def _check(path: Path, key: str, value: Any) -> Any:
    if key in _BOOL_KEYS:
        if not isinstance(value, bool):
            raise ConfigError(path, f"'{key}' must be true or false, got {value!r}")
    elif key in _LIST_KEYS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(path, f"'{key}' must be a list of pattern strings, got {value!r}")
    elif key == "backend":
        if value not in BACKENDS:
            raise ConfigError(
                path, f"'backend' must be one of {', '.join(BACKENDS)}, got {value!r}"
            )
    return value


def load_config(path: Path) -> SrcglobConfig:
    """Load and validate settings. Unknown keys are reported and skipped."""
    table = _srcglob_table(path, _read_toml(path)) or {}

    entries = [(k, v) for k, v in table.items() if k not in _SECTIONS]
    for section in _SECTIONS:
        sub = table.get(section, {})
        if not isinstance(sub, dict):
            raise ConfigError(path, f"[{section}] must be a table")
        entries.extend(sub.items())

    valid = _BOOL_KEYS | _LIST_KEYS | {"backend"}
    values: dict[str, Any] = {}
    for raw_key, value in entries:
        key = raw_key.replace("-", "_")
        if key not in valid:
            logger.warning("%s: ignoring unknown setting '%s'", path, raw_key)
            continue
        values[key] = _check(path, key, value)
    return SrcglobConfig(**values)


def merge_settings(config: SrcglobConfig | None, explicit: dict[str, Any]) -> dict[str, Any]:
    """Config file settings overlaid with explicit command-line settings."""
    merged = config.settings() if config is not None else {}
    merged.update(explicit)
    return merged
