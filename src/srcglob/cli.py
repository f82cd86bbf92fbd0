#!/usr/bin/env python3
"""
srcglob: Expand source-file glob patterns into concrete paths

Common usage:
  srcglob 'src/**/*.cpp'
  srcglob --dirs --no-files 'src/*'
  srcglob --hidden --sort 'config/**/*'
  srcglob --extend-exclude 'build/' 'src/**/*.h' 'include/**/*.h'

Patterns use '/' as the separator on every platform. Supported wildcards are '*',
'?', and a whole '**' segment matching zero or more directory levels. Quote patterns
so the shell does not expand them first.

Settings not given on the command line are read from the nearest .srcglob.toml,
srcglob.toml, or pyproject.toml [tool.srcglob] table.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import os
import sys
from pathlib import Path
from typing import Any

from srcglob.config import find_config_file, load_config, merge_settings
from srcglob.glob import GlobError, GlobResolver, ResolverConfig
from srcglob.glob.dir_reader import BACKENDS

logger = logging.getLogger(__name__)

# Resolver settings that may come from either the command line or a config file.
# Their argparse default is None, so any other value was given explicitly.
SETTINGS = (
    "include_dirs",
    "include_files",
    "include_hidden",
    "exclude",
    "extend_exclude",
    "respect_ignore_file",
    "backend",
    "sort",
)


def _build_parser() -> argparse.ArgumentParser:
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="srcglob",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Path patterns to expand (e.g. 'src/**/*.cpp')",
    )
    parser.add_argument(
        "-d",
        "--dirs",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="include_dirs",
        help="Include matching directories (default: off)",
    )
    parser.add_argument(
        "--files",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="include_files",
        help="Include matching regular files (default: on)",
    )
    parser.add_argument(
        "-a",
        "--hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="include_hidden",
        help="Include hidden entries (names starting with '.') when expanding wildcards",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace configured exclusion patterns (gitignore syntax). Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to exclusion patterns (e.g., 'build/'). Can be repeated",
    )
    parser.add_argument(
        "--ignore-file",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="respect_ignore_file",
        help="Read .srcglobignore files (default: on)",
    )
    parser.add_argument(
        "--backend",
        choices=list(BACKENDS),
        default=None,
        help="Directory reader backend (default: auto)",
    )
    parser.add_argument(
        "--sort",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Sort output instead of keeping directory order (default: off)",
    )
    parser.add_argument(
        "--relative",
        action="store_true",
        help="Print paths relative to the current directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    return parser


def explicit_settings(opts: argparse.Namespace) -> dict[str, Any]:
    """The resolver settings the user actually passed on the command line."""
    return {name: getattr(opts, name) for name in SETTINGS if getattr(opts, name) is not None}


def _display_path(path: str, relative: bool) -> str:
    if not relative:
        return path
    try:
        return os.path.relpath(path).replace(os.sep, "/")
    except ValueError:
        # Different drive on Windows.
        return path


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the srcglob CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage or config errors, 2 for read failures)
    """
    opts = _build_parser().parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if opts.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if opts.version:
        try:
            version = importlib.metadata.version("srcglob")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not opts.patterns:
        print(
            "Error: No pattern specified. Provide one or more path patterns"
            " (e.g. 'src/**/*.cpp'). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        config_path = find_config_file(Path.cwd())
        file_config = None
        if config_path:
            logger.debug("Using config file %s", config_path)
            file_config = load_config(config_path)
        settings = merge_settings(file_config, explicit_settings(opts))
        resolver = GlobResolver(ResolverConfig(**settings))
        paths = resolver.resolve_all(opts.patterns)
    except ValueError as e:
        # Bad configuration values, like an unknown backend name.
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GlobError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for path in paths:
        print(_display_path(path, opts.relative))
    return 0


if __name__ == "__main__":
    sys.exit(main())
