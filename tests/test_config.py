"""Tests for config file discovery, validation, and merging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from srcglob.cli import _build_parser, explicit_settings
from srcglob.config import (
    ConfigError,
    SrcglobConfig,
    find_config_file,
    load_config,
    merge_settings,
)


def test_find_config_srcglob_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text("[matching]\ninclude-dirs = true\n")
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_srcglob_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "srcglob.toml").write_text("sort = true\n")
    dot_config = tmp_path / ".srcglob.toml"
    dot_config.write_text("sort = false\n")
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.srcglob]\nsort = true\n")
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_invalid_pyproject_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.srcglob\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text("sort = true\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_load_config_sections_and_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text(
        "[matching]\n"
        "include-dirs = true\n"
        "include-hidden = true\n"
        "\n"
        "[discovery]\n"
        'extend-exclude = ["build/"]\n'
        "respect-ignore-file = false\n"
        'backend = "posix"\n'
    )
    config = load_config(config_file)
    assert config.include_dirs is True
    assert config.include_hidden is True
    assert config.extend_exclude == ["build/"]
    assert config.respect_ignore_file is False
    assert config.backend == "posix"
    # Unset fields stay None
    assert config.include_files is None
    assert config.sort is None


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.srcglob]\nexclude = ["third_party/"]\nsort = true\n')
    config = load_config(config_file)
    assert config.exclude == ["third_party/"]
    assert config.sort is True


def test_load_config_warns_on_unknown_keys(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text("colour = 'blue'\nsort = true\n")
    with caplog.at_level(logging.WARNING, logger="srcglob.config"):
        config = load_config(config_file)
    assert config == SrcglobConfig(sort=True)
    assert "ignoring unknown setting 'colour'" in caplog.text


@pytest.mark.parametrize(
    "content, message",
    [
        ('backend = "beos"\n', "'backend' must be one of auto, posix, windows"),
        ('sort = "yes"\n', "'sort' must be true or false"),
        ("[matching]\ninclude-hidden = 1\n", "'include_hidden' must be true or false"),
        ('exclude = "build/"\n', "'exclude' must be a list of pattern strings"),
        ("[discovery]\nextend-exclude = [1, 2]\n", "'extend_exclude' must be a list"),
        ('matching = "all"\n', "[matching] must be a table"),
        ("sort = \n", "invalid TOML"),
    ],
)
def test_load_config_rejects_bad_values(tmp_path: Path, content: str, message: str) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text(content)
    with pytest.raises(ConfigError) as exc:
        load_config(config_file)
    assert message in str(exc.value)
    assert str(config_file) in str(exc.value)
    assert exc.value.path == config_file


def test_config_error_is_a_value_error(tmp_path: Path) -> None:
    config_file = tmp_path / "srcglob.toml"
    config_file.write_text('backend = "beos"\n')
    with pytest.raises(ValueError):
        load_config(config_file)


def test_settings_only_lists_keys_that_were_set() -> None:
    config = SrcglobConfig(include_dirs=False, extend_exclude=["build/"])
    assert config.settings() == {"include_dirs": False, "extend_exclude": ["build/"]}


def test_merge_config_fills_unset_flags() -> None:
    config = SrcglobConfig(include_dirs=True, extend_exclude=["build/"], backend="windows")
    assert merge_settings(config, {}) == {
        "include_dirs": True,
        "extend_exclude": ["build/"],
        "backend": "windows",
    }


def test_merge_explicit_cli_flags_win() -> None:
    config = SrcglobConfig(sort=True, extend_exclude=["build/"], include_hidden=True)
    merged = merge_settings(config, {"sort": False, "extend_exclude": ["out/"]})
    assert merged == {"sort": False, "extend_exclude": ["out/"], "include_hidden": True}


def test_merge_without_config() -> None:
    assert merge_settings(None, {"sort": True}) == {"sort": True}
    assert merge_settings(None, {}) == {}


def test_explicit_settings_empty_without_flags() -> None:
    opts = _build_parser().parse_args(["src/*.cpp"])
    assert explicit_settings(opts) == {}


def test_explicit_settings_track_given_flags() -> None:
    opts = _build_parser().parse_args(
        ["--no-files", "-d", "--no-sort", "--extend-exclude", "out/", "--backend", "posix", "x"]
    )
    assert explicit_settings(opts) == {
        "include_files": False,
        "include_dirs": True,
        "sort": False,
        "extend_exclude": ["out/"],
        "backend": "posix",
    }


def test_explicit_false_is_tracked() -> None:
    opts = _build_parser().parse_args(["--no-hidden", "--no-ignore-file", "x"])
    assert explicit_settings(opts) == {"include_hidden": False, "respect_ignore_file": False}
