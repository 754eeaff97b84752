# topmark:header:start
#
#   project      : DiagFmt
#   file         : test_config_discovery.py
#   file_relpath : tests/config/test_config_discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for config discovery and layered merging."""

from __future__ import annotations

from typing import TYPE_CHECKING

from diagfmt.config import MutableConfig
from diagfmt.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from pathlib import Path


def test_discovery_finds_nearest_directory(tmp_path: Path) -> None:
    (tmp_path / "diagfmt.toml").write_text("[layout]\nindent = 1\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (tmp_path / "a" / "diagfmt.toml").write_text("[layout]\nindent = 3\n", encoding="utf-8")

    found = MutableConfig.discover_local_config_files(nested)
    assert found == [(tmp_path / "a" / "diagfmt.toml").resolve()]


def test_discovery_orders_pyproject_before_own_file(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.diagfmt.layout]\nindent = 5\n", encoding="utf-8"
    )
    (tmp_path / "diagfmt.toml").write_text("[layout]\nindent = 7\n", encoding="utf-8")

    found = MutableConfig.discover_local_config_files(tmp_path)
    assert [p.name for p in found] == ["pyproject.toml", "diagfmt.toml"]

    cfg = MutableConfig.load_merged(anchor=tmp_path).freeze()
    assert cfg.indent == 7


def test_discovery_skips_pyproject_without_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
    assert MutableConfig.discover_local_config_files(tmp_path) == []


def test_load_merged_no_config_skips_discovery(tmp_path: Path) -> None:
    (tmp_path / "diagfmt.toml").write_text("[layout]\nindent = 9\n", encoding="utf-8")
    cfg = MutableConfig.load_merged(anchor=tmp_path, no_config=True).freeze()
    assert cfg.indent == 2


def test_extra_files_merge_after_discovery_in_order(tmp_path: Path) -> None:
    (tmp_path / "diagfmt.toml").write_text("[layout]\nindent = 9\n", encoding="utf-8")
    first = tmp_path / "first.toml"
    first.write_text("[layout]\nindent = 3\n[input]\nmode = 'diag'\n", encoding="utf-8")
    second = tmp_path / "second.toml"
    second.write_text("[layout]\nindent = 4\n", encoding="utf-8")

    cfg = MutableConfig.load_merged(anchor=tmp_path, extra_config_files=[first, second]).freeze()
    assert cfg.indent == 4
    assert cfg.input_mode.value == "diag"
    assert cfg.config_files[-2:] == (first, second)


def test_extra_pyproject_without_table_warns(tmp_path: Path) -> None:
    extra = tmp_path / "pyproject.toml"
    extra.write_text('[project]\nname = "x"\n', encoding="utf-8")
    cfg = MutableConfig.load_merged(
        anchor=tmp_path / "missing", extra_config_files=[extra], no_config=True
    ).freeze()
    warnings = [d for d in cfg.diagnostics if d.level is DiagnosticLevel.WARNING]
    assert len(warnings) == 1
    assert "tool.diagfmt" in warnings[0].message
