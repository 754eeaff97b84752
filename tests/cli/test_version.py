# topmark:header:start
#
#   project      : DiagFmt
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output."""

from __future__ import annotations

import json

from diagfmt.constants import DIAGFMT_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli


def test_version_outputs_version() -> None:
    result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == DIAGFMT_VERSION


def test_version_verbose_adds_heading() -> None:
    result = run_cli(["--no-color", "-v", "version"])
    assert_SUCCESS(result)
    assert "DiagFmt version:" in result.output
    assert DIAGFMT_VERSION in result.output


def test_version_json() -> None:
    result = run_cli(["version", "--format", "json"])
    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": DIAGFMT_VERSION}


def test_version_markdown() -> None:
    result = run_cli(["--no-color", "version", "--format", "markdown"])
    assert_SUCCESS(result)
    assert result.output.startswith("# DiagFmt Version\n")
    assert f"**DiagFmt version: {DIAGFMT_VERSION}**" in result.output


def test_version_rejects_unknown_format() -> None:
    result = run_cli(["version", "--format", "ndjson"])
    assert result.exit_code == 2
    assert "Invalid value 'ndjson'" in result.output
