# topmark:header:start
#
#   project      : DiagFmt
#   file         : test_logging_flags.py
#   file_relpath : tests/cli/test_logging_flags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for internal logging configured via DIAGFMT_LOG_LEVEL."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from diagfmt.config.logging import TRACE_LEVEL, resolve_env_log_level, setup_logging
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import parametrize


@parametrize(
    "value, expected",
    [("DEBUG", logging.DEBUG), ("trace", TRACE_LEVEL), ("30", 30), ("bogus", None)],
)
def test_env_log_level(monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None) -> None:
    monkeypatch.setenv("DIAGFMT_LOG_LEVEL", value)
    assert resolve_env_log_level() == expected


def test_env_unset_means_no_override() -> None:
    assert resolve_env_log_level() is None


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Point the root handler back at the real stderr after a CLI run."""
    yield
    setup_logging(level=TRACE_LEVEL)


@pytest.mark.usefixtures("restore_logging")
def test_cli_logs_to_stderr_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIAGFMT_LOG_LEVEL", "DEBUG")
    result = run_cli(["--no-color", "format", "-d", "[1]"])
    assert_SUCCESS(result)
    assert "[\n  1\n]" in result.output
    assert "Formatted diag input" in result.output


def test_cli_is_silent_by_default() -> None:
    result = run_cli(["--no-color", "format", "-d", "[1]"])
    assert_SUCCESS(result)
    assert result.output == "[\n  1\n]\n"
