# topmark:header:start
#
#   project      : DiagFmt
#   file         : io.py
#   file_relpath : src/diagfmt/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input acquisition for the ``format`` command.

``DATA`` given on the command line is used as-is; when it is omitted (or is
``-``), STDIN is read to the end. One trailing line break is dropped from
STDIN content so ``echo ... | diagfmt format`` does not lay out the newline.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from diagfmt.cli.errors import DiagfmtInputError, DiagfmtIOError, DiagfmtUsageError
from diagfmt.config.logging import get_logger

if TYPE_CHECKING:
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)

NO_INPUT_ERR: str = "no input received, pass input either via stdin or command-line argument"


def _strip_one_newline(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def read_stdin_text() -> str:
    """Read STDIN to the end as UTF-8 text.

    Raises:
        DiagfmtInputError: If STDIN is not valid UTF-8.
        DiagfmtIOError: If reading fails.
    """
    try:
        raw: bytes = sys.stdin.buffer.read()
    except OSError as exc:
        raise DiagfmtIOError(f"failed to read stdin: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DiagfmtInputError(f"stdin is not valid UTF-8: {exc}") from exc


def read_cli_input(data: str | None) -> str:
    """Return the raw input for ``format``.

    Args:
        data (str | None): The positional ``DATA`` argument.

    Returns:
        str: The raw input text.

    Raises:
        DiagfmtUsageError: If no input was received.
    """
    if data is not None and data != "-":
        text: str = data
    else:
        logger.debug("Reading input from stdin")
        text = _strip_one_newline(read_stdin_text())

    if not text:
        raise DiagfmtUsageError(NO_INPUT_ERR)
    return text
