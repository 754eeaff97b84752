# topmark:header:start
#
#   project      : DiagFmt
#   file         : errors.py
#   file_relpath : src/diagfmt/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the DiagFmt CLI.

Raise these in commands to signal errors with standardized messages and exit
codes. Library exceptions (`diagfmt.converter.ConversionError`,
`diagfmt.classify.HexDecodeError`) are translated into these at the command
boundary.

Styling:
    Errors prefer the project console if one is stored in the Click context (see
    `DiagfmtError.show`); otherwise Click's default display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from diagfmt.cli.exit_codes import ExitCode


class DiagfmtError(click.ClickException):
    """Base class for all DiagFmt CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show`)."""
        return str(self.message)

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class DiagfmtUsageError(DiagfmtError):
    """Error for command-line invocation errors (invalid flags/args, no input)."""

    exit_code = ExitCode.USAGE_ERROR


class DiagfmtInputError(DiagfmtError):
    """Error for input that cannot be decoded (invalid hex, invalid UTF-8)."""

    exit_code = ExitCode.INPUT_ERROR


class DiagfmtConverterMissingError(DiagfmtError):
    """Error when the selected converter is not installed."""

    exit_code = ExitCode.CONVERTER_UNAVAILABLE


class DiagfmtConversionError(DiagfmtError):
    """Error when the converter fails on the given bytes."""

    exit_code = ExitCode.CONVERSION_ERROR


class DiagfmtIOError(DiagfmtError):
    """Error for I/O errors while reading input."""

    exit_code = ExitCode.IO_ERROR


class DiagfmtConfigError(DiagfmtError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR
