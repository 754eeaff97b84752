# topmark:header:start
#
#   project      : DiagFmt
#   file         : converter.py
#   file_relpath : src/diagfmt/converter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Convert CBOR bytes into diagnostic notation.

The conversion itself is done by an external implementation, selected through
`diagfmt.config.types.ConverterBackend`:

- ``ruby`` runs ``cbor2diag.rb`` from the ``cbor-diag`` Ruby gem with the bytes
  on stdin (``-e`` asks it to expand embedded CBOR byte strings);
- ``python`` calls ``cbor_diag.cbor2diag`` from the ``cbor-diag`` Python package,
  which has no embedded-CBOR expansion.

Every failure surfaces as `ConversionError`; callers must not lay out the
output of a failed conversion.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from diagfmt.config.logging import get_logger
from diagfmt.config.types import ConverterBackend
from diagfmt.constants import (
    CBOR2DIAG_EMBEDDED_FLAG,
    CBOR2DIAG_EXECUTABLE,
    DEFAULT_CONVERTER_TIMEOUT,
)

if TYPE_CHECKING:
    from diagfmt.config import Config
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)

NO_CBOR2DIAG_ERR: str = (
    "failed to locate {executable}.\n"
    'Ensure cbor2diag.rb is installed (using "gem install cbor-diag") and present in '
    "your $PATH, select the Python backend (--backend python), "
    "or input diagnostic CBOR instead (e.g. using https://cbor.me)."
)


class ConversionError(Exception):
    """Raised when CBOR bytes cannot be turned into diagnostic notation."""


class ConverterNotFoundError(ConversionError):
    """Raised when the selected converter implementation is not available."""


class Converter(Protocol):
    """Anything that turns CBOR bytes into diagnostic-notation text."""

    def convert(self, data: bytes, embedded: bool = False) -> str:
        """Return the diagnostic notation of ``data``."""
        ...


def _decode_output(raw: bytes, origin: str) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(f"{origin} produced output that is not valid UTF-8: {exc}") from exc
    return text.rstrip("\r\n")


@dataclass(frozen=True)
class RubyConverter:
    """Run ``cbor2diag.rb`` as a blocking subprocess.

    Attributes:
        executable (str): Executable name looked up on ``PATH``, or a path.
        timeout (float): Seconds before the subprocess is abandoned.
    """

    executable: str = CBOR2DIAG_EXECUTABLE
    timeout: float = DEFAULT_CONVERTER_TIMEOUT

    def locate(self) -> str:
        """Return the resolved executable path.

        Raises:
            ConverterNotFoundError: If the executable cannot be found.
        """
        path: str | None = shutil.which(self.executable)
        if path is None:
            raise ConverterNotFoundError(NO_CBOR2DIAG_ERR.format(executable=self.executable))
        return path

    def convert(self, data: bytes, embedded: bool = False) -> str:
        """Pipe ``data`` through ``cbor2diag.rb`` and return its output.

        Args:
            data (bytes): CBOR-encoded bytes.
            embedded (bool): Pass ``-e`` so embedded CBOR byte strings are expanded.

        Returns:
            str: Diagnostic notation, without the trailing newline.

        Raises:
            ConversionError: If the process cannot run, times out or fails.
        """
        argv: list[str] = [self.locate()]
        if embedded:
            argv.append(CBOR2DIAG_EMBEDDED_FLAG)
        logger.debug("Running %s on %d byte(s)", " ".join(argv), len(data))

        try:
            proc = subprocess.run(
                argv,
                input=data,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ConversionError(
                f"{self.executable} timed out after {self.timeout:g} second(s)"
            ) from exc
        except OSError as exc:
            raise ConversionError(f"failed to execute {self.executable}: {exc}") from exc

        if proc.returncode != 0:
            detail: str = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ConversionError(
                f"{self.executable} failed (exit status {proc.returncode})"
                + (f": {detail}" if detail else "")
            )
        return _decode_output(proc.stdout, self.executable)


@dataclass(frozen=True)
class PythonConverter:
    """Convert in-process with the ``cbor-diag`` Python package."""

    def convert(self, data: bytes, embedded: bool = False) -> str:
        """Return the single-line diagnostic notation of ``data``.

        Args:
            data (bytes): CBOR-encoded bytes.
            embedded (bool): Not supported by this backend; a warning is logged.

        Returns:
            str: Diagnostic notation.

        Raises:
            ConverterNotFoundError: If ``cbor-diag`` is not installed.
            ConversionError: If ``data`` is not valid CBOR.
        """
        # Runtime import keeps the Ruby-only path free of the extension module
        try:
            import cbor_diag  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ConverterNotFoundError(
                'the "cbor-diag" Python package is not installed (pip install cbor-diag)'
            ) from exc

        if embedded:
            logger.warning("The python backend cannot expand embedded CBOR; ignoring --embedded")

        logger.debug("Converting %d byte(s) with cbor_diag", len(data))
        try:
            text: str = cbor_diag.cbor2diag(data, pretty=False)
        except ValueError as exc:
            raise ConversionError(f"cbor_diag failed: {exc}") from exc
        return text.rstrip("\r\n")


def get_converter(config: Config | None = None) -> Converter:
    """Return the converter selected by ``config`` (Ruby with defaults when None)."""
    if config is None:
        return RubyConverter()
    if config.backend is ConverterBackend.PYTHON:
        return PythonConverter()
    return RubyConverter(executable=config.executable, timeout=config.timeout)


def convert(data: bytes, embedded: bool = False, *, config: Config | None = None) -> str:
    """Convert ``data`` to diagnostic notation with the configured backend.

    Args:
        data (bytes): CBOR-encoded bytes.
        embedded (bool): Expand embedded CBOR byte strings where supported.
        config (Config | None): Selects backend, executable and timeout.

    Returns:
        str: Diagnostic notation.

    Raises:
        ConversionError: If the conversion fails.
    """
    return get_converter(config).convert(data, embedded)
