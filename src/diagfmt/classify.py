# topmark:header:start
#
#   project      : DiagFmt
#   file         : classify.py
#   file_relpath : src/diagfmt/classify.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decide whether raw input is hexadecimal CBOR or diagnostic notation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from diagfmt.config.logging import get_logger
from diagfmt.config.types import InputMode

if TYPE_CHECKING:
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)

InputSource = Literal["hex", "diag"]


class HexDecodeError(ValueError):
    """Raised when input forced to hex mode is not valid hexadecimal."""


@dataclass(frozen=True)
class Classified:
    """Outcome of `classify`.

    Exactly one of ``data`` (hex input, to be converted) and ``text`` (diagnostic
    notation, to be laid out directly) is set.
    """

    source: InputSource
    data: bytes | None = None
    text: str | None = None


def decode_hex(raw: str) -> bytes:
    """Decode hexadecimal text, ignoring ASCII whitespace between digit pairs.

    Args:
        raw (str): Hexadecimal text such as ``"a1 61 61 01"``.

    Returns:
        bytes: The decoded bytes.

    Raises:
        HexDecodeError: If ``raw`` is not valid hexadecimal.
    """
    try:
        return bytes.fromhex(raw)
    except ValueError as exc:
        raise HexDecodeError(f"hexadecimal decoding failed: {exc}") from exc


def classify(raw: str, mode: InputMode = InputMode.AUTO) -> Classified:
    """Classify ``raw`` according to ``mode``.

    ``AUTO`` tries hex first, so short inputs that are both valid hex and valid
    diagnostic notation (``12`` for instance) are treated as hex.

    Args:
        raw (str): The raw input text.
        mode (InputMode): Explicit mode or ``AUTO``.

    Returns:
        Classified: The routed input.

    Raises:
        HexDecodeError: In ``HEX`` mode, if ``raw`` is not valid hexadecimal.
    """
    if mode is InputMode.DIAG:
        return Classified(source="diag", text=raw)
    if mode is InputMode.HEX:
        return Classified(source="hex", data=decode_hex(raw))

    try:
        data: bytes = decode_hex(raw)
    except HexDecodeError:
        logger.debug("Input is not hexadecimal; treating it as diagnostic notation")
        return Classified(source="diag", text=raw)
    if not data:
        # Blank input decodes to zero bytes; there is nothing to convert
        return Classified(source="diag", text=raw)
    logger.debug("Input decoded as %d byte(s) of hexadecimal CBOR", len(data))
    return Classified(source="hex", data=data)
