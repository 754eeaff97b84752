# topmark:header:start
#
#   project      : DiagFmt
#   file         : types.py
#   file_relpath : src/diagfmt/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enumerations and type aliases shared by the config layer."""

from __future__ import annotations

from enum import Enum
from typing import Any

TomlTable = dict[str, Any]


class InputMode(str, Enum):
    """How raw input is interpreted before layout.

    Members:
        AUTO: Try to decode the input as hexadecimal CBOR; if that fails, treat it as
            diagnostic notation.
        HEX: The input must be hexadecimal CBOR; it is converted before layout.
        DIAG: The input is diagnostic notation and is laid out directly.
    """

    AUTO = "auto"
    HEX = "hex"
    DIAG = "diag"


class ConverterBackend(str, Enum):
    """Which implementation turns CBOR bytes into diagnostic notation.

    Members:
        RUBY: The ``cbor2diag.rb`` executable from the ``cbor-diag`` Ruby gem.
        PYTHON: The ``cbor-diag`` Python package.
    """

    RUBY = "ruby"
    PYTHON = "python"
