# topmark:header:start
#
#   project      : DiagFmt
#   file         : __init__.py
#   file_relpath : src/diagfmt/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for DiagFmt.

Exposes the immutable `Config` snapshot, the `MutableConfig` builder used to
discover and merge TOML layers (``diagfmt.toml`` or ``[tool.diagfmt]`` in
``pyproject.toml``), and the enumerations stored in them.
"""

from __future__ import annotations

from diagfmt.config.model import ArgsLike, Config, MutableConfig
from diagfmt.config.types import ConverterBackend, InputMode

__all__ = [
    "ArgsLike",
    "Config",
    "ConverterBackend",
    "InputMode",
    "MutableConfig",
]
