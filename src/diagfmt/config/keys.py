# topmark:header:start
#
#   project      : DiagFmt
#   file         : keys.py
#   file_relpath : src/diagfmt/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for DiagFmt configuration.

These constants are the external configuration schema as it appears in
``diagfmt.toml`` and in ``[tool.diagfmt]`` inside ``pyproject.toml``. Renaming
or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by DiagFmt configuration.

    The ordering mirrors the defaults in `diagfmt.config.loaders.load_defaults_dict`.
    """

    # [layout]
    SECTION_LAYOUT: Final[str] = "layout"

    KEY_INDENT: Final[str] = "indent"
    KEY_NORMALIZE_WHITESPACE: Final[str] = "normalize_whitespace"

    # [input]
    SECTION_INPUT: Final[str] = "input"

    KEY_MODE: Final[str] = "mode"
    KEY_EMBEDDED: Final[str] = "embedded"

    # [converter]
    SECTION_CONVERTER: Final[str] = "converter"

    KEY_BACKEND: Final[str] = "backend"
    KEY_EXECUTABLE: Final[str] = "executable"
    KEY_TIMEOUT: Final[str] = "timeout"
