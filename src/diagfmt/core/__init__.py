# topmark:header:start
#
#   project      : DiagFmt
#   file         : __init__.py
#   file_relpath : src/diagfmt/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives of DiagFmt.

- ``scanner``: literal-aware tokenizer for diagnostic notation.
- ``layout``: the indentation engine built on the scanner.
- ``diagnostics``: levels, messages and aggregation used to report degraded
  input and config problems consistently.

Nothing in this package performs I/O or depends on the CLI.
"""

from __future__ import annotations
