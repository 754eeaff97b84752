# topmark:header:start
#
#   project      : DiagFmt
#   file         : __init__.py
#   file_relpath : src/diagfmt/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for DiagFmt.

The group lives in `diagfmt.cli.main`; each subcommand has its own module
under ``diagfmt.cli.commands``. Program output goes through the console
(`diagfmt.cli.console`), internal diagnostics through logging.
"""

from __future__ import annotations
