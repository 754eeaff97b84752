# topmark:header:start
#
#   project      : DiagFmt
#   file         : __main__.py
#   file_relpath : src/diagfmt/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running DiagFmt via ``python -m diagfmt``.

Delegates to `diagfmt.cli.main.cli`, the single CLI entry point.

Examples:
    Lay out a diagnostic-notation string::

        python -m diagfmt format '{"a":[1,2]}'
"""

from __future__ import annotations

from diagfmt.cli.main import cli

if __name__ == "__main__":
    cli()
