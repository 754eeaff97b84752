# topmark:header:start
#
#   project      : DiagFmt
#   file         : cmd_common.py
#   file_relpath : src/diagfmt/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Small helpers shared by DiagFmt commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import click

if TYPE_CHECKING:
    from diagfmt.cli.console_api import ConsoleLike
    from diagfmt.core.diagnostics import Diagnostic


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 when unset)."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))


def emit_diagnostics(
    console: ConsoleLike,
    diagnostics: Iterable[Diagnostic],
    *,
    color: bool,
) -> int:
    """Write each diagnostic to stderr and return how many were written."""
    count = 0
    for diag in diagnostics:
        console.warn(diag.render(color=color))
        count += 1
    return count
