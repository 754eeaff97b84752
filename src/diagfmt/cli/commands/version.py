# topmark:header:start
#
#   project      : DiagFmt
#   file         : version.py
#   file_relpath : src/diagfmt/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt `version` command.

Prints the current DiagFmt version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from diagfmt.cli.cli_types import EnumChoiceParam, OutputFormat
from diagfmt.cli.cmd_common import get_effective_verbosity
from diagfmt.constants import DIAGFMT_VERSION

if TYPE_CHECKING:
    from diagfmt.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of DiagFmt.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of DiagFmt.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": DIAGFMT_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# DiagFmt Version\n")
        console.print(f"**DiagFmt version: {DIAGFMT_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("DiagFmt version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(DIAGFMT_VERSION, bold=True)}")
    else:
        console.print(console.styled(DIAGFMT_VERSION, bold=True))
