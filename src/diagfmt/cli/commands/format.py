# topmark:header:start
#
#   project      : DiagFmt
#   file         : format.py
#   file_relpath : src/diagfmt/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt `format` command.

Reads hexadecimal CBOR or CBOR diagnostic notation (from ``DATA`` or STDIN),
converts hex input through the configured converter, and prints the notation
laid out with one item per line and nested containers indented.

Exit codes:
    USAGE_ERROR (64): no input, ``--hex`` with ``--diag``, negative ``--indent``.
    INPUT_ERROR (65): ``--hex`` input that is not hexadecimal, non-UTF-8 STDIN.
    CONVERTER_UNAVAILABLE (69): the selected converter is not installed.
    CONVERSION_ERROR (70): the converter failed.
    CONFIG_ERROR (78): invalid configuration.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from diagfmt.api import FormatResult, format_text
from diagfmt.classify import HexDecodeError
from diagfmt.cli.cli_types import EnumChoiceParam, OutputFormat, build_args_namespace
from diagfmt.cli.cmd_common import emit_diagnostics, get_effective_verbosity
from diagfmt.cli.config_resolver import resolve_config_from_click
from diagfmt.cli.errors import (
    DiagfmtConversionError,
    DiagfmtConverterMissingError,
    DiagfmtInputError,
    DiagfmtUsageError,
)
from diagfmt.cli.io import read_cli_input
from diagfmt.cli.options import CONTEXT_SETTINGS, common_config_options
from diagfmt.config.logging import get_logger
from diagfmt.config.types import ConverterBackend, InputMode
from diagfmt.converter import ConversionError, ConverterNotFoundError

if TYPE_CHECKING:
    from diagfmt.cli.console_api import ConsoleLike
    from diagfmt.config import Config
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)


def _input_mode(hex_mode: bool, diag_mode: bool) -> InputMode | None:
    if hex_mode and diag_mode:
        raise DiagfmtUsageError("The '--hex' and '--diag' options are mutually exclusive.")
    if hex_mode:
        return InputMode.HEX
    if diag_mode:
        return InputMode.DIAG
    return None


def render_result(result: FormatResult, fmt: OutputFormat) -> str:
    """Render ``result`` for stdout in the requested format."""
    if fmt == OutputFormat.JSON:
        return json.dumps(result.to_dict(), ensure_ascii=False)
    if fmt == OutputFormat.MARKDOWN:
        return f"```cbor-diag\n{result.output}\n```"
    return result.output


@click.command(
    name="format",
    help=(
        "Pretty-print CBOR diagnostic notation. DATA is hexadecimal CBOR or "
        "diagnostic notation; when omitted (or '-'), STDIN is read. "
        "Without --hex/--diag, hex decoding is tried first."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("data", required=False)
@click.option(
    "-e",
    "--embedded/--no-embedded",
    default=None,
    help="Ask the converter to expand embedded CBOR byte strings (hex input only).",
)
@click.option(
    "-i",
    "--indent",
    type=int,
    default=None,
    metavar="N",
    help="Spaces per nesting level (default: 2).",
)
@click.option("-x", "--hex", "hex_mode", is_flag=True, help="Input is hexadecimal CBOR.")
@click.option("-d", "--diag", "diag_mode", is_flag=True, help="Input is diagnostic notation.")
@click.option(
    "-n",
    "--normalize/--no-normalize",
    "normalize",
    default=None,
    help="Drop whitespace outside literals and write ': ' after colons.",
)
@click.option(
    "--backend",
    type=EnumChoiceParam(ConverterBackend),
    default=None,
    help=f"Converter for hex input ({', '.join(b.value for b in ConverterBackend)}).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    metavar="SECONDS",
    help="Seconds the cbor2diag.rb converter may run.",
)
@common_config_options
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def format_command(
    *,
    data: str | None,
    embedded: bool | None,
    indent: int | None,
    hex_mode: bool,
    diag_mode: bool,
    normalize: bool | None,
    backend: ConverterBackend | None,
    timeout: float | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """Format ``DATA`` (or STDIN) and print the result to stdout."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = get_effective_verbosity(ctx)

    input_mode: InputMode | None = _input_mode(hex_mode, diag_mode)
    if indent is not None and indent < 0:
        raise DiagfmtUsageError(f"--indent must be a non-negative integer (got {indent})")

    config: Config = resolve_config_from_click(
        no_config=no_config,
        config_paths=config_paths,
        args=build_args_namespace(
            indent=indent,
            normalize_whitespace=normalize,
            input_mode=input_mode,
            embedded=embedded,
            backend=backend,
            timeout=timeout,
        ),
    )
    raw: str = read_cli_input(data)

    try:
        result: FormatResult = format_text(raw, config=config)
    except HexDecodeError as exc:
        raise DiagfmtInputError(str(exc)) from exc
    except ConverterNotFoundError as exc:
        raise DiagfmtConverterMissingError(str(exc)) from exc
    except ConversionError as exc:
        raise DiagfmtConversionError(str(exc)) from exc

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if vlevel > 0:
        emit_diagnostics(console, config.diagnostics, color=bool(ctx.color))
        emit_diagnostics(console, result.diagnostics, color=bool(ctx.color))
    logger.debug(
        "Formatted %s input; %d layout diagnostic(s)", result.source, len(result.diagnostics)
    )
    console.print(render_result(result, fmt))
