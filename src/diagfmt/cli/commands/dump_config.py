# topmark:header:start
#
#   project      : DiagFmt
#   file         : dump_config.py
#   file_relpath : src/diagfmt/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt `dump-config` command.

Emits the effective DiagFmt configuration as TOML after applying defaults and
project/explicit config files. The TOML is wrapped between
``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing in tests or
tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from diagfmt.cli.cmd_common import emit_diagnostics, get_effective_verbosity
from diagfmt.cli.config_resolver import resolve_config_from_click
from diagfmt.cli.options import CONTEXT_SETTINGS, common_config_options
from diagfmt.config.logging import get_logger

if TYPE_CHECKING:
    from diagfmt.cli.console_api import ConsoleLike
    from diagfmt.config import Config

logger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the final merged DiagFmt configuration as TOML.",
    epilog="Output is wrapped between '# === BEGIN ===' and '# === END ===' markers.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
def dump_config_command(*, no_config: bool, config_paths: tuple[str, ...]) -> None:
    """Dump the final merged configuration as TOML.

    Args:
        no_config (bool): If True, skip project config discovery.
        config_paths (tuple[str, ...]): Additional TOML config files to merge.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config: Config = resolve_config_from_click(no_config=no_config, config_paths=config_paths)
    logger.trace("Merged config: %s", config)

    if get_effective_verbosity(ctx) > 0:
        for source in config.config_files:
            console.warn(f"Loaded config: {source}")
        emit_diagnostics(console, config.diagnostics, color=bool(ctx.color))

    console.print("# === BEGIN ===")
    console.print(config.to_toml().rstrip("\n"))
    console.print("# === END ===")
