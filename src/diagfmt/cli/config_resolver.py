# topmark:header:start
#
#   project      : DiagFmt
#   file         : config_resolver.py
#   file_relpath : src/diagfmt/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the DiagFmt configuration from Click parameters.

Resolution order (lowest → highest precedence):
  1. Runtime defaults.
  2. The nearest discovered ``pyproject.toml`` (``[tool.diagfmt]``) and
     ``diagfmt.toml``, unless ``--no-config`` is set.
  3. Explicit config files passed via ``--config``, merged in order.
  4. CLI overrides, applied last.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from diagfmt.cli.errors import DiagfmtConfigError
from diagfmt.config import MutableConfig
from diagfmt.config.logging import get_logger
from diagfmt.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from diagfmt.cli.cli_types import ArgsNamespace
    from diagfmt.config import Config
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)


def resolve_config_from_click(
    *,
    no_config: bool,
    config_paths: Iterable[str],
    args: ArgsNamespace | None = None,
    anchor: Path | None = None,
) -> Config:
    """Build a frozen `Config` from Click parameters.

    Args:
        no_config (bool): If True, skip project config discovery.
        config_paths (Iterable[str]): Extra TOML config files to merge.
        args (ArgsNamespace | None): CLI overrides.
        anchor (Path | None): Discovery start directory (CWD when None).

    Returns:
        Config: The effective configuration.

    Raises:
        DiagfmtConfigError: If any layer recorded an error.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    if args:
        logger.trace("CLI overrides: %s", args)
        draft.apply_args(args)

    config: Config = draft.freeze()
    logger.debug("Effective config sources: %s", [str(p) for p in config.config_files])
    if config.has_errors:
        messages: list[str] = [
            d.message for d in config.diagnostics if d.level is DiagnosticLevel.ERROR
        ]
        raise DiagfmtConfigError("; ".join(messages))
    return config
