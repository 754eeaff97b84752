# topmark:header:start
#
#   project      : DiagFmt
#   file         : api.py
#   file_relpath : src/diagfmt/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public DiagFmt API (stable surface).

This module exposes a small, typed API for callers that want DiagFmt without
going through the CLI:

```python
from diagfmt import api

api.layout('{"a":[1,2]}')                  # engine only
api.format_text("a1616101").output         # hex → converter → engine
api.format_text(text, config={"layout": {"indent": 4}})
```

Configuration contract:
    ``config`` is either a frozen `diagfmt.config.Config` or a plain mapping in
    the TOML shape (``{"layout": {...}, "input": {...}, "converter": {...}}``),
    merged over the runtime defaults. Project config files are **not**
    discovered here; the CLI does that.

Removing or renaming anything exported here is a breaking change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from diagfmt.classify import Classified, HexDecodeError, InputSource, classify
from diagfmt.config import Config, InputMode, MutableConfig
from diagfmt.config.logging import get_logger
from diagfmt.converter import ConversionError, Converter, get_converter
from diagfmt.core.layout import LayoutReport, layout, layout_with_report

if TYPE_CHECKING:
    from diagfmt.config.logging import DiagfmtLogger
    from diagfmt.core.diagnostics import Diagnostic

__all__ = [
    "ConversionError",
    "FormatResult",
    "HexDecodeError",
    "InputMode",
    "format_text",
    "layout",
    "layout_with_report",
    "resolve_config",
]

logger: DiagfmtLogger = get_logger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Outcome of `format_text`.

    Attributes:
        output (str): The laid-out diagnostic notation.
        source (InputSource): ``"hex"`` when the input went through the converter,
            ``"diag"`` when it was laid out directly.
        final_depth (int): Nesting depth at the end of the text (0 when balanced).
        diagnostics (tuple[Diagnostic, ...]): Layout warnings about malformed input.
    """

    output: str
    source: InputSource
    final_depth: int
    diagnostics: tuple[Diagnostic, ...]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this result."""
        return {
            "output": self.output,
            "source": self.source,
            "final_depth": self.final_depth,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def resolve_config(config: Config | Mapping[str, Any] | None) -> Config:
    """Return a frozen `Config` from a snapshot, a TOML-shaped mapping, or None.

    Raises:
        ValueError: If a mapping holds invalid values (negative indent, unknown mode...).
    """
    if isinstance(config, Config):
        return config
    draft: MutableConfig = MutableConfig.from_defaults()
    if config is not None:
        overlay: MutableConfig = MutableConfig.from_toml_dict(dict(config))
        if overlay.diagnostics.has_errors:
            messages = "; ".join(d.message for d in overlay.diagnostics)
            raise ValueError(f"Invalid configuration: {messages}")
        draft = draft.merge_with(overlay)
    return draft.freeze()


def format_text(
    raw: str,
    *,
    config: Config | Mapping[str, Any] | None = None,
    converter: Converter | None = None,
) -> FormatResult:
    """Classify, convert if needed, and lay out ``raw``.

    Args:
        raw (str): Hexadecimal CBOR or diagnostic notation.
        config (Config | Mapping[str, Any] | None): Options; defaults when None.
        converter (Converter | None): Overrides the converter selected by ``config``.

    Returns:
        FormatResult: The laid-out text and its diagnostics.

    Raises:
        HexDecodeError: If the input mode is ``hex`` and ``raw`` is not hexadecimal.
        ConversionError: If the converter fails; nothing is laid out in that case.
    """
    cfg: Config = resolve_config(config)
    routed: Classified = classify(raw, cfg.input_mode)

    if routed.data is not None:
        conv: Converter = converter or get_converter(cfg)
        text: str = conv.convert(routed.data, cfg.embedded)
    else:
        text = routed.text or ""

    # Unset: converter output (``{1: 2, 3: 4}``) is normalized, typed notation is kept.
    normalize: bool = (
        cfg.normalize_whitespace
        if cfg.normalize_whitespace is not None
        else routed.source == "hex"
    )
    report: LayoutReport = layout_with_report(text, cfg.indent, normalize_whitespace=normalize)
    logger.debug("Formatted %s input (final depth %d)", routed.source, report.final_depth)
    return FormatResult(
        output=report.output,
        source=routed.source,
        final_depth=report.final_depth,
        diagnostics=report.diagnostics,
    )
