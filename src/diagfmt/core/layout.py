# topmark:header:start
#
#   project      : DiagFmt
#   file         : layout.py
#   file_relpath : src/diagfmt/core/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layout engine: indent flat CBOR diagnostic notation.

Rules, applied to the token stream produced by `diagfmt.core.scanner.scan`:

- after an open container (``{`` / ``[``) the depth is incremented and a
  newline plus ``indent * depth`` spaces is emitted;
- before a close container (``}`` / ``]``) the depth is decremented, then a
  newline plus ``indent * depth`` spaces is emitted, then the close itself;
- after an item separator (``,``) a newline plus ``indent * depth`` spaces is
  emitted;
- everything else, literals included, is copied verbatim.

Empty containers are not collapsed, and whitespace already present in the input
is kept as is. Tag parentheses and the ``<<`` / ``>>`` markers do not affect the
depth.

Malformed input never raises: a close without a matching open is emitted at
depth 0, containers left open at the end stay open, and an unterminated literal
swallows the rest of the input verbatim. Each of these records a WARNING
diagnostic on the `LayoutReport`.

Running the engine on its own output is well defined but not a no-op: the
newlines inserted by the first run are preserved as content by the second.

With ``normalize_whitespace`` set, whitespace outside literals is dropped and a
single space is written after every ``:``, which lays out converter output such
as ``{1: 2, 3: 4}`` without stray leading spaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from diagfmt.config.logging import get_logger
from diagfmt.constants import DEFAULT_INDENT
from diagfmt.core.diagnostics import Diagnostic, DiagnosticLog
from diagfmt.core.scanner import TokenKind, scan

if TYPE_CHECKING:
    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)


@dataclass(frozen=True)
class LayoutReport:
    """Result of a layout run.

    Attributes:
        output (str): The indented text.
        final_depth (int): Nesting depth at the end of the input (0 when balanced).
        stray_closes (int): Number of close delimiters seen at depth 0.
        unterminated_literal (bool): Whether the input ended inside a quoted span.
        diagnostics (tuple[Diagnostic, ...]): Warnings about malformed input.
    """

    output: str
    final_depth: int
    stray_closes: int
    unterminated_literal: bool
    diagnostics: tuple[Diagnostic, ...]

    @property
    def balanced(self) -> bool:
        """Return True when no degradation happened."""
        return not self.diagnostics


def _newline(depth: int, indent: int) -> str:
    return "\n" + " " * (indent * depth)


def layout_with_report(
    text: str,
    indent: int = DEFAULT_INDENT,
    *,
    normalize_whitespace: bool = False,
) -> LayoutReport:
    """Lay out ``text`` and report how the input degraded, if at all.

    Args:
        text (str): Diagnostic-notation text.
        indent (int): Spaces per nesting level.
        normalize_whitespace (bool): Drop whitespace outside literals and emit
            ``": "`` after colons.

    Returns:
        LayoutReport: The indented text plus depth bookkeeping and diagnostics.

    Raises:
        ValueError: If ``indent`` is negative.
    """
    if indent < 0:
        raise ValueError(f"indent must be a non-negative integer (got {indent})")

    out: list[str] = []
    diagnostics = DiagnosticLog()
    depth: int = 0
    stray_closes: int = 0
    unterminated: bool = False

    for token in scan(text):
        kind: TokenKind = token.kind

        if kind is TokenKind.OPEN_CONTAINER:
            depth += 1
            out.append(token.text)
            out.append(_newline(depth, indent))
        elif kind is TokenKind.CLOSE_CONTAINER:
            if depth == 0:
                stray_closes += 1
                diagnostics.add_warning(
                    f"Unmatched {token.text!r} at offset {token.offset}; kept at depth 0"
                )
            else:
                depth -= 1
            out.append(_newline(depth, indent))
            out.append(token.text)
        elif kind is TokenKind.ITEM_SEPARATOR:
            out.append(token.text)
            out.append(_newline(depth, indent))
        elif kind is TokenKind.OPAQUE_LITERAL:
            out.append(token.text)
            if not token.terminated:
                unterminated = True
                diagnostics.add_warning(
                    f"Unterminated literal starting at offset {token.offset}; "
                    "copied the remaining input verbatim"
                )
        elif normalize_whitespace and token.text.isspace():
            continue
        else:
            out.append(token.text)
            if normalize_whitespace and token.text == ":":
                out.append(" ")

    if depth > 0:
        diagnostics.add_warning(f"Input ended with {depth} unclosed container(s)")

    logger.debug(
        "Laid out %d characters (indent=%d, final depth=%d, stray closes=%d)",
        len(text),
        indent,
        depth,
        stray_closes,
    )

    return LayoutReport(
        output="".join(out),
        final_depth=depth,
        stray_closes=stray_closes,
        unterminated_literal=unterminated,
        diagnostics=tuple(diagnostics),
    )


def layout(
    text: str,
    indent: int = DEFAULT_INDENT,
    *,
    normalize_whitespace: bool = False,
) -> str:
    """Return ``text`` laid out with ``indent`` spaces per nesting level.

    Total for any input string; see `layout_with_report` for the details.

    Args:
        text (str): Diagnostic-notation text.
        indent (int): Spaces per nesting level.
        normalize_whitespace (bool): Drop whitespace outside literals and emit
            ``": "`` after colons.

    Returns:
        str: The indented text.
    """
    return layout_with_report(text, indent, normalize_whitespace=normalize_whitespace).output
