# topmark:header:start
#
#   project      : DiagFmt
#   file         : scanner.py
#   file_relpath : src/diagfmt/core/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Literal-aware tokenizer for CBOR diagnostic notation.

The scanner splits diagnostic-notation text into the handful of token kinds the
layout engine cares about. It does not parse the notation: apart from container
delimiters and item separators, every character is a `TokenKind.PASS_THROUGH`
token.

Quoted spans (``"text"`` strings as well as ``'bytes'``, ``h'..'``, ``b64'..'``
and friends) are emitted as a single `TokenKind.OPAQUE_LITERAL` token. The
encoding prefix in front of a single-quoted byte string is plain pass-through
text; only the quoted part is opaque. Inside a literal a backslash protects the
next character, so an escaped quote never terminates the span.

The scan runs as a three-state machine (`ScanState`) in one left-to-right pass,
looking one character ahead to recognize the ``<<`` / ``>>`` markers that wrap
embedded CBOR byte content.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from diagfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from diagfmt.config.logging import DiagfmtLogger

logger: DiagfmtLogger = get_logger(__name__)

OPEN_CHARS: Final[frozenset[str]] = frozenset("{[")
CLOSE_CHARS: Final[frozenset[str]] = frozenset("}]")
SEPARATOR_CHAR: Final[str] = ","
QUOTE_CHARS: Final[frozenset[str]] = frozenset("\"'")
ESCAPE_CHAR: Final[str] = "\\"

# Two-character markers around embedded CBOR byte content: h'..' encoded as <<...>>
MARKERS: Final[frozenset[str]] = frozenset({"<<", ">>"})


class TokenKind(Enum):
    """Classification of a scanned span."""

    OPEN_CONTAINER = "open"
    CLOSE_CONTAINER = "close"
    ITEM_SEPARATOR = "separator"
    OPAQUE_LITERAL = "literal"
    PASS_THROUGH = "pass"


class ScanState(Enum):
    """States of the scanner."""

    NORMAL = "normal"
    IN_LITERAL = "in_literal"
    IN_ESCAPE = "in_escape"


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of the input.

    Attributes:
        kind (TokenKind): What the span is.
        text (str): The exact input characters of the span.
        offset (int): Index of the first character of the span in the input.
        terminated (bool): False only for an `TokenKind.OPAQUE_LITERAL` that runs
            to the end of the input without its closing quote.
    """

    kind: TokenKind
    text: str
    offset: int
    terminated: bool = True


def classify_char(ch: str) -> TokenKind:
    """Return the token kind of a single character outside any literal."""
    if ch in OPEN_CHARS:
        return TokenKind.OPEN_CONTAINER
    if ch in CLOSE_CHARS:
        return TokenKind.CLOSE_CONTAINER
    if ch == SEPARATOR_CHAR:
        return TokenKind.ITEM_SEPARATOR
    return TokenKind.PASS_THROUGH


def scan(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text`` from left to right.

    The concatenation of all yielded ``Token.text`` values is always ``text``
    itself; the scanner never drops, rewrites or reorders characters.

    Args:
        text (str): Diagnostic-notation text.

    Yields:
        Token: The next classified span.
    """
    state: ScanState = ScanState.NORMAL
    literal_start: int = 0
    quote: str = ""
    i: int = 0
    n: int = len(text)

    while i < n:
        ch: str = text[i]

        if state is ScanState.IN_ESCAPE:
            state = ScanState.IN_LITERAL
        elif state is ScanState.IN_LITERAL:
            if ch == ESCAPE_CHAR:
                state = ScanState.IN_ESCAPE
            elif ch == quote:
                token = Token(TokenKind.OPAQUE_LITERAL, text[literal_start : i + 1], literal_start)
                logger.trace("literal at %d: %r", literal_start, token.text)
                yield token
                state = ScanState.NORMAL
        elif ch in QUOTE_CHARS:
            state = ScanState.IN_LITERAL
            literal_start = i
            quote = ch
        elif text[i : i + 2] in MARKERS:
            yield Token(TokenKind.PASS_THROUGH, text[i : i + 2], i)
            i += 2
            continue
        else:
            yield Token(classify_char(ch), ch, i)

        i += 1

    if state is not ScanState.NORMAL:
        logger.trace("unterminated literal at %d", literal_start)
        yield Token(
            TokenKind.OPAQUE_LITERAL,
            text[literal_start:],
            literal_start,
            terminated=False,
        )
