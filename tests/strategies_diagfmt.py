# topmark:header:start
#
#   project      : DiagFmt
#   file         : strategies_diagfmt.py
#   file_relpath : tests/strategies_diagfmt.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating CBOR diagnostic-notation text.

Two families: arbitrary character soup over the delimiter-heavy alphabet the
layout engine reacts to (malformed input included), and well-formed compact
notation built from nested arrays and maps.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

Draw = Callable[[st.SearchStrategy[Any]], Any]

# No whitespace: inserted newline+indent runs are then the only whitespace in the output
DIAG_ALPHABET: str = "{}[],:\"'\\<>()01abh-"

# Characters that would be structural outside a literal
STRUCTURAL: str = "{}[],:<>()"


def s_indent() -> st.SearchStrategy[int]:
    """Indent widths, zero included."""
    return st.integers(min_value=0, max_value=8)


def s_diag_soup(max_size: int = 80) -> st.SearchStrategy[str]:
    """Arbitrary (often malformed) text over `DIAG_ALPHABET`."""
    return st.text(alphabet=DIAG_ALPHABET, max_size=max_size)


def s_text_literal() -> st.SearchStrategy[str]:
    """A double-quoted string literal whose content is full of delimiters."""
    content = st.text(alphabet=STRUCTURAL + "ab1", max_size=12)
    return content.map(lambda s: json.dumps(s))


def s_byte_literal() -> st.SearchStrategy[str]:
    """A single-quoted byte string, optionally with an ``h``/``b64`` prefix."""
    prefix = st.sampled_from(["", "h", "b64"])
    content = st.text(alphabet="0123456789abcdef,{}", max_size=10)
    return st.builds(lambda p, c: f"{p}'{c}'", prefix, content)


def _scalar() -> st.SearchStrategy[str]:
    return st.one_of(
        st.integers(min_value=-1000, max_value=1000).map(str),
        st.sampled_from(["true", "false", "null", "undefined", "1.5"]),
        s_text_literal(),
        s_byte_literal(),
    )


@st.composite
def s_diag_value(draw: Draw, max_leaves: int = 12) -> str:
    """Well-formed compact diagnostic notation (no whitespace)."""

    def extend(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
        arrays = st.lists(children, max_size=4).map(lambda xs: "[" + ",".join(xs) + "]")
        maps = st.lists(st.tuples(_scalar(), children), max_size=3).map(
            lambda kvs: "{" + ",".join(f"{k}:{v}" for k, v in kvs) + "}"
        )
        tagged = st.tuples(st.integers(min_value=0, max_value=99), children).map(
            lambda tv: f"{tv[0]}({tv[1]})"
        )
        return st.one_of(arrays, maps, tagged)

    value: str = draw(st.recursive(_scalar(), extend, max_leaves=max_leaves))
    return value
