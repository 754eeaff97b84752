# topmark:header:start
#
#   project      : DiagFmt
#   file         : test_layout_property.py
#   file_relpath : tests/core/test_layout_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the layout engine.

Inputs carry no whitespace of their own, so every newline and space in the
output was inserted by the engine.
"""

from __future__ import annotations

import re

import pytest
from hypothesis import HealthCheck, given, settings

from diagfmt.core.layout import layout, layout_with_report
from diagfmt.core.scanner import TokenKind, scan
from tests.strategies_diagfmt import s_diag_soup, s_diag_value, s_indent, s_text_literal

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

INSERTED_RUN = re.compile(r"\n *")

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=200,
)


def check_indentation(output: str, indent: int) -> None:
    """Each line's leading spaces equal ``indent`` times the depth at that point."""
    depth = 0
    tokens = list(scan(output))
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.text == "\n":
            spaces = 0
            j = i + 1
            while j < len(tokens) and tokens[j].text == " ":
                spaces += 1
                j += 1
            at_close = j < len(tokens) and tokens[j].kind is TokenKind.CLOSE_CONTAINER
            expected_depth = max(depth - 1, 0) if at_close else depth
            assert spaces == indent * expected_depth, (output, i)
            i = j
            continue
        if tok.kind is TokenKind.OPEN_CONTAINER:
            depth += 1
        elif tok.kind is TokenKind.CLOSE_CONTAINER:
            depth = max(depth - 1, 0)
        assert depth >= 0
        i += 1


@PROPERTY_SETTINGS
@given(text=s_diag_soup(), indent=s_indent())
def test_content_is_preserved(text: str, indent: int) -> None:
    """Removing inserted newline+indent runs gives back the input."""
    out = layout(text, indent)
    assert INSERTED_RUN.sub("", out) == text


@PROPERTY_SETTINGS
@given(text=s_diag_soup(), indent=s_indent())
def test_depth_never_negative(text: str, indent: int) -> None:
    """The reported depth is never negative, even with stray closes."""
    report = layout_with_report(text, indent)
    assert report.final_depth >= 0
    assert report.stray_closes >= 0


@PROPERTY_SETTINGS
@given(text=s_diag_soup(), indent=s_indent())
def test_indentation_is_proportional_to_depth(text: str, indent: int) -> None:
    """Leading spaces track the nesting depth, malformed input included."""
    check_indentation(layout(text, indent), indent)


@PROPERTY_SETTINGS
@given(value=s_diag_value(), indent=s_indent())
def test_well_formed_input_is_balanced(value: str, indent: int) -> None:
    """Well-formed notation ends at depth zero with no diagnostics."""
    report = layout_with_report(value, indent)
    assert report.balanced
    assert report.final_depth == 0
    assert INSERTED_RUN.sub("", report.output) == value
    check_indentation(report.output, indent)


@PROPERTY_SETTINGS
@given(literal=s_text_literal(), indent=s_indent())
def test_literals_are_opaque(literal: str, indent: int) -> None:
    """Delimiters inside a string neither split it nor change the depth."""
    out = layout("{1:" + literal + "}", indent)
    assert out == "{\n" + " " * indent + "1:" + literal + "\n}"


@PROPERTY_SETTINGS
@given(text=s_diag_soup(), indent=s_indent())
def test_rerun_on_own_output_does_not_crash(text: str, indent: int) -> None:
    """Running the engine on its own output is well defined."""
    once = layout(text, indent)
    twice = layout(once, indent)
    assert isinstance(twice, str)
    assert len(twice) >= len(once)
