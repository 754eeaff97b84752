# topmark:header:start
#
#   project      : DiagFmt
#   file         : cli_types.py
#   file_relpath : src/diagfmt/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types for DiagFmt.

Defines the `OutputFormat` enum used by ``--format``, the `ArgsNamespace`
mapping handed to `diagfmt.config.MutableConfig.apply_args`, and the
`EnumChoiceParam` Click type that parses enum-valued options.
"""

from __future__ import annotations

from enum import Enum
from typing import (
    TYPE_CHECKING,
    Generic,
    Iterable,
    NoReturn,
    Protocol,
    TypedDict,
    TypeVar,
    cast,
)

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    from diagfmt.config.types import ConverterBackend, InputMode

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: The formatted text as-is.
      JSON: A single JSON object (machine-readable, never colored).
      MARKDOWN: The formatted text inside a fenced code block.
    """

    DEFAULT = "default"
    JSON = "json"
    MARKDOWN = "markdown"


class ArgsNamespace(TypedDict, total=False):
    """CLI overrides applied on top of the merged configuration.

    Keys left at ``None`` keep the value from config files or defaults.
    """

    indent: int | None
    normalize_whitespace: bool | None
    input_mode: InputMode | None
    embedded: bool | None
    backend: ConverterBackend | None
    timeout: float | None


def build_args_namespace(
    *,
    indent: int | None = None,
    normalize_whitespace: bool | None = None,
    input_mode: InputMode | None = None,
    embedded: bool | None = None,
    backend: ConverterBackend | None = None,
    timeout: float | None = None,
) -> ArgsNamespace:
    """Build an `ArgsNamespace` from parsed command options."""
    return {
        "indent": indent,
        "normalize_whitespace": normalize_whitespace,
        "input_mode": input_mode,
        "embedded": embedded,
        "backend": backend,
        "timeout": timeout,
    }


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Converts a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_DIAGFMT_COMPLETE=bash_source diagfmt)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        return [RuntimeCompletionItem(v) for v in self.choices if v.lower().startswith(prefix)]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumParam({self.enum_cls.__name__})"
