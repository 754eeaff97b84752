# topmark:header:start
#
#   project      : DiagFmt
#   file         : loaders.py
#   file_relpath : src/diagfmt/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load, query and render TOML configuration.

This module provides I/O helpers for reading DiagFmt configuration from
on-disk TOML files (``diagfmt.toml`` / ``pyproject.toml``), the runtime defaults
defined in code, and a few *checked* getters that validate the shape of a value
and record a warning in a `DiagnosticLog` when it does not match.

Parsing and rendering are done with `tomlkit`; parsed documents are returned as
plain `dict` structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from diagfmt.config.keys import Toml
from diagfmt.config.logging import get_logger
from diagfmt.constants import (
    CBOR2DIAG_EXECUTABLE,
    DEFAULT_CONVERTER_TIMEOUT,
    DEFAULT_INDENT,
)

if TYPE_CHECKING:
    from pathlib import Path

    from diagfmt.config.logging import DiagfmtLogger
    from diagfmt.config.types import TomlTable
    from diagfmt.core.diagnostics import DiagnosticLog

logger: DiagfmtLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return DiagFmt's **runtime defaults** as a Python dict.

    This function performs no I/O. The returned value is a new dict so callers
    can mutate it safely.
    """
    return {
        Toml.SECTION_LAYOUT: {
            Toml.KEY_INDENT: DEFAULT_INDENT,
        },
        Toml.SECTION_INPUT: {
            Toml.KEY_MODE: "auto",
            Toml.KEY_EMBEDDED: False,
        },
        Toml.SECTION_CONVERTER: {
            Toml.KEY_BACKEND: "ruby",
            Toml.KEY_EXECUTABLE: CBOR2DIAG_EXECUTABLE,
            Toml.KEY_TIMEOUT: DEFAULT_CONVERTER_TIMEOUT,
        },
    }


def load_toml_dict(path: Path, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``diagfmt.toml`` or ``pyproject.toml``).
        diagnostics (DiagnosticLog | None): When given, read and parse failures are
            recorded as errors.

    Returns:
        TomlTable: The parsed TOML content, or an empty dict on failure.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        message = f"Error loading TOML from {path}: {e}"
    except TomlkitParseError as e:
        message = f"Error decoding TOML from {path}: {e}"

    if diagnostics is not None:
        diagnostics.add_error(message)
    else:
        logger.error(message)
    return {}


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings.

    TOML has no `null`; config dumps omit keys with None values.
    """
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out
    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


# --- Checked getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table stored under ``key``, or an empty dict."""
    value: Any = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.debug("Expected table for %r, got %s", key, type(value).__name__)
    return {}


def _warn_type(diagnostics: DiagnosticLog, where: str, key: str, expected: str, value: Any) -> None:
    diagnostics.add_warning(
        f"Expected {expected} in [{where}].{key}, got {type(value).__name__}: {value!r}"
    )


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    _warn_type(diagnostics, where, key, "bool", value)
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> int | None:
    """Return an optional integer value, warning when present but not `int`.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    _warn_type(diagnostics, where, key, "int", value)
    return None


def get_float_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> float | None:
    """Return an optional number as `float`, warning when present but not numeric."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    _warn_type(diagnostics, where, key, "number", value)
    return None


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, str):
        return value
    _warn_type(diagnostics, where, key, "string", value)
    return None
