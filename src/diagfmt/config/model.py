# topmark:header:start
#
#   project      : DiagFmt
#   file         : model.py
#   file_relpath : src/diagfmt/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot used by the API and the CLI.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Layers (lowest → highest precedence), see `MutableConfig.load_merged`:
    1. runtime defaults (`diagfmt.config.loaders.load_defaults_dict`),
    2. the nearest project config found walking up from the anchor directory
       (``pyproject.toml`` ``[tool.diagfmt]`` first, then ``diagfmt.toml``),
    3. extra config files, in the order given,
    4. CLI / API overrides via `MutableConfig.apply_args`.

Fields on the mutable side are tri-state (``None`` = not set by this layer) so
merging never loses information; `MutableConfig.freeze` fills whatever is
still unset from the defaults.

Invalid values (negative indent, unknown input mode or backend, non-positive
timeout) are recorded as ERROR diagnostics and ignored, so the snapshot always
holds usable values. Callers decide whether errors are fatal.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from diagfmt.config.keys import Toml
from diagfmt.config.loaders import (
    get_bool_value_or_none_checked,
    get_float_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from diagfmt.config.logging import get_logger
from diagfmt.config.types import ConverterBackend, InputMode
from diagfmt.constants import (
    CBOR2DIAG_EXECUTABLE,
    CONFIG_FILE_NAME,
    DEFAULT_CONVERTER_TIMEOUT,
    DEFAULT_INDENT,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from diagfmt.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from diagfmt.config.logging import DiagfmtLogger
    from diagfmt.config.types import TomlTable

# Generic mapping accepted by `MutableConfig.apply_args` (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: DiagfmtLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for DiagFmt.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the draft was created.
        indent (int): Spaces per nesting level.
        normalize_whitespace (bool | None): Drop whitespace outside literals, ``": "``
            after colons. When None, only converter output is normalized.
        input_mode (InputMode): How raw input is classified.
        embedded (bool): Ask the converter to expand embedded CBOR.
        backend (ConverterBackend): Which converter implementation to use.
        executable (str): Name or path of the ``cbor2diag.rb`` executable.
        timeout (float): Seconds the Ruby converter may run.
        config_files (tuple[Path | str, ...]): Config sources merged into this snapshot.
        diagnostics (tuple[Diagnostic, ...]): Warnings or errors encountered while
            loading and merging.
    """

    timestamp: str
    indent: int
    normalize_whitespace: bool | None
    input_mode: InputMode
    embedded: bool
    backend: ConverterBackend
    executable: str
    timeout: float
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    @classmethod
    def from_defaults(cls) -> Config:
        """Return a snapshot holding only the runtime defaults."""
        return MutableConfig.from_defaults().freeze()

    @property
    def has_errors(self) -> bool:
        """Return True when loading or merging recorded an ERROR diagnostic."""
        return DiagnosticLog.from_iterable(self.diagnostics).has_errors

    def to_toml_dict(self) -> TomlTable:
        """Convert this snapshot into a TOML-serializable dict."""
        return {
            Toml.SECTION_LAYOUT: {
                Toml.KEY_INDENT: self.indent,
                Toml.KEY_NORMALIZE_WHITESPACE: self.normalize_whitespace,
            },
            Toml.SECTION_INPUT: {
                Toml.KEY_MODE: self.input_mode.value,
                Toml.KEY_EMBEDDED: self.embedded,
            },
            Toml.SECTION_CONVERTER: {
                Toml.KEY_BACKEND: self.backend.value,
                Toml.KEY_EXECUTABLE: self.executable,
                Toml.KEY_TIMEOUT: self.timeout,
            },
        }

    def to_toml(self) -> str:
        """Render this snapshot as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            timestamp=self.timestamp,
            indent=self.indent,
            normalize_whitespace=self.normalize_whitespace,
            input_mode=self.input_mode,
            embedded=self.embedded,
            backend=self.backend,
            executable=self.executable,
            timeout=self.timeout,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Every option is ``None`` until a layer sets it. See `Config` for the
    meaning of each attribute.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    indent: int | None = None
    normalize_whitespace: bool | None = None
    input_mode: InputMode | None = None
    embedded: bool | None = None
    backend: ConverterBackend | None = None
    executable: str | None = None
    timeout: float | None = None
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling unset values."""
        return Config(
            timestamp=self.timestamp,
            indent=self.indent if self.indent is not None else DEFAULT_INDENT,
            normalize_whitespace=self.normalize_whitespace,
            input_mode=self.input_mode or InputMode.AUTO,
            embedded=bool(self.embedded),
            backend=self.backend or ConverterBackend.RUBY,
            executable=self.executable or CBOR2DIAG_EXECUTABLE,
            timeout=self.timeout if self.timeout is not None else DEFAULT_CONVERTER_TIMEOUT,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.diagfmt]`` table is considered.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None when a ``pyproject.toml`` has no
                ``[tool.diagfmt]`` table. Read and parse errors yield a draft that
                carries an ERROR diagnostic.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        diagnostics = DiagnosticLog()
        toml_data: TomlTable = load_toml_dict(path, diagnostics)

        if path.name == PYPROJECT_FILE_NAME and not diagnostics.has_errors:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, "tool"), PYPROJECT_TOOL_SECTION
            )
            if not tool_section:
                logger.debug("No [tool.%s] table in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        draft.diagnostics.items[:0] = diagnostics.items
        logger.trace("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return the config files of the nearest directory at or above ``start``.

        The walk stops at the first directory holding ``diagfmt.toml`` or a
        ``pyproject.toml`` with a ``[tool.diagfmt]`` table. When both are present,
        ``pyproject.toml`` comes first so that ``diagfmt.toml`` wins the merge.

        Args:
            start (Path): Where discovery starts; a file anchors at its parent.

        Returns:
            list[Path]: Zero, one or two config paths.
        """
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            found: list[Path] = []
            pyproject: Path = cur / PYPROJECT_FILE_NAME
            if pyproject.is_file():
                tool: TomlTable = get_table_value(load_toml_dict(pyproject), "tool")
                if PYPROJECT_TOOL_SECTION in tool:
                    found.append(pyproject)
            own: Path = cur / CONFIG_FILE_NAME
            if own.is_file():
                found.append(own)

            if found:
                logger.debug("Discovered config file(s): %s", ", ".join(str(p) for p in found))
                return found

            parent: Path = cur.parent
            if parent == cur:
                return []
            cur = parent

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data (already unwrapped from ``[tool.diagfmt]``).
            config_file (Path | None): Source file, recorded for provenance.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft: MutableConfig = cls()
        if config_file is not None:
            draft.config_files = [config_file]
        diags: DiagnosticLog = draft.diagnostics

        layout_tbl: TomlTable = get_table_value(data, Toml.SECTION_LAYOUT)
        logger.trace("TOML [layout]: %s", layout_tbl)
        input_tbl: TomlTable = get_table_value(data, Toml.SECTION_INPUT)
        logger.trace("TOML [input]: %s", input_tbl)
        converter_tbl: TomlTable = get_table_value(data, Toml.SECTION_CONVERTER)
        logger.trace("TOML [converter]: %s", converter_tbl)

        draft.set_indent(
            get_int_value_or_none_checked(
                layout_tbl, Toml.KEY_INDENT, where=Toml.SECTION_LAYOUT, diagnostics=diags
            )
        )
        draft.normalize_whitespace = get_bool_value_or_none_checked(
            layout_tbl,
            Toml.KEY_NORMALIZE_WHITESPACE,
            where=Toml.SECTION_LAYOUT,
            diagnostics=diags,
        )

        draft.set_input_mode(
            get_string_value_or_none_checked(
                input_tbl, Toml.KEY_MODE, where=Toml.SECTION_INPUT, diagnostics=diags
            )
        )
        draft.embedded = get_bool_value_or_none_checked(
            input_tbl, Toml.KEY_EMBEDDED, where=Toml.SECTION_INPUT, diagnostics=diags
        )

        draft.set_backend(
            get_string_value_or_none_checked(
                converter_tbl, Toml.KEY_BACKEND, where=Toml.SECTION_CONVERTER, diagnostics=diags
            )
        )
        executable: str | None = get_string_value_or_none_checked(
            converter_tbl, Toml.KEY_EXECUTABLE, where=Toml.SECTION_CONVERTER, diagnostics=diags
        )
        if executable is not None and not executable.strip():
            diags.add_error(f"[{Toml.SECTION_CONVERTER}].{Toml.KEY_EXECUTABLE} must not be empty")
        else:
            draft.executable = executable
        draft.set_timeout(
            get_float_value_or_none_checked(
                converter_tbl, Toml.KEY_TIMEOUT, where=Toml.SECTION_CONVERTER, diagnostics=diags
            )
        )

        return draft

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            anchor (Path | None): Directory where discovery starts (CWD if None).
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                **after** discovery, in their given order.
            no_config (bool): If True, skip project discovery.

        Returns:
            MutableConfig: A draft ready to be frozen or further edited.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            extra_path = Path(extra)
            mc = cls.from_toml_file(extra_path)
            if mc is None:
                draft.diagnostics.add_warning(
                    f"{extra_path} has no [tool.{PYPROJECT_TOOL_SECTION}] table; ignored"
                )
                continue
            draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        return MutableConfig(
            timestamp=self.timestamp,
            indent=pick(self.indent, other.indent),
            normalize_whitespace=pick(self.normalize_whitespace, other.normalize_whitespace),
            input_mode=pick(self.input_mode, other.input_mode),
            embedded=pick(self.embedded, other.embedded),
            backend=pick(self.backend, other.backend),
            executable=pick(self.executable, other.executable),
            timeout=pick(self.timeout, other.timeout),
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog(items=self.diagnostics.items + other.diagnostics.items),
        )

    def apply_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI / API overrides in place; ``None`` values are ignored.

        Recognized keys: ``indent``, ``normalize_whitespace``, ``input_mode``,
        ``embedded``, ``backend``, ``executable``, ``timeout``. Enum-valued keys
        accept either the enum member or its string value.

        Args:
            args (ArgsLike): Override mapping.

        Returns:
            MutableConfig: This draft, for chaining.
        """
        if args.get("indent") is not None:
            self.set_indent(int(args["indent"]))
        if args.get("normalize_whitespace") is not None:
            self.normalize_whitespace = bool(args["normalize_whitespace"])
        if args.get("input_mode") is not None:
            self.set_input_mode(args["input_mode"])
        if args.get("embedded") is not None:
            self.embedded = bool(args["embedded"])
        if args.get("backend") is not None:
            self.set_backend(args["backend"])
        if args.get("executable") is not None:
            self.executable = str(args["executable"])
        if args.get("timeout") is not None:
            self.set_timeout(float(args["timeout"]))
        return self

    # ------------------------------ Validation ------------------------------

    def set_indent(self, value: int | None) -> None:
        """Set the indent width, recording an error for negative values."""
        if value is None:
            return
        if value < 0:
            self.diagnostics.add_error(f"indent must be a non-negative integer (got {value})")
            return
        self.indent = value

    def set_input_mode(self, value: str | InputMode | None) -> None:
        """Set the input mode from a member or its string value."""
        if value is None:
            return
        try:
            self.input_mode = InputMode(value)
        except ValueError:
            allowed: str = ", ".join(m.value for m in InputMode)
            self.diagnostics.add_error(f"Invalid input mode {value!r} (allowed values: {allowed})")

    def set_backend(self, value: str | ConverterBackend | None) -> None:
        """Set the converter backend from a member or its string value."""
        if value is None:
            return
        try:
            self.backend = ConverterBackend(value)
        except ValueError:
            allowed: str = ", ".join(b.value for b in ConverterBackend)
            self.diagnostics.add_error(
                f"Invalid converter backend {value!r} (allowed values: {allowed})"
            )

    def set_timeout(self, value: float | None) -> None:
        """Set the converter timeout, recording an error for non-positive values."""
        if value is None:
            return
        if value <= 0:
            self.diagnostics.add_error(f"timeout must be positive (got {value})")
            return
        self.timeout = value
