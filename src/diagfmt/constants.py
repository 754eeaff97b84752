# topmark:header:start
#
#   project      : DiagFmt
#   file         : constants.py
#   file_relpath : src/diagfmt/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    DIAGFMT_VERSION: str = get_version("diagfmt")
except PackageNotFoundError:  # running from a source checkout
    DIAGFMT_VERSION = "0.0.0+unknown"

# Environment variable consulted for the internal log level
LOG_LEVEL_ENV_VAR: str = "DIAGFMT_LOG_LEVEL"

# Config discovery
CONFIG_FILE_NAME: str = "diagfmt.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "diagfmt"

# One indentation level is by default this many spaces
DEFAULT_INDENT: int = 2

# Ruby converter shipped by the `cbor-diag` gem
CBOR2DIAG_EXECUTABLE: str = "cbor2diag.rb"
CBOR2DIAG_EMBEDDED_FLAG: str = "-e"
DEFAULT_CONVERTER_TIMEOUT: float = 30.0
