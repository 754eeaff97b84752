# topmark:header:start
#
#   project      : DiagFmt
#   file         : exit_codes.py
#   file_relpath : src/diagfmt/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the DiagFmt CLI.

DiagFmt aligns with the BSD `sysexits` convention so other tooling can
interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the DiagFmt CLI.

    Attributes:
        SUCCESS: The input was formatted and written to stdout.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (invalid flags/args, no input).
            Mirrors BSD ``EX_USAGE (64)``.
        INPUT_ERROR: The input could not be decoded (bad hex, bad text encoding).
            Mirrors BSD ``EX_DATAERR (65)``.
        CONVERTER_UNAVAILABLE: The selected converter is not installed.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        CONVERSION_ERROR: The converter ran but failed. Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: Reading the input failed. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    INPUT_ERROR = 65  # EX_DATAERR
    CONVERTER_UNAVAILABLE = 69  # EX_UNAVAILABLE
    CONVERSION_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
