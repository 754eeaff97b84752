# topmark:header:start
#
#   project      : DiagFmt
#   file         : __init__.py
#   file_relpath : src/diagfmt/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt CLI subcommands."""
