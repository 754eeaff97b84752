# topmark:header:start
#
#   project      : DiagFmt
#   file         : __init__.py
#   file_relpath : src/diagfmt/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DiagFmt package.

DiagFmt pretty-prints CBOR diagnostic notation. It lays out flat diagnostic
text as indented, multi-line text, and can first turn hexadecimal CBOR into
diagnostic notation through an external converter. It exposes both a CLI and
a small typed API (`diagfmt.api`).
"""

from __future__ import annotations
