# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck package.

RiverCheck wraps the external `alloy fmt` formatter for River configuration files. It
formats documents on demand and turns the formatter's stderr into positioned,
debounced diagnostics for editors and other document event sources.
"""

from __future__ import annotations
