# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API for hosts embedding RiverCheck.

- `format_document` / `format_edits`: on-demand formatting.
- `RiverIntegration`: lifecycle hooks plus formatting wired to one configuration.
"""

from __future__ import annotations

from rivercheck.api.formatting import failure_message, format_document, format_edits
from rivercheck.api.integration import RiverIntegration
from rivercheck.api.types import Notifier, TextEdit

__all__ = [
    "Notifier",
    "RiverIntegration",
    "TextEdit",
    "failure_message",
    "format_document",
    "format_edits",
]
