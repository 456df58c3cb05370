# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/formatter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""External formatter invocation and stderr parsing."""

from __future__ import annotations

from rivercheck.formatter.invoker import BoundedInvoker, Invoker, invoke
from rivercheck.formatter.models import (
    Failed,
    Formatted,
    FormatRequest,
    FormatResult,
    SpawnError,
)
from rivercheck.formatter.parser import has_positions, parse

__all__ = [
    "BoundedInvoker",
    "Failed",
    "FormatRequest",
    "FormatResult",
    "Formatted",
    "Invoker",
    "SpawnError",
    "has_positions",
    "invoke",
    "parse",
]
