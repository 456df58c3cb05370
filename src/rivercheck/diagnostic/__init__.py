# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic types, configuration notices and the per-document diagnostic store."""

from __future__ import annotations

from rivercheck.diagnostic.log import Notice, NoticeLog, NoticeStats
from rivercheck.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    Position,
    PositionedError,
    Range,
    diagnostics_from_errors,
)
from rivercheck.diagnostic.store import DiagnosticSink, DiagnosticStore

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticSink",
    "DiagnosticStore",
    "Notice",
    "NoticeLog",
    "NoticeStats",
    "Position",
    "PositionedError",
    "Range",
    "diagnostics_from_errors",
]
