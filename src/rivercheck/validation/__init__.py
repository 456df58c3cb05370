# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/validation/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Background validation: documents, outcome classification and the debounced scheduler."""

from __future__ import annotations

from rivercheck.validation.documents import InMemoryDocument, TextDocument, is_river_document
from rivercheck.validation.outcome import OutcomeKind, ValidationOutcome, classify
from rivercheck.validation.scheduler import (
    DocumentValidationState,
    ValidationScheduler,
    ValidationState,
)

__all__ = [
    "DocumentValidationState",
    "InMemoryDocument",
    "OutcomeKind",
    "TextDocument",
    "ValidationOutcome",
    "ValidationScheduler",
    "ValidationState",
    "classify",
    "is_river_document",
]
