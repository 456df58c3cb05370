# topmark:header:start
#
#   project      : RiverCheck
#   file         : types.py
#   file_relpath : src/rivercheck/api/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public types exchanged with the host integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rivercheck.diagnostic.model import Range


class Notifier(Protocol):
    """Shows user-visible messages for explicit, user-initiated actions.

    Any console with an ``error(text)`` method satisfies this protocol.
    """

    def error(self, text: str) -> None:
        """Show an error message to the user."""
        ...


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace the text inside ``range`` with ``new_text``."""

    range: Range
    new_text: str
