# topmark:header:start
#
#   project      : RiverCheck
#   file         : keys.py
#   file_relpath : src/rivercheck/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for RiverCheck configuration.

These constants are the external configuration schema, as it appears in
``rivercheck.toml`` and in ``[tool.rivercheck]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by RiverCheck configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [formatter]
    SECTION_FORMATTER: Final[str] = "formatter"

    KEY_ALLOY_PATH: Final[str] = "alloy_path"

    # [validation]
    SECTION_VALIDATION: Final[str] = "validation"

    KEY_ENABLED: Final[str] = "enabled"
    KEY_QUICK_DELAY_MS: Final[str] = "quick_delay_ms"
    KEY_CHANGE_DELAY_MS: Final[str] = "change_delay_ms"
    KEY_STRICT_ORDERING: Final[str] = "strict_ordering"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_ROOT,
            SECTION_FORMATTER,
            SECTION_VALIDATION,
        }
    )

    ALLOWED_SECTION_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_FORMATTER: frozenset(
            {
                KEY_ALLOY_PATH,
            }
        ),
        SECTION_VALIDATION: frozenset(
            {
                KEY_ENABLED,
                KEY_QUICK_DELAY_MS,
                KEY_CHANGE_DELAY_MS,
                KEY_STRICT_ORDERING,
            }
        ),
    }
