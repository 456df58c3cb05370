# topmark:header:start
#
#   project      : RiverCheck
#   file         : io.py
#   file_relpath : src/rivercheck/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and checked value access for RiverCheck configuration.

Parsing and rendering use `tomlkit`; parsed documents are returned as plain ``dict``
structures. The ``*_checked`` getters never raise on wrong user input: they log a
warning, record it in a `NoticeLog` with its TOML location (e.g.
``[validation].quick_delay_ms``) and return ``None`` so the value is inherited from
a lower-precedence layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from rivercheck.config.keys import Toml
from rivercheck.config.logging import get_logger
from rivercheck.constants import (
    CHANGE_DELAY_MS,
    DEFAULT_ALLOY_PATH,
    PYPROJECT_TOOL_SECTION,
    QUICK_DELAY_MS,
)

if TYPE_CHECKING:
    from pathlib import Path

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.diagnostic.log import NoticeLog

TomlTable: TypeAlias = dict[str, Any]

logger: RivercheckLogger = get_logger(__name__)


# --- TOML file I/O ---


def load_defaults_dict() -> TomlTable:
    """Return RiverCheck's runtime defaults as a TOML-shaped dict.

    This function performs no I/O. The returned value is a new dict so callers can
    mutate it safely.
    """
    return {
        Toml.SECTION_FORMATTER: {
            Toml.KEY_ALLOY_PATH: DEFAULT_ALLOY_PATH,
        },
        Toml.SECTION_VALIDATION: {
            Toml.KEY_ENABLED: True,
            Toml.KEY_QUICK_DELAY_MS: QUICK_DELAY_MS,
            Toml.KEY_CHANGE_DELAY_MS: CHANGE_DELAY_MS,
            Toml.KEY_STRICT_ORDERING: True,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content; an empty dict on failure.

    Notes:
        Errors are logged and an empty dict is returned. Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_tool_section(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.rivercheck]`` table of a parsed ``pyproject.toml``, if present."""
    tool: Any = data.get("tool")
    if not isinstance(tool, dict):
        return None
    section: Any = cast("TomlTable", tool).get(PYPROJECT_TOOL_SECTION)
    return cast("TomlTable", section) if isinstance(section, dict) else None


def to_toml(data: TomlTable) -> str:
    """Serialize a TOML mapping to a string, dropping ``None`` values (TOML has no null)."""
    cleaned: Any = _strip_none(data)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def _strip_none(value: object) -> object:
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none(v) for k, v in m.items() if v is not None}
    return value


# --- Checked getters ---


def get_table_value(
    table: TomlTable,
    key: str,
    *,
    notices: NoticeLog,
) -> TomlTable:
    """Return a sub-table, or an empty dict if it is missing or not a table."""
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast("TomlTable", value)
    logger.warning("Expected table [%s], got %s: %r", key, type(value).__name__, value)
    notices.add_warning(f"Expected table [{key}], got {type(value).__name__}: {value!r}")
    return {}


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    notices: NoticeLog,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, str):
        return value
    _warn_type(where, key, "string", value, notices)
    return None


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    notices: NoticeLog,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`.

    Integers are **not** coerced.
    """
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    _warn_type(where, key, "bool", value, notices)
    return None


def get_non_negative_int_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    notices: NoticeLog,
) -> int | None:
    """Return an optional non-negative integer, warning on wrong types or negative values.

    Booleans are rejected even though ``bool`` is a subclass of ``int``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        _warn_type(where, key, "integer", value, notices)
        return None
    if value < 0:
        loc: Final[str] = f"{where}.{key}"
        logger.warning("Expected non-negative integer in %s, got %d", loc, value)
        notices.add_warning(f"Expected non-negative integer in {loc}, got {value}")
        return None
    return value


def check_unknown_keys(table: TomlTable, *, notices: NoticeLog) -> None:
    """Record a warning for every unknown top-level key or section key."""
    for key in table:
        if key not in Toml.ALLOWED_TOP_LEVEL_KEYS:
            logger.warning("Ignoring unknown configuration key: %s", key)
            notices.add_warning(f"Ignoring unknown configuration key: {key}")
    for section, allowed in Toml.ALLOWED_SECTION_KEYS.items():
        sub: Any = table.get(section)
        if not isinstance(sub, dict):
            continue
        for key in cast("TomlTable", sub):
            if key not in allowed:
                logger.warning("Ignoring unknown key in [%s]: %s", section, key)
                notices.add_warning(f"Ignoring unknown key in [{section}]: {key}")


def _warn_type(where: str, key: str, expected: str, value: object, notices: NoticeLog) -> None:
    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected %s in %s, got %s: %r", expected, loc, type(value).__name__, value)
    notices.add_warning(f"Expected {expected} in {loc}, got {type(value).__name__}: {value!r}")
