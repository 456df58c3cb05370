# topmark:header:start
#
#   project      : RiverCheck
#   file         : model.py
#   file_relpath : src/rivercheck/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layered configuration for RiverCheck.

`MutableConfig` collects values from defaults, discovered project files, explicit
config files and CLI overrides. Every field is tri-state (``None`` = inherit) so that
a later layer only overrides what it actually sets. `MutableConfig.freeze` resolves
the layers into an immutable `Config` snapshot used at runtime.

Precedence (lowest to highest):
    1. Built-in defaults (`load_defaults_dict`)
    2. Discovered files, root-most first, nearest last. Within a directory,
       ``pyproject.toml`` (``[tool.rivercheck]``) comes before ``rivercheck.toml``.
    3. Explicit ``--config`` files, in the order given
    4. CLI overrides
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from rivercheck.config.io import (
    check_unknown_keys,
    extract_tool_section,
    get_bool_value_or_none_checked,
    get_non_negative_int_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from rivercheck.config.keys import Toml
from rivercheck.config.logging import get_logger
from rivercheck.constants import (
    CHANGE_DELAY_MS,
    CONFIG_FILE_NAME,
    DEFAULT_ALLOY_PATH,
    QUICK_DELAY_MS,
)
from rivercheck.diagnostic.log import Notice, NoticeLog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rivercheck.config.io import TomlTable
    from rivercheck.config.logging import RivercheckLogger

logger: RivercheckLogger = get_logger(__name__)

T = TypeVar("T")


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        alloy_path (str): Formatter binary, as a path or a command name looked up on PATH.
        validation_enabled (bool): Whether background validation runs at all.
        quick_delay_ms (int): Debounce delay for open, save and activate events.
        change_delay_ms (int): Debounce delay for document changes.
        strict_ordering (bool): Discard validation results older than the newest applied one.
        config_files (tuple[Path, ...]): Config files that contributed, in merge order.
        notices (tuple[Notice, ...]): Problems found while loading configuration.
    """

    alloy_path: str = DEFAULT_ALLOY_PATH
    validation_enabled: bool = True
    quick_delay_ms: int = QUICK_DELAY_MS
    change_delay_ms: int = CHANGE_DELAY_MS
    strict_ordering: bool = True
    config_files: tuple[Path, ...] = ()
    notices: tuple[Notice, ...] = ()

    def to_toml_dict(self) -> TomlTable:
        """Return the effective configuration in TOML shape."""
        return {
            Toml.SECTION_FORMATTER: {
                Toml.KEY_ALLOY_PATH: self.alloy_path,
            },
            Toml.SECTION_VALIDATION: {
                Toml.KEY_ENABLED: self.validation_enabled,
                Toml.KEY_QUICK_DELAY_MS: self.quick_delay_ms,
                Toml.KEY_CHANGE_DELAY_MS: self.change_delay_ms,
                Toml.KEY_STRICT_ORDERING: self.strict_ordering,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable builder initialized from this snapshot."""
        return MutableConfig(
            alloy_path=self.alloy_path,
            validation_enabled=self.validation_enabled,
            quick_delay_ms=self.quick_delay_ms,
            change_delay_ms=self.change_delay_ms,
            strict_ordering=self.strict_ordering,
            config_files=list(self.config_files),
            notices=NoticeLog.from_iterable(self.notices),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    All value fields are tri-state: ``None`` means "not set by this layer".
    """

    alloy_path: str | None = None
    validation_enabled: bool | None = None
    quick_delay_ms: int | None = None
    change_delay_ms: int | None = None
    strict_ordering: bool | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # Collected notices while loading / merging config.
    notices: NoticeLog = field(default_factory=NoticeLog)

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling unset values with defaults.

        Raises:
            ValueError: If a delay is negative or the formatter path is empty.
        """
        alloy_path: str = DEFAULT_ALLOY_PATH if self.alloy_path is None else self.alloy_path
        if not alloy_path.strip():
            raise ValueError("Formatter path must not be empty.")

        quick: int = QUICK_DELAY_MS if self.quick_delay_ms is None else self.quick_delay_ms
        change: int = CHANGE_DELAY_MS if self.change_delay_ms is None else self.change_delay_ms
        if quick < 0 or change < 0:
            raise ValueError(f"Debounce delays must be >= 0 (got {quick} and {change}).")

        return Config(
            alloy_path=alloy_path,
            validation_enabled=True if self.validation_enabled is None else self.validation_enabled,
            quick_delay_ms=quick,
            change_delay_ms=change,
            strict_ordering=True if self.strict_ordering is None else self.strict_ordering,
            config_files=tuple(self.config_files),
            notices=tuple(self.notices),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a builder from a parsed TOML table.

        Unknown keys and wrongly typed values are reported as notices and ignored.

        Args:
            data (TomlTable): Parsed configuration (``rivercheck.toml`` shape).
            config_file (Path | None): Source file, recorded in ``config_files``.

        Returns:
            MutableConfig: The resulting builder.
        """
        notices = NoticeLog()
        check_unknown_keys(data, notices=notices)

        formatter_tbl: TomlTable = get_table_value(data, Toml.SECTION_FORMATTER, notices=notices)
        validation_tbl: TomlTable = get_table_value(
            data, Toml.SECTION_VALIDATION, notices=notices
        )
        where_fmt = f"[{Toml.SECTION_FORMATTER}]"
        where_val = f"[{Toml.SECTION_VALIDATION}]"

        draft = cls(
            alloy_path=get_string_value_or_none_checked(
                formatter_tbl, Toml.KEY_ALLOY_PATH, where=where_fmt, notices=notices
            ),
            validation_enabled=get_bool_value_or_none_checked(
                validation_tbl, Toml.KEY_ENABLED, where=where_val, notices=notices
            ),
            quick_delay_ms=get_non_negative_int_or_none_checked(
                validation_tbl, Toml.KEY_QUICK_DELAY_MS, where=where_val, notices=notices
            ),
            change_delay_ms=get_non_negative_int_or_none_checked(
                validation_tbl, Toml.KEY_CHANGE_DELAY_MS, where=where_val, notices=notices
            ),
            strict_ordering=get_bool_value_or_none_checked(
                validation_tbl, Toml.KEY_STRICT_ORDERING, where=where_val, notices=notices
            ),
            notices=notices,
        )
        if draft.alloy_path is not None and not draft.alloy_path.strip():
            notices.add_warning(f"Ignoring empty {where_fmt}.{Toml.KEY_ALLOY_PATH}")
            draft.alloy_path = None
        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a ``rivercheck.toml`` or ``pyproject.toml`` file.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The builder, or None if a ``pyproject.toml`` has no
                ``[tool.rivercheck]`` section.
        """
        logger.debug("Loading configuration from %s", path)
        data: TomlTable = load_toml_dict(path)
        if path.name == "pyproject.toml":
            section: TomlTable | None = extract_tool_section(data)
            if section is None:
                logger.debug("No [tool.rivercheck] section in %s", path)
                return None
            data = section
        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found by walking upward from ``start``.

        Files are ordered root-most first, nearest last. Within a directory,
        ``pyproject.toml`` (only if it has ``[tool.rivercheck]``) precedes
        ``rivercheck.toml``. A file setting ``root = true`` stops the walk after its
        directory.

        Args:
            start (Path): Directory (or file) where discovery starts.

        Returns:
            list[Path]: Discovered config files in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            stop_here = False
            entries: list[Path] = []
            for name in ("pyproject.toml", CONFIG_FILE_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == "pyproject.toml":
                    section: TomlTable | None = extract_tool_section(data)
                    if section is None:
                        continue
                    data = section
                entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if data.get(Toml.KEY_ROOT) is True:
                    stop_here = True

            if entries:
                per_dir.append(entries)
            parent: Path = cur.parent
            if stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            if parent == cur:
                break
            cur = parent

        ordered: list[Path] = []
        for entries in reversed(per_dir):
            ordered.extend(entries)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: Iterable[Path] = (),
    ) -> MutableConfig:
        """Build a draft from defaults, discovered files and explicit config files.

        Args:
            start (Path | None): Discovery anchor; defaults to the current directory.
            extra_config_files (Iterable[Path]): Explicit files, applied last.

        Returns:
            MutableConfig: The merged draft (CLI overrides not yet applied).
        """
        draft: MutableConfig = cls.from_defaults()
        for path in cls.discover_local_config_files(start or Path.cwd()):
            layer = cls.from_toml_file(path)
            if layer is not None:
                draft = draft.merge_with(layer)
        for path in extra_config_files:
            if not path.is_file():
                logger.error("Config file not found: %s", path)
                draft.notices.add_error(f"Config file not found: {path}")
                continue
            layer = cls.from_toml_file(path)
            if layer is None:
                draft.notices.add_warning(f"No [tool.rivercheck] section in {path}")
                continue
            draft = draft.merge_with(layer)
        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        notices = NoticeLog.from_iterable(self.notices)
        notices.extend(other.notices)
        return MutableConfig(
            alloy_path=_pick(other.alloy_path, self.alloy_path),
            validation_enabled=_pick(other.validation_enabled, self.validation_enabled),
            quick_delay_ms=_pick(other.quick_delay_ms, self.quick_delay_ms),
            change_delay_ms=_pick(other.change_delay_ms, self.change_delay_ms),
            strict_ordering=_pick(other.strict_ordering, self.strict_ordering),
            config_files=self.config_files + other.config_files,
            notices=notices,
        )

    def apply_overrides(self, *, alloy_path: str | None = None) -> MutableConfig:
        """Apply CLI overrides in place and return ``self`` for chaining."""
        if alloy_path is not None:
            self.alloy_path = alloy_path
        return self


def _pick(override: T | None, base: T | None) -> T | None:
    return override if override is not None else base
