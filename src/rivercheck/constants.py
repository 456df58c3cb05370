# topmark:header:start
#
#   project      : RiverCheck
#   file         : constants.py
#   file_relpath : src/rivercheck/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck Constants."""

from __future__ import annotations

import os
from importlib.metadata import version as get_version
from typing import Final

RIVERCHECK_VERSION: str = get_version("rivercheck")

# Formatter invocation: read the document from stdin, write the result to stdout.
DEFAULT_ALLOY_PATH: Final[str] = "alloy"
FORMAT_ARGS: Final[tuple[str, ...]] = ("fmt", "-")

DIAGNOSTIC_SOURCE: Final[str] = "alloy fmt"
RIVER_LANGUAGE_ID: Final[str] = "river"
RIVER_FILE_SUFFIXES: Final[tuple[str, ...]] = (".alloy", ".river")

# Debounce delays (milliseconds)
QUICK_DELAY_MS: Final[int] = 50
CHANGE_DELAY_MS: Final[int] = 250
DEFAULT_DELAY_MS: Final[int] = 300

# Formatter processes running at the same time
MAX_CONCURRENT_RUNS: Final[int] = os.cpu_count() or 4

# Config discovery
CONFIG_FILE_NAME: Final[str] = "rivercheck.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "rivercheck"

LOG_LEVEL_ENV_VAR: Final[str] = "RIVERCHECK_LOG_LEVEL"

REMEDIATION_HINT: Final[str] = (
    "Ensure `alloy` is installed and on PATH, or set `formatter.alloy_path`."
)
