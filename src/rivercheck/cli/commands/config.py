# topmark:header:start
#
#   project      : RiverCheck
#   file         : config.py
#   file_relpath : src/rivercheck/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck `config` command.

Emits the effective configuration as TOML after applying defaults, discovered
project files, explicit ``--config`` files and CLI overrides. The output is
wrapped between ``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing
in tests or tooling. With ``-v``, the contributing files are listed first as
TOML comments.
"""

from __future__ import annotations

import click

from rivercheck.cli.cmd_common import get_config, get_console, is_verbose
from rivercheck.cli.options import CONTEXT_SETTINGS
from rivercheck.config.io import to_toml


@click.command(
    name="config",
    help="Show the effective RiverCheck configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Print the merged configuration as TOML."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)

    if is_verbose(ctx):
        if config.config_files:
            for path in config.config_files:
                console.print(f"# source: {path}")
        else:
            console.print("# source: built-in defaults")

    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()), nl=False)
    console.print("# === END ===")
