# topmark:header:start
#
#   project      : RiverCheck
#   file         : version.py
#   file_relpath : src/rivercheck/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck `version` command.

Prints the current RiverCheck version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from rivercheck.cli.cmd_common import get_console, is_verbose
from rivercheck.constants import RIVERCHECK_VERSION


@click.command(
    name="version",
    help="Show the current version of RiverCheck.",
)
def version_command() -> None:
    """Show the current version of RiverCheck."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    if is_verbose(ctx):
        console.print(console.styled("RiverCheck version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(RIVERCHECK_VERSION, bold=True)}")
    else:
        console.print(console.styled(RIVERCHECK_VERSION, bold=True))
