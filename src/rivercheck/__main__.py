# topmark:header:start
#
#   project      : RiverCheck
#   file         : __main__.py
#   file_relpath : src/rivercheck/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running RiverCheck via ``python -m rivercheck``.

It delegates directly to :func:`rivercheck.cli.main.cli`, so the module and the
``rivercheck`` console script share a single entry point.

Examples:
    Lint a River file::

        python -m rivercheck lint config.alloy
"""

from __future__ import annotations

from rivercheck.cli.main import cli

if __name__ == "__main__":
    cli()
