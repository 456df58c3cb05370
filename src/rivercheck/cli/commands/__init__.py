# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck CLI subcommands."""
