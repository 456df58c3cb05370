# topmark:header:start
#
#   project      : RiverCheck
#   file         : __init__.py
#   file_relpath : src/rivercheck/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck configuration: TOML schema, loading, layered merging and logging.

Import from the submodules directly (`rivercheck.config.model`,
`rivercheck.config.logging`); this package module stays import-free because the
logging module is needed by nearly every other module.
"""
