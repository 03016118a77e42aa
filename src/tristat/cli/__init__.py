# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for Tristat.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        tristat = "tristat.cli.main:cli"

All subcommands live in [`tristat.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
