# topmark:header:start
#
#   project      : Tristat
#   file         : __main__.py
#   file_relpath : src/tristat/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Tristat via ``python -m tristat``.

Delegates directly to :func:`tristat.cli.main.cli` so there is a single CLI entry
point regardless of how Tristat is launched.

Examples:
    Show the status of the current repository::

        python -m tristat status -v
"""

from __future__ import annotations

from tristat.cli.main import cli

if __name__ == "__main__":
    cli()
