# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering of status reports and help text.

Everything here is pure: renderers take immutable inputs and return strings
wrapped in `tristat.rendering.api.RenderedOutput`. Printing is left to the CLI.
"""

from __future__ import annotations
