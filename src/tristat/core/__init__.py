# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, frontend-agnostic primitives shared across Tristat.

Nothing in this package imports Click or writes to a console.
"""

from __future__ import annotations
