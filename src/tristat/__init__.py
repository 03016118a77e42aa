# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tristat package.

Tristat reports the state of a git working copy. It reconciles the HEAD tree,
the index and the working tree into a single immutable status report and renders
that report at three verbosity tiers, as human text or as JSON. It exposes both a
CLI and a small typed API (see `tristat.api`).
"""

from __future__ import annotations
