# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/status/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status aggregation: from raw repository state to an immutable `StatusReport`.

Stages, each a pure function over immutable inputs:

1. a `StateProvider` lists HEAD, index and working tree records;
2. `reconcile` classifies every path on the index and worktree axes;
3. `detect_renames` pairs staged deletions with staged additions;
4. `build_report` sorts, counts and freezes the result.

`tristat.status.engine.compute_status` runs the stages in order.
"""

from __future__ import annotations
