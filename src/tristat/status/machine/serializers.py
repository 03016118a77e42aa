# topmark:header:start
#
#   project      : Tristat
#   file         : serializers.py
#   file_relpath : src/tristat/status/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialize a `StatusReport` as a JSON document.

Document shape::

    {
      "meta": {"tool": "tristat", "version": "..."},
      "root": "/path/to/repo",
      "clean": false,
      "entries": [{"path": "a.txt", "indexState": "unmodified", "worktreeState": "untracked"}],
      "summary": {"index": {...}, "worktree": {...}},
      "ignored": [{"path": "...", "source": ".gitignore", "line": 1, "pattern": "*.log"}]
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tristat.core.machine.serializers import serialize_json_envelope
from tristat.status.machine.payloads import build_status_payloads

if TYPE_CHECKING:
    from tristat.core.machine.schemas import MetaPayload
    from tristat.status.model import StatusReport


def serialize_status_json(*, meta: MetaPayload, report: StatusReport) -> str:
    """Serialize ``report`` as a pretty-printed JSON document (no trailing newline).

    Args:
        meta: Metadata payload (tool/version).
        report: The report to serialize.

    Returns:
        The JSON document.
    """
    return serialize_json_envelope(meta, **build_status_payloads(report))
