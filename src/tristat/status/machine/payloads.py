# topmark:header:start
#
#   project      : Tristat
#   file         : payloads.py
#   file_relpath : src/tristat/status/machine/payloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Payload builders for the status JSON document.

This module is Click-free, console-free and serialization-free: it turns a
`StatusReport` into plain, insertion-ordered dicts and lists. The document does
not depend on the verbosity tier.

Entry shape:
    ``{"path", "indexState", "worktreeState", "renameFrom"?, "similarity"?,
    "modeChanged"?}``. Optional keys are present only when meaningful.
    Similarity is rounded to `SIMILARITY_DIGITS` decimals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from tristat.core.machine.schemas import MachineKey

if TYPE_CHECKING:
    from tristat.status.model import IgnoreMatch, StatusEntry, StatusReport, SummaryCounts

SIMILARITY_DIGITS: Final[int] = 4


def build_entry_payload(entry: StatusEntry) -> dict[str, object]:
    """Build the payload for one status entry.

    Args:
        entry (StatusEntry): The entry.

    Returns:
        dict[str, object]: JSON-ready mapping with a fixed key order.
    """
    payload: dict[str, object] = {
        MachineKey.PATH: entry.path,
        MachineKey.INDEX_STATE: entry.index_state.value,
        MachineKey.WORKTREE_STATE: entry.worktree_state.value,
    }
    if entry.rename_from is not None:
        payload[MachineKey.RENAME_FROM] = entry.rename_from
    if entry.similarity is not None:
        payload[MachineKey.SIMILARITY] = round(entry.similarity, SIMILARITY_DIGITS)
    if entry.mode_changed:
        payload[MachineKey.MODE_CHANGED] = True
    return payload


def build_summary_payload(summary: SummaryCounts) -> dict[str, object]:
    """Build the ``summary`` payload: counts per state on each axis."""
    return {
        MachineKey.INDEX: {state.value: count for state, count in summary.index.items()},
        MachineKey.WORKTREE: {state.value: count for state, count in summary.worktree.items()},
    }


def build_ignore_payload(match: IgnoreMatch) -> dict[str, object]:
    """Build the payload describing why a path is ignored."""
    return {
        MachineKey.PATH: match.path,
        MachineKey.SOURCE: match.source,
        MachineKey.LINE: match.line,
        MachineKey.PATTERN: match.pattern,
    }


def build_status_payloads(report: StatusReport) -> dict[str, object]:
    """Build the named payloads of the status document, in output order.

    Args:
        report (StatusReport): The report to project.

    Returns:
        dict[str, object]: ``root``, ``branch`` (null when HEAD is detached or
            unborn), ``branches``, ``clean``, ``entries``, ``summary`` and ``ignored``.
    """
    return {
        MachineKey.ROOT: report.root,
        MachineKey.BRANCH: report.branch,
        MachineKey.BRANCHES: list(report.branches),
        MachineKey.CLEAN: report.clean,
        MachineKey.ENTRIES: [build_entry_payload(e) for e in report.entries],
        MachineKey.SUMMARY: build_summary_payload(report.summary),
        MachineKey.IGNORED: [build_ignore_payload(m) for m in report.ignore_matches],
    }
