# topmark:header:start
#
#   project      : Tristat
#   file         : builder.py
#   file_relpath : src/tristat/status/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build the immutable `StatusReport` from classified entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tristat.core.errors import RenderError
from tristat.status.model import IgnoreMatch, StatusEntry, StatusReport, SummaryCounts
from tristat.status.records import path_sort_key

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_report(
    root: str,
    entries: Iterable[StatusEntry],
    ignore_matches: Iterable[IgnoreMatch] = (),
    *,
    branch: str | None = None,
    branches: Iterable[str] = (),
) -> StatusReport:
    """Sort, validate and freeze entries into a report.

    Args:
        root (str): Repository root.
        entries (Iterable[StatusEntry]): Classified entries, in any order.
        ignore_matches (Iterable[IgnoreMatch]): Provenance for ignored entries.
        branch (str | None): Checked-out branch, if any.
        branches (Iterable[str]): Local branch names.

    Returns:
        StatusReport: The canonical report.

    Raises:
        RenderError: If a path appears more than once. Upstream stages guarantee
            uniqueness, so this indicates a bug.
    """
    ordered: tuple[StatusEntry, ...] = tuple(sorted(entries, key=lambda e: path_sort_key(e.path)))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.path == current.path:
            raise RenderError(f"Duplicate status entry for path '{current.path}'")

    matches: tuple[IgnoreMatch, ...] = tuple(
        sorted(ignore_matches, key=lambda m: path_sort_key(m.path))
    )
    return StatusReport(
        root=root,
        entries=ordered,
        summary=SummaryCounts.from_entries(ordered),
        ignore_matches=matches,
        clean=not any(e.is_dirty for e in ordered),
        branch=branch,
        branches=tuple(sorted(branches)),
    )
