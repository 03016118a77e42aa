# topmark:header:start
#
#   project      : Tristat
#   file         : reconciler.py
#   file_relpath : src/tristat/status/reconciler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path reconciliation: classify every path on the index and worktree axes.

`reconcile` takes the three record sets listed by a provider and returns one
`StatusEntry` per path in their union, sorted byte-lexicographically.

Decision table (``H`` = HEAD record, ``I`` = index record, ``W`` = worktree record):

    index axis      H absent, I present       -> added
                    H present, I absent       -> deleted
                    object id or mode differs -> modified
    worktree axis   I present, W absent       -> deleted
                    object id or mode differs -> modified
                    I absent, W present       -> untracked, or ignored if a rule matches
    conflict        I conflicted              -> conflicted / unmodified (short-circuit)

Ignore rules are only consulted for paths absent from the index, so a tracked
path is never reported as ignored. Rename and copy classification happens later,
in `tristat.status.renames`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tristat.config.logging import get_logger
from tristat.core.errors import StateReadError
from tristat.status.model import StatusEntry
from tristat.status.records import PathRecord, path_sort_key
from tristat.status.states import IndexState, WorktreeState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)


def index_by_path(records: Iterable[PathRecord], *, side: str) -> dict[str, PathRecord]:
    """Map records by path, rejecting duplicates.

    Args:
        records (Iterable[PathRecord]): Records of one side.
        side (str): Side name, for the error message.

    Returns:
        dict[str, PathRecord]: Records keyed by path.

    Raises:
        StateReadError: If the provider listed the same path twice.
    """
    out: dict[str, PathRecord] = {}
    for record in records:
        if record.path in out:
            raise StateReadError(f"list_{side}", "path listed more than once", path=record.path)
        out[record.path] = record
    return out


def _differs(a: PathRecord, b: PathRecord) -> bool:
    # A missing fingerprint means "not hashed"; only the mode can be compared then.
    if a.mode is not b.mode:
        return True
    if a.fingerprint is None or b.fingerprint is None:
        return False
    return a.fingerprint != b.fingerprint


def classify_index(head: PathRecord | None, index: PathRecord | None) -> IndexState:
    """Classify the index axis for one path.

    Args:
        head (PathRecord | None): HEAD record, if any.
        index (PathRecord | None): Index record, if any.

    Returns:
        IndexState: The index-axis state (never renamed/copied here).
    """
    if index is not None and index.conflicted:
        return IndexState.CONFLICTED
    if head is None and index is not None:
        return IndexState.ADDED
    if head is not None and index is None:
        return IndexState.DELETED
    if head is not None and index is not None and _differs(head, index):
        return IndexState.MODIFIED
    return IndexState.UNMODIFIED


def classify_worktree(
    path: str,
    index: PathRecord | None,
    worktree: PathRecord | None,
    is_ignored: Callable[[str], bool],
) -> WorktreeState:
    """Classify the worktree axis for one path.

    Args:
        path (str): The path being classified.
        index (PathRecord | None): Index record, if any.
        worktree (PathRecord | None): Working tree record, if any.
        is_ignored (Callable[[str], bool]): Ignore predicate; only called for paths
            absent from the index.

    Returns:
        WorktreeState: The worktree-axis state.
    """
    if index is not None:
        if index.conflicted:
            return WorktreeState.UNMODIFIED
        if worktree is None:
            return WorktreeState.DELETED
        if _differs(index, worktree):
            return WorktreeState.MODIFIED
        return WorktreeState.UNMODIFIED
    if worktree is None:
        return WorktreeState.UNMODIFIED
    return WorktreeState.IGNORED if is_ignored(path) else WorktreeState.UNTRACKED


def reconcile(
    head: Iterable[PathRecord],
    index: Iterable[PathRecord],
    worktree: Iterable[PathRecord],
    is_ignored: Callable[[str], bool],
) -> tuple[StatusEntry, ...]:
    """Classify the union of all listed paths.

    Args:
        head (Iterable[PathRecord]): HEAD tree records.
        index (Iterable[PathRecord]): Index records.
        worktree (Iterable[PathRecord]): Working tree records.
        is_ignored (Callable[[str], bool]): Ignore predicate.

    Returns:
        tuple[StatusEntry, ...]: One entry per path, sorted byte-lexicographically.
        Unchanged tracked paths are included.

    Raises:
        StateReadError: If a side lists the same path twice.
    """
    head_map: dict[str, PathRecord] = index_by_path(head, side="head")
    index_map: dict[str, PathRecord] = index_by_path(index, side="index")
    worktree_map: dict[str, PathRecord] = index_by_path(worktree, side="worktree")

    paths: set[str] = set(head_map) | set(index_map) | set(worktree_map)
    entries: list[StatusEntry] = []
    for path in sorted(paths, key=path_sort_key):
        h: PathRecord | None = head_map.get(path)
        i: PathRecord | None = index_map.get(path)
        w: PathRecord | None = worktree_map.get(path)
        entries.append(
            StatusEntry(
                path=path,
                index_state=classify_index(h, i),
                worktree_state=classify_worktree(path, i, w, is_ignored),
                head_fingerprint=h.fingerprint if h else None,
                index_fingerprint=i.fingerprint if i else None,
                worktree_fingerprint=w.fingerprint if w else None,
            )
        )
    logger.debug(
        "Reconciled %d path(s) (head=%d, index=%d, worktree=%d)",
        len(entries),
        len(head_map),
        len(index_map),
        len(worktree_map),
    )
    return tuple(entries)
