# topmark:header:start
#
#   project      : Tristat
#   file         : renames.py
#   file_relpath : src/tristat/status/renames.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rename and copy detection on the index axis.

Staged deletions are *sources* and staged additions are *targets*. Every
source/target pair of the same file kind is scored with
`tristat.status.similarity.similarity` (identical object ids score 1.0 without
reading content). Pairs at or above the threshold are then assigned greedily:

    1. sort candidate pairs by descending score, then by source path, then by
       target path (byte order);
    2. walk the list and accept a pair when neither side is taken yet.

The result is one-to-one and independent of input order. A matched target
becomes a ``renamed`` entry carrying ``rename_from`` and ``similarity``. The
source entry disappears unless its file is still on disk as an untracked or
ignored file; in that case it stays as a worktree-only entry.

Copy detection is optional. Targets left over after rename matching are
compared against HEAD paths that are still tracked, and the best source at or
above the threshold makes the target a ``copied`` entry. A source may be copied
any number of times.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from tristat.config.logging import get_logger
from tristat.status.records import FileMode, PathRecord, path_sort_key
from tristat.status.similarity import similarity
from tristat.status.states import IndexState, WorktreeState

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from tristat.config.logging import TristatLogger
    from tristat.status.model import StatusEntry

logger: TristatLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenamePair:
    """A scored source/target candidate.

    Attributes:
        source (str): Path deleted from the index (or, for copies, a tracked HEAD path).
        target (str): Path added to the index.
        score (float): Similarity in [0, 1].
        mode_changed (bool): Whether the two file modes differ.
    """

    source: str
    target: str
    score: float
    mode_changed: bool

    def sort_key(self) -> tuple[float, bytes, bytes]:
        """Greedy assignment order: best score first, then paths in byte order."""
        return (-self.score, path_sort_key(self.source), path_sort_key(self.target))


class _Scorer:
    """Score record pairs, caching blob reads by object id."""

    def __init__(self, load_blob: Callable[[PathRecord], bytes]) -> None:
        self._load_blob = load_blob
        self._blobs: dict[str, bytes] = {}

    def _content(self, record: PathRecord) -> bytes:
        key: str = record.fingerprint or f"{record.side.value}:{record.path}"
        if key not in self._blobs:
            self._blobs[key] = self._load_blob(record)
        return self._blobs[key]

    def score(self, source: PathRecord, target: PathRecord) -> float | None:
        """Return the similarity of two records, or None if they cannot be paired."""
        if source.mode.kind != target.mode.kind or source.is_directory or target.is_directory:
            return None
        if source.fingerprint is not None and source.fingerprint == target.fingerprint:
            return 1.0
        if source.mode in (FileMode.GITLINK, FileMode.TREE):
            # Submodule commits have no content to compare.
            return None
        a: bytes = self._content(source)
        b: bytes = self._content(target)
        if not a or not b:
            return None
        return similarity(a, b)


def assign_greedy(pairs: Sequence[RenamePair]) -> list[RenamePair]:
    """Select a one-to-one subset of ``pairs``, best scores first.

    Args:
        pairs (Sequence[RenamePair]): Candidates at or above the threshold.

    Returns:
        list[RenamePair]: Accepted pairs; no source or target appears twice.
    """
    taken_sources: set[str] = set()
    taken_targets: set[str] = set()
    accepted: list[RenamePair] = []
    for pair in sorted(pairs, key=RenamePair.sort_key):
        if pair.source in taken_sources or pair.target in taken_targets:
            continue
        taken_sources.add(pair.source)
        taken_targets.add(pair.target)
        accepted.append(pair)
    return accepted


def _score_pairs(
    sources: Sequence[PathRecord],
    targets: Sequence[PathRecord],
    scorer: _Scorer,
    threshold: float,
) -> list[RenamePair]:
    pairs: list[RenamePair] = []
    for src in sources:
        for tgt in targets:
            score: float | None = scorer.score(src, tgt)
            if score is None or score < threshold:
                continue
            pairs.append(
                RenamePair(
                    source=src.path,
                    target=tgt.path,
                    score=score,
                    mode_changed=src.mode is not tgt.mode,
                )
            )
    return pairs


def detect_renames(
    entries: Sequence[StatusEntry],
    head: Mapping[str, PathRecord],
    index: Mapping[str, PathRecord],
    load_blob: Callable[[PathRecord], bytes],
    *,
    threshold: float,
    detect_copies: bool = False,
) -> tuple[StatusEntry, ...]:
    """Rewrite staged delete/add pairs as renames (and optionally copies).

    Args:
        entries (Sequence[StatusEntry]): Reconciled entries, sorted by path.
        head (Mapping[str, PathRecord]): HEAD records by path.
        index (Mapping[str, PathRecord]): Index records by path.
        load_blob (Callable[[PathRecord], bytes]): Reads the content of a record.
        threshold (float): Minimum similarity for a pair to be accepted.
        detect_copies (bool): Also match leftover additions against tracked HEAD paths.

    Returns:
        tuple[StatusEntry, ...]: Entries with renames/copies applied, still sorted.
    """
    sources: list[PathRecord] = [
        head[e.path] for e in entries if e.index_state is IndexState.DELETED and e.path in head
    ]
    targets: list[PathRecord] = [
        index[e.path] for e in entries if e.index_state is IndexState.ADDED and e.path in index
    ]
    if not targets:
        return tuple(entries)

    scorer = _Scorer(load_blob)
    renames: list[RenamePair] = []
    if sources:
        renames = assign_greedy(_score_pairs(sources, targets, scorer, threshold))

    copies: list[RenamePair] = []
    if detect_copies:
        renamed_targets: set[str] = {p.target for p in renames}
        leftover: list[PathRecord] = [t for t in targets if t.path not in renamed_targets]
        copy_sources: list[PathRecord] = [
            record
            for path, record in sorted(head.items(), key=lambda kv: path_sort_key(kv[0]))
            if path in index
        ]
        for tgt in leftover:
            candidates: list[RenamePair] = _score_pairs(copy_sources, [tgt], scorer, threshold)
            if candidates:
                copies.append(min(candidates, key=RenamePair.sort_key))

    if not renames and not copies:
        return tuple(entries)

    by_target: dict[str, tuple[RenamePair, IndexState]] = {
        p.target: (p, IndexState.RENAMED) for p in renames
    }
    by_target.update({p.target: (p, IndexState.COPIED) for p in copies})
    renamed_sources: set[str] = {p.source for p in renames}

    out: list[StatusEntry] = []
    for entry in entries:
        if entry.path in renamed_sources:
            if entry.worktree_state in (WorktreeState.UNTRACKED, WorktreeState.IGNORED):
                # The source file is back on disk but not in the index.
                out.append(replace(entry, index_state=IndexState.UNMODIFIED, head_fingerprint=None))
            continue
        matched: tuple[RenamePair, IndexState] | None = by_target.get(entry.path)
        if matched is None:
            out.append(entry)
            continue
        pair, state = matched
        out.append(
            replace(
                entry,
                index_state=state,
                rename_from=pair.source,
                similarity=pair.score,
                mode_changed=pair.mode_changed,
                head_fingerprint=head[pair.source].fingerprint,
            )
        )

    logger.debug("Detected %d rename(s) and %d copy(ies)", len(renames), len(copies))
    for pair in renames:
        logger.trace("rename %s -> %s (%.3f)", pair.source, pair.target, pair.score)
    return tuple(out)
