# topmark:header:start
#
#   project      : Tristat
#   file         : model.py
#   file_relpath : src/tristat/status/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable status model: entries, summary counts and the report itself.

A `StatusReport` is the single source of truth for every rendering. Renderers
only project it; they never re-read repository state.

Invariants:
    - ``entries`` are sorted byte-lexicographically by path and each path
      appears at most once.
    - ``clean`` is True iff no entry is staged, unstaged, untracked or conflicted.
      Ignored paths never make a report dirty.
    - Conflicted entries carry ``WorktreeState.UNMODIFIED``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from tristat.status.states import IndexState, WorktreeState

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_STAGED_STATES: frozenset[IndexState] = frozenset(
    {
        IndexState.ADDED,
        IndexState.MODIFIED,
        IndexState.DELETED,
        IndexState.RENAMED,
        IndexState.COPIED,
    }
)
_UNSTAGED_STATES: frozenset[WorktreeState] = frozenset(
    {WorktreeState.MODIFIED, WorktreeState.DELETED}
)


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """Classification of one path.

    Attributes:
        path (str): Repository-relative path (rename/copy target for renamed entries).
        index_state (IndexState): HEAD vs index.
        worktree_state (WorktreeState): Index vs working tree.
        rename_from (str | None): Source path of a rename or copy.
        similarity (float | None): Content similarity of a rename or copy, in [0, 1].
        mode_changed (bool): A rename/copy whose file mode differs from its source.
        head_fingerprint (str | None): Object id in HEAD (source object for renames).
        index_fingerprint (str | None): Object id in the index.
        worktree_fingerprint (str | None): Object id of the working tree content.
    """

    path: str
    index_state: IndexState = IndexState.UNMODIFIED
    worktree_state: WorktreeState = WorktreeState.UNMODIFIED
    rename_from: str | None = None
    similarity: float | None = None
    mode_changed: bool = False
    head_fingerprint: str | None = None
    index_fingerprint: str | None = None
    worktree_fingerprint: str | None = None

    @property
    def is_conflicted(self) -> bool:
        """Whether the path has unresolved merge stages."""
        return self.index_state is IndexState.CONFLICTED

    @property
    def is_staged(self) -> bool:
        """Whether the index differs from HEAD for this path."""
        return self.index_state in _STAGED_STATES

    @property
    def is_unstaged(self) -> bool:
        """Whether the working tree differs from the index for a tracked path."""
        return self.worktree_state in _UNSTAGED_STATES

    @property
    def is_untracked(self) -> bool:
        """Whether the path exists only in the working tree and is not ignored."""
        return self.worktree_state is WorktreeState.UNTRACKED

    @property
    def is_ignored(self) -> bool:
        """Whether the path exists only in the working tree and matches an ignore rule."""
        return self.worktree_state is WorktreeState.IGNORED

    @property
    def is_dirty(self) -> bool:
        """Whether this entry makes the working copy not clean."""
        return self.is_conflicted or self.is_staged or self.is_unstaged or self.is_untracked

    @property
    def is_unchanged(self) -> bool:
        """Whether this is a tracked path identical in HEAD, index and working tree."""
        return (
            self.index_state is IndexState.UNMODIFIED
            and self.worktree_state is WorktreeState.UNMODIFIED
        )

    @property
    def short_code(self) -> str:
        """Two-character status code, as in ``git status --short``."""
        if self.is_conflicted:
            return "UU"
        if self.index_state is IndexState.UNMODIFIED:
            # Worktree-only paths; a staged deletion still on disk keeps its index code.
            if self.is_untracked:
                return "??"
            if self.is_ignored:
                return "!!"
        return f"{self.index_state.code}{self.worktree_state.code}"

    @property
    def display_path(self) -> str:
        """Path as shown in text output; renames and copies read ``old -> new``."""
        if self.rename_from is not None:
            return f"{self.rename_from} -> {self.path}"
        return self.path


@dataclass(frozen=True, slots=True)
class IgnoreMatch:
    """Provenance of an ignored path: which rule in which file matched it.

    Attributes:
        path (str): The ignored path.
        source (str): Ignore file relative to the repository root
            (e.g. ``".gitignore"``, ``"docs/.gitignore"``, ``".git/info/exclude"``).
        line (int): 1-based line number of the matching rule (0 for built-in rules).
        pattern (str): The rule text as written.
    """

    path: str
    source: str
    line: int
    pattern: str

    def describe(self) -> str:
        """Return ``source:line: pattern`` for display."""
        return f"{self.source}:{self.line}: {self.pattern}"


@dataclass(frozen=True, slots=True)
class SummaryCounts:
    """Number of entries per state, on each axis.

    Both mappings hold every member of their enum (zero counts included), in
    declaration order.

    Attributes:
        index (Mapping[IndexState, int]): Counts per index state.
        worktree (Mapping[WorktreeState, int]): Counts per worktree state.
    """

    index: Mapping[IndexState, int]
    worktree: Mapping[WorktreeState, int]

    @classmethod
    def from_entries(cls, entries: tuple[StatusEntry, ...]) -> SummaryCounts:
        """Count entries per state.

        Args:
            entries (tuple[StatusEntry, ...]): The entries to count.

        Returns:
            SummaryCounts: The counts.
        """
        index: dict[IndexState, int] = dict.fromkeys(IndexState, 0)
        worktree: dict[WorktreeState, int] = dict.fromkeys(WorktreeState, 0)
        for entry in entries:
            index[entry.index_state] += 1
            worktree[entry.worktree_state] += 1
        return cls(index=MappingProxyType(index), worktree=MappingProxyType(worktree))


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Canonical, immutable result of a status computation.

    Attributes:
        root (str): Repository root, as a POSIX path string.
        entries (tuple[StatusEntry, ...]): One entry per path, sorted.
        summary (SummaryCounts): Counts per state.
        ignore_matches (tuple[IgnoreMatch, ...]): Ignore provenance for ignored entries.
        clean (bool): True iff no entry is dirty.
        branch (str | None): Checked-out branch; None when HEAD is detached or unborn.
        branches (tuple[str, ...]): Local branch names, sorted.
    """

    root: str
    entries: tuple[StatusEntry, ...]
    summary: SummaryCounts
    ignore_matches: tuple[IgnoreMatch, ...]
    clean: bool
    branch: str | None = None
    branches: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[StatusEntry]:
        return iter(self.entries)

    @property
    def conflicted(self) -> tuple[StatusEntry, ...]:
        """Entries with unresolved merge stages."""
        return tuple(e for e in self.entries if e.is_conflicted)

    @property
    def staged(self) -> tuple[StatusEntry, ...]:
        """Entries whose index differs from HEAD."""
        return tuple(e for e in self.entries if e.is_staged)

    @property
    def unstaged(self) -> tuple[StatusEntry, ...]:
        """Tracked entries whose working tree differs from the index."""
        return tuple(e for e in self.entries if e.is_unstaged)

    @property
    def untracked(self) -> tuple[StatusEntry, ...]:
        """Untracked, non-ignored entries."""
        return tuple(e for e in self.entries if e.is_untracked)

    @property
    def ignored(self) -> tuple[StatusEntry, ...]:
        """Untracked entries that match an ignore rule."""
        return tuple(e for e in self.entries if e.is_ignored)

    @property
    def unchanged(self) -> tuple[StatusEntry, ...]:
        """Tracked entries identical in HEAD, index and working tree."""
        return tuple(e for e in self.entries if e.is_unchanged)

    def ignore_match_for(self, path: str) -> IgnoreMatch | None:
        """Return the ignore provenance for ``path``, if recorded."""
        for match in self.ignore_matches:
            if match.path == path:
                return match
        return None
