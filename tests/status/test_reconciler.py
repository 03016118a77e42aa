# topmark:header:start
#
#   project      : Tristat
#   file         : test_reconciler.py
#   file_relpath : tests/status/test_reconciler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for per-path classification on the index and worktree axes."""

from __future__ import annotations

import pytest

from tests.conftest import parametrize
from tristat.core.errors import StateReadError
from tristat.status.reconciler import classify_index, classify_worktree, reconcile
from tristat.status.records import FileMode, PathRecord, Side, blob_fingerprint
from tristat.status.states import IndexState, WorktreeState


def _record(path: str, content: bytes | None, side: Side, **kwargs: object) -> PathRecord:
    fingerprint: str | None = blob_fingerprint(content) if content is not None else None
    return PathRecord(path=path, fingerprint=fingerprint, side=side, **kwargs)  # type: ignore[arg-type]


def _never_ignored(_path: str) -> bool:
    return False


def _always_ignored(_path: str) -> bool:
    return True


@parametrize(
    "head, index, expected",
    [
        (None, b"x", IndexState.ADDED),
        (b"x", None, IndexState.DELETED),
        (b"x", b"y", IndexState.MODIFIED),
        (b"x", b"x", IndexState.UNMODIFIED),
        (None, None, IndexState.UNMODIFIED),
    ],
)
def test_classify_index(head: bytes | None, index: bytes | None, expected: IndexState) -> None:
    """HEAD vs index decision table."""
    h = _record("p", head, Side.HEAD) if head is not None else None
    i = _record("p", index, Side.INDEX) if index is not None else None
    assert classify_index(h, i) is expected


def test_mode_change_is_a_modification() -> None:
    """Identical content with a different mode is modified."""
    h = _record("run.sh", b"echo\n", Side.HEAD)
    i = _record("run.sh", b"echo\n", Side.INDEX, mode=FileMode.EXECUTABLE)
    assert classify_index(h, i) is IndexState.MODIFIED


def test_conflict_short_circuits_both_axes() -> None:
    """A conflicted index entry is conflicted / unmodified whatever the contents."""
    h = _record("c.txt", b"base\n", Side.HEAD)
    i = _record("c.txt", b"ours\n", Side.INDEX, conflicted=True)
    w = _record("c.txt", b"<<<<<<<\n", Side.WORKTREE)
    assert classify_index(h, i) is IndexState.CONFLICTED
    assert classify_worktree("c.txt", i, w, _never_ignored) is WorktreeState.UNMODIFIED


@parametrize(
    "index, worktree, expected",
    [
        (b"x", None, WorktreeState.DELETED),
        (b"x", b"y", WorktreeState.MODIFIED),
        (b"x", b"x", WorktreeState.UNMODIFIED),
        (None, b"x", WorktreeState.UNTRACKED),
    ],
)
def test_classify_worktree(
    index: bytes | None, worktree: bytes | None, expected: WorktreeState
) -> None:
    """Index vs working tree decision table."""
    i = _record("p", index, Side.INDEX) if index is not None else None
    w = _record("p", worktree, Side.WORKTREE) if worktree is not None else None
    assert classify_worktree("p", i, w, _never_ignored) is expected


def test_tracked_path_is_never_ignored() -> None:
    """The ignore predicate is not even consulted for indexed paths."""
    calls: list[str] = []

    def predicate(path: str) -> bool:
        calls.append(path)
        return True

    i = _record("build.log", b"x", Side.INDEX)
    w = _record("build.log", b"y", Side.WORKTREE)
    assert classify_worktree("build.log", i, w, predicate) is WorktreeState.MODIFIED
    assert calls == []


def test_untracked_path_matching_rule_is_ignored() -> None:
    """An untracked path that matches a rule is ignored rather than untracked."""
    w = _record("debug.log", b"x", Side.WORKTREE)
    assert classify_worktree("debug.log", None, w, _always_ignored) is WorktreeState.IGNORED


def test_missing_fingerprint_compares_by_mode_only() -> None:
    """A record without a fingerprint is never reported as modified by content."""
    i = _record("vendor", b"x", Side.INDEX, mode=FileMode.GITLINK)
    w = PathRecord(path="vendor", fingerprint=None, mode=FileMode.GITLINK)
    assert classify_worktree("vendor", i, w, _never_ignored) is WorktreeState.UNMODIFIED


def test_reconcile_covers_union_sorted() -> None:
    """Every listed path gets exactly one entry, in byte order."""
    head = [_record("b.txt", b"1", Side.HEAD), _record("a.txt", b"1", Side.HEAD)]
    index = [_record("a.txt", b"1", Side.INDEX), _record("C.txt", b"2", Side.INDEX)]
    worktree = [
        _record("a.txt", b"1", Side.WORKTREE),
        _record("C.txt", b"2", Side.WORKTREE),
        _record("new.md", b"3", Side.WORKTREE),
    ]
    entries = reconcile(head, index, worktree, _never_ignored)
    assert [e.path for e in entries] == ["C.txt", "a.txt", "b.txt", "new.md"]
    states = {e.path: (e.index_state, e.worktree_state) for e in entries}
    assert states == {
        "C.txt": (IndexState.ADDED, WorktreeState.UNMODIFIED),
        "a.txt": (IndexState.UNMODIFIED, WorktreeState.UNMODIFIED),
        "b.txt": (IndexState.DELETED, WorktreeState.UNMODIFIED),
        "new.md": (IndexState.UNMODIFIED, WorktreeState.UNTRACKED),
    }


def test_reconcile_rejects_duplicate_paths() -> None:
    """A provider listing a path twice is a state read error."""
    index = [_record("a.txt", b"1", Side.INDEX), _record("a.txt", b"2", Side.INDEX)]
    with pytest.raises(StateReadError) as excinfo:
        reconcile([], index, [], _never_ignored)
    assert excinfo.value.operation == "list_index"
    assert excinfo.value.path == "a.txt"
