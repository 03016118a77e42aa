# topmark:header:start
#
#   project      : Tristat
#   file         : test_engine.py
#   file_relpath : tests/status/test_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `compute_status` and the report-level properties it guarantees."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, given, settings

from tests.conftest import make_config, mark_property, memory_report, parametrize
from tests.strategies_tristat import RepoState, s_repo_state
from tristat.core.errors import StateReadError
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier
from tristat.rendering.api import render
from tristat.status.engine import compute_status, rename_detection_enabled
from tristat.status.provider import MemoryStateProvider, StateProvider
from tristat.status.states import IndexState, WorktreeState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tristat.status.records import PathRecord


def test_empty_repository_is_clean() -> None:
    """No HEAD, no index, no files."""
    report = memory_report()
    assert report.clean
    assert report.entries == ()
    assert report.root == "/repo"


def test_ignored_entries_carry_provenance() -> None:
    """Ignored paths are reported with the rule that matched them."""
    report = memory_report(worktree={"x.log": b"1\n", "a.txt": b"2\n"}, ignore_rules=["*.log"])
    assert [e.path for e in report.ignored] == ["x.log"]
    assert [e.path for e in report.untracked] == ["a.txt"]
    match = report.ignore_match_for("x.log")
    assert match is not None and match.describe() == ".gitignore:1: *.log"


def test_tracked_file_matching_ignore_rule() -> None:
    """A tracked path is unchanged or modified, never ignored."""
    report = memory_report(
        head={"build.log": b"v1\n", "other.log": b"v1\n"},
        index={"build.log": b"v1\n", "other.log": b"v1\n"},
        worktree={"build.log": b"v1\n", "other.log": b"v2\n"},
        ignore_rules=["*.log"],
    )
    states = {e.path: e.worktree_state for e in report.entries}
    assert states == {
        "build.log": WorktreeState.UNMODIFIED,
        "other.log": WorktreeState.MODIFIED,
    }
    assert report.ignore_matches == ()


def test_conflicted_paths() -> None:
    """Conflicted paths are dirty and show only on the index axis."""
    report = memory_report(
        head={"c.txt": b"base\n"},
        index={"c.txt": b"ours\n"},
        worktree={"c.txt": b"<<<<<<< ours\n"},
        conflicted=["c.txt"],
    )
    (entry,) = report.entries
    assert entry.index_state is IndexState.CONFLICTED
    assert entry.worktree_state is WorktreeState.UNMODIFIED
    assert not report.clean


def test_pathspecs_restrict_entries() -> None:
    """Only matching paths are reported; cleanliness follows the filtered set."""
    report = memory_report(
        pathspecs=("docs",),
        head={"src/a.py": b"1\n", "docs/i.md": b"1\n"},
        index={"src/a.py": b"1\n", "docs/i.md": b"1\n"},
        worktree={"src/a.py": b"2\n", "docs/i.md": b"1\n"},
    )
    assert [e.path for e in report.entries] == ["docs/i.md"]
    assert report.clean


class _BrokenProvider(MemoryStateProvider):
    def list_worktree(self) -> Sequence[PathRecord]:
        raise PermissionError(13, "Permission denied", "secret/file")


def test_os_errors_become_state_read_errors() -> None:
    """Unexpected OS errors surface as `StateReadError` with the offending path."""
    provider: StateProvider = _BrokenProvider()
    with pytest.raises(StateReadError) as excinfo:
        compute_status(provider, make_config())
    assert excinfo.value.path == "secret/file"
    assert "Permission denied" in str(excinfo.value)


@parametrize(
    "fast, tier, fmt, expected",
    [
        (False, VerbosityTier.TERSE, OutputFormat.TEXT, True),
        (True, VerbosityTier.TERSE, OutputFormat.TEXT, False),
        (True, VerbosityTier.VERBOSE, OutputFormat.TEXT, True),
        (True, VerbosityTier.TERSE, OutputFormat.JSON, True),
    ],
)
def test_fast_mode_only_for_terse_text(
    fast: bool, tier: VerbosityTier, fmt: OutputFormat, expected: bool
) -> None:
    """``fast`` never suppresses similarity information that would be shown."""
    config = make_config(fast=fast)
    assert rename_detection_enabled(config, tier=tier, fmt=fmt) is expected


def test_detect_renames_off_wins() -> None:
    """``detect_renames = false`` disables detection at every tier."""
    config = make_config(detect_renames=False)
    for tier in VerbosityTier:
        assert not rename_detection_enabled(config, tier=tier, fmt=OutputFormat.TEXT)


@mark_property
@settings(max_examples=80, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(state=s_repo_state())
def test_every_path_is_accounted_for_once(state: RepoState) -> None:
    """Entry paths plus rename sources cover the union of all sides, without duplicates."""
    report = memory_report(**state.as_kwargs())
    listed: set[str] = set(state.head) | set(state.index) | set(state.worktree)

    entry_paths: list[str] = [e.path for e in report.entries]
    assert len(entry_paths) == len(set(entry_paths))

    sources: set[str] = {
        e.rename_from
        for e in report.entries
        if e.rename_from is not None and e.index_state is IndexState.RENAMED
    }
    assert set(entry_paths) | sources == listed


@mark_property
@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(state=s_repo_state())
def test_status_is_deterministic_and_idempotent(state: RepoState) -> None:
    """Same state, same report; same report, same bytes."""
    first = memory_report(**state.as_kwargs())
    second = memory_report(**state.as_kwargs())
    assert first.entries == second.entries
    assert first.clean == second.clean
    for fmt in OutputFormat:
        for tier in VerbosityTier:
            assert render(first, tier, fmt).text == render(second, tier, fmt).text


@mark_property
@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(state=s_repo_state())
def test_clean_iff_nothing_dirty(state: RepoState) -> None:
    """Cleanliness ignores ignored paths and nothing else."""
    report = memory_report(**state.as_kwargs())
    dirty = report.staged or report.unstaged or report.untracked or report.conflicted
    assert report.clean is (not dirty)
