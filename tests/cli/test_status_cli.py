# topmark:header:start
#
#   project      : Tristat
#   file         : test_status_cli.py
#   file_relpath : tests/cli/test_status_cli.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for ``tristat status``: output per tier and exit codes."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from tests.cli.conftest import run_cli, run_cli_in
from tests.conftest import mark_cli, numbered_lines, parametrize, run_git
from tristat.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _commit_all(repo: Path) -> None:
    run_git(repo, "add", "-A")
    run_git(repo, "commit", "--quiet", "-m", "commit")


@mark_cli
def test_empty_repository_is_clean(git_repo: Path) -> None:
    """Empty repository: ``clean`` on stdout, exit 0."""
    result = run_cli(["status"])
    assert result.exit_code == ExitCode.CLEAN
    assert result.stdout == "clean\n"
    assert result.stderr == ""


@mark_cli
def test_untracked_file(git_repo: Path) -> None:
    """One untracked file at each tier, exit 1."""
    (git_repo / "a.txt").write_text("x\n", encoding="utf-8")

    terse = run_cli(["status"])
    assert terse.exit_code == ExitCode.DIRTY
    assert terse.stdout == "?? a.txt\n"

    verbose = run_cli(["status", "-v"])
    assert verbose.exit_code == ExitCode.DIRTY
    assert "-- Untracked:\n?? a.txt\n" in verbose.stdout
    header, summary = verbose.stdout.splitlines()[:2]
    assert header == f"{git_repo.resolve().as_posix()} :: (no branch)"
    assert summary.startswith("0 staged, 0 unstaged, 1 untracked")

    doc = json.loads(run_cli(["status", "--format", "json"]).stdout)
    assert doc["clean"] is False
    assert doc["entries"] == [
        {"path": "a.txt", "indexState": "unmodified", "worktreeState": "untracked"}
    ]


@mark_cli
def test_staged_then_modified(git_repo: Path) -> None:
    """MM once at terse; under Staged and Unstaged at -v."""
    target: Path = git_repo / "a.txt"
    target.write_text("v1\n", encoding="utf-8")
    _commit_all(git_repo)
    target.write_text("v2\n", encoding="utf-8")
    run_git(git_repo, "add", "a.txt")
    target.write_text("v3\n", encoding="utf-8")

    assert run_cli(["status"]).stdout == "MM a.txt\n"
    lines = run_cli(["status", "-v"]).stdout.splitlines()
    assert lines[lines.index("-- Staged:") + 1] == "MM a.txt"
    assert lines[lines.index("-- Unstaged:") + 1] == "MM a.txt"


@mark_cli
def test_rename_similarity_at_very_verbose(git_repo: Path) -> None:
    """A 95% rename is one entry; the score shows at -vv only."""
    old: bytes = numbered_lines(20)
    (git_repo / "old.txt").write_bytes(old)
    _commit_all(git_repo)
    run_git(git_repo, "mv", "old.txt", "new.txt")
    (git_repo / "new.txt").write_bytes(old.replace(b"line 19\n", b"LINE 19\n"))
    run_git(git_repo, "add", "new.txt")

    assert run_cli(["status"]).stdout == "R  old.txt -> new.txt\n"
    assert "similarity" not in run_cli(["status", "-v"]).stdout
    very = run_cli(["status", "-vv"])
    assert very.exit_code == ExitCode.DIRTY
    assert "R  old.txt -> new.txt\n    similarity: 95.0%\n" in very.stdout

    (entry,) = json.loads(run_cli(["status", "--format", "json"]).stdout)["entries"]
    assert entry["renameFrom"] == "old.txt"
    assert entry["similarity"] == 0.95


@mark_cli
def test_fast_mode_skips_rename_detection(git_repo: Path) -> None:
    """``--fast`` reports a move as a deletion and an addition."""
    (git_repo / "old.txt").write_bytes(numbered_lines(10))
    _commit_all(git_repo)
    run_git(git_repo, "mv", "old.txt", "new.txt")
    result = run_cli(["status", "--fast"])
    assert result.stdout == "A  new.txt\nD  old.txt\n"


@mark_cli
def test_tracked_path_is_never_ignored(git_repo: Path) -> None:
    """A tracked, modified file matching an ignore rule stays dirty."""
    (git_repo / ".gitignore").write_text("*.log\n", encoding="utf-8")
    (git_repo / "keep.log").write_text("v1\n", encoding="utf-8")
    run_git(git_repo, "add", ".gitignore")
    run_git(git_repo, "add", "-f", "keep.log")
    run_git(git_repo, "commit", "--quiet", "-m", "init")
    (git_repo / "keep.log").write_text("v2\n", encoding="utf-8")
    (git_repo / "other.log").write_text("x\n", encoding="utf-8")

    result = run_cli(["status", "-vv"])
    assert result.exit_code == ExitCode.DIRTY
    lines = result.stdout.splitlines()
    assert lines[lines.index("-- Unstaged:") + 1] == " M keep.log"
    assert "!! other.log" in lines
    assert "other.log  (.gitignore:1: *.log)" in lines
    assert not any(line.startswith("keep.log  (") for line in lines)


@mark_cli
def test_conflicting_verbosity_is_rejected(
    git_repo: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``-v -vv`` exits 2 before any repository state is read."""

    def _fail(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("status must not be computed")

    monkeypatch.setattr("tristat.cli.commands.status.run_status", _fail)
    result = run_cli(["status", "-v", "-vv"])
    assert result.exit_code == ExitCode.ERROR
    assert result.stdout == ""
    assert "Error: Conflicting verbosity" in result.stderr


@mark_cli
def test_quiet_sets_exit_code_only(git_repo: Path) -> None:
    """``-q`` prints nothing."""
    assert run_cli(["status", "-q"]).exit_code == ExitCode.CLEAN
    (git_repo / "a.txt").write_text("x\n", encoding="utf-8")
    result = run_cli(["status", "-q"])
    assert result.exit_code == ExitCode.DIRTY
    assert result.stdout == ""


@mark_cli
@parametrize(
    "argv, message",
    [
        (["status", "-q", "--format", "json"], "--quiet"),
        (["status", "-q", "-v"], "mutually exclusive"),
        (["status", "--fast", "-v"], "--fast"),
        (["status", "--fast", "--format", "json"], "--fast"),
    ],
)
def test_contradictory_flags(git_repo: Path, argv: list[str], message: str) -> None:
    """Contradictory flags are argument errors with exit status 2."""
    result = run_cli(argv)
    assert result.exit_code == ExitCode.ERROR
    assert result.stdout == ""
    assert message in result.stderr


@mark_cli
def test_not_a_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Outside a working copy: error on stderr, nothing on stdout, exit 2."""
    outside: Path = tmp_path / "outside"
    outside.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    result = run_cli_in(outside, ["status"])
    assert result.exit_code == ExitCode.ERROR
    assert result.stdout == ""
    assert result.stderr.startswith("Error: Cannot read repository state in locate_root")


@mark_cli
def test_invalid_config_file(git_repo: Path) -> None:
    """A malformed tristat.toml is a configuration error."""
    (git_repo / "tristat.toml").write_text("rename_threshold = = 1\n", encoding="utf-8")
    result = run_cli(["status"])
    assert result.exit_code == ExitCode.ERROR
    assert "Invalid TOML" in result.stderr
    assert run_cli(["status", "--no-config"]).exit_code == ExitCode.DIRTY


@mark_cli
def test_rename_threshold_override(git_repo: Path) -> None:
    """``--rename-threshold`` beats the default."""
    old: bytes = numbered_lines(20)
    (git_repo / "old.txt").write_bytes(old)
    _commit_all(git_repo)
    run_git(git_repo, "mv", "old.txt", "new.txt")
    (git_repo / "new.txt").write_bytes(old.replace(b"line 19\n", b"LINE 19\n"))
    run_git(git_repo, "add", "new.txt")
    result = run_cli(["status", "--rename-threshold", "0.99"])
    assert result.stdout == "A  new.txt\nD  old.txt\n"


@mark_cli
def test_pathspec_filter(git_repo: Path) -> None:
    """Pathspecs restrict the report and its exit code."""
    (git_repo / "src").mkdir()
    (git_repo / "src" / "a.py").write_text("x\n", encoding="utf-8")
    (git_repo / "b.txt").write_text("y\n", encoding="utf-8")
    assert run_cli(["status", "src"]).stdout == "?? src/a.py\n"
    assert run_cli(["status", "*.md"]).exit_code == ExitCode.CLEAN


@mark_cli
def test_root_option(git_repo: Path, tmp_path: Path) -> None:
    """``--root`` points at the working copy from elsewhere."""
    (git_repo / "a.txt").write_text("x\n", encoding="utf-8")
    elsewhere: Path = tmp_path / "elsewhere"
    elsewhere.mkdir()
    result = run_cli_in(elsewhere, ["status", "--root", str(git_repo)])
    assert result.stdout == "?? a.txt\n"


@mark_cli
def test_color_never_has_no_escape_codes(git_repo: Path) -> None:
    """``--no-color`` output is plain."""
    (git_repo / "a.txt").write_text("x\n", encoding="utf-8")
    result = run_cli(["--no-color", "status", "-vv"])
    assert "\x1b[" not in result.stdout
