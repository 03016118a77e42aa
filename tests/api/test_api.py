# topmark:header:start
#
#   project      : Tristat
#   file         : test_api.py
#   file_relpath : tests/api/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public API in `tristat.api`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_config, mark_integration, memory_report, numbered_lines, run_git
from tristat import api
from tristat.api.runtime import OVERRIDES_SOURCE, resolve_config
from tristat.core.errors import ConfigError, StateReadError
from tristat.core.exit_codes import ExitCode
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier

if TYPE_CHECKING:
    from pathlib import Path


def test_public_surface() -> None:
    """The documented names are exported."""
    assert set(api.__all__) == {
        "RenderedOutput",
        "StatusRun",
        "compute_status",
        "render",
        "render_help",
        "status",
    }


def test_render_uses_config_fingerprint_width() -> None:
    """``render`` takes the fingerprint width from the config."""
    report = memory_report(worktree={"a.txt": b"hello\n"})
    out = api.render(report, VerbosityTier.VERY_VERBOSE, config=make_config(fingerprint_width=10))
    assert "worktree ce01362503" in out.text
    assert out.exit_code is ExitCode.DIRTY


def test_render_defaults_to_terse_text() -> None:
    """Defaults: terse tier, text format."""
    assert api.render(memory_report()).text == "clean"


def test_resolve_config_passes_frozen_config_through(tmp_path: Path) -> None:
    """A frozen config is used as is; discovery is skipped."""
    (tmp_path / "tristat.toml").write_text("workers = 2\n", encoding="utf-8")
    config = make_config(workers=9)
    assert resolve_config(tmp_path, config) is config


def test_resolve_config_mapping_is_layered_last(tmp_path: Path) -> None:
    """A mapping overrides discovered files and is validated."""
    (tmp_path / "tristat.toml").write_text("workers = 2\nfast = true\n", encoding="utf-8")
    config = resolve_config(tmp_path, {"fast": False})
    assert config.workers == 2
    assert config.fast is False
    assert config.config_files[-1] == OVERRIDES_SOURCE
    with pytest.raises(ConfigError):
        resolve_config(tmp_path, {"rename_threshold": 3})


@mark_integration
def test_status_on_a_repository(git_repo: Path) -> None:
    """``status`` runs the full chain on a working copy."""
    old: bytes = numbered_lines(20)
    (git_repo / "old.txt").write_bytes(old)
    run_git(git_repo, "add", "-A")
    run_git(git_repo, "commit", "--quiet", "-m", "init")
    run_git(git_repo, "mv", "old.txt", "new.txt")

    run = api.status(git_repo, tier=VerbosityTier.VERBOSE)
    assert run.output.exit_code is ExitCode.DIRTY
    assert [e.path for e in run.report.staged] == ["new.txt"]
    assert "R  old.txt -> new.txt" in run.output.text

    no_renames = api.status(git_repo, config={"detect_renames": False})
    assert no_renames.output.text == "A  new.txt\nD  old.txt"


@mark_integration
def test_status_json(git_repo: Path) -> None:
    """JSON output from the API matches the CLI document."""
    run = api.status(git_repo, fmt=OutputFormat.JSON)
    doc = json.loads(run.output.text)
    assert doc["clean"] is True
    assert run.output.exit_code is ExitCode.CLEAN


@mark_integration
def test_status_pathspecs(git_repo: Path) -> None:
    """Pathspecs narrow the report."""
    (git_repo / "a.py").write_text("x\n", encoding="utf-8")
    (git_repo / "b.txt").write_text("y\n", encoding="utf-8")
    run = api.status(git_repo, pathspecs=["*.py"])
    assert [e.path for e in run.report.entries] == ["a.py"]


def test_status_outside_a_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No working copy: a state read error, never a partial report."""
    outside: Path = tmp_path / "outside"
    outside.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    with pytest.raises(StateReadError):
        api.status(outside)
