# topmark:header:start
#
#   project      : Tristat
#   file         : test_version_cli.py
#   file_relpath : tests/cli/test_version_cli.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``tristat version``."""

from __future__ import annotations

import json

from tests.cli.conftest import run_cli
from tests.conftest import mark_cli
from tristat.constants import TRISTAT_VERSION


@mark_cli
def test_version_text() -> None:
    """Plain version string."""
    result = run_cli(["version"])
    assert result.exit_code == 0
    assert result.stdout == f"{TRISTAT_VERSION}\n"


@mark_cli
def test_version_json() -> None:
    """JSON envelope with meta and version."""
    doc = json.loads(run_cli(["version", "--format", "json"]).stdout)
    assert doc == {
        "meta": {"tool": "tristat", "version": TRISTAT_VERSION},
        "version": TRISTAT_VERSION,
    }


@mark_cli
def test_unknown_format_is_a_usage_error() -> None:
    """Click rejects unknown choices with exit status 2."""
    result = run_cli(["version", "--format", "yaml"])
    assert result.exit_code == 2
    assert result.stdout == ""
