# topmark:header:start
#
#   project      : Tristat
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Tristat in a controlled working directory.

`run_cli_in()` changes the process working directory before invoking the Click
CLI, so the repository is located the same way it is for a user running
``tristat status`` from a project directory.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from tristat.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep color decisions independent of the CI environment.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop color-forcing variables.
    """
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI in the current working directory.

    Args:
        argv (Sequence[str]): CLI argument vector, e.g. ``["status", "-v"]``.

    Returns:
        Result: The `click.testing.Result`; ``stdout`` and ``stderr`` are separate.
    """
    runner = CliRunner()
    return runner.invoke(cli, list(argv), obj={})


def run_cli_in(path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``path`` as the working directory.

    Args:
        path (Path): Directory to run from.
        argv (Sequence[str]): CLI argument vector.

    Returns:
        Result: The `click.testing.Result`.
    """
    cwd: str = os.getcwd()
    try:
        os.chdir(path)
        return run_cli(argv)
    finally:
        os.chdir(cwd)
