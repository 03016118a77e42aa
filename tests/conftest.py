# topmark:header:start
#
#   project      : Tristat
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Tristat test suite.

This file sets up global fixtures, typed wrappers around pytest decorators, and
helpers that build status reports from in-memory repository state.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `tristat.config.MutableConfig`, then `freeze()` it. Do not mutate a frozen
    `Config`; use `Config.thaw()` instead.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from tristat.config import Config, MutableConfig, logging
from tristat.status.engine import compute_status
from tristat.status.provider import MemoryStateProvider

if TYPE_CHECKING:
    from pathlib import Path

    from tristat.status.model import StatusReport

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_property: DecoratorType[Any] = as_typed_mark(pytest.mark.property)

GIT: str | None = shutil.which("git")

requires_git: DecoratorType[Any] = as_typed_mark(
    pytest.mark.skipif(GIT is None, reason="git executable not available")
)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_tristat_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Tristat's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop ``TRISTAT_LOG_LEVEL``.
    """
    monkeypatch.delenv("TRISTAT_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level during the test run so failures come with full context.

    Args:
        config (pytest.Config): The pytest configuration object (unused).
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Field values to set on the builder before freezing.

    Returns:
        Config: The frozen configuration.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft.freeze()


def memory_report(
    *,
    config: Config | None = None,
    detect_renames: bool = True,
    pathspecs: tuple[str, ...] = (),
    **state: Any,
) -> StatusReport:
    """Compute a report for in-memory repository state.

    Args:
        config (Config | None): Configuration; defaults when None.
        detect_renames (bool): Run rename detection.
        pathspecs (tuple[str, ...]): Optional path filter.
        **state (Any): Keyword arguments for `MemoryStateProvider`.

    Returns:
        StatusReport: The computed report.
    """
    provider = MemoryStateProvider(**state)
    return compute_status(
        provider,
        config or make_config(),
        detect_renames=detect_renames,
        pathspecs=pathspecs,
    )


def numbered_lines(count: int, *, prefix: str = "line") -> bytes:
    """Return ``count`` distinct lines of equal length (``line 00\\n`` ...)."""
    return "".join(f"{prefix} {i:02d}\n" for i in range(count)).encode()


def run_git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` with a fixed identity and no user configuration.

    Args:
        repo (Path): Working directory.
        *args (str): Git arguments.

    Returns:
        str: Captured stdout.
    """
    assert GIT is not None
    result = subprocess.run(
        [
            GIT,
            "-c",
            "user.name=Tristat Tests",
            "-c",
            "user.email=tests@example.invalid",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "init.defaultBranch=main",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(
    tmp_path: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Create an empty git repository isolated from the user's git configuration.

    Args:
        tmp_path (Path): Pytest temporary directory.
        tmp_path_factory (pytest.TempPathFactory): Creates the repository directory under
            a neutral name, so the path never echoes the test's name into CLI output.
        monkeypatch (pytest.MonkeyPatch): Used to isolate git from global config.

    Returns:
        Path: The repository root (also the current working directory).
    """
    if GIT is None:
        pytest.skip("git executable not available")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("HOME", str(tmp_path))
    repo: Path = tmp_path_factory.mktemp("repo")
    run_git(repo, "init", "--quiet")
    monkeypatch.chdir(repo)
    return repo
