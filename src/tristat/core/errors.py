# topmark:header:start
#
#   project      : Tristat
#   file         : errors.py
#   file_relpath : src/tristat/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions raised by the Tristat core.

These exceptions are Click-free so the API can be used from any frontend. The
CLI translates them into `tristat.cli.errors` exceptions, which carry the process
exit code and know how to print themselves.

Taxonomy:
    - `ArgumentError`: invalid or contradictory invocation arguments (e.g. two
      verbosity tiers at once). Raised before any repository state is read.
    - `StateReadError`: the repository state could not be read (missing repository,
      unreadable file, failing ``git`` subprocess). Never retried.
    - `ConfigError`: a configuration source is malformed or holds invalid values.
    - `RenderError`: an internal invariant was violated while building or
      rendering a report. Indicates a bug, not a user error.
"""

from __future__ import annotations


class TristatError(Exception):
    """Base class for all Tristat core errors."""


class ArgumentError(TristatError):
    """Invalid or mutually exclusive invocation arguments."""


class ConfigError(TristatError):
    """Missing, malformed or invalid configuration."""


class RenderError(TristatError):
    """Internal failure while building or rendering a status report."""


class StateReadError(TristatError):
    """The repository state provider failed to read HEAD, index, worktree or ignore rules.

    Attributes:
        operation (str): Which read failed (e.g. ``"list_index"``, ``"read_blob"``).
        path (str | None): Offending path, when one is known.
        reason (str): Human-readable cause.
    """

    operation: str
    path: str | None
    reason: str

    def __init__(self, operation: str, reason: str, *, path: str | None = None) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(self._compose())

    def _compose(self) -> str:
        where: str = f" ({self.path})" if self.path else ""
        return f"Cannot read repository state in {self.operation}{where}: {self.reason}"
