# topmark:header:start
#
#   project      : Tristat
#   file         : states.py
#   file_relpath : src/tristat/status/states.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Classification enums for the two axes of a status entry.

Every path gets one `IndexState` (HEAD vs index) and one `WorktreeState`
(index vs working tree).

Conventions:
  * Both enums inherit from `EnumIntrospectionMixin` and `ColoredStrEnum`, so the
    ``.value`` is the stable machine key used in JSON and ``.color`` the yachalk
    style used by the text renderer.
  * ``.code`` is the single-character status letter shown in text output, in
    the same alphabet as ``git status --short``.
  * Declaration order is the order used in summaries.
"""

from __future__ import annotations

from typing import Final

from yachalk import chalk

from tristat.core.enum_mixins import EnumIntrospectionMixin
from tristat.rendering.colored_enum import ColoredStrEnum


class IndexState(EnumIntrospectionMixin, ColoredStrEnum):
    """State of a path in the index relative to HEAD."""

    UNMODIFIED = ("unmodified", chalk.gray)
    ADDED = ("added", chalk.green)
    MODIFIED = ("modified", chalk.green)
    DELETED = ("deleted", chalk.green)
    RENAMED = ("renamed", chalk.cyan)
    COPIED = ("copied", chalk.cyan)
    CONFLICTED = ("conflicted", chalk.red_bright)

    @property
    def code(self) -> str:
        """Single-character status letter (blank when unmodified)."""
        return _INDEX_CODES[self]


class WorktreeState(EnumIntrospectionMixin, ColoredStrEnum):
    """State of a path in the working tree relative to the index."""

    UNMODIFIED = ("unmodified", chalk.gray)
    MODIFIED = ("modified", chalk.red)
    DELETED = ("deleted", chalk.red)
    UNTRACKED = ("untracked", chalk.red)
    IGNORED = ("ignored", chalk.gray)

    @property
    def code(self) -> str:
        """Single-character status letter (blank when unmodified)."""
        return _WORKTREE_CODES[self]


_INDEX_CODES: Final[dict[IndexState, str]] = {
    IndexState.UNMODIFIED: " ",
    IndexState.ADDED: "A",
    IndexState.MODIFIED: "M",
    IndexState.DELETED: "D",
    IndexState.RENAMED: "R",
    IndexState.COPIED: "C",
    IndexState.CONFLICTED: "U",
}

_WORKTREE_CODES: Final[dict[WorktreeState, str]] = {
    WorktreeState.UNMODIFIED: " ",
    WorktreeState.MODIFIED: "M",
    WorktreeState.DELETED: "D",
    WorktreeState.UNTRACKED: "?",
    WorktreeState.IGNORED: "!",
}
