# topmark:header:start
#
#   project      : Tristat
#   file         : strategies_tristat.py
#   file_relpath : tests/strategies_tristat.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for synthetic repository state.

Paths are drawn from a small alphabet so HEAD, index and working tree overlap
often; contents are drawn from a few line pools so rename candidates at various
similarities show up without exploding the search space.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hypothesis import strategies as st

Draw = Callable[[st.SearchStrategy[Any]], Any]

DIRS: tuple[str, ...] = ("", "src/", "docs/", "src/pkg/")
NAMES: tuple[str, ...] = ("a.txt", "b.txt", "c.py", "d.md", "e.log", "f.py")

LINE_POOL: tuple[bytes, ...] = tuple(f"shared line {i}\n".encode() for i in range(12))

IGNORE_RULE_POOL: tuple[str, ...] = ("*.log", "docs/", "!keep.log", "src/pkg/*.py", "/c.py")


@dataclass(frozen=True)
class RepoState:
    """Keyword arguments for `tristat.status.provider.MemoryStateProvider`."""

    head: dict[str, bytes]
    index: dict[str, bytes]
    worktree: dict[str, bytes]
    ignore_rules: tuple[str, ...]

    def as_kwargs(self) -> dict[str, Any]:
        """Return the state as provider keyword arguments."""
        return {
            "head": self.head,
            "index": self.index,
            "worktree": self.worktree,
            "ignore_rules": self.ignore_rules,
        }


def s_path() -> st.SearchStrategy[str]:
    """A repository-relative file path."""
    return st.builds(lambda d, n: d + n, st.sampled_from(DIRS), st.sampled_from(NAMES))


def s_content() -> st.SearchStrategy[bytes]:
    """File content built from a shared pool of lines (possibly empty)."""
    return st.lists(st.sampled_from(LINE_POOL), min_size=0, max_size=8).map(b"".join)


@st.composite
def s_repo_state(draw: Draw) -> RepoState:
    """Draw HEAD, index and working tree contents that share paths and lines.

    The index starts as a copy of HEAD and the working tree as a copy of the index,
    then each side is perturbed, so unchanged, modified, deleted and added paths
    all occur.
    """
    head: dict[str, bytes] = draw(st.dictionaries(s_path(), s_content(), max_size=5))

    index: dict[str, bytes] = dict(head)
    for path in draw(st.lists(st.sampled_from(sorted(head)), unique=True)) if head else []:
        if draw(st.booleans()):
            del index[path]
        else:
            index[path] = draw(s_content())
    index.update(draw(st.dictionaries(s_path(), s_content(), max_size=3)))

    worktree: dict[str, bytes] = dict(index)
    for path in draw(st.lists(st.sampled_from(sorted(index)), unique=True)) if index else []:
        if draw(st.booleans()):
            del worktree[path]
        else:
            worktree[path] = draw(s_content())
    worktree.update(draw(st.dictionaries(s_path(), s_content(), max_size=3)))

    rules: list[str] = draw(st.lists(st.sampled_from(IGNORE_RULE_POOL), max_size=3))
    return RepoState(head=head, index=index, worktree=worktree, ignore_rules=tuple(rules))
