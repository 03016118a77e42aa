# topmark:header:start
#
#   project      : Tristat
#   file         : filters.py
#   file_relpath : src/tristat/status/filters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pathspec filtering of status entries (``tristat status [PATHSPEC...]``).

Patterns use gitignore wildmatch syntax via `pathspec.PathSpec`. An entry is kept
when its path, or the source of its rename, matches any pattern. A bare directory
name such as ``src`` selects everything below it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from tristat.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from tristat.config.logging import TristatLogger
    from tristat.status.model import StatusEntry

logger: TristatLogger = get_logger(__name__)


def compile_pathspecs(patterns: Iterable[str]) -> PathSpec | None:
    """Compile pathspec patterns, or return None when there are none.

    Args:
        patterns (Iterable[str]): Wildmatch patterns relative to the repository root.

    Returns:
        PathSpec | None: The compiled spec, or None for "no filtering".
    """
    cleaned: list[str] = [p.strip() for p in patterns if p.strip()]
    if not cleaned:
        return None
    # Anchor plain names so 'src' means the top-level 'src', like a git pathspec.
    anchored: list[str] = [p if p.startswith(("/", "*", "!")) else f"/{p}" for p in cleaned]
    return PathSpec.from_lines(GitWildMatchPattern, anchored)


def filter_entries(
    entries: Sequence[StatusEntry],
    patterns: Iterable[str],
) -> tuple[StatusEntry, ...]:
    """Keep only the entries selected by ``patterns``.

    Args:
        entries (Sequence[StatusEntry]): Entries to filter, order preserved.
        patterns (Iterable[str]): Wildmatch patterns; empty means keep everything.

    Returns:
        tuple[StatusEntry, ...]: The selected entries.
    """
    spec: PathSpec | None = compile_pathspecs(patterns)
    if spec is None:
        return tuple(entries)
    kept: tuple[StatusEntry, ...] = tuple(
        e
        for e in entries
        if spec.match_file(e.path)
        or (e.rename_from is not None and spec.match_file(e.rename_from))
    )
    logger.debug("Pathspec filter kept %d of %d entries", len(kept), len(entries))
    return kept
