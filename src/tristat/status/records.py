# topmark:header:start
#
#   project      : Tristat
#   file         : records.py
#   file_relpath : src/tristat/status/records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Raw per-path records as listed by a repository state provider.

A `PathRecord` is what a provider reports for one path on one side (HEAD tree,
index or working tree). Records are read-only to the rest of the pipeline.

Paths are repository-relative, use ``/`` separators and never contain ``.`` or
``..`` segments. Ignored directories that a provider did not descend into are
reported once, with a trailing ``/`` and no fingerprint.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


class FileMode(str, Enum):
    """Git object modes, as found in tree and index entries."""

    REGULAR = "100644"
    EXECUTABLE = "100755"
    SYMLINK = "120000"
    GITLINK = "160000"
    TREE = "040000"

    @property
    def kind(self) -> str:
        """Coarse kind used for rename eligibility.

        Regular and executable files share the ``"file"`` kind, so a rename that
        also flips the executable bit is still detected.
        """
        if self in (FileMode.REGULAR, FileMode.EXECUTABLE):
            return "file"
        return self.name.lower()

    @classmethod
    def from_octal(cls, raw: str) -> FileMode:
        """Parse an octal mode string as printed by ``git ls-files`` / ``git ls-tree``.

        Args:
            raw (str): Octal mode, e.g. ``"100644"``. Legacy group-writable
                ``"100664"`` is read as a regular file.

        Returns:
            FileMode: The matching mode.

        Raises:
            ValueError: If ``raw`` is not a known git mode.
        """
        if raw == "100664":
            return cls.REGULAR
        if raw == "40000":
            return cls.TREE
        return cls(raw)


class Side(str, Enum):
    """Which snapshot a record was listed from."""

    HEAD = "head"
    INDEX = "index"
    WORKTREE = "worktree"


def normalize_path(raw: str) -> str:
    """Return the canonical repository-relative form of ``raw``.

    A trailing ``/`` (directory marker) is preserved.

    Args:
        raw (str): A relative path, possibly with ``./`` prefixes or duplicate slashes.

    Returns:
        str: The normalized path.

    Raises:
        ValueError: If the path is empty, absolute or escapes the repository root.
    """
    is_dir: bool = raw.endswith("/")
    pure = PurePosixPath(raw)
    if pure.is_absolute():
        raise ValueError(f"Expected a repository-relative path, got {raw!r}")
    parts: list[str] = [p for p in pure.parts if p != "."]
    if not parts:
        raise ValueError(f"Empty path: {raw!r}")
    if ".." in parts:
        raise ValueError(f"Path escapes the repository root: {raw!r}")
    normalized: str = "/".join(parts)
    return f"{normalized}/" if is_dir else normalized


def path_sort_key(path: str) -> bytes:
    """Sort key giving byte-lexicographic order on the UTF-8 encoding of ``path``.

    This matches the order git uses for index entries, and it does not depend on
    the locale.
    """
    return path.encode("utf-8", "surrogateescape")


def blob_fingerprint(data: bytes) -> str:
    """Return the git blob object id (SHA-1 hex) for ``data``."""
    digest = hashlib.sha1(usedforsecurity=False)
    digest.update(b"blob %d\0" % len(data))
    digest.update(data)
    return digest.hexdigest()


@dataclass(frozen=True, slots=True)
class PathRecord:
    """State of one path on one side.

    Attributes:
        path (str): Normalized repository-relative path.
        fingerprint (str | None): Git object id of the content, or None when the
            provider did not fingerprint the path (e.g. a pruned ignored directory).
        mode (FileMode): Git object mode.
        side (Side): Snapshot the record was listed from.
        exists (bool): Always True for listed records; absence is expressed by not
            listing the path at all.
        conflicted (bool): Index only: the path has unresolved merge stages.
    """

    path: str
    fingerprint: str | None
    mode: FileMode = FileMode.REGULAR
    side: Side = Side.WORKTREE
    exists: bool = True
    conflicted: bool = False

    def __post_init__(self) -> None:
        if normalize_path(self.path) != self.path:
            raise ValueError(f"PathRecord path is not normalized: {self.path!r}")

    @property
    def is_directory(self) -> bool:
        """Whether this record stands for a whole (pruned) directory."""
        return self.path.endswith("/")
