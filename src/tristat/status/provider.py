# topmark:header:start
#
#   project      : Tristat
#   file         : provider.py
#   file_relpath : src/tristat/status/provider.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Repository state provider interface and an in-memory implementation.

The status pipeline never talks to git directly. It reads raw state through a
`StateProvider`:

    - ``list_head()`` / ``list_index()`` / ``list_worktree()``: one `PathRecord`
      per path on each side.
    - ``is_ignored(path)`` / ``ignore_match(path)``: ignore rule evaluation.
    - ``read_blob(record)``: content of a record, for rename similarity.
    - ``branch`` / ``list_branches()``: the checked-out branch and the local
      branches.

Every method may raise `tristat.core.errors.StateReadError`.

`GitStateProvider` (in `tristat.status.git_provider`) reads a real repository.
`MemoryStateProvider` is built from plain mappings; it backs the unit tests and
lets library callers compute a status for synthetic state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

from tristat.core.errors import StateReadError
from tristat.status.ignore import GITIGNORE_NAME, IgnoreRules
from tristat.status.records import FileMode, PathRecord, Side, blob_fingerprint, normalize_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from tristat.status.model import IgnoreMatch

# A memory-provider file is either raw content or (content, mode).
FileSpec = Union[bytes, str, tuple[Union[bytes, str], FileMode]]


@runtime_checkable
class StateProvider(Protocol):
    """Read-only access to the raw state of one working copy."""

    @property
    def root(self) -> str:
        """Repository root as a POSIX path string."""
        ...

    @property
    def branch(self) -> str | None:
        """Checked-out branch; None when HEAD is detached or unborn."""
        ...

    def list_branches(self) -> Sequence[str]:
        """Return the local branch names, sorted."""
        ...

    def list_head(self) -> Sequence[PathRecord]:
        """Return the records of the HEAD tree (empty for an unborn branch)."""
        ...

    def list_index(self) -> Sequence[PathRecord]:
        """Return the records of the index (staging area)."""
        ...

    def list_worktree(self) -> Sequence[PathRecord]:
        """Return the records of the working tree, ignored paths included."""
        ...

    def is_ignored(self, path: str) -> bool:
        """Return True if ``path`` matches an ignore rule."""
        ...

    def ignore_match(self, path: str) -> IgnoreMatch | None:
        """Return the provenance of the rule that ignores ``path``, if any."""
        ...

    def read_blob(self, record: PathRecord) -> bytes:
        """Return the content of ``record``."""
        ...


def _to_bytes(content: bytes | str) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else content


class MemoryStateProvider:
    """State provider backed by in-memory mappings.

    Example:
        ```python
        provider = MemoryStateProvider(
            head={"a.txt": b"one\\n"},
            index={"a.txt": b"one\\n"},
            worktree={"a.txt": b"two\\n", "notes.log": b""},
            ignore_rules=["*.log"],
        )
        ```

    Args:
        head (Mapping[str, FileSpec] | None): HEAD tree content per path.
        index (Mapping[str, FileSpec] | None): Index content per path.
        worktree (Mapping[str, FileSpec] | None): Working tree content per path.
        ignore_rules (Iterable[str]): Lines of a root ``.gitignore``.
        conflicted (Iterable[str]): Index paths with unresolved merge stages.
        root (str): Reported repository root.
        branch (str | None): Reported checked-out branch.
        branches (Iterable[str]): Other local branches; ``branch`` is always included.
    """

    def __init__(
        self,
        *,
        head: Mapping[str, FileSpec] | None = None,
        index: Mapping[str, FileSpec] | None = None,
        worktree: Mapping[str, FileSpec] | None = None,
        ignore_rules: Iterable[str] = (),
        conflicted: Iterable[str] = (),
        root: str = "/repo",
        branch: str | None = None,
        branches: Iterable[str] = (),
    ) -> None:
        self._root: str = root
        self._branch: str | None = branch
        self._branches: tuple[str, ...] = tuple(
            sorted(set(branches) | ({branch} if branch else set()))
        )
        self._blobs: dict[str, bytes] = {}
        conflicted_paths: set[str] = {normalize_path(p) for p in conflicted}
        self._head: tuple[PathRecord, ...] = self._records(head or {}, Side.HEAD, set())
        self._index: tuple[PathRecord, ...] = self._records(
            index or {}, Side.INDEX, conflicted_paths
        )
        self._worktree: tuple[PathRecord, ...] = self._records(worktree or {}, Side.WORKTREE, set())
        self._ignore = IgnoreRules()
        self._ignore.add_lines(ignore_rules, source=GITIGNORE_NAME)

    def _records(
        self,
        files: Mapping[str, FileSpec],
        side: Side,
        conflicted: set[str],
    ) -> tuple[PathRecord, ...]:
        out: list[PathRecord] = []
        for raw_path, spec in files.items():
            content, mode = spec if isinstance(spec, tuple) else (spec, FileMode.REGULAR)
            data: bytes = _to_bytes(content)
            fingerprint: str = blob_fingerprint(data)
            self._blobs[fingerprint] = data
            path: str = normalize_path(raw_path)
            out.append(
                PathRecord(
                    path=path,
                    fingerprint=fingerprint,
                    mode=mode,
                    side=side,
                    conflicted=path in conflicted,
                )
            )
        return tuple(out)

    @property
    def root(self) -> str:
        """Repository root as a POSIX path string."""
        return self._root

    @property
    def branch(self) -> str | None:
        """Checked-out branch."""
        return self._branch

    def list_branches(self) -> Sequence[str]:
        """Return the local branch names, sorted."""
        return self._branches

    def list_head(self) -> Sequence[PathRecord]:
        """Return the HEAD records."""
        return self._head

    def list_index(self) -> Sequence[PathRecord]:
        """Return the index records."""
        return self._index

    def list_worktree(self) -> Sequence[PathRecord]:
        """Return the working tree records."""
        return self._worktree

    def is_ignored(self, path: str) -> bool:
        """Return True if ``path`` matches the configured ignore rules."""
        return self._ignore.is_ignored(path)

    def ignore_match(self, path: str) -> IgnoreMatch | None:
        """Return the ignore provenance for ``path``."""
        return self._ignore.match(path)

    def read_blob(self, record: PathRecord) -> bytes:
        """Return the content of ``record``.

        Raises:
            StateReadError: If the record's object is unknown to this provider.
        """
        if record.fingerprint is None or record.fingerprint not in self._blobs:
            raise StateReadError("read_blob", "unknown object", path=record.path)
        return self._blobs[record.fingerprint]
