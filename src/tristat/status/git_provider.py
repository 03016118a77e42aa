# topmark:header:start
#
#   project      : Tristat
#   file         : git_provider.py
#   file_relpath : src/tristat/status/git_provider.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Repository state provider backed by a real git repository.

HEAD and index are read through the ``git`` executable:

    - ``git ls-tree -r -z --full-tree HEAD`` for the HEAD tree (an unborn branch
      yields an empty list);
    - ``git ls-files --stage -z`` for the index; paths with non-zero stages are
      merged into a single conflicted record;
    - ``git cat-file blob <oid>`` for blob content.

The working tree is walked directly and each file is fingerprinted with the git
blob hash on a thread pool. Directories that are ignored (and hold no tracked
path) are not descended into; they are reported once as ``dir/``. Nested
repositories that are not registered as submodules are treated the same way and
reported as ignored. Only index entries with mode 160000 are submodules: their
worktree fingerprint is the submodule's checked-out HEAD, or None while the
submodule is not initialized. A tracked file replaced by a directory is walked
like any other directory.

An unborn branch yields an empty HEAD tree; a HEAD that exists but does not
resolve to a commit is an error.

Known limitations: clean/smudge filters and end-of-line conversion are not
applied before hashing, and the global ``core.excludesFile`` is not consulted.
"""

from __future__ import annotations

import os
import stat
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Final

from tristat.config.logging import get_logger
from tristat.constants import GIT_DIR_NAME
from tristat.core.errors import StateReadError
from tristat.status.ignore import GITIGNORE_NAME, INFO_EXCLUDE_SOURCE, IgnoreRules
from tristat.status.model import IgnoreMatch
from tristat.status.records import FileMode, PathRecord, Side, blob_fingerprint, path_sort_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)

NESTED_REPOSITORY_SOURCE: Final[str] = "(nested repository)"


def _decode(raw: bytes) -> str:
    return os.fsdecode(raw)


def _split_z(output: bytes) -> list[bytes]:
    return [chunk for chunk in output.split(b"\0") if chunk]


def _ancestors(path: str) -> list[str]:
    """Return ``["a/", "a/b/"]`` for ``"a/b/c"``."""
    parts: list[str] = path.split("/")[:-1]
    return ["/".join(parts[: i + 1]) + "/" for i in range(len(parts))]


class GitStateProvider:
    """Read HEAD, index, working tree and ignore rules of a git working copy.

    Args:
        start (Path | str): Any directory inside the working copy.
        non_interactive (bool): Never let a git subprocess prompt: stdin is closed and
            ``GIT_TERMINAL_PROMPT=0`` is exported.
        workers (int): Threads used to fingerprint working tree files.
        git_executable (str): Name or path of the git executable.

    Raises:
        StateReadError: If ``start`` is not inside a git working copy.
    """

    def __init__(
        self,
        start: Path | str = ".",
        *,
        non_interactive: bool = False,
        workers: int = 4,
        git_executable: str = "git",
    ) -> None:
        self._start: Path = Path(start)
        self._non_interactive: bool = non_interactive
        self._workers: int = max(1, workers)
        self._git: str = git_executable

        self._head: tuple[PathRecord, ...] | None = None
        self._index: tuple[PathRecord, ...] | None = None
        self._worktree: tuple[PathRecord, ...] | None = None
        self._ignore: IgnoreRules | None = None
        self._nested: set[str] = set()
        self._born: bool | None = None
        self._branch: str | None = None
        self._branch_read: bool = False
        self._branches: tuple[str, ...] | None = None

        if not self._start.is_dir():
            raise StateReadError("locate_root", "not a directory", path=str(self._start))
        toplevel: str = _decode(
            self._run_git(
                ["rev-parse", "--show-toplevel"], operation="locate_root", cwd=self._start
            )
        ).strip()
        self._root: Path = Path(toplevel)
        logger.debug("Repository root: %s", self._root)

    # --------------------------- git plumbing ---------------------------

    def _run_git(
        self,
        args: list[str],
        *,
        operation: str,
        cwd: Path | None = None,
        check: bool = True,
    ) -> bytes:
        """Run a git command and return its raw stdout.

        Raises:
            StateReadError: If git cannot be started, or exits non-zero and
                ``check`` is True.
        """
        env: dict[str, str] = dict(os.environ)
        if self._non_interactive:
            env["GIT_TERMINAL_PROMPT"] = "0"
        argv: list[str] = [self._git, "-c", "core.quotepath=off", *args]
        logger.trace("Running %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                cwd=cwd or self._root,
                capture_output=True,
                stdin=subprocess.DEVNULL if self._non_interactive else None,
                env=env,
                check=False,
            )
        except OSError as exc:
            raise StateReadError(operation, f"cannot run {self._git}: {exc}") from exc
        if check and result.returncode != 0:
            message: str = _decode(result.stderr).strip() or f"exit status {result.returncode}"
            raise StateReadError(operation, message)
        return result.stdout

    @property
    def root(self) -> str:
        """Repository root as a POSIX path string."""
        return self._root.as_posix()

    @property
    def workers(self) -> int:
        """Threads used to fingerprint working tree files."""
        return self._workers

    @workers.setter
    def workers(self, value: int) -> None:
        # The root must be known before config is loaded, so the pool size is
        # settable until the first worktree scan.
        self._workers = max(1, value)

    # ------------------------------ HEAD --------------------------------

    def _query(self, args: list[str], *, operation: str) -> str:
        """Run a git query whose failure means "no answer"; return stripped stdout."""
        return _decode(self._run_git(args, operation=operation, check=False)).strip()

    def _ref_file_exists(self, ref: str) -> bool:
        raw: str = self._query(["rev-parse", "--git-path", ref], operation="list_head")
        return bool(raw) and (Path(raw) if os.path.isabs(raw) else self._root / raw).exists()

    def _has_head(self) -> bool:
        """Return True if HEAD names a commit, False if its branch is unborn.

        Raises:
            StateReadError: If HEAD or the branch it names exists but does not
                resolve to a commit (a damaged repository).
        """
        if self._born is not None:
            return self._born
        commit: str = self._query(
            ["rev-parse", "--verify", "--quiet", "HEAD^{commit}"], operation="list_head"
        )
        if commit:
            self._born = True
            return True

        oid: str = self._query(["rev-parse", "--verify", "--quiet", "HEAD"], operation="list_head")
        ref: str = self._query(["symbolic-ref", "-q", "HEAD"], operation="list_head")
        if oid or not ref or self._ref_file_exists(ref):
            raise StateReadError(
                "list_head", f"HEAD ({ref or 'detached'}) does not resolve to a commit"
            )
        self._born = False
        return False

    @property
    def branch(self) -> str | None:
        """Name of the checked-out branch; None when HEAD is detached or unborn."""
        if not self._branch_read:
            if self._has_head():
                name: str = self._query(
                    ["symbolic-ref", "--short", "-q", "HEAD"], operation="branch"
                )
                self._branch = name or None
            self._branch_read = True
        return self._branch

    def list_branches(self) -> Sequence[str]:
        """Return the local branch names, sorted."""
        if self._branches is None:
            output: str = _decode(
                self._run_git(
                    ["for-each-ref", "--format=%(refname:short)", "refs/heads/"],
                    operation="list_branches",
                )
            )
            self._branches = tuple(sorted(line for line in output.splitlines() if line))
        return self._branches

    def list_head(self) -> Sequence[PathRecord]:
        """Return the records of the HEAD tree (empty for an unborn branch).

        Raises:
            StateReadError: If HEAD cannot be resolved or its tree cannot be listed.
        """
        if self._head is None:
            if not self._has_head():
                logger.debug("HEAD is unborn; treating the HEAD tree as empty")
                self._head = ()
            else:
                output: bytes = self._run_git(
                    ["ls-tree", "-r", "-z", "--full-tree", "HEAD"], operation="list_head"
                )
                self._head = tuple(self._parse_ls_tree(output))
        return self._head

    @staticmethod
    def _parse_ls_tree(output: bytes) -> list[PathRecord]:
        records: list[PathRecord] = []
        for chunk in _split_z(output):
            meta, _, raw_path = chunk.partition(b"\t")
            mode, _type, oid = _decode(meta).split(" ")
            records.append(
                PathRecord(
                    path=_decode(raw_path),
                    fingerprint=oid,
                    mode=FileMode.from_octal(mode),
                    side=Side.HEAD,
                )
            )
        return records

    # ------------------------------ index -------------------------------

    def list_index(self) -> Sequence[PathRecord]:
        """Return the index records; unmerged paths become one conflicted record."""
        if self._index is None:
            output: bytes = self._run_git(["ls-files", "--stage", "-z"], operation="list_index")
            self._index = tuple(self._parse_ls_files(output))
        return self._index

    @staticmethod
    def _parse_ls_files(output: bytes) -> list[PathRecord]:
        stages: dict[str, dict[int, tuple[str, str]]] = {}
        for chunk in _split_z(output):
            meta, _, raw_path = chunk.partition(b"\t")
            mode, oid, stage = _decode(meta).split(" ")
            stages.setdefault(_decode(raw_path), {})[int(stage)] = (mode, oid)

        records: list[PathRecord] = []
        for path, by_stage in stages.items():
            conflicted: bool = 0 not in by_stage
            # Prefer stage 0; for conflicts prefer "ours" (2), then "theirs" (3), then base (1).
            for preferred in (0, 2, 3, 1):
                if preferred in by_stage:
                    mode, oid = by_stage[preferred]
                    break
            records.append(
                PathRecord(
                    path=path,
                    fingerprint=oid,
                    mode=FileMode.from_octal(mode),
                    side=Side.INDEX,
                    conflicted=conflicted,
                )
            )
        return records

    # --------------------------- working tree ---------------------------

    def _load_base_rules(self) -> IgnoreRules:
        rules = IgnoreRules()
        raw: str = _decode(
            self._run_git(["rev-parse", "--git-path", "info/exclude"], operation="ignore_rules")
        ).strip()
        exclude: Path = Path(raw) if os.path.isabs(raw) else self._root / raw
        if exclude.is_file():
            rules.add_text(
                exclude.read_text(encoding="utf-8", errors="replace"), source=INFO_EXCLUDE_SOURCE
            )
        return rules

    def _scan(self) -> None:
        """Walk the working tree once, collecting records and ignore rules."""
        rules: IgnoreRules = self._load_base_rules()
        index_modes: dict[str, FileMode] = {r.path: r.mode for r in self.list_index()}
        tracked_dirs: set[str] = {a for p in index_modes for a in _ancestors(p)}

        pending: list[tuple[str, str, FileMode]] = []
        gitlinks: list[tuple[str, str]] = []
        records: list[PathRecord] = []

        def _raise(exc: OSError) -> None:
            raise exc

        root: str = str(self._root)
        for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=_raise):
            rel_dir: str = os.path.relpath(dirpath, root).replace(os.sep, "/")
            base: str = "" if rel_dir == "." else f"{rel_dir}/"

            if GITIGNORE_NAME in filenames:
                text: str = Path(dirpath, GITIGNORE_NAME).read_text(
                    encoding="utf-8", errors="replace"
                )
                rules.add_text(text, source=f"{base}{GITIGNORE_NAME}", base=base)

            files: list[str] = [f for f in filenames if f != GIT_DIR_NAME]
            descend: list[str] = []
            for name in sorted(dirnames):
                if name == GIT_DIR_NAME:
                    continue
                full: str = os.path.join(dirpath, name)
                rel: str = f"{base}{name}"
                if os.path.islink(full):
                    files.append(name)
                elif index_modes.get(rel) is FileMode.GITLINK:
                    gitlinks.append((rel, full))
                elif os.path.exists(os.path.join(full, GIT_DIR_NAME)):
                    self._nested.add(f"{rel}/")
                    records.append(self._directory_record(rel))
                elif f"{rel}/" not in tracked_dirs and rules.is_ignored(f"{rel}/"):
                    records.append(self._directory_record(rel))
                else:
                    descend.append(name)
            dirnames[:] = descend

            for name in files:
                full = os.path.join(dirpath, name)
                st: os.stat_result = os.lstat(full)
                if stat.S_ISLNK(st.st_mode):
                    mode: FileMode = FileMode.SYMLINK
                elif stat.S_ISREG(st.st_mode):
                    mode = FileMode.EXECUTABLE if st.st_mode & 0o111 else FileMode.REGULAR
                else:
                    logger.debug("Skipping special file %s", full)
                    continue
                pending.append((f"{base}{name}", full, mode))

        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            fingerprints: list[str] = list(
                pool.map(lambda item: self._hash_file(item[1], item[2]), pending)
            )
        for (rel, _full, mode), fingerprint in zip(pending, fingerprints):
            records.append(
                PathRecord(path=rel, fingerprint=fingerprint, mode=mode, side=Side.WORKTREE)
            )
        for rel, full in gitlinks:
            records.append(
                PathRecord(
                    path=rel,
                    fingerprint=self._submodule_head(full),
                    mode=FileMode.GITLINK,
                    side=Side.WORKTREE,
                )
            )

        records.sort(key=lambda r: path_sort_key(r.path))
        self._worktree = tuple(records)
        self._ignore = rules
        logger.debug(
            "Scanned %d working tree path(s) with %d ignore rule(s)", len(records), len(rules.rules)
        )

    @staticmethod
    def _directory_record(rel: str) -> PathRecord:
        return PathRecord(path=f"{rel}/", fingerprint=None, mode=FileMode.TREE, side=Side.WORKTREE)

    @staticmethod
    def _hash_file(full: str, mode: FileMode) -> str:
        if mode is FileMode.SYMLINK:
            data: bytes = os.fsencode(os.readlink(full))
        else:
            with open(full, "rb") as fh:
                data = fh.read()
        return blob_fingerprint(data)

    def _submodule_head(self, full: str) -> str | None:
        # Without its own .git, rev-parse would resolve the enclosing repository.
        if not os.path.exists(os.path.join(full, GIT_DIR_NAME)):
            return None
        out: bytes = self._run_git(
            ["rev-parse", "--verify", "--quiet", "HEAD"],
            operation="list_worktree",
            cwd=Path(full),
            check=False,
        )
        oid: str = _decode(out).strip()
        return oid or None

    def _ensure_scanned(self) -> IgnoreRules:
        if self._ignore is None:
            try:
                self._scan()
            except OSError as exc:
                filename: str | None = str(exc.filename) if exc.filename else None
                raise StateReadError(
                    "list_worktree", exc.strerror or str(exc), path=filename
                ) from exc
        assert self._ignore is not None
        return self._ignore

    def list_worktree(self) -> Sequence[PathRecord]:
        """Return the working tree records, ignored paths included."""
        self._ensure_scanned()
        assert self._worktree is not None
        return self._worktree

    # ------------------------------ ignore ------------------------------

    def ignore_match(self, path: str) -> IgnoreMatch | None:
        """Return the rule (or nested repository) that makes ``path`` ignored."""
        rules: IgnoreRules = self._ensure_scanned()
        if path in self._nested:
            return IgnoreMatch(path=path, source=NESTED_REPOSITORY_SOURCE, line=0, pattern=path)
        return rules.match(path)

    def is_ignored(self, path: str) -> bool:
        """Return True if ``path`` is ignored."""
        return self.ignore_match(path) is not None

    # ------------------------------ content -----------------------------

    def read_blob(self, record: PathRecord) -> bytes:
        """Return the content of ``record`` (from disk for working tree records)."""
        if record.side is Side.WORKTREE:
            full: Path = self._root / record.path
            try:
                if record.mode is FileMode.SYMLINK:
                    return os.fsencode(os.readlink(full))
                return full.read_bytes()
            except OSError as exc:
                raise StateReadError("read_blob", str(exc), path=record.path) from exc
        if record.fingerprint is None:
            raise StateReadError("read_blob", "record has no object id", path=record.path)
        return self._run_git(["cat-file", "blob", record.fingerprint], operation="read_blob")
