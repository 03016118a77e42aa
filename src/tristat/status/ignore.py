# topmark:header:start
#
#   project      : Tristat
#   file         : ignore.py
#   file_relpath : src/tristat/status/ignore.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Gitignore rule evaluation with provenance.

Rules are parsed with `pathspec`'s `GitWildMatchPattern`, one pattern per line, so
that a match can be traced back to its file and line number (shown at the
very-verbose tier).

Precedence follows git: ``.git/info/exclude`` is consulted first, then every
``.gitignore`` from the root downwards. The *last* matching rule wins, and a
negated rule (``!pattern``) un-ignores. A rule in ``sub/.gitignore`` only applies
to paths below ``sub/`` and is matched against the path relative to ``sub/``.
A path inside an ignored directory is ignored regardless of negations, because git
never descends into an ignored directory.

This module answers "would this path be ignored?". Whether an ignore rule
actually applies is the reconciler's decision: tracked paths are never ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathspec.patterns.gitwildmatch import GitWildMatchPattern, GitWildMatchPatternError

from tristat.config.logging import get_logger
from tristat.status.model import IgnoreMatch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)

GITIGNORE_NAME: str = ".gitignore"
INFO_EXCLUDE_SOURCE: str = ".git/info/exclude"


@dataclass(frozen=True)
class IgnoreRule:
    """One non-blank, non-comment line of an ignore file.

    Attributes:
        base (str): Directory the rule is scoped to (``""`` for the root, else ``"sub/"``).
        source (str): Ignore file, relative to the repository root.
        line (int): 1-based line number in ``source``.
        text (str): Rule text as written.
        pattern (GitWildMatchPattern): Compiled pattern.
    """

    base: str
    source: str
    line: int
    text: str
    pattern: GitWildMatchPattern

    @property
    def negated(self) -> bool:
        """Whether this rule un-ignores what it matches."""
        return self.pattern.include is False

    def matches(self, path: str) -> bool:
        """Return True if this rule matches ``path`` (a root-relative path).

        Args:
            path (str): Path to test; directories carry a trailing ``/``.

        Returns:
            bool: True on a match, whether the rule is negated or not.
        """
        if self.base and not path.startswith(self.base):
            return False
        relative: str = path[len(self.base) :]
        if not relative:
            return False
        return self.pattern.match_file(relative) is not None


class IgnoreRules:
    """Ordered collection of ignore rules for one working tree."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self._rules: list[IgnoreRule] = list(rules)
        self._sources: list[str] = []

    @property
    def rules(self) -> tuple[IgnoreRule, ...]:
        """All rules in evaluation order."""
        return tuple(self._rules)

    @property
    def sources(self) -> tuple[str, ...]:
        """Ignore files that contributed rules, in load order."""
        return tuple(self._sources)

    def add_lines(self, lines: Iterable[str], *, source: str, base: str = "") -> None:
        """Parse ignore-file lines and append them as rules.

        Args:
            lines (Iterable[str]): Raw lines of an ignore file.
            source (str): Root-relative name of the file, for provenance.
            base (str): Directory the rules apply to (``""`` or ``"sub/"``).
        """
        added: int = 0
        for number, raw in enumerate(lines, start=1):
            text: str = raw.rstrip("\r\n")
            try:
                pattern = GitWildMatchPattern(text)
            except GitWildMatchPatternError as exc:
                logger.warning("Skipping invalid ignore rule %s:%d: %s", source, number, exc)
                continue
            if pattern.include is None:
                # blank line or comment
                continue
            self._rules.append(
                IgnoreRule(base=base, source=source, line=number, text=text, pattern=pattern)
            )
            added += 1
        self._sources.append(source)
        logger.trace("Loaded %d ignore rule(s) from %s", added, source)

    def add_text(self, text: str, *, source: str, base: str = "") -> None:
        """Parse the content of an ignore file and append its rules."""
        self.add_lines(text.splitlines(), source=source, base=base)

    def _last_match(self, path: str) -> IgnoreRule | None:
        last: IgnoreRule | None = None
        for rule in self._rules:
            if rule.matches(path):
                last = rule
        return last

    def _own_match(self, path: str) -> IgnoreMatch | None:
        rule: IgnoreRule | None = self._last_match(path)
        if rule is None or rule.negated:
            return None
        return IgnoreMatch(path=path, source=rule.source, line=rule.line, pattern=rule.text)

    def match(self, path: str) -> IgnoreMatch | None:
        """Return the rule that ignores ``path``, or None if it is not ignored.

        Args:
            path (str): Root-relative path; directories carry a trailing ``/``.

        Returns:
            IgnoreMatch | None: Provenance of the deciding rule, attributed to ``path``.
        """
        parts: list[str] = path.rstrip("/").split("/")
        for depth in range(1, len(parts)):
            ancestor: str = "/".join(parts[:depth]) + "/"
            hit: IgnoreMatch | None = self._own_match(ancestor)
            if hit is not None:
                return IgnoreMatch(path=path, source=hit.source, line=hit.line, pattern=hit.pattern)
        return self._own_match(path)

    def is_ignored(self, path: str) -> bool:
        """Return True if ``path`` matches an (un-negated) ignore rule."""
        return self.match(path) is not None
