# topmark:header:start
#
#   project      : Tristat
#   file         : text.py
#   file_relpath : src/tristat/rendering/text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable text projection of a `StatusReport`.

Every tier is built from the same entry line, ``XY path`` (``R  old -> new`` for
renames), so the lines of a lower tier always reappear verbatim in the higher
tiers:

    terse          entry lines grouped as conflicted, staged, unstaged, untracked;
                   or the single line ``clean``
    verbose        ``<root> :: <branch>`` header, summary line, then one section
                   per group (ignored included), ``(none)`` for empty sections,
                   ``clean`` last when clean
    very-verbose   verbose output with indented detail lines under each entry,
                   then local branches (``*`` marks the current one), unchanged
                   paths and ignore provenance

Color (yachalk) is applied only when requested. Plain output is byte-stable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from yachalk import chalk

from tristat.constants import CLEAN_MARKER, NO_FINGERPRINT
from tristat.core.errors import RenderError
from tristat.core.tiers import VerbosityTier

if TYPE_CHECKING:
    from tristat.status.model import StatusEntry, StatusReport

NONE_LINE: Final[str] = "  (none)"
DETAIL_INDENT: Final[str] = "    "
NO_BRANCH: Final[str] = "(no branch)"


class _Style:
    """Apply yachalk styles, or nothing when color is off."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    def heading(self, text: str) -> str:
        return chalk.bold(text) if self.enabled else text

    def dim(self, text: str) -> str:
        return chalk.dim(text) if self.enabled else text

    def code(self, entry: StatusEntry) -> str:
        code: str = entry.short_code
        if not self.enabled:
            return code
        return entry.index_state.color(code[0]) + entry.worktree_state.color(code[1])


def entry_line(entry: StatusEntry, style: _Style | None = None) -> str:
    """Return the one-line form of ``entry`` shared by all text tiers.

    Args:
        entry (StatusEntry): The entry to format.
        style (_Style | None): Optional styling; plain when omitted.

    Returns:
        str: ``XY path`` or ``XY old -> new``.
    """
    code: str = style.code(entry) if style is not None else entry.short_code
    return f"{code} {entry.display_path}"


def _terse_groups(report: StatusReport) -> list[StatusEntry]:
    """Dirty entries, each once, in display order."""
    conflicted: list[StatusEntry] = list(report.conflicted)
    staged: list[StatusEntry] = list(report.staged)
    unstaged_only: list[StatusEntry] = [e for e in report.unstaged if not e.is_staged]
    untracked_only: list[StatusEntry] = [e for e in report.untracked if not e.is_staged]
    return conflicted + staged + unstaged_only + untracked_only


def render_terse(report: StatusReport, style: _Style) -> list[str]:
    """Render the terse tier: one line per dirty path, or ``clean``."""
    if report.clean:
        return [CLEAN_MARKER]
    return [entry_line(e, style) for e in _terse_groups(report)]


def summary_line(report: StatusReport) -> str:
    """Return the one-line summary heading the verbose tiers."""
    return (
        f"{len(report.staged)} staged, {len(report.unstaged)} unstaged, "
        f"{len(report.untracked)} untracked, {len(report.ignored)} ignored, "
        f"{len(report.conflicted)} conflicted"
    )


def header_line(report: StatusReport) -> str:
    """Return ``<root> :: <branch>``, with ``(no branch)`` for a detached or unborn HEAD."""
    return f"{report.root} :: {report.branch or NO_BRANCH}"


def _format_fingerprint(value: str | None, width: int) -> str:
    if value is None:
        return NO_FINGERPRINT * width
    return value[:width]


def detail_lines(entry: StatusEntry, *, fingerprint_width: int) -> list[str]:
    """Return the indented very-verbose detail lines for ``entry``.

    Args:
        entry (StatusEntry): The entry to describe.
        fingerprint_width (int): Hex digits shown per fingerprint.

    Returns:
        list[str]: Similarity (renames/copies), mode change and fingerprints.
    """
    lines: list[str] = []
    if entry.similarity is not None:
        lines.append(f"{DETAIL_INDENT}similarity: {entry.similarity * 100:.1f}%")
    if entry.mode_changed:
        lines.append(f"{DETAIL_INDENT}mode changed")
    lines.append(
        f"{DETAIL_INDENT}head {_format_fingerprint(entry.head_fingerprint, fingerprint_width)}"
        f"  index {_format_fingerprint(entry.index_fingerprint, fingerprint_width)}"
        f"  worktree {_format_fingerprint(entry.worktree_fingerprint, fingerprint_width)}"
    )
    return lines


def _sections(report: StatusReport) -> list[tuple[str, tuple[StatusEntry, ...], bool]]:
    """(heading, entries, shown-when-empty) for every verbose section."""
    return [
        ("-- Conflicted:", report.conflicted, False),
        ("-- Staged:", report.staged, True),
        ("-- Unstaged:", report.unstaged, True),
        ("-- Untracked:", report.untracked, True),
        ("-- Ignored:", report.ignored, True),
    ]


def render_verbose(
    report: StatusReport,
    style: _Style,
    *,
    details: bool = False,
    fingerprint_width: int = 7,
) -> list[str]:
    """Render the verbose tier, optionally with very-verbose detail lines.

    Args:
        report (StatusReport): The report.
        style (_Style): Styling.
        details (bool): Append detail lines under each entry line.
        fingerprint_width (int): Hex digits shown per fingerprint (details only).

    Returns:
        list[str]: Output lines.
    """
    lines: list[str] = [header_line(report), summary_line(report)]
    for heading, entries, always in _sections(report):
        if not entries and not always:
            continue
        lines.append(style.heading(heading))
        if not entries:
            lines.append(style.dim(NONE_LINE))
            continue
        for entry in entries:
            lines.append(entry_line(entry, style))
            if details:
                lines.extend(
                    style.dim(d) for d in detail_lines(entry, fingerprint_width=fingerprint_width)
                )
    if report.clean:
        lines.append(CLEAN_MARKER)
    return lines


def render_very_verbose(
    report: StatusReport,
    style: _Style,
    *,
    fingerprint_width: int = 7,
) -> list[str]:
    """Render the very-verbose tier."""
    lines: list[str] = render_verbose(
        report,
        style,
        details=True,
        fingerprint_width=fingerprint_width,
    )

    lines.append(style.heading("-- Branches:"))
    if not report.branches:
        lines.append(style.dim(NONE_LINE))
    lines.extend(f"{'*' if name == report.branch else ' '} {name}" for name in report.branches)

    lines.append(style.heading("-- Unchanged:"))
    unchanged: tuple[StatusEntry, ...] = report.unchanged
    if not unchanged:
        lines.append(style.dim(NONE_LINE))
    lines.extend(entry_line(e, style) for e in unchanged)

    lines.append(style.heading("-- Ignore rules:"))
    if not report.ignore_matches:
        lines.append(style.dim(NONE_LINE))
    lines.extend(f"{m.path}  ({m.describe()})" for m in report.ignore_matches)
    return lines


def render_text(
    report: StatusReport,
    tier: VerbosityTier,
    *,
    fingerprint_width: int = 7,
    color: bool = False,
) -> str:
    """Render ``report`` as text for ``tier``.

    Args:
        report (StatusReport): The report.
        tier (VerbosityTier): Requested tier.
        fingerprint_width (int): Hex digits shown per fingerprint at very-verbose.
        color (bool): Apply yachalk colors.

    Returns:
        str: The rendered text, lines joined with ``\\n`` (no trailing newline).

    Raises:
        RenderError: If ``tier`` is not a known tier.
    """
    style = _Style(color)
    if tier is VerbosityTier.TERSE:
        lines: list[str] = render_terse(report, style)
    elif tier is VerbosityTier.VERBOSE:
        lines = render_verbose(report, style)
    elif tier is VerbosityTier.VERY_VERBOSE:
        lines = render_very_verbose(report, style, fingerprint_width=fingerprint_width)
    else:
        raise RenderError(f"Unsupported verbosity tier: {tier!r}")
    return "\n".join(lines)
