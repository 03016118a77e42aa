# topmark:header:start
#
#   project      : Tristat
#   file         : engine.py
#   file_relpath : src/tristat/status/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the status stages in order: provider, reconciler, detector, builder.

`compute_status` is the only place that sequences the stages. It reads all
repository state up front, so a provider failure aborts before anything is
rendered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tristat.config.logging import get_logger
from tristat.core.errors import StateReadError
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier
from tristat.status.builder import build_report
from tristat.status.filters import filter_entries
from tristat.status.reconciler import index_by_path, reconcile
from tristat.status.renames import detect_renames as run_rename_detection
from tristat.status.states import WorktreeState

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from tristat.config.logging import TristatLogger
    from tristat.config.model import Config
    from tristat.status.model import IgnoreMatch, StatusEntry, StatusReport
    from tristat.status.provider import StateProvider
    from tristat.status.records import PathRecord

logger: TristatLogger = get_logger(__name__)


def rename_detection_enabled(config: Config, *, tier: VerbosityTier, fmt: OutputFormat) -> bool:
    """Decide whether rename detection runs for one invocation.

    Detection is skipped only on explicit request: ``fast`` must be set, and it is
    honored for terse text output only, where similarity is never shown. The size
    of the change set never turns detection off.

    Args:
        config (Config): Effective configuration.
        tier (VerbosityTier): Requested tier.
        fmt (OutputFormat): Requested output format.

    Returns:
        bool: True if renames should be detected.
    """
    if not config.detect_renames:
        return False
    if not config.fast:
        return True
    if tier is VerbosityTier.TERSE and fmt is OutputFormat.TEXT:
        logger.info("Fast mode: skipping rename detection")
        return False
    logger.info("Fast mode only applies to terse text output; detecting renames (%s)", tier.key)
    return True


def compute_status(
    provider: StateProvider,
    config: Config,
    *,
    detect_renames: bool = True,
    pathspecs: Iterable[str] = (),
) -> StatusReport:
    """Compute the status report for the working copy behind ``provider``.

    Args:
        provider (StateProvider): Source of raw repository state.
        config (Config): Effective configuration (threshold, copy detection).
        detect_renames (bool): Run rename/copy detection.
        pathspecs (Iterable[str]): Optional wildmatch patterns restricting the paths
            reported.

    Returns:
        StatusReport: The immutable report.

    Raises:
        StateReadError: If the provider fails, including unexpected OS errors.
    """
    try:
        head: Sequence[PathRecord] = provider.list_head()
        index: Sequence[PathRecord] = provider.list_index()
        worktree: Sequence[PathRecord] = provider.list_worktree()
        branch: str | None = provider.branch
        branches: Sequence[str] = provider.list_branches()

        entries: tuple[StatusEntry, ...] = reconcile(head, index, worktree, provider.is_ignored)
        if detect_renames:
            entries = run_rename_detection(
                entries,
                index_by_path(head, side="head"),
                index_by_path(index, side="index"),
                provider.read_blob,
                threshold=config.rename_threshold,
                detect_copies=config.detect_copies,
            )
        entries = filter_entries(entries, pathspecs)

        matches: list[IgnoreMatch] = []
        for entry in entries:
            if entry.worktree_state is WorktreeState.IGNORED:
                match: IgnoreMatch | None = provider.ignore_match(entry.path)
                if match is not None:
                    matches.append(match)
    except OSError as exc:
        filename: str | None = str(exc.filename) if exc.filename else None
        raise StateReadError("compute_status", exc.strerror or str(exc), path=filename) from exc

    report: StatusReport = build_report(
        provider.root, entries, matches, branch=branch, branches=branches
    )
    logger.info(
        "Status for %s: %d entr%s, %s",
        report.root,
        len(report.entries),
        "y" if len(report.entries) == 1 else "ies",
        "clean" if report.clean else "dirty",
    )
    return report
