# topmark:header:start
#
#   project      : Tristat
#   file         : status.py
#   file_relpath : src/tristat/cli/commands/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tristat `status` command.

Reports the working copy on two axes, staged (index vs HEAD) and unstaged
(working tree vs index), in one of three tiers:

    $ tristat status          # one line per changed path, or "clean"
    $ tristat status -v       # summary line and sections
    $ tristat status -vv      # plus fingerprints, similarity, ignore provenance

Arguments are validated before the repository is touched, so a rejected
invocation never reads state and never prints a partial report.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from tristat.api.runtime import run_status
from tristat.cli.errors import cli_error_from
from tristat.cli.options import (
    CONTEXT_SETTINGS,
    color_enabled_for,
    common_config_options,
    common_verbose_options,
    format_option,
)
from tristat.config.keys import Toml
from tristat.config.logging import get_logger
from tristat.core.errors import ArgumentError, TristatError
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier, resolve_tier

if TYPE_CHECKING:
    from tristat.api.runtime import StatusRun
    from tristat.cli.console_api import ConsoleLike
    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)


def check_status_arguments(
    *,
    tier: VerbosityTier,
    fmt: OutputFormat,
    quiet: bool,
    fast: bool,
) -> None:
    """Reject flag combinations that contradict each other.

    Args:
        tier (VerbosityTier): Resolved tier.
        fmt (OutputFormat): Requested output format.
        quiet (bool): ``-q`` was given.
        fast (bool): ``--fast`` was given.

    Raises:
        ArgumentError: If ``-q`` is combined with JSON output, or ``--fast`` with a
            verbose tier or JSON output.
    """
    if quiet and fmt is OutputFormat.JSON:
        raise ArgumentError("The '--quiet' option cannot be combined with '--format json'.")
    if fast and tier is not VerbosityTier.TERSE:
        raise ArgumentError(
            "The '--fast' option only applies to terse output; drop -v/-vv or --fast."
        )
    if fast and fmt is OutputFormat.JSON:
        raise ArgumentError("The '--fast' option cannot be combined with '--format json'.")


def build_overrides(
    *,
    fast: bool,
    no_renames: bool,
    find_copies: bool,
    rename_threshold: float | None,
) -> dict[str, object]:
    """Translate command-line flags into configuration overrides.

    Only flags that were actually given produce a key, so unset flags never mask
    values from configuration files.
    """
    overrides: dict[str, object] = {}
    if fast:
        overrides[Toml.KEY_FAST] = True
    if no_renames:
        overrides[Toml.KEY_DETECT_RENAMES] = False
    if find_copies:
        overrides[Toml.KEY_DETECT_COPIES] = True
    if rename_threshold is not None:
        overrides[Toml.KEY_RENAME_THRESHOLD] = rename_threshold
    return overrides


@click.command(
    name="status",
    help="Show staged, unstaged, untracked and ignored paths.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Exit status: 0 when clean, 1 when anything is staged, unstaged, untracked or
conflicted, 2 on errors.

  tristat status -vv
  tristat status --format json 'src/*.py'
""",
)
@common_verbose_options
@format_option
@click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=".",
    show_default=True,
    help="Directory inside the working copy.",
)
@click.option("--fast", is_flag=True, help="Skip rename detection (terse text output only).")
@click.option("--no-renames", "no_renames", is_flag=True, help="Never detect renames or copies.")
@click.option("--find-copies", "find_copies", is_flag=True, help="Also detect copies.")
@click.option(
    "--rename-threshold",
    "rename_threshold",
    type=float,
    default=None,
    metavar="FLOAT",
    help="Minimum similarity (0..1) for a rename or copy.",
)
@click.option(
    "-y",
    "--non-interactive",
    "non_interactive",
    is_flag=True,
    help="Never let git prompt for input.",
)
@common_config_options
@click.argument("pathspecs", nargs=-1, metavar="[PATHSPEC]...")
def status_command(
    *,
    verbose: int,
    quiet: int,
    output_format: OutputFormat | None,
    root: Path,
    fast: bool,
    no_renames: bool,
    find_copies: bool,
    rename_threshold: float | None,
    non_interactive: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    pathspecs: tuple[str, ...],
) -> None:
    """Report the status of the working copy.

    Args:
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        output_format (OutputFormat | None): ``text`` (default) or ``json``.
        root (Path): Directory inside the working copy.
        fast (bool): Skip rename detection (terse text only).
        no_renames (bool): Disable rename and copy detection.
        find_copies (bool): Detect copies as well as renames.
        rename_threshold (float | None): Similarity threshold override.
        non_interactive (bool): Never let git prompt.
        no_config (bool): Skip project config discovery.
        config_paths (tuple[str, ...]): Extra config files.
        pathspecs (tuple[str, ...]): Restrict the report to matching paths.

    Raises:
        TristatCliError: On invalid arguments, unreadable repository state,
            invalid configuration or render failures (exit status 2).

    Exit Status:
        CLEAN (0): Nothing staged, unstaged, untracked or conflicted.
        DIRTY (1): At least one path is staged, unstaged, untracked or conflicted.
        ERROR (2): The status could not be determined.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    try:
        tier: VerbosityTier = resolve_tier(verbose, quiet)
        check_status_arguments(tier=tier, fmt=fmt, quiet=quiet > 0, fast=fast)
        run: StatusRun = run_status(
            root,
            tier=tier,
            fmt=fmt,
            config=build_overrides(
                fast=fast,
                no_renames=no_renames,
                find_copies=find_copies,
                rename_threshold=rename_threshold,
            ),
            config_paths=config_paths,
            no_config=no_config,
            pathspecs=pathspecs,
            non_interactive=non_interactive,
            color=color_enabled_for(ctx, fmt),
        )
    except TristatError as exc:
        logger.debug("status failed: %s", exc)
        raise cli_error_from(exc) from exc

    if quiet == 0:
        console.print(run.output.text)
    ctx.exit(run.output.exit_code)
