# topmark:header:start
#
#   project      : Tristat
#   file         : help.py
#   file_relpath : src/tristat/cli/commands/help.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tristat `help` command.

Prints help at the same tiers as `status`: ``-v`` adds every flag, ``-vv`` adds
an overview and examples.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tristat.cli.errors import cli_error_from
from tristat.cli.options import color_enabled_for, format_option, verbose_option
from tristat.core.errors import TristatError
from tristat.core.formats import OutputFormat
from tristat.core.tiers import resolve_tier
from tristat.rendering.help import render_help

if TYPE_CHECKING:
    from tristat.cli.console_api import ConsoleLike
    from tristat.core.tiers import VerbosityTier
    from tristat.rendering.api import RenderedOutput


@click.command(
    name="help",
    help="Show help; -v adds flags, -vv adds examples.",
)
@verbose_option
@format_option
def help_command(
    *,
    verbose: int,
    output_format: OutputFormat | None = None,
) -> None:
    """Show tiered help.

    Args:
        verbose (int): Count of ``-v`` flags.
        output_format (OutputFormat | None): ``text`` (default) or ``json``.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    try:
        tier: VerbosityTier = resolve_tier(verbose)
        output: RenderedOutput = render_help(tier, fmt, color=color_enabled_for(ctx, fmt))
    except TristatError as exc:
        raise cli_error_from(exc) from exc
    console.print(output.text)
