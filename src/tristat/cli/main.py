# topmark:header:start
#
#   project      : Tristat
#   file         : main.py
#   file_relpath : src/tristat/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for Tristat.

Key ideas:
- Group-level options (color) are initialized once and placed into ``ctx.obj``.
- Internal logging is configured from ``TRISTAT_LOG_LEVEL`` only; ``-v`` selects
  the output tier, never the log level.
- Subcommands render a complete document before printing it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tristat.cli.commands.help import help_command
from tristat.cli.commands.status import status_command
from tristat.cli.commands.version import version_command
from tristat.cli.console import ClickConsole
from tristat.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    resolve_color_mode,
)
from tristat.config.logging import get_logger, resolve_env_log_level, setup_logging
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier
from tristat.rendering.help import render_help

if TYPE_CHECKING:
    from tristat.cli.console_api import ConsoleLike
    from tristat.config.logging import TristatLogger

logger: TristatLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Configure internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    ctx.obj["color_mode"] = effective_color_mode
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    if "console" not in ctx.obj:
        ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Tristat: repository status in three levels of detail.",
)
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Tristat CLI."""
    init_common_state(ctx, color_mode=color_mode, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print(
            render_help(
                VerbosityTier.TERSE, OutputFormat.TEXT, color=ctx.obj["color_enabled"]
            ).text
        )


cli.add_command(status_command)

cli.add_command(help_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
