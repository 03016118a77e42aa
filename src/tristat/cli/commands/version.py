# topmark:header:start
#
#   project      : Tristat
#   file         : version.py
#   file_relpath : src/tristat/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tristat `version` command.

Prints the current Tristat version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tristat.cli.options import format_option
from tristat.constants import TRISTAT_VERSION
from tristat.core.formats import OutputFormat
from tristat.core.machine.payloads import build_meta_payload
from tristat.core.machine.schemas import MachineKey
from tristat.core.machine.serializers import serialize_json_envelope

if TYPE_CHECKING:
    from tristat.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Tristat.",
)
@format_option
def version_command(
    *,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the current version of Tristat.

    Args:
        output_format (OutputFormat | None): ``text`` (default) or ``json``.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt is OutputFormat.JSON:
        console.print(
            serialize_json_envelope(build_meta_payload(), **{MachineKey.VERSION: TRISTAT_VERSION})
        )
    else:
        console.print(TRISTAT_VERSION)
