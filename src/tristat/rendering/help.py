# topmark:header:start
#
#   project      : Tristat
#   file         : help.py
#   file_relpath : src/tristat/rendering/help.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tiered help output.

Help uses the same `VerbosityTier` as status output:

    terse          usage line and the list of commands
    verbose        + the flags of every command and the global flags
    very-verbose   + an overview of the three status tiers and examples

JSON output always carries the full content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from yachalk import chalk

from tristat.core.errors import RenderError
from tristat.core.exit_codes import ExitCode
from tristat.core.formats import OutputFormat
from tristat.core.machine.payloads import build_meta_payload
from tristat.core.machine.schemas import MachineKey
from tristat.core.machine.serializers import serialize_json_envelope
from tristat.core.tiers import VerbosityTier
from tristat.help_content import COMMANDS, EXAMPLES, GLOBAL_FLAGS, USAGE
from tristat.rendering.api import RenderedOutput

if TYPE_CHECKING:
    from tristat.help_content import FlagHelp

_OVERVIEW: Final[tuple[str, ...]] = (
    "tristat reports the working copy on two axes: the index against HEAD (staged)",
    "and the working tree against the index (unstaged, untracked, ignored).",
    "Exit status: 0 when clean, 1 when anything is staged, unstaged, untracked",
    "or conflicted, 2 on errors. Ignored paths never make a working copy dirty.",
)


def _flag_lines(flags: tuple[FlagHelp, ...], heading: str, bold: bool) -> list[str]:
    width: int = max(len(f.name) for f in flags)
    lines: list[str] = ["", chalk.bold(heading) if bold else heading]
    lines.extend(f"  {f.name.ljust(width)}  {f.description}" for f in flags)
    return lines


def _help_text(tier: VerbosityTier, color: bool) -> str:
    def heading(text: str) -> str:
        return chalk.bold(text) if color else text

    width: int = max(len(c.name) for c in COMMANDS)
    lines: list[str] = [f"Usage: {USAGE}", "", heading("Commands:")]
    lines.extend(f"  {c.name.ljust(width)}  {c.description}" for c in COMMANDS)

    if tier.level >= VerbosityTier.VERBOSE.level:
        lines.extend(_flag_lines(GLOBAL_FLAGS, "Global options:", color))
        for command in COMMANDS:
            lines.extend(_flag_lines(command.flags, f"Options for '{command.name}':", color))

    if tier.level >= VerbosityTier.VERY_VERBOSE.level:
        lines.extend(["", heading("Overview:")])
        lines.extend(f"  {line}" for line in _OVERVIEW)
        lines.extend(["", heading("Examples:")])
        for example in EXAMPLES:
            lines.append(f"  $ {example.command}")
            lines.append(f"      {example.description}")
    return "\n".join(lines)


def _help_json() -> str:
    return serialize_json_envelope(
        build_meta_payload(),
        **{
            MachineKey.USAGE: USAGE,
            MachineKey.FLAGS: [f.to_dict() for f in GLOBAL_FLAGS],
            MachineKey.COMMANDS: [c.to_dict() for c in COMMANDS],
            MachineKey.EXAMPLES: [e.to_dict() for e in EXAMPLES],
        },
    )


def render_help(
    tier: VerbosityTier,
    fmt: OutputFormat,
    *,
    color: bool = False,
) -> RenderedOutput:
    """Render help for ``tier`` in ``fmt``.

    Args:
        tier (VerbosityTier): Requested tier.
        fmt (OutputFormat): Output format; JSON ignores ``tier``.
        color (bool): Bold headings in text output.

    Returns:
        RenderedOutput: The help document with `ExitCode.CLEAN`.

    Raises:
        RenderError: If the format is unsupported.
    """
    if fmt is OutputFormat.TEXT:
        text: str = _help_text(tier, color)
    elif fmt is OutputFormat.JSON:
        text = _help_json()
    else:
        raise RenderError(f"Unsupported output format: {fmt!r}")
    return RenderedOutput(text=text, exit_code=ExitCode.CLEAN)
