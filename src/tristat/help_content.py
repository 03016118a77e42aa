# topmark:header:start
#
#   project      : Tristat
#   file         : help_content.py
#   file_relpath : src/tristat/help_content.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Static help content: commands, their flags and usage examples.

The help renderer (`tristat.rendering.help`) projects this content per
verbosity tier. Keep it in sync with the click definitions in `tristat.cli`;
``tests/cli/test_help.py`` checks that every flag listed here exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from tristat.core.machine.schemas import MachineKey


@dataclass(frozen=True, slots=True)
class FlagHelp:
    """One option of a command.

    Attributes:
        name (str): Option spelling(s) with metavar, as shown to users.
        description (str): One-line description.
    """

    name: str
    description: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON payload for this flag."""
        return {MachineKey.NAME: self.name, MachineKey.DESCRIPTION: self.description}


@dataclass(frozen=True, slots=True)
class CommandHelp:
    """A subcommand with its summary and options.

    Attributes:
        name (str): Subcommand name.
        description (str): One-line summary.
        flags (tuple[FlagHelp, ...]): Options accepted by the subcommand.
    """

    name: str
    description: str
    flags: tuple[FlagHelp, ...]

    def to_dict(self) -> dict[str, object]:
        """Return the JSON payload for this command."""
        return {
            MachineKey.NAME: self.name,
            MachineKey.DESCRIPTION: self.description,
            MachineKey.FLAGS: [f.to_dict() for f in self.flags],
        }


@dataclass(frozen=True, slots=True)
class ExampleHelp:
    """A sample invocation.

    Attributes:
        command (str): The command line.
        description (str): What it shows.
    """

    command: str
    description: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON payload for this example."""
        return {MachineKey.COMMAND: self.command, MachineKey.DESCRIPTION: self.description}


USAGE: Final[str] = "tristat [--color auto|always|never] [--no-color] COMMAND [ARGS]..."

GLOBAL_FLAGS: Final[tuple[FlagHelp, ...]] = (
    FlagHelp("--color [auto|always|never]", "Color output (default: auto)."),
    FlagHelp("--no-color", "Disable color output (same as --color=never)."),
    FlagHelp("-h, --help", "Show click's option reference for a command."),
)

_VERBOSE_FLAG = FlagHelp(
    "-v, --verbose", "Increase detail: -v for verbose, -vv for very verbose (at most two)."
)
_FORMAT_FLAG = FlagHelp("--format [text|json]", "Output format (default: text).")

COMMANDS: Final[tuple[CommandHelp, ...]] = (
    CommandHelp(
        name="status",
        description="Show staged, unstaged, untracked and ignored paths.",
        flags=(
            _VERBOSE_FLAG,
            FlagHelp("-q, --quiet", "Print nothing; only set the exit code (0 clean, 1 dirty)."),
            _FORMAT_FLAG,
            FlagHelp("--root DIR", "Directory inside the working copy (default: current)."),
            FlagHelp("--fast", "Skip rename detection (terse text output only)."),
            FlagHelp("--no-renames", "Never detect renames or copies."),
            FlagHelp("--find-copies", "Also detect copies of tracked files."),
            FlagHelp("--rename-threshold FLOAT", "Minimum similarity for a rename (0..1)."),
            FlagHelp("-y, --non-interactive", "Never let git prompt for input."),
            FlagHelp("--config FILE", "Extra TOML config file (repeatable)."),
            FlagHelp("--no-config", "Ignore pyproject.toml and tristat.toml."),
            FlagHelp("PATHSPEC...", "Only report paths matching these patterns."),
        ),
    ),
    CommandHelp(
        name="help",
        description="Show this help; -v adds flags, -vv adds examples.",
        flags=(_VERBOSE_FLAG, _FORMAT_FLAG),
    ),
    CommandHelp(
        name="version",
        description="Show the installed Tristat version.",
        flags=(_FORMAT_FLAG,),
    ),
)

EXAMPLES: Final[tuple[ExampleHelp, ...]] = (
    ExampleHelp("tristat status", "One line per changed path, or 'clean'."),
    ExampleHelp("tristat status -v", "Root and branch, summary line, one section per change kind."),
    ExampleHelp("tristat status -vv", "Adds details per path, local branches and ignore rules."),
    ExampleHelp("tristat status --format json", "Full report for scripts."),
    ExampleHelp("tristat status -q && echo clean", "Test for a clean working copy."),
    ExampleHelp("tristat status 'src/*.py'", "Restrict the report to matching paths."),
)
