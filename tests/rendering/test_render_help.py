# topmark:header:start
#
#   project      : Tristat
#   file         : test_render_help.py
#   file_relpath : tests/rendering/test_render_help.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for tiered help output."""

from __future__ import annotations

import json

from tests.conftest import parametrize
from tristat.core.exit_codes import ExitCode
from tristat.core.formats import OutputFormat
from tristat.core.tiers import VerbosityTier
from tristat.help_content import COMMANDS, EXAMPLES, USAGE
from tristat.rendering.help import render_help


def _lines(tier: VerbosityTier) -> list[str]:
    return render_help(tier, OutputFormat.TEXT).text.split("\n")


def test_terse_help_lists_commands() -> None:
    """Terse help is the usage line and one line per command."""
    lines = _lines(VerbosityTier.TERSE)
    assert lines[0] == f"Usage: {USAGE}"
    assert lines[2] == "Commands:"
    assert len(lines) == 3 + len(COMMANDS)
    assert all(line.startswith("  ") for line in lines[3:])


def test_verbose_help_adds_flags() -> None:
    """-v adds the options of every command."""
    text = render_help(VerbosityTier.VERBOSE, OutputFormat.TEXT).text
    assert "Options for 'status':" in text
    assert "--rename-threshold FLOAT" in text
    assert "Examples:" not in text


def test_very_verbose_help_adds_examples() -> None:
    """-vv adds the overview and the examples."""
    lines = _lines(VerbosityTier.VERY_VERBOSE)
    assert "Overview:" in lines
    assert "Examples:" in lines
    assert "  $ tristat status -vv" in lines


def test_help_tiers_are_monotonic() -> None:
    """Every help line of a tier reappears in the next tier."""
    terse, verbose, very = (_lines(t) for t in VerbosityTier)
    assert set(terse) < set(verbose) < set(very)


@parametrize("fmt", list(OutputFormat))
def test_help_exit_code(fmt: OutputFormat) -> None:
    """Help never reports dirty."""
    assert render_help(VerbosityTier.TERSE, fmt).exit_code is ExitCode.CLEAN


def test_help_json_is_complete() -> None:
    """JSON help carries every command, flag and example whatever the tier."""
    doc = json.loads(render_help(VerbosityTier.TERSE, OutputFormat.JSON).text)
    assert list(doc) == ["meta", "usage", "flags", "commands", "examples"]
    assert [c["name"] for c in doc["commands"]] == [c.name for c in COMMANDS]
    status = doc["commands"][0]
    assert {"name": "--no-config", "description": "Ignore pyproject.toml and tristat.toml."} in (
        status["flags"]
    )
    assert len(doc["examples"]) == len(EXAMPLES)
    assert doc["examples"][0] == {
        "command": "tristat status",
        "description": "One line per changed path, or 'clean'.",
    }
    very = render_help(VerbosityTier.VERY_VERBOSE, OutputFormat.JSON).text
    assert very == render_help(VerbosityTier.TERSE, OutputFormat.JSON).text


def test_plain_help_has_no_escape_codes() -> None:
    """Bold headings only when color is requested."""
    assert "\x1b[" not in render_help(VerbosityTier.VERY_VERBOSE, OutputFormat.TEXT).text
