# topmark:header:start
#
#   project      : Tristat
#   file         : formats.py
#   file_relpath : src/tristat/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared output format definitions used across Tristat frontends.

This module centralizes the `OutputFormat` enum so CLI commands, renderers and the
API agree on the same format vocabulary without introducing Click or console
dependencies.

Machine formats are stable and colorless.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for status, help and version rendering.

    Attributes:
        TEXT: Human-friendly text output; may include ANSI color if enabled.
        JSON: A single JSON document (machine-readable) whose shape does not
            depend on the verbosity tier.

    Notes:
        Use with `tristat.cli.cli_types.EnumChoiceParam` to parse ``--format``.
    """

    TEXT = "text"
    JSON = "json"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for formats intended for machine consumption.

    Args:
        fmt: the output format to be checked.

    Returns:
        `True` if the format provided is a machine format, else `False`.
    """
    return fmt is OutputFormat.JSON
