# topmark:header:start
#
#   project      : Tristat
#   file         : tiers.py
#   file_relpath : src/tristat/core/tiers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Verbosity tiers shared by the status renderer and the help renderer.

A single `VerbosityTier` enum is used for every command, so ``-v`` and ``-vv`` mean
the same thing whether the user asks for status or for help. Tiers are ordered:
each higher tier renders a strict superset of the lines of the tier below.
"""

from __future__ import annotations

from tristat.core.enum_mixins import KeyedStrEnum
from tristat.core.errors import ArgumentError


class VerbosityTier(KeyedStrEnum):
    """Requested level of detail.

    Attributes:
        TERSE: One line per changed path (or ``clean``).
        VERBOSE: Sections with headings and a summary line (``-v``).
        VERY_VERBOSE: Verbose plus fingerprints, similarity scores, unchanged paths
            and ignore provenance (``-vv``).
    """

    TERSE = ("terse", "Terse", ("0", "default"))
    VERBOSE = ("verbose", "Verbose", ("1", "v"))
    VERY_VERBOSE = ("very-verbose", "Very verbose", ("2", "vv"))

    @property
    def level(self) -> int:
        """Numeric rank of the tier (0, 1 or 2)."""
        return list(VerbosityTier).index(self)

    @classmethod
    def from_level(cls, level: int) -> VerbosityTier:
        """Return the tier for a numeric level.

        Args:
            level (int): 0, 1 or 2.

        Returns:
            VerbosityTier: The matching tier.

        Raises:
            ArgumentError: If ``level`` is outside 0..2.
        """
        members: list[VerbosityTier] = list(cls)
        if not 0 <= level < len(members):
            raise ArgumentError(
                f"Verbosity level must be between 0 and {len(members) - 1}, got {level}."
            )
        return members[level]


def resolve_tier(verbose_count: int, quiet_count: int = 0) -> VerbosityTier:
    """Resolve the verbosity tier from counted ``-v`` / ``-q`` flags.

    Args:
        verbose_count (int): Number of times ``-v`` was given (``-vv`` counts as two).
        quiet_count (int): Number of times ``-q`` was given.

    Returns:
        VerbosityTier: The requested tier. Quiet invocations resolve to
        `VerbosityTier.TERSE`; suppressing output is up to the frontend.

    Raises:
        ArgumentError: If more than one tier was requested (e.g. ``-v -vv``) or if
            ``-v`` and ``-q`` were combined.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ArgumentError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > VerbosityTier.VERY_VERBOSE.level:
        raise ArgumentError(
            "Conflicting verbosity: use either -v (verbose) or -vv (very verbose), not both."
        )
    return VerbosityTier.from_level(verbose_count)
