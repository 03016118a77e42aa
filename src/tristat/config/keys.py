# topmark:header:start
#
#   project      : Tristat
#   file         : keys.py
#   file_relpath : src/tristat/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for Tristat configuration.

Keys defined here are the external configuration API as it appears in
``tristat.toml`` and in ``[tool.tristat]`` inside ``pyproject.toml``. Renaming or
removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Tristat configuration."""

    # [tool.tristat] in pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TRISTAT: Final[str] = "tristat"

    # [status] (optional sub-table in tristat.toml; top-level keys are accepted too)
    SECTION_STATUS: Final[str] = "status"

    KEY_RENAME_THRESHOLD: Final[str] = "rename_threshold"
    KEY_DETECT_RENAMES: Final[str] = "detect_renames"
    KEY_DETECT_COPIES: Final[str] = "detect_copies"
    KEY_FAST: Final[str] = "fast"
    KEY_FINGERPRINT_WIDTH: Final[str] = "fingerprint_width"
    KEY_WORKERS: Final[str] = "workers"


# Ordered for validation messages and defaults.
ALL_KEYS: Final[tuple[str, ...]] = (
    Toml.KEY_RENAME_THRESHOLD,
    Toml.KEY_DETECT_RENAMES,
    Toml.KEY_DETECT_COPIES,
    Toml.KEY_FAST,
    Toml.KEY_FINGERPRINT_WIDTH,
    Toml.KEY_WORKERS,
)
