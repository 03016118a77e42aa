# topmark:header:start
#
#   project      : Tristat
#   file         : constants.py
#   file_relpath : src/tristat/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tristat Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

TRISTAT: str = "tristat"

TRISTAT_VERSION: str = get_version("tristat")

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "TRISTAT_LOG_LEVEL"

# Project-local configuration file names, lowest precedence first.
PYPROJECT_TOML_NAME: str = "pyproject.toml"
TRISTAT_TOML_NAME: str = "tristat.toml"

# Directory holding git metadata; never reported as a working tree path.
GIT_DIR_NAME: str = ".git"

# Literal line printed by the terse text tier for a clean working copy.
CLEAN_MARKER: str = "clean"

# Placeholder for an absent fingerprint in very-verbose output.
NO_FINGERPRINT: str = "-"
