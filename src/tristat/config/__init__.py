# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for Tristat.

Public surface:
    - `Config` / `MutableConfig`: immutable snapshot and mutable builder.
    - `load_config`: layered discovery and merge of TOML sources.
"""

from __future__ import annotations

from tristat.config.io import load_config
from tristat.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "MutableConfig",
    "load_config",
]
