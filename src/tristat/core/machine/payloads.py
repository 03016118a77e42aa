# topmark:header:start
#
#   project      : Tristat
#   file         : payloads.py
#   file_relpath : src/tristat/core/machine/payloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Payload builders shared by every machine-readable document.

`build_meta_payload()` returns a minimal ``{tool, version}`` mapping. It is stable
for the lifetime of the process and therefore cached. Nothing platform- or
time-dependent goes into it, so identical reports serialize identically.
"""

from __future__ import annotations

from functools import lru_cache

from tristat.constants import TRISTAT, TRISTAT_VERSION
from tristat.core.machine.schemas import MetaPayload


@lru_cache(maxsize=1)
def build_meta_payload() -> MetaPayload:
    """Build a small metadata payload with tool name and version.

    Returns:
        Mapping with keys `"tool"` and `"version"`.
    """
    return MetaPayload(
        tool=TRISTAT,
        version=TRISTAT_VERSION,
    )
