# topmark:header:start
#
#   project      : Tristat
#   file         : __init__.py
#   file_relpath : src/tristat/core/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core machine-output infrastructure.

Separation of concerns:

1) Schema primitives (keys + normalization): `tristat.core.machine.schemas`.
2) Payload builders (domain data only, no envelope): `tristat.<domain>.machine.payloads`.
3) Shape builders (envelopes, still not serialized): `tristat.core.machine.shapes`.
4) Serialization (shapes to strings, no printing): `tristat.core.machine.serializers`.
5) Emission (printing to a console) lives under `tristat.cli`.

Rule of thumb: if it imports ``click`` or a console, it does not belong here.
"""

from __future__ import annotations

from tristat.core.machine.schemas import MachineKey, MetaPayload, normalize_payload

__all__ = [
    "MachineKey",
    "MetaPayload",
    "normalize_payload",
]
