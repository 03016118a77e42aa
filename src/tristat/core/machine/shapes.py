# topmark:header:start
#
#   project      : Tristat
#   file         : shapes.py
#   file_relpath : src/tristat/core/machine/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Envelope shaping utilities for machine output.

A Tristat JSON document is an *envelope*: a ``"meta"`` object followed by one or
more named payloads, in insertion order.

This module is intentionally console-free, Click-free and serialization-free.
"""

from __future__ import annotations

from tristat.core.machine.schemas import MachineKey, MetaPayload, normalize_payload


def build_json_envelope(
    *,
    meta: MetaPayload,
    **payloads: object,
) -> dict[str, object]:
    """Build a JSON envelope with `meta` plus one or more named payloads.

    Args:
        meta: Metadata payload (tool/version).
        **payloads: One or more named payload objects, emitted in the given order.

    Returns:
        JSON-serializable envelope dict.
    """
    out: dict[str, object] = {MachineKey.META: dict(meta)}
    for name, payload in payloads.items():
        out[name] = normalize_payload(payload)
    return out
