# topmark:header:start
#
#   project      : Tristat
#   file         : serializers.py
#   file_relpath : src/tristat/core/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure JSON serialization utilities for machine output.

This module converts *already-shaped* machine output objects into strings. It is
console-free, Click-free and side-effect-free.

Conventions:
- Two-space indentation and insertion-ordered keys, so identical inputs always
  produce byte-identical documents.
- `json.dumps()` does not append a trailing newline; callers add it when printing.
"""

from __future__ import annotations

import json

from tristat.core.machine.schemas import MetaPayload, normalize_payload
from tristat.core.machine.shapes import build_json_envelope


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline).

    Args:
        obj: The object to serialize.

    Returns:
        A pretty-printed JSON string (no trailing newline).
    """
    normalized: object = normalize_payload(obj)
    return json.dumps(normalized, indent=2, ensure_ascii=False)


def serialize_json_envelope(meta: MetaPayload, **payloads: object) -> str:
    """Serialize a JSON envelope with `meta` plus named payloads.

    Args:
        meta: Metadata payload (tool/version).
        **payloads: Named payload objects. Each value may be a dict-like object or
            an object exposing `to_dict()`.

    Returns:
        Pretty-printed JSON string (no trailing newline).
    """
    envelope: dict[str, object] = build_json_envelope(meta=meta, **payloads)
    return serialize_json_object(envelope)
