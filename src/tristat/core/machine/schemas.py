# topmark:header:start
#
#   project      : Tristat
#   file         : schemas.py
#   file_relpath : src/tristat/core/machine/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical schema primitives for Tristat machine output.

This module centralizes:
- canonical *keys* used in JSON documents (`MachineKey`)
- the metadata payload type (`MetaPayload`)
- payload normalization (`normalize_payload`)

Keys are camelCase where they name a field of a status entry, to keep the
document friendly to JavaScript consumers; envelope keys are single words.

Normalization rules:
- `Path` -> `str`
- `Enum` -> `Enum.value`
- objects with `.to_dict()` -> normalize of that mapping
- mappings -> dict with stringified keys and normalized values (order preserved)
- sequences/sets -> lists of normalized values
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final, TypedDict, cast


class MachineKey:
    """Canonical keys used in machine-readable JSON documents.

    These are shared constants to avoid stringly-typed key drift across payload builders.
    """

    META: Final[str] = "meta"

    # status document
    ROOT: Final[str] = "root"
    BRANCH: Final[str] = "branch"
    BRANCHES: Final[str] = "branches"
    CLEAN: Final[str] = "clean"
    ENTRIES: Final[str] = "entries"
    SUMMARY: Final[str] = "summary"
    IGNORED: Final[str] = "ignored"

    # status entry
    PATH: Final[str] = "path"
    INDEX_STATE: Final[str] = "indexState"
    WORKTREE_STATE: Final[str] = "worktreeState"
    RENAME_FROM: Final[str] = "renameFrom"
    SIMILARITY: Final[str] = "similarity"
    MODE_CHANGED: Final[str] = "modeChanged"

    # summary
    INDEX: Final[str] = "index"
    WORKTREE: Final[str] = "worktree"

    # ignore provenance
    SOURCE: Final[str] = "source"
    LINE: Final[str] = "line"
    PATTERN: Final[str] = "pattern"

    # help
    COMMAND: Final[str] = "command"
    USAGE: Final[str] = "usage"
    COMMANDS: Final[str] = "commands"
    NAME: Final[str] = "name"
    DESCRIPTION: Final[str] = "description"
    FLAGS: Final[str] = "flags"
    EXAMPLES: Final[str] = "examples"

    # version
    VERSION: Final[str] = "version"


class MetaPayload(TypedDict):
    """Metadata describing the Tristat runtime for machine output."""

    tool: str
    version: str


def normalize_payload(obj: object) -> object:
    """Normalize a payload into JSON-serializable structures.

    Conversions:
      - `Path` -> `str`
      - `Enum` -> `Enum.value`
      - object with callable `.to_dict()` -> normalize(`.to_dict()`)
      - `Mapping` -> `dict[str, normalized value]`
      - `list/tuple/set/frozenset` -> `list[normalized item]`

    Sets are sorted after normalization so the output is deterministic.

    Args:
        obj: The payload object to normalize.

    Returns:
        A JSON-serializable representation of `obj`.
    """
    if isinstance(obj, Path):
        return obj.as_posix()

    if isinstance(obj, Enum):
        return normalize_payload(obj.value)

    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return normalize_payload(to_dict())

    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        return {str(k): normalize_payload(v) for k, v in mapping.items()}

    if isinstance(obj, (set, frozenset)):
        items: list[object] = [normalize_payload(v) for v in cast("set[object]", obj)]
        return sorted(items, key=repr)

    if isinstance(obj, (list, tuple)):
        seq: Iterator[object] = iter(cast("list[object]", obj))
        return [normalize_payload(v) for v in seq]

    return obj
