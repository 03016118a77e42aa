# topmark:header:start
#
#   project      : Tristat
#   file         : similarity.py
#   file_relpath : src/tristat/status/similarity.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content similarity for rename and copy detection.

The metric is a shared-block ratio in the spirit of git's ``diffcore-delta``:
content is cut into chunks at line boundaries (lines longer than `CHUNK_SIZE`
bytes are split further), the bytes of identical chunks are counted on both
sides, and

    score = common bytes / max(len(a), len(b))

Two identical blobs score 1.0; two blobs with no chunk in common score 0.0.
The score only depends on the two byte strings, so it is deterministic.
"""

from __future__ import annotations

from collections import Counter
from functools import lru_cache
from typing import Final

CHUNK_SIZE: Final[int] = 64


def iter_chunks(data: bytes) -> list[bytes]:
    """Split ``data`` into line chunks of at most `CHUNK_SIZE` bytes.

    Args:
        data (bytes): Content to split.

    Returns:
        list[bytes]: Chunks whose concatenation equals ``data``.
    """
    chunks: list[bytes] = []
    for line in data.splitlines(keepends=True):
        for start in range(0, len(line), CHUNK_SIZE):
            chunks.append(line[start : start + CHUNK_SIZE])
    return chunks


@lru_cache(maxsize=512)
def chunk_profile(data: bytes) -> Counter[bytes]:
    """Return the number of bytes contributed by each distinct chunk of ``data``."""
    profile: Counter[bytes] = Counter()
    for chunk in iter_chunks(data):
        profile[chunk] += len(chunk)
    return profile


def similarity(a: bytes, b: bytes) -> float:
    """Return the similarity of two blobs, in [0.0, 1.0].

    Args:
        a (bytes): First blob.
        b (bytes): Second blob.

    Returns:
        float: Shared-block ratio; 1.0 for identical content. Two empty blobs
        score 1.0, an empty blob against a non-empty one scores 0.0.
    """
    if a == b:
        return 1.0
    longest: int = max(len(a), len(b))
    if not a or not b:
        return 0.0
    pa: Counter[bytes] = chunk_profile(a)
    pb: Counter[bytes] = chunk_profile(b)
    common: int = sum(min(count, pb[chunk]) for chunk, count in pa.items() if chunk in pb)
    return common / longest
