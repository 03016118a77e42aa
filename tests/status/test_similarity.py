# topmark:header:start
#
#   project      : Tristat
#   file         : test_similarity.py
#   file_relpath : tests/status/test_similarity.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the shared-block similarity metric."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from tests.conftest import mark_property, numbered_lines
from tristat.status.similarity import CHUNK_SIZE, iter_chunks, similarity


def test_identical_blobs_score_one() -> None:
    """Equal content is a perfect match."""
    assert similarity(b"a\nb\n", b"a\nb\n") == 1.0
    assert similarity(b"", b"") == 1.0


def test_empty_against_content_scores_zero() -> None:
    """Nothing is shared with an empty blob."""
    assert similarity(b"", b"a\n") == 0.0
    assert similarity(b"a\n", b"") == 0.0


def test_one_changed_line_out_of_twenty() -> None:
    """Changing one of twenty equal-length lines leaves 95% in common."""
    old: bytes = numbered_lines(20)
    new: bytes = old.replace(b"line 19\n", b"LINE 19\n")
    assert similarity(old, new) == 0.95


def test_unrelated_content_scores_zero() -> None:
    """Blobs without a common chunk score zero."""
    assert similarity(b"alpha\nbeta\n", b"gamma\ndelta\n") == 0.0


def test_long_lines_are_split() -> None:
    """Lines longer than the chunk size are cut into fixed-size pieces."""
    data: bytes = b"x" * (CHUNK_SIZE * 2 + 5) + b"\n"
    chunks: list[bytes] = iter_chunks(data)
    assert [len(c) for c in chunks] == [CHUNK_SIZE, CHUNK_SIZE, 6]
    assert b"".join(chunks) == data


@mark_property
@given(a=st.binary(max_size=300), b=st.binary(max_size=300))
def test_similarity_is_bounded_and_symmetric(a: bytes, b: bytes) -> None:
    """Scores stay in [0, 1] and do not depend on argument order."""
    score: float = similarity(a, b)
    assert 0.0 <= score <= 1.0
    assert score == similarity(b, a)


@mark_property
@given(data=st.binary(max_size=500))
def test_chunks_reassemble(data: bytes) -> None:
    """Chunking never loses or reorders bytes."""
    assert b"".join(iter_chunks(data)) == data
