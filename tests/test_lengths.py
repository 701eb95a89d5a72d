import pytest

from chunking.boundary import split_chunks
from core.chunk import Chunk
from evaluation.lengths import check_chunks, length_stats


def test_length_stats():
    chunks = [Chunk(index=i, text="x" * n) for i, n in enumerate([10, 20, 30, 40], start=1)]
    stats = length_stats(chunks)
    assert stats["count"] == 4
    assert stats["total"] == 100
    assert stats["min"] == 10
    assert stats["max"] == 40
    assert stats["mean"] == 25
    assert stats["p95"] == pytest.approx(38.5)


def test_length_stats_empty():
    assert length_stats([]) == {"count": 0, "total": 0, "min": 0.0, "max": 0.0, "mean": 0.0, "p95": 0.0}


@pytest.mark.parametrize("text", ["", "  ", "One. Two three four five.", "x" * 57, "a  b\tc\nd. e"])
def test_real_splits_pass_all_checks(text):
    assert check_chunks(text, split_chunks(text, 6), 6)["ok"]


def test_checks_flag_violations():
    text = "alpha beta"
    report = check_chunks(text, [Chunk(index=1, text=" alpha beta ")], 5)
    assert not report["bounded"]
    assert not report["trimmed"]
    assert report["ordered"]
    assert not report["ok"]

    report = check_chunks(text, [Chunk(index=1, text="beta"), Chunk(index=2, text="alpha")], 5)
    assert not report["ordered"]

    assert not check_chunks(text, [], 5)["non_empty"]
    assert not check_chunks(text, [Chunk(index=1, text="")], 5)["non_empty"]
