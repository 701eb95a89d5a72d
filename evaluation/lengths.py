"""Length statistics and invariant checks for a split."""

from typing import Dict, Sequence

import numpy as np

from core.chunk import Chunk


def length_stats(chunks: Sequence[Chunk]) -> Dict[str, float]:
    """Summarize chunk lengths: count, total, min, max, mean and 95th percentile."""
    if not chunks:
        return {"count": 0, "total": 0, "min": 0.0, "max": 0.0, "mean": 0.0, "p95": 0.0}

    lengths = np.array([chunk.length for chunk in chunks], dtype=np.int64)
    return {
        "count": int(lengths.size),
        "total": int(lengths.sum()),
        "min": float(lengths.min()),
        "max": float(lengths.max()),
        "mean": float(lengths.mean()),
        "p95": float(np.percentile(lengths, 95)),
    }


def _squeeze(text: str) -> str:
    return "".join(text.split())


def check_chunks(text: str, chunks: Sequence[Chunk], max_len: int) -> Dict[str, bool]:
    """
    Verify a split against the source text.

    bounded: every chunk fits in `max_len`
    non_empty: no empty chunk, and some chunk whenever the text has content
    trimmed: no chunk starts or ends with whitespace
    ordered: the chunks carry the text's non-whitespace characters in order
    """
    pieces = [chunk.text for chunk in chunks]
    result = {
        "bounded": all(len(piece) <= max_len for piece in pieces),
        "non_empty": all(pieces) and (bool(pieces) or not text.strip()),
        "trimmed": all(piece == piece.strip() for piece in pieces),
        "ordered": _squeeze("".join(pieces)) == _squeeze(text),
    }
    result["ok"] = all(result.values())
    return result
