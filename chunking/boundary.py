"""Bounded-length chunking that prefers sentence, then word boundaries."""

import logging
from typing import Iterator, List, Tuple

from core.chunk import Chunk

LOGGER = logging.getLogger(__name__)

MAX_CHUNK_LENGTH = 1000
SENTENCE_DELIMITER = "."
WORD_DELIMITER = " "


def validate_max_len(max_len: int) -> int:
    """Reject anything that is not a positive integer."""
    if isinstance(max_len, bool) or not isinstance(max_len, int):
        raise ValueError(f"max_len must be an integer, got {type(max_len).__name__}")
    if max_len <= 0:
        raise ValueError(f"max_len must be positive, got {max_len}")
    return max_len


def _find_split(window: str, max_len: int) -> int:
    """Return the cut position inside `window` (exclusive end of the chunk)."""
    # A delimiter at index 0 would give an empty chunk, so both searches skip it.
    split_index = window.rfind(SENTENCE_DELIMITER)
    if split_index <= 0:
        split_index = window.rfind(WORD_DELIMITER)

    if split_index <= 0:
        return max_len
    return split_index + 1


def iter_chunk_spans(text: str, max_len: int = MAX_CHUNK_LENGTH) -> Iterator[Tuple[int, int]]:
    """
    Yield `(start, end)` offsets into `text` for each chunk.

    `text[start:end]` is the trimmed chunk. The remaining text is kept
    trimmed between steps, so every span starts and ends on a non-whitespace
    character and each step consumes at least one character.
    """
    validate_max_len(max_len)

    end = len(text.rstrip())
    start = len(text) - len(text.lstrip())

    while start < end:
        if end - start <= max_len:
            yield start, end
            return

        window = text[start : start + max_len]
        cut = start + _find_split(window, max_len)
        yield start, start + len(text[start:cut].rstrip())

        start = cut
        while start < end and text[start].isspace():
            start += 1


def split_text(text: str, max_len: int = MAX_CHUNK_LENGTH) -> List[str]:
    """
    Split text into trimmed chunks no longer than `max_len` characters.

    Args:
        text: Input text, may be empty or whitespace-only
        max_len: Maximum characters per chunk, must be >= 1

    Returns:
        Chunks in document order; empty when the trimmed text is empty
    """
    return [text[start:end] for start, end in iter_chunk_spans(text, max_len)]


def split_chunks(text: str, max_len: int = MAX_CHUNK_LENGTH) -> List[Chunk]:
    """Split text and wrap each piece in a numbered `Chunk`."""
    chunks = [
        Chunk(index=i, text=text[start:end], start=start)
        for i, (start, end) in enumerate(iter_chunk_spans(text, max_len), start=1)
    ]
    LOGGER.debug("Split %d chars into %d chunks (max_len=%d)", len(text), len(chunks), max_len)
    return chunks
