"""State of an interactive splitting session."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List
import logging

from chunking.boundary import MAX_CHUNK_LENGTH, split_chunks, validate_max_len
from core.chunk import Chunk

LOGGER = logging.getLogger(__name__)


@dataclass
class SplitRecord:
    """One past split, kept for the /history listing."""
    chunk_count: int
    character_count: int
    timestamp: datetime = field(default_factory=datetime.now)


class SplitSession:
    """
    Holds the text being edited and the chunks of the last split.

    The buffer and the chunk list are independent: editing the buffer does
    not discard the previous result until the next split or clear.
    """

    def __init__(self, max_len: int = MAX_CHUNK_LENGTH, max_history: int = 10):
        self.max_len = validate_max_len(max_len)
        if max_history < 0:
            raise ValueError(f"max_history must be >= 0, got {max_history}")
        self.max_history = max_history
        self._lines: List[str] = []
        self.chunks: List[Chunk] = []
        self.history: List[SplitRecord] = []

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def character_count(self) -> int:
        return len(self.text)

    def append(self, line: str) -> None:
        """Add a line of input to the buffer."""
        self._lines.append(line)

    def set_text(self, text: str) -> None:
        """Replace the buffer with `text`."""
        self._lines = text.split("\n") if text else []

    def split(self) -> List[Chunk]:
        """Split the buffer and remember the result."""
        self.chunks = split_chunks(self.text, self.max_len)
        self.history.append(
            SplitRecord(chunk_count=len(self.chunks), character_count=self.character_count)
        )
        del self.history[: len(self.history) - self.max_history]
        return self.chunks

    def get(self, number: int) -> Chunk:
        """Return chunk `number` (1-based) from the last split."""
        if number < 1 or number > len(self.chunks):
            raise IndexError(f"chunk {number} out of range (1-{len(self.chunks)})")
        return self.chunks[number - 1]

    def clear(self) -> None:
        """Drop the buffer and the chunks; history is kept."""
        self._lines = []
        self.chunks = []
        LOGGER.debug("Session cleared")

    def __len__(self) -> int:
        return len(self.chunks)

    def __bool__(self) -> bool:
        return bool(self._lines) or bool(self.chunks)
