"""Chunk record produced by the splitter and consumed by display and export."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Chunk:
    index: int
    text: str
    start: int = 0

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return self.start + self.length

    def summary(self, length: int = 120) -> str:
        """Return a one-line preview of the chunk for listings and logs."""
        snippet = " ".join(self.text.split())
        return snippet[:length] + ("..." if len(snippet) > length else "")

    def as_row(self) -> Tuple[int, str, int]:
        """Sequence number, content and character count, in export column order."""
        return self.index, self.text, self.length
