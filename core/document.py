"""Input text loaded from a file, stdin or the command line."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class Document:
    """Raw text to split, tagged with its origin."""

    id: str
    text: str
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, doc_id: str = "text") -> "Document":
        return cls(id=doc_id, text=text, metadata={"source": doc_id})

    @property
    def source(self) -> str:
        return self.metadata.get("source", self.id)

    @property
    def character_count(self) -> int:
        return len(self.text)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

