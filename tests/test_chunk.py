from core.chunk import Chunk
from core.document import Document


def test_chunk_length_and_row():
    chunk = Chunk(index=3, text="Hello world.", start=40)
    assert chunk.length == 12
    assert chunk.end == 52
    assert chunk.as_row() == (3, "Hello world.", 12)


def test_chunk_summary_collapses_whitespace_and_truncates():
    chunk = Chunk(index=1, text="line one\nline   two")
    assert chunk.summary() == "line one line two"
    assert chunk.summary(8) == "line one..."


def test_document_from_text():
    doc = Document.from_text("  ")
    assert doc.id == "text"
    assert doc.source == "text"
    assert doc.is_blank
    assert doc.character_count == 2

