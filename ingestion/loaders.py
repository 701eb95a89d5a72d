"""Loaders that turn files, PDFs and stdin into documents ready for splitting."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from core.document import Document

LOGGER = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md", ".rst", ".json", ".csv"}
PDF_EXTENSIONS = {".pdf"}
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | PDF_EXTENSIONS
BOM = "\ufeff"


def _pdf_pages_pymupdf(path: Path) -> Optional[str]:
    try:
        import fitz  # pymupdf
    except ImportError:
        return None

    try:
        with fitz.open(str(path)) as doc:
            pages = [page.get_text("text") for page in doc]
    except Exception as e:
        LOGGER.debug("PyMuPDF failed for %s: %s", path, e)
        return None
    return "\n\n".join(text for text in pages if text.strip())


def _pdf_pages_pdfplumber(path: Path) -> Optional[str]:
    try:
        import pdfplumber
    except ImportError:
        return None

    try:
        with pdfplumber.open(str(path)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        LOGGER.debug("pdfplumber failed for %s: %s", path, e)
        return None
    return "\n\n".join(text for text in pages if text.strip())


def _pdf_pages_pypdf2(path: Path) -> Optional[str]:
    try:
        from PyPDF2 import PdfReader
    except ImportError:
        return None

    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        LOGGER.debug("PyPDF2 failed for %s: %s", path, e)
        return None
    return "\n\n".join(text for text in pages if text.strip())


def extract_pdf_text(path: Path) -> Optional[str]:
    """
    Extract the text layer of a PDF with the first library that succeeds.
    Order: PyMuPDF, pdfplumber, PyPDF2.
    """
    extractors = [
        ("PyMuPDF", _pdf_pages_pymupdf),
        ("pdfplumber", _pdf_pages_pdfplumber),
        ("PyPDF2", _pdf_pages_pypdf2),
    ]

    for name, extractor in extractors:
        text = extractor(path)
        if text and text.strip():
            LOGGER.info("Extracted %d chars from %s using %s", len(text), path.name, name)
            return text

    LOGGER.warning("Could not extract text from PDF: %s", path)
    return None


def load_text_file(path: Path) -> Optional[str]:
    """Read a text file as UTF-8 (dropping a leading BOM), falling back to latin-1."""
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        LOGGER.debug("%s is not valid UTF-8; retrying as latin-1", path)
        return path.read_text(encoding="latin-1")
    except OSError as e:
        LOGGER.warning("Could not read %s: %s", path, e)
        return None


def load_document(path: Path) -> Optional[Document]:
    """Load one input file; None when it is missing, unsupported or unreadable."""
    path = Path(path)
    if not path.is_file():
        LOGGER.warning("Not a file: %s", path)
        return None

    suffix = path.suffix.lower()
    if suffix in PDF_EXTENSIONS:
        text = extract_pdf_text(path)
    elif suffix in TEXT_EXTENSIONS:
        text = load_text_file(path)
    else:
        LOGGER.warning(
            "Unsupported file type %r for %s (supported: %s)",
            suffix,
            path,
            ", ".join(sorted(SUPPORTED_EXTENSIONS)),
        )
        return None

    if text is None:
        return None

    if not text.strip():
        LOGGER.warning("No text content in %s", path)

    return Document(
        id=path.stem,
        text=text,
        metadata={
            "source": str(path.resolve()),
            "filename": path.name,
            "extension": suffix,
        },
    )


def load_stdin(stream: Optional[TextIO] = None) -> Document:
    """Read all of standard input (or `stream`) into a document."""
    stream = stream if stream is not None else sys.stdin
    text = stream.read()
    if text.startswith(BOM):
        text = text[1:]
    LOGGER.debug("Read %d chars from stdin", len(text))
    return Document(id="stdin", text=text, metadata={"source": "stdin"})


def document_from_text(text: str) -> Document:
    """Wrap literal text given on the command line."""
    return Document.from_text(text)
