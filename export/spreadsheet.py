"""Tabular export of split chunks to Excel or CSV."""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter

from core.chunk import Chunk
from core.config import DEFAULT_SHEET_NAME

LOGGER = logging.getLogger(__name__)

COLUMNS = ["No.", "Content", "Characters"]
COLUMN_WIDTHS = [10, 100, 15]
CONTENT_COLUMN = COLUMNS.index("Content") + 1

XLSX_SUFFIXES = {".xlsx"}
CSV_SUFFIXES = {".csv"}


def chunks_to_frame(chunks: Sequence[Chunk]) -> pd.DataFrame:
    """One row per chunk: sequence number, content, character count."""
    return pd.DataFrame([chunk.as_row() for chunk in chunks], columns=COLUMNS)


def _drop_illegal_characters(frame: pd.DataFrame) -> pd.DataFrame:
    """Remove control characters the xlsx format cannot store (form feeds from PDFs etc.)."""
    content = frame["Content"].str.replace(ILLEGAL_CHARACTERS_RE, "", regex=True)
    changed = int((content != frame["Content"]).sum())
    if changed:
        LOGGER.warning("Removed control characters from %d chunk(s) for .xlsx export", changed)
    return frame.assign(Content=content)


def _write_xlsx(frame: pd.DataFrame, path: Path, sheet_name: str) -> None:
    frame = _drop_illegal_characters(frame)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
        worksheet = writer.sheets[sheet_name]
        # Content is text even when it starts with "=", never a formula
        for (cell,) in worksheet.iter_rows(
            min_row=2, min_col=CONTENT_COLUMN, max_col=CONTENT_COLUMN
        ):
            cell.data_type = "s"
        for position, width in enumerate(COLUMN_WIDTHS, start=1):
            worksheet.column_dimensions[get_column_letter(position)].width = width
        worksheet.freeze_panes = "A2"


def export_chunks(
    chunks: Sequence[Chunk],
    path: Union[str, Path],
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """
    Write chunks to `path`; the format follows the file suffix.

    Raises:
        RuntimeError: when there is nothing to export
        ValueError: for a suffix other than .xlsx or .csv
    """
    if not chunks:
        raise RuntimeError("No chunks to export; split some text first.")

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in XLSX_SUFFIXES | CSV_SUFFIXES:
        raise ValueError(f"Unsupported export format {suffix or '(none)'!r}; use .xlsx or .csv")

    path.parent.mkdir(parents=True, exist_ok=True)
    frame = chunks_to_frame(chunks)

    if suffix in XLSX_SUFFIXES:
        _write_xlsx(frame, path, sheet_name)
    else:
        # BOM so spreadsheet tools pick up UTF-8
        frame.to_csv(path, index=False, encoding="utf-8-sig")

    LOGGER.info("Exported %d chunks to %s", len(frame), path)
    return path


def read_exported(path: Union[str, Path]) -> pd.DataFrame:
    """Load an export written by `export_chunks` back into a frame."""
    path = Path(path)
    options = {"dtype": {"Content": str}, "keep_default_na": False}
    if path.suffix.lower() in XLSX_SUFFIXES:
        return pd.read_excel(path, engine="openpyxl", **options)
    return pd.read_csv(path, encoding="utf-8-sig", **options)
