import pytest
from openpyxl import load_workbook

from chunking.boundary import split_chunks
from core.chunk import Chunk
from export.spreadsheet import COLUMNS, chunks_to_frame, export_chunks, read_exported

TEXT = "This is a sentence. And another one. 12345 NA"


def test_frame_columns_and_rows():
    frame = chunks_to_frame(split_chunks(TEXT, 20))
    assert list(frame.columns) == COLUMNS
    assert frame["No."].tolist() == [1, 2, 3]
    assert frame["Content"].tolist() == ["This is a sentence.", "And another one.", "12345 NA"]
    assert frame["Characters"].tolist() == [19, 16, 8]


def test_xlsx_export(tmp_path):
    chunks = split_chunks(TEXT, 20)
    path = export_chunks(chunks, tmp_path / "nested" / "out.xlsx", sheet_name="Chunks")
    assert path.exists()

    workbook = load_workbook(path)
    sheet = workbook["Chunks"]
    assert [cell.value for cell in sheet[1]] == COLUMNS
    assert sheet.column_dimensions["A"].width == 10
    assert sheet.column_dimensions["B"].width == 100
    assert sheet.column_dimensions["C"].width == 15
    assert sheet.freeze_panes == "A2"

    frame = read_exported(path)
    assert frame["Content"].tolist() == [c.text for c in chunks]


def test_csv_export_round_trips_text(tmp_path):
    chunks = split_chunks(TEXT, 20)
    path = export_chunks(chunks, tmp_path / "out.csv")
    assert path.read_bytes().startswith(b"\xef\xbb\xbf")
    frame = read_exported(path)
    assert frame["Content"].tolist() == [c.text for c in chunks]
    assert frame["Characters"].tolist() == [c.length for c in chunks]


def test_export_refuses_empty_split(tmp_path):
    with pytest.raises(RuntimeError, match="No chunks"):
        export_chunks([], tmp_path / "out.xlsx")


def test_export_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        export_chunks(split_chunks(TEXT, 20), tmp_path / "out.json")


FORMULA_LIKE = [
    Chunk(index=1, text="=SUM(1,2) is text."),
    Chunk(index=2, text="====== heading"),
    Chunk(index=3, text="+84 90 123 4567"),
    Chunk(index=4, text="- bullet item"),
    Chunk(index=5, text="@mention here"),
    Chunk(index=6, text="Xin chào thế giới. Привет. 你好。"),
]


@pytest.mark.parametrize("name", ["out.xlsx", "out.csv"])
def test_formula_like_and_non_latin_text_stays_text(tmp_path, name):
    path = export_chunks(FORMULA_LIKE, tmp_path / name)
    frame = read_exported(path)
    assert frame["Content"].tolist() == [c.text for c in FORMULA_LIKE]
    assert frame["Characters"].tolist() == [c.length for c in FORMULA_LIKE]


def test_xlsx_content_cells_are_strings(tmp_path):
    chunks = split_chunks("=SUM(1,2) is text. ====== heading", 20)
    path = export_chunks(chunks, tmp_path / "out.xlsx")
    sheet = load_workbook(path).active
    cells = [row[0] for row in sheet.iter_rows(min_row=2, min_col=2, max_col=2)]
    assert [(cell.value, cell.data_type) for cell in cells] == [
        ("=SUM(1,2) is text.", "s"),
        ("====== heading", "s"),
    ]


def test_xlsx_drops_control_characters(tmp_path):
    chunks = split_chunks("page one.\x0cpage two\x07 end\x0b", 100)
    frame = read_exported(export_chunks(chunks, tmp_path / "out.xlsx"))
    assert frame["Content"].tolist() == ["page one.page two end"]
    # the count still describes the chunk as split
    assert frame["Characters"].tolist() == [chunks[0].length]


def test_csv_keeps_control_characters(tmp_path):
    chunks = split_chunks("page one.\x0cpage two\x07 end", 100)
    frame = read_exported(export_chunks(chunks, tmp_path / "out.csv"))
    assert frame["Content"].tolist() == ["page one.\x0cpage two\x07 end"]
