from __future__ import annotations

import io

import pandas as pd
import plotly.graph_objs as go
import pytest

from table_browser.core.dataset import Dataset
from table_browser.core.exceptions import ExportError
from table_browser.core.pipeline import ViewPipeline
from table_browser.core.view_state import SortConfig, SortDirection, ViewState
from table_browser.export.model import EmptyCellPolicy, ExportFormat
from table_browser.services.export_service import ExportService


@pytest.fixture()
def small() -> Dataset:
    return Dataset.from_records(
        {
            "col1": ["v11", "v21", "v31"],
            "col2": ["v12", "v22", "v32"],
        }
    )


@pytest.fixture()
def mixed() -> Dataset:
    return Dataset.from_records(
        {
            "name": ["Ann", "Bob", "Cid"],
            "age": [30, 0, 25],
            "note": ["a, b", 'say "hi"', ""],
            "active": [True, False],
        }
    )


@pytest.fixture()
def svc() -> ExportService:
    return ExportService()


def test_csv_exact_output(small: Dataset, svc: ExportService):
    assert svc.to_csv(small, ViewState()) == "col1,col2\nv11,v12\nv21,v22\nv31,v32"


def test_csv_quotes_delimiters_and_quotes(mixed: Dataset, svc: ExportService):
    lines = svc.to_csv(mixed, ViewState()).split("\n")
    assert lines[0] == "name,age,note,active"
    assert lines[1] == 'Ann,30,"a, b",true'
    assert lines[2] == 'Bob,0,"say ""hi""",false'
    assert lines[3] == "Cid,25,,"


def test_csv_respects_visibility_selection_and_sort(mixed: Dataset, svc: ExportService):
    state = ViewState(
        sort=SortConfig("age", SortDirection.ASCENDING),
        selected_rows={"0", "1"},
        column_visibility={"note": False, "active": False},
    )
    assert svc.to_csv(mixed, state) == "name,age\nBob,0\nAnn,30"


def test_export_ignores_search_by_default(mixed: Dataset, svc: ExportService):
    state = ViewState(search_term="ann")
    assert len(svc.export_rows(mixed, state)) == 3

    filtered = ExportService(respect_search=True)
    assert [r["name"] for r in filtered.export_rows(mixed, state)] == ["Ann"]


def test_hidden_column_still_matches_search_but_is_not_exported(mixed: Dataset):
    svc = ExportService(respect_search=True, pipeline=ViewPipeline())
    state = ViewState(search_term='"hi"', column_visibility={"note": False})

    assert svc.to_csv(mixed, state) == "name,age,active\nBob,0,false"


def test_no_visible_columns_gives_empty_text(small: Dataset, svc: ExportService):
    state = ViewState(column_visibility={"col1": False, "col2": False})
    assert svc.to_csv(small, state) == ""
    assert svc.to_clipboard_text(small, state) == ""


def test_clipboard_is_tab_separated_without_header(small: Dataset, svc: ExportService):
    text = svc.to_clipboard_text(small, ViewState(selected_rows={"2"}))
    assert text == "v31\tv32"

    with_header = svc.to_clipboard_text(small, ViewState(), include_header=True)
    assert with_header.split("\n")[0] == "col1\tcol2"


def test_clipboard_flattens_tabs_and_newlines(svc: ExportService):
    ds = Dataset.from_records({"a": ["x\ty"], "b": ["line1\nline2"]})
    assert svc.to_clipboard_text(ds, ViewState()) == "x y\tline1 line2"


def test_spreadsheet_records_use_placeholder(mixed: Dataset):
    svc = ExportService(empty_cell=EmptyCellPolicy(placeholder="FALSE", falsy_is_empty=True))
    records = svc.to_spreadsheet_records(mixed, ViewState())

    assert records[0] == {"name": "Ann", "age": 30, "note": "a, b", "active": True}
    assert records[1]["age"] == "FALSE"
    assert records[1]["active"] == "FALSE"
    assert records[2]["note"] == "FALSE"
    assert records[2]["active"] == "FALSE"


def test_empty_cell_policy_is_shared_across_sinks(mixed: Dataset):
    svc = ExportService(empty_cell=EmptyCellPolicy(placeholder="-"))
    state = ViewState(selected_rows={"2"})

    assert svc.to_csv(mixed, state).split("\n")[1] == "Cid,25,-,-"
    assert svc.to_clipboard_text(mixed, state) == "Cid\t25\t-\t-"


def test_xlsx_is_single_named_sheet(mixed: Dataset):
    svc = ExportService(sheet_name="People")
    content = svc.to_xlsx(mixed, ViewState(column_visibility={"note": False}))

    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["People"]
    assert list(sheets["People"].columns) == ["name", "age", "active"]
    assert len(sheets["People"]) == 3


def test_pdf_figure_layout(mixed: Dataset):
    svc = ExportService(pdf_title="People")
    fig = svc.build_pdf_figure(mixed, ViewState(column_visibility={"note": False}))

    table = fig.data[0]
    assert isinstance(table, go.Table)
    assert list(table.header.values) == ["name", "age", "active"]
    assert [list(col) for col in table.cells.values] == [
        ["Ann", "Bob", "Cid"],
        ["30", "0", "25"],
        ["true", "false", ""],
    ]
    assert fig.layout.title.text == "People"


def test_pdf_export_is_mockable(monkeypatch, mixed: Dataset, svc: ExportService):
    called = {"format": None}

    def _fake_to_image(self, *args, **kwargs):
        called["format"] = kwargs.get("format")
        return b"%PDF-fake"

    monkeypatch.setattr(go.Figure, "to_image", _fake_to_image, raising=True)

    exported = svc.export(ExportFormat.PDF, mixed, ViewState())

    assert called["format"] == "pdf"
    assert exported.content == b"%PDF-fake"
    assert exported.filename == "data.pdf"
    assert exported.content_type == "application/pdf"
    assert exported.is_binary


def test_pdf_failure_is_reported_as_export_error(monkeypatch, mixed: Dataset, svc: ExportService):
    def _boom(self, *args, **kwargs):
        raise RuntimeError("kaleido missing")

    monkeypatch.setattr(go.Figure, "to_image", _boom, raising=True)

    with pytest.raises(ExportError):
        svc.to_pdf(mixed, ViewState())


def test_export_entry_point_for_text_sinks(small: Dataset):
    svc = ExportService(filenames={ExportFormat.CSV: "people.csv"})

    csv_out = svc.export(ExportFormat.CSV, small, ViewState(selected_rows={"0"}))
    assert csv_out.filename == "people.csv"
    assert csv_out.row_count == 1
    assert csv_out.content == "col1,col2\nv11,v12"
    assert not csv_out.is_binary

    clip = svc.export("clipboard", small, ViewState())
    assert clip.format is ExportFormat.CLIPBOARD
    assert clip.filename is None
    assert clip.row_count == 3


def test_csv_blank_row_is_an_empty_line(svc: ExportService):
    ds = Dataset.from_records({"a": ["x"], "b": ["y", "z"]})
    state = ViewState(column_visibility={"b": False})

    assert svc.to_csv(ds, state) == "a\nx\n"


def test_csv_blank_row_with_several_columns(svc: ExportService):
    ds = Dataset.from_records({"a": ["x", ""], "b": ["y", ""]})
    assert svc.to_csv(ds, ViewState()) == "a,b\nx,y\n,"


def test_unknown_format_is_an_export_error(small: Dataset, svc: ExportService):
    with pytest.raises(ExportError):
        svc.export("docx", small, ViewState())
