from __future__ import annotations

import csv
import io
import logging
from typing import Any, Dict, List, Optional

import pandas as pd
import plotly.graph_objs as go

from table_browser.core.dataset import Dataset, Row
from table_browser.core.exceptions import ExportError
from table_browser.core.pipeline import ViewPipeline, filter_rows, sort_rows
from table_browser.core.view_state import ViewState
from table_browser.export.model import (
    CONTENT_TYPES,
    DEFAULT_FILENAMES,
    EmptyCellPolicy,
    ExportedTable,
    ExportFormat,
)

logger = logging.getLogger(__name__)


class ExportService:
    """
    Turns the currently relevant rows/columns of a table into export payloads.

    Row set: the sorted rows (also search-filtered when respect_search is set),
    narrowed to the selected rows if any are selected.
    Column set: the visible columns, in dataset order.

    Stateless apart from its settings: every call reads the dataset and view
    state it is given.
    """

    def __init__(
            self,
            *,
            empty_cell: Optional[EmptyCellPolicy] = None,
            respect_search: bool = False,
            sheet_name: str = "Sheet1",
            pdf_title: str = "Table export",
            filenames: Optional[Dict[ExportFormat, str]] = None,
            pipeline: Optional[ViewPipeline] = None,
    ) -> None:
        self.empty_cell = empty_cell or EmptyCellPolicy()
        self.respect_search = respect_search
        self.sheet_name = sheet_name
        self.pdf_title = pdf_title
        self.filenames = {**DEFAULT_FILENAMES, **(filenames or {})}
        self._pipeline = pipeline

    # -------------------------------------------------------------------------
    # Row / column selection
    # -------------------------------------------------------------------------
    def export_rows(self, dataset: Dataset, state: ViewState) -> List[Row]:
        term = state.search_term if self.respect_search else ""
        if self._pipeline is not None:
            rows = self._pipeline.filtered_rows(dataset, state.sort, term)
        else:
            rows = filter_rows(sort_rows(dataset.materialize_rows(), state.sort), term)

        if state.selected_rows:
            rows = [row for row in rows if row.token in state.selected_rows]
        return list(rows)

    def export_columns(self, dataset: Dataset, state: ViewState) -> List[str]:
        return state.visible_columns(dataset.column_ids)

    # -------------------------------------------------------------------------
    # Sinks
    # -------------------------------------------------------------------------
    def to_csv(self, dataset: Dataset, state: ViewState) -> str:
        """
        Header line of visible column ids, then one line per row.

        Lines are joined with "\\n" (no trailing newline). Cells containing the
        delimiter, quotes or line breaks are quoted.
        """
        columns = self.export_columns(dataset, state)
        if not columns:
            return ""

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerow(columns)
        for row in self.export_rows(dataset, state):
            cells = [self.empty_cell.format(row[c]) for c in columns]
            if not any(cells):
                # csv writes a lone empty field as '""'; a blank row is a bare line
                buf.write(",".join(cells) + "\n")
                continue
            writer.writerow(cells)

        text = buf.getvalue()
        return text[:-1] if text.endswith("\n") else text

    def to_spreadsheet_records(self, dataset: Dataset, state: ViewState) -> List[Dict[str, Any]]:
        """One dict per row keyed by visible column id; numbers stay numeric."""
        columns = self.export_columns(dataset, state)
        records: List[Dict[str, Any]] = []
        for row in self.export_rows(dataset, state):
            records.append(
                {
                    c: self.empty_cell.placeholder if self.empty_cell.is_empty(row[c]) else row[c]
                    for c in columns
                }
            )
        return records

    def to_xlsx(self, dataset: Dataset, state: ViewState) -> bytes:
        columns = self.export_columns(dataset, state)
        df = pd.DataFrame(self.to_spreadsheet_records(dataset, state), columns=columns)

        buf = io.BytesIO()
        try:
            df.to_excel(buf, sheet_name=self.sheet_name, index=False, engine="openpyxl")
        except Exception as e:
            raise ExportError(f"Spreadsheet export failed: {e}") from e
        return buf.getvalue()

    def build_pdf_figure(self, dataset: Dataset, state: ViewState) -> go.Figure:
        """Titled table layout: header row of column ids, body of formatted cells."""
        columns = self.export_columns(dataset, state)
        rows = self.export_rows(dataset, state)

        # go.Table takes column-major cell values
        cell_columns = [[self.empty_cell.format(row[c]) for row in rows] for c in columns]

        fig = go.Figure(
            data=[
                go.Table(
                    header=dict(values=columns, align="left", fill_color="#f3f4f6"),
                    cells=dict(values=cell_columns, align="left"),
                )
            ]
        )
        fig.update_layout(
            title=self.pdf_title,
            height=max(300, 120 + 28 * (len(rows) + 1)),
            margin=dict(l=20, r=20, t=60, b=20),
        )
        return fig

    def to_pdf(self, dataset: Dataset, state: ViewState) -> bytes:
        fig = self.build_pdf_figure(dataset, state)
        try:
            # Requires kaleido
            return fig.to_image(format="pdf")
        except Exception as e:
            raise ExportError(f"PDF export failed: {e}") from e

    def to_clipboard_text(self, dataset: Dataset, state: ViewState, *, include_header: bool = False) -> str:
        """Tab-separated cells, newline-separated rows. Tabs/newlines inside cells become spaces."""
        columns = self.export_columns(dataset, state)
        if not columns:
            return ""

        def clean(text: str) -> str:
            return text.replace("\t", " ").replace("\r", " ").replace("\n", " ")

        lines: List[str] = []
        if include_header:
            lines.append("\t".join(clean(c) for c in columns))
        for row in self.export_rows(dataset, state):
            lines.append("\t".join(clean(self.empty_cell.format(row[c])) for c in columns))
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------
    def export(
            self,
            fmt: ExportFormat,
            dataset: Dataset,
            state: ViewState,
            *,
            filename: Optional[str] = None,
    ) -> ExportedTable:
        """
        Build the payload for one sink.

        Raises:
            ExportError: if the format is unknown or the sink cannot produce its payload
        """
        try:
            fmt = ExportFormat(fmt)
        except ValueError as e:
            raise ExportError(f"Unknown export format: {fmt!r}") from e
        if fmt is ExportFormat.CSV:
            content: Any = self.to_csv(dataset, state)
        elif fmt is ExportFormat.XLSX:
            content = self.to_xlsx(dataset, state)
        elif fmt is ExportFormat.PDF:
            content = self.to_pdf(dataset, state)
        else:
            content = self.to_clipboard_text(dataset, state)

        row_count = len(self.export_rows(dataset, state))
        logger.info(
            "Exported table",
            extra={
                "dataset": dataset.name,
                "format": fmt.value,
                "rows": row_count,
                "selected_only": bool(state.selected_rows),
            },
        )
        return ExportedTable(
            format=fmt,
            filename=filename or self.filenames.get(fmt),
            content=content,
            content_type=CONTENT_TYPES[fmt],
            row_count=row_count,
        )
