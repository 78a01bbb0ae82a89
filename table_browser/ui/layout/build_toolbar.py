from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import FeatureFlags
from table_browser.ui.ids import IDs


def _hidden_unless(enabled: bool) -> dict:
    # Controls stay in the layout so callbacks can always bind to them
    return {} if enabled else {"display": "none"}


def build_toolbar(features: FeatureFlags, columns: List[str]) -> dbc.Card:
    """
    Toolbar above the table:

    - search box (left)
    - export / copy / delete buttons (right)
    - column visibility checklist (below)
    """
    search = dbc.Input(
        id=IDs.Control.SEARCH_INPUT,
        type="search",
        placeholder="Search...",
        debounce=True,
        value="",
        style={"maxWidth": "360px", **_hidden_unless(features.search_bar)},
    )

    actions = html.Div(
        [
            dbc.Button("CSV", id=IDs.Control.CSV_EXPORT_BTN, color="secondary", outline=True,
                       size="sm", style=_hidden_unless(features.csv_export)),
            dbc.Button("Excel", id=IDs.Control.XLSX_EXPORT_BTN, color="success", outline=True,
                       size="sm", style=_hidden_unless(features.excel_export)),
            dbc.Button("PDF", id=IDs.Control.PDF_EXPORT_BTN, color="danger", outline=True,
                       size="sm", style=_hidden_unless(features.pdf_export)),
            html.Span(
                dcc.Clipboard(id=IDs.Control.COPY_ROWS, title="Copy rows", className="tb-clipboard"),
                style=_hidden_unless(features.row_copy),
            ),
            dbc.Button("Clear selection", id=IDs.Control.CLEAR_SELECTION_BTN, color="light", size="sm"),
            dbc.Button("Delete selected", id=IDs.Control.DELETE_ROWS_BTN, color="danger",
                       size="sm", disabled=True, style=_hidden_unless(features.removable_rows)),
            dbc.Button("Reload", id=IDs.Control.RELOAD_TABLE_BTN, color="light", size="sm",
                       style=_hidden_unless(features.table_reload)),
        ],
        className="d-flex align-items-center gap-2",
    )

    visibility = html.Div(
        [
            html.Small("Columns", className="text-muted me-2"),
            dbc.Checklist(
                id=IDs.Control.COLUMN_VISIBILITY,
                options=[{"label": c, "value": c} for c in columns],
                value=list(columns),
                inline=True,
                switch=True,
            ),
        ],
        className="d-flex align-items-center mt-2",
        style=_hidden_unless(features.column_visibility),
    )

    return dbc.Card(
        dbc.CardBody(
            [
                html.Div([search, actions], className="d-flex w-100 align-items-center justify-content-between"),
                visibility,
                dcc.Download(id=IDs.Control.DOWNLOAD_CSV),
                dcc.Download(id=IDs.Control.DOWNLOAD_XLSX),
                dcc.Download(id=IDs.Control.DOWNLOAD_PDF),
            ]
        ),
        className="tb-toolbar mt-3",
    )
