from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import FeatureFlags
from table_browser.ui.ids import IDs


def build_table_panel(features: FeatureFlags, page_size_options: List[int], default_page_size: int) -> dbc.Card:
    """
    Table card: the rendered page plus the pager row underneath.
    """
    page_size = dcc.Dropdown(
        id=IDs.Control.PAGE_SIZE_SELECT,
        options=[{"label": str(n), "value": n} for n in page_size_options],
        value=default_page_size,
        clearable=False,
        style={
            "width": "100px",
            **({} if features.page_size_control and features.pagination else {"display": "none"}),
        },
    )

    pager = html.Div(
        [
            dbc.Button("‹", id=IDs.Control.PREV_PAGE_BTN, color="light", size="sm", disabled=True),
            html.Span(id=IDs.Control.PAGE_LABEL, className="mx-2"),
            dbc.Button("›", id=IDs.Control.NEXT_PAGE_BTN, color="light", size="sm", disabled=True),
        ],
        className="d-flex align-items-center",
        style={} if features.pagination else {"display": "none"},
    )

    return dbc.Card(
        dbc.CardBody(
            [
                html.Div(id=IDs.Control.TABLE_CONTAINER, className="tb-table-container"),
                html.Div(
                    [
                        page_size,
                        html.Small(id=IDs.Control.SELECTION_SUMMARY, className="text-muted"),
                        pager,
                    ],
                    className="d-flex w-100 align-items-center justify-content-between mt-3",
                ),
            ]
        ),
        className="mt-3",
    )
