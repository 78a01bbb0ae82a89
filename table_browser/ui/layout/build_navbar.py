from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import GlobalConfig
from table_browser.ui.ids import IDs


def build_navbar(
    table_names: List[str],
    global_config: GlobalConfig,
    default_table: Optional[str],
) -> dbc.Navbar:
    selected = default_table or (table_names[0] if table_names else None)

    brand = html.Div(
        [
            html.H2(global_config.ui_title, className="mb-0"),
            html.Small(
                f"{len(table_names)} table(s) configured",
                className="text-muted",
            ),
        ],
        className="d-flex flex-column justify-content-center",
    )

    picker = html.Div(
        [
            dbc.Label("Table", html_for=IDs.Control.TABLE_SELECT, className="mb-0 small"),
            dcc.Dropdown(
                id=IDs.Control.TABLE_SELECT,
                options=[{"label": name, "value": name} for name in table_names],
                value=selected,
                clearable=False,
                className="tb-table-dropdown",
            ),
        ],
        className="ms-auto",
        style={"minWidth": "260px", "marginRight": "24px"},
    )

    return dbc.Navbar(
        dbc.Container([brand, picker], fluid=True),
        className="shadow-sm tb-navbar",
    )
