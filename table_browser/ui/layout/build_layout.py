from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.core.view_state import ViewState
from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_navbar import build_navbar
from table_browser.ui.layout.build_table_panel import build_table_panel
from table_browser.ui.layout.build_toolbar import build_toolbar

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig


def initial_view_state(ctx: AppConfig) -> ViewState:
    return ViewState(page_size=ctx.global_config.default_page_size)


def build_layout(ctx: AppConfig):
    default_ds = ctx.get_table(ctx.default_table)
    columns = default_ds.column_ids if default_ds is not None else []

    navbar = build_navbar(ctx.table_names, ctx.global_config, ctx.default_table)

    if default_ds is None:
        body = dbc.Card(
            dbc.CardBody("No tables configured. Add a table config under tables/."),
            className="mt-3",
        )
    else:
        body = html.Div(
            [
                build_toolbar(ctx.features, columns),
                html.Div(id=IDs.Control.STATUS_BAR, className="mt-2"),
                build_table_panel(
                    ctx.features,
                    ctx.global_config.page_size_options,
                    ctx.global_config.default_page_size,
                ),
            ]
        )

    return dbc.Container(
        fluid=True,
        className="tb-root",
        children=[
            navbar,

            # App-level stores (view state lives in memory only)
            dcc.Store(id=IDs.Store.VIEW_STATE, data=initial_view_state(ctx).to_dict(), storage_type="memory"),
            dcc.Store(id=IDs.Store.DATASET_VERSION, data=0, storage_type="memory"),

            body,
        ],
    )
