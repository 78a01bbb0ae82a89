from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output, html

from table_browser.ui.callbacks.callbacks_utils import try_parse_view_state
from table_browser.ui.helpers import build_table, page_label, selection_summary
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _message(text: str) -> html.Div:
    return html.Div(text, className="text-muted p-3")


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # ViewState (+ dataset version) -> table page and pager
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE_CONTAINER, "children"),
        Output(IDs.Control.PAGE_LABEL, "children"),
        Output(IDs.Control.PREV_PAGE_BTN, "disabled"),
        Output(IDs.Control.NEXT_PAGE_BTN, "disabled"),
        Output(IDs.Control.SELECTION_SUMMARY, "children"),
        Output(IDs.Control.DELETE_ROWS_BTN, "disabled"),
        Input(IDs.Store.VIEW_STATE, "data"),
        Input(IDs.Store.DATASET_VERSION, "data"),
        Input(IDs.Control.TABLE_SELECT, "value"),
    )
    def render_table(state_data: dict[str, Any] | None, _version, table_name: str | None):
        ds = ctx.get_table(table_name)
        if ds is None:
            return _message(f"Table '{table_name}' is not available."), "", True, True, "", True

        state = try_parse_view_state(state_data)
        if state is None:
            return _message("Internal error: invalid view state."), "", True, True, "", True

        try:
            view = ctx.pipeline.derive(ds, state, paginated=ctx.features.pagination)
        except Exception:
            logger.exception("Failed to derive view for table %s", ds.name)
            return _message("Something went wrong while rendering this table."), "", True, True, "", True

        return (
            build_table(ds, view.rows, state),
            page_label(view.current_page, view.total_pages),
            view.current_page <= 0,
            view.current_page + 1 >= view.total_pages,
            selection_summary(state, view.filtered_count),
            not state.selected_rows,
        )
