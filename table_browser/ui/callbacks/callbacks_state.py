from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, exceptions

from table_browser.core.view_state import ViewState
from table_browser.ui.callbacks.callbacks_utils import safe_view_state
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_state_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    default_page_size = ctx.global_config.default_page_size

    # ---------------------------------------------------------
    # 1. Table switch: reset dependent controls
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.COLUMN_VISIBILITY, "options"),
        Output(IDs.Control.COLUMN_VISIBILITY, "value"),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.TABLE_SELECT, "value"),
        prevent_initial_call=True,
    )
    def reset_controls_on_table_change(table_name):
        ds = ctx.get_table(table_name)
        if ds is None:
            raise exceptions.PreventUpdate
        columns = ds.column_ids
        return [{"label": c, "value": c} for c in columns], columns, ""

    # ---------------------------------------------------------
    # 2. Every user interaction -> ViewState
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STATE, "data"),
        Input(IDs.Control.TABLE_SELECT, "value"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input({"type": IDs.Pattern.SORT_HEADER, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.ROW_SELECT, "index": ALL}, "n_clicks"),
        Input(IDs.Control.PREV_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.NEXT_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Input(IDs.Control.COLUMN_VISIBILITY, "value"),
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_view_state(
            table_name, search, _sort_clicks, _row_clicks, _prev, _next,
            page_size, visible_columns, _clear, state_data,
    ):
        trigger = dash.ctx.triggered_id
        if trigger is None:
            raise exceptions.PreventUpdate

        ds = ctx.get_table(table_name)
        if ds is None:
            raise exceptions.PreventUpdate

        state = safe_view_state(state_data, default_page_size)

        if isinstance(trigger, dict):
            # Pattern components fire with n_clicks=0 whenever the table is re-rendered
            if not dash.ctx.triggered[0].get("value"):
                raise exceptions.PreventUpdate
            if trigger["type"] == IDs.Pattern.SORT_HEADER:
                sort = state.cycle_sort(trigger["index"])
                logger.debug("Sort on %s -> %s", sort.column, sort.direction.value)
            elif trigger["type"] == IDs.Pattern.ROW_SELECT:
                state.toggle_row(trigger["index"])
        elif trigger == IDs.Control.TABLE_SELECT:
            state = ViewState(page_size=state.page_size)
        elif trigger == IDs.Control.SEARCH_INPUT:
            if (search or "") == state.search_term:
                raise exceptions.PreventUpdate
            state.set_search(search)
        elif trigger == IDs.Control.PREV_PAGE_BTN:
            state.previous_page()
        elif trigger == IDs.Control.NEXT_PAGE_BTN:
            view = ctx.pipeline.derive(ds, state, paginated=ctx.features.pagination)
            state.next_page(view.total_pages)
        elif trigger == IDs.Control.PAGE_SIZE_SELECT:
            if page_size:
                state.set_page_size(page_size)
        elif trigger == IDs.Control.COLUMN_VISIBILITY:
            state.set_visible_columns(visible_columns or [], ds.column_ids)
        elif trigger == IDs.Control.CLEAR_SELECTION_BTN:
            state.clear_selection()

        # Write back the clamped page so the store never points past the last page
        view = ctx.pipeline.derive(ds, state, paginated=ctx.features.pagination)
        state.current_page = view.current_page
        return state.to_dict()
