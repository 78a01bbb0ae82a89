from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
from dash import Input, Output, State, dcc, exceptions

from table_browser.core.exceptions import ExportError
from table_browser.core.mutation import delete_selected
from table_browser.export.model import ExportedTable, ExportFormat
from table_browser.ui.callbacks.callbacks_utils import safe_view_state
from table_browser.ui.helpers import status_alert
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _download_payload(exported: ExportedTable) -> dict:
    if exported.is_binary:
        return dcc.send_bytes(exported.content, exported.filename, type=exported.content_type)
    return dict(content=exported.content, filename=exported.filename, type=exported.content_type)


def register_export_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    default_page_size = ctx.global_config.default_page_size

    def run_export(fmt: ExportFormat, table_name: Optional[str], state_data) -> Tuple[Optional[ExportedTable], Any]:
        ds = ctx.get_table(table_name)
        if ds is None:
            return None, status_alert(f"Table '{table_name}' is not available.", color="warning")

        state = safe_view_state(state_data, default_page_size)
        try:
            exported = ctx.export_service.export(fmt, ds, state)
        except ExportError as e:
            logger.exception("Export to %s failed for table %s", fmt.value, ds.name)
            return None, status_alert(str(e), color="danger")

        scope = "selected" if state.selected_rows else "all"
        return exported, status_alert(f"Exported {exported.row_count} {scope} row(s) to {fmt.value.upper()}.")

    def make_download_callback(fmt: ExportFormat, button_id: str, download_id: str) -> None:
        @app.callback(
            Output(download_id, "data"),
            Output(IDs.Control.STATUS_BAR, "children", allow_duplicate=True),
            Input(button_id, "n_clicks"),
            State(IDs.Control.TABLE_SELECT, "value"),
            State(IDs.Store.VIEW_STATE, "data"),
            prevent_initial_call=True,
        )
        def download(n_clicks, table_name, state_data):
            if not n_clicks:
                raise exceptions.PreventUpdate
            exported, alert = run_export(fmt, table_name, state_data)
            if exported is None:
                return dash.no_update, alert
            return _download_payload(exported), alert

    # ---------------------------------------------------------
    # 1. File downloads
    # ---------------------------------------------------------
    make_download_callback(ExportFormat.CSV, IDs.Control.CSV_EXPORT_BTN, IDs.Control.DOWNLOAD_CSV)
    make_download_callback(ExportFormat.XLSX, IDs.Control.XLSX_EXPORT_BTN, IDs.Control.DOWNLOAD_XLSX)
    make_download_callback(ExportFormat.PDF, IDs.Control.PDF_EXPORT_BTN, IDs.Control.DOWNLOAD_PDF)

    # ---------------------------------------------------------
    # 2. Clipboard
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.COPY_ROWS, "content"),
        Output(IDs.Control.STATUS_BAR, "children", allow_duplicate=True),
        Input(IDs.Control.COPY_ROWS, "n_clicks"),
        State(IDs.Control.TABLE_SELECT, "value"),
        State(IDs.Store.VIEW_STATE, "data"),
        prevent_initial_call=True,
    )
    def copy_rows(n_clicks, table_name, state_data):
        if not n_clicks:
            raise exceptions.PreventUpdate
        exported, alert = run_export(ExportFormat.CLIPBOARD, table_name, state_data)
        if exported is None:
            return dash.no_update, alert
        return exported.content, alert

    # ---------------------------------------------------------
    # 3. Row deletion / reload
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STATE, "data", allow_duplicate=True),
        Output(IDs.Store.DATASET_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.STATUS_BAR, "children", allow_duplicate=True),
        Input(IDs.Control.DELETE_ROWS_BTN, "n_clicks"),
        State(IDs.Control.TABLE_SELECT, "value"),
        State(IDs.Store.VIEW_STATE, "data"),
        State(IDs.Store.DATASET_VERSION, "data"),
        prevent_initial_call=True,
    )
    def delete_rows(n_clicks, table_name, state_data, version):
        if not n_clicks or not ctx.features.removable_rows:
            raise exceptions.PreventUpdate

        ds = ctx.get_table(table_name)
        if ds is None:
            raise exceptions.PreventUpdate

        state = safe_view_state(state_data, default_page_size)
        if not state.selected_rows:
            raise exceptions.PreventUpdate
        removed = delete_selected(ds, state)

        view = ctx.pipeline.derive(ds, state, paginated=ctx.features.pagination)
        state.current_page = view.current_page
        return state.to_dict(), (version or 0) + 1, status_alert(f"Deleted {removed} row(s).", color="warning")

    @app.callback(
        Output(IDs.Store.VIEW_STATE, "data", allow_duplicate=True),
        Output(IDs.Store.DATASET_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.STATUS_BAR, "children", allow_duplicate=True),
        Input(IDs.Control.RELOAD_TABLE_BTN, "n_clicks"),
        State(IDs.Control.TABLE_SELECT, "value"),
        State(IDs.Store.VIEW_STATE, "data"),
        State(IDs.Store.DATASET_VERSION, "data"),
        prevent_initial_call=True,
    )
    def reload_table(n_clicks, table_name, state_data, version):
        if not n_clicks or not table_name or not ctx.features.table_reload:
            raise exceptions.PreventUpdate

        try:
            ds = ctx.reload_table(table_name)
        except Exception:
            logger.exception("Failed to reload table %s", table_name)
            return dash.no_update, dash.no_update, status_alert(f"Could not reload '{table_name}'.", color="danger")

        state = safe_view_state(state_data, default_page_size)
        state.clear_selection()
        view = ctx.pipeline.derive(ds, state, paginated=ctx.features.pagination)
        state.current_page = view.current_page
        # The store is a change counter; bumping it re-renders the table
        return state.to_dict(), (version or 0) + 1, status_alert(f"Reloaded '{table_name}'.", color="info")
