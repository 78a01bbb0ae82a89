from __future__ import annotations

from typing import Any, List, Sequence, Tuple

import dash_bootstrap_components as dbc
from dash import html

from table_browser.core.cells import CellValue, cell_text
from table_browser.core.dataset import Column, Dataset, Row
from table_browser.core.view_state import SortDirection, ViewState
from table_browser.ui.ids import row_select_id, sort_header_id

SORT_MARKS = {
    SortDirection.ASCENDING: " ▲",
    SortDirection.DESCENDING: " ▼",
    SortDirection.UNSORTED: "",
}


def render_cell(column: Column, value: CellValue) -> Tuple[str, Any]:
    """
    Apply a column's decorator (if any) to a cell.
    :return: (class name, content)
    """
    if column.decorator is None:
        return "", cell_text(value)
    return column.decorator.classify(value), column.decorator.render(value)


def build_table(dataset: Dataset, rows: Sequence[Row], state: ViewState) -> dbc.Table:
    """
    Build the visible page as a Bootstrap table.

    - headers are clickable (sort cycling) and show the sort direction
    - rows are clickable (selection toggle); selected rows are highlighted
    - hidden columns are skipped
    """
    visible = state.visible_columns(dataset.column_ids)

    header = html.Thead(
        html.Tr(
            [
                html.Th(
                    f"{column_id}{SORT_MARKS[state.sort_direction_for(column_id)]}",
                    id=sort_header_id(column_id),
                    n_clicks=0,
                    className="tb-sortable",
                )
                for column_id in visible
            ]
        )
    )

    body_rows: List[html.Tr] = []
    for row in rows:
        cells = []
        for column_id in visible:
            class_name, content = render_cell(dataset.columns[column_id], row[column_id])
            cells.append(html.Td(content, className=class_name or None))
        body_rows.append(
            html.Tr(
                cells,
                id=row_select_id(row.token),
                n_clicks=0,
                className="tb-row tb-row-selected" if state.is_selected(row.token) else "tb-row",
            )
        )

    if not body_rows:
        body_rows.append(
            html.Tr(html.Td("No matching rows.", colSpan=max(len(visible), 1), className="text-muted"))
        )

    return dbc.Table(
        [header, html.Tbody(body_rows)],
        bordered=False,
        hover=True,
        responsive=True,
        size="sm",
        className="tb-table",
    )


def page_label(current_page: int, total_pages: int) -> str:
    if total_pages == 0:
        return "Page 0 of 0"
    return f"Page {current_page + 1} of {total_pages}"


def selection_summary(state: ViewState, filtered_count: int) -> str:
    n = len(state.selected_rows)
    if n == 0:
        return f"{filtered_count} row(s)"
    return f"{filtered_count} row(s), {n} selected"


def status_alert(message: str, color: str = "success") -> dbc.Alert:
    """Transient notification; auto-dismisses after a few seconds."""
    return dbc.Alert(message, color=color, duration=4000, is_open=True, dismissable=True)
