from __future__ import annotations

__all__ = ["IDs", "sort_header_id", "row_select_id"]


class IDs:
    class Store:
        VIEW_STATE = "view-state"
        DATASET_VERSION = "dataset-version"

    class Control:
        TABLE_SELECT = "table-select"

        # Toolbar
        SEARCH_INPUT = "search-input"
        CSV_EXPORT_BTN = "csv-export-btn"
        XLSX_EXPORT_BTN = "xlsx-export-btn"
        PDF_EXPORT_BTN = "pdf-export-btn"
        DELETE_ROWS_BTN = "delete-rows-btn"
        CLEAR_SELECTION_BTN = "clear-selection-btn"
        RELOAD_TABLE_BTN = "reload-table-btn"
        COPY_ROWS = "copy-rows-clipboard"
        COLUMN_VISIBILITY = "column-visibility-checklist"

        # Downloads
        DOWNLOAD_CSV = "download-csv"
        DOWNLOAD_XLSX = "download-xlsx"
        DOWNLOAD_PDF = "download-pdf"

        # Table + pager
        TABLE_CONTAINER = "table-container"
        PAGE_SIZE_SELECT = "page-size-select"
        PREV_PAGE_BTN = "prev-page-btn"
        NEXT_PAGE_BTN = "next-page-btn"
        PAGE_LABEL = "page-label"
        SELECTION_SUMMARY = "selection-summary"

        # Status bar
        STATUS_BAR = "status-bar"

    class Pattern:
        # pattern-matching "type" strings
        SORT_HEADER = "sort-header"
        ROW_SELECT = "row-select"


def sort_header_id(column: str) -> dict:
    return {"type": IDs.Pattern.SORT_HEADER, "index": column}


def row_select_id(token: str) -> dict:
    return {"type": IDs.Pattern.ROW_SELECT, "index": token}
