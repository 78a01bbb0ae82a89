from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set

DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = [5, 10, 20, 50, 100]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"
    UNSORTED = "none"

    def next(self) -> "SortDirection":
        """ASC -> DESC -> UNSORTED -> ASC"""
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        if self is SortDirection.DESCENDING:
            return SortDirection.UNSORTED
        return SortDirection.ASCENDING


@dataclass(frozen=True)
class SortConfig:
    column: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def is_active(self) -> bool:
        return self.direction is not SortDirection.UNSORTED


@dataclass
class ViewState:
    """
    Mutable configuration driving the displayed subset of a table.

    Fields:

    - search_term: case-insensitive substring matched against every column
    - sort: active sort column/direction, or None for original order
    - current_page: zero-based page index
    - page_size: rows per page (positive)
    - selected_rows: selection tokens (string form of stable row ids)
    - column_visibility: column id -> visible; missing columns are visible

    All handlers below mutate the state in place; the pipeline re-derives from it.
    """

    search_term: str = ""
    sort: Optional[SortConfig] = None
    current_page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    selected_rows: Set[str] = field(default_factory=set)
    column_visibility: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.current_page < 0:
            self.current_page = 0

    # -------------------------------------------------------------------------
    # Search / sort / paging
    # -------------------------------------------------------------------------
    def set_search(self, term: Optional[str]) -> None:
        """Changing the search term always returns to the first page."""
        self.search_term = term or ""
        self.current_page = 0

    def cycle_sort(self, column: str) -> SortConfig:
        """
        Header click handler.

        Same column: advance ASC -> DESC -> UNSORTED -> ASC.
        Different column (or no sort yet): ASC on the new column.
        """
        if self.sort is not None and self.sort.column == column:
            self.sort = SortConfig(column, self.sort.direction.next())
        else:
            self.sort = SortConfig(column, SortDirection.ASCENDING)
        return self.sort

    def sort_direction_for(self, column: str) -> SortDirection:
        if self.sort is None or self.sort.column != column:
            return SortDirection.UNSORTED
        return self.sort.direction

    def go_to_page(self, page: int, total_pages: Optional[int] = None) -> None:
        page = max(int(page), 0)
        if total_pages is not None:
            page = min(page, max(total_pages - 1, 0))
        self.current_page = page

    def next_page(self, total_pages: int) -> None:
        self.go_to_page(self.current_page + 1, total_pages)

    def previous_page(self) -> None:
        self.go_to_page(self.current_page - 1)

    def set_page_size(self, page_size: int) -> None:
        page_size = int(page_size)
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------
    def toggle_row(self, token: str) -> bool:
        """
        Add the token if absent, remove it if present.
        :return: True if the row is selected after the toggle
        """
        token = str(token)
        if token in self.selected_rows:
            self.selected_rows.discard(token)
            return False
        self.selected_rows.add(token)
        return True

    def select_rows(self, tokens: Iterable[str]) -> None:
        self.selected_rows = {str(t) for t in tokens}

    def clear_selection(self) -> None:
        self.selected_rows = set()

    def is_selected(self, token: str) -> bool:
        return str(token) in self.selected_rows

    # -------------------------------------------------------------------------
    # Column visibility
    # -------------------------------------------------------------------------
    def is_visible(self, column: str) -> bool:
        return self.column_visibility.get(column, True)

    def toggle_column(self, column: str) -> bool:
        visible = not self.is_visible(column)
        self.column_visibility[column] = visible
        return visible

    def set_visible_columns(self, visible: Iterable[str], all_columns: Iterable[str]) -> None:
        wanted = set(visible)
        self.column_visibility = {c: c in wanted for c in all_columns}

    def visible_columns(self, all_columns: Iterable[str]) -> List[str]:
        return [c for c in all_columns if self.is_visible(c)]

    # -------------------------------------------------------------------------
    # Store (de)serialisation
    # -------------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_term": self.search_term,
            "sort": (
                {"column": self.sort.column, "direction": self.sort.direction.value}
                if self.sort is not None
                else None
            ),
            "current_page": self.current_page,
            "page_size": self.page_size,
            "selected_rows": sorted(self.selected_rows),
            "column_visibility": dict(self.column_visibility),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ViewState:
        data = data or {}
        raw_sort = data.get("sort")
        sort = None
        if raw_sort:
            sort = SortConfig(
                column=raw_sort["column"],
                direction=SortDirection(raw_sort.get("direction", SortDirection.ASCENDING.value)),
            )
        return cls(
            search_term=data.get("search_term") or "",
            sort=sort,
            current_page=int(data.get("current_page", 0)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
            selected_rows={str(t) for t in data.get("selected_rows", [])},
            column_visibility={str(k): bool(v) for k, v in (data.get("column_visibility") or {}).items()},
        )
