from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence, Tuple

from .cells import compare_cells, matches_term
from .dataset import Dataset, Row
from .view_state import SortConfig, SortDirection, ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedView:
    """
    Output of one pipeline run.

    - rows: rows on the (clamped) current page
    - total_pages: ceil(filtered_count / page_size)
    - filtered_count: rows surviving the search filter
    - current_page: the page actually shown, after clamping
    """
    rows: List[Row]
    total_pages: int
    filtered_count: int
    current_page: int


# -------------------------------------------------------------------------
# Stages
# -------------------------------------------------------------------------
def sort_rows(rows: Sequence[Row], sort: Optional[SortConfig]) -> List[Row]:
    """
    Stable sort on a single column.

    No sort / UNSORTED keeps the incoming order. Descending uses reverse=True,
    which keeps equal keys in their original relative order.
    """
    if sort is None or not sort.is_active:
        return list(rows)

    column = sort.column
    key = cmp_to_key(lambda a, b: compare_cells(a.get(column, ""), b.get(column, "")))
    return sorted(rows, key=key, reverse=sort.direction is SortDirection.DESCENDING)


def filter_rows(rows: Sequence[Row], term: str) -> List[Row]:
    """Keep rows where any column (hidden ones included) contains term, case-insensitively."""
    if not term:
        return list(rows)
    needle = term.lower()
    return [row for row in rows if any(matches_term(value, needle) for value in row.values())]


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if count else 0


def clamp_page(page: int, pages: int) -> int:
    """Clamp into [0, pages - 1]; 0 when there are no pages."""
    if pages <= 0:
        return 0
    return min(max(page, 0), pages - 1)


def paginate(rows: Sequence[Row], page: int, page_size: int) -> List[Row]:
    start = page * page_size
    return list(rows[start:start + page_size])


def derive_view(dataset: Dataset, state: ViewState, *, paginated: bool = True) -> DerivedView:
    """
    Pure sort -> filter -> paginate derivation. Same inputs give the same output.

    With paginated=False the whole filtered set is a single page.
    """
    rows = dataset.materialize_rows()
    ordered = sort_rows(rows, state.sort)
    filtered = filter_rows(ordered, state.search_term)
    return _page_of(filtered, state, paginated)


def _page_of(filtered: List[Row], state: ViewState, paginated: bool) -> DerivedView:
    count = len(filtered)
    if not paginated:
        return DerivedView(rows=list(filtered), total_pages=1 if count else 0, filtered_count=count, current_page=0)

    pages = total_pages(count, state.page_size)
    page = clamp_page(state.current_page, pages)
    return DerivedView(
        rows=paginate(filtered, page, state.page_size),
        total_pages=pages,
        filtered_count=count,
        current_page=page,
    )


class ViewPipeline:
    """
    Memoising wrapper around the three stages.

    Each stage is cached on the identity of its inputs:
    - sort:     (dataset uid, dataset.version, content fingerprint, sort config)
    - filter:   sort key + search term
    Pagination is cheap and always recomputed. Mutations through the Dataset
    bump dataset.version and in-place column edits change the fingerprint, so
    nothing cached survives a change to the data.
    """

    MAX_CACHE = 32

    def __init__(self) -> None:
        self._sorted_cache: Dict[Tuple, List[Row]] = {}
        self._filtered_cache: Dict[Tuple, List[Row]] = {}

    def _dataset_key(self, dataset: Dataset) -> Tuple[int, int, int]:
        return (dataset.uid, dataset.version, dataset.fingerprint())

    def sorted_rows(self, dataset: Dataset, sort: Optional[SortConfig]) -> List[Row]:
        key = (self._dataset_key(dataset), sort)
        cached = self._sorted_cache.get(key)
        if cached is not None:
            return cached

        result = sort_rows(dataset.materialize_rows(), sort)
        self._store(self._sorted_cache, key, result)
        return result

    def filtered_rows(self, dataset: Dataset, sort: Optional[SortConfig], term: str) -> List[Row]:
        key = (self._dataset_key(dataset), sort, term)
        cached = self._filtered_cache.get(key)
        if cached is not None:
            return cached

        result = filter_rows(self.sorted_rows(dataset, sort), term)
        self._store(self._filtered_cache, key, result)
        return result

    def derive(self, dataset: Dataset, state: ViewState, *, paginated: bool = True) -> DerivedView:
        filtered = self.filtered_rows(dataset, state.sort, state.search_term)
        view = _page_of(filtered, state, paginated)
        logger.debug(
            "Derived view for %s: %d/%d rows, page %d of %d",
            dataset.name,
            len(view.rows),
            view.filtered_count,
            view.current_page + 1,
            view.total_pages,
        )
        return view

    def cache_size(self) -> int:
        return len(self._sorted_cache) + len(self._filtered_cache)

    def clear(self) -> None:
        """Drop every cached stage (e.g. after a table is replaced)."""
        self._sorted_cache.clear()
        self._filtered_cache.clear()

    def _store(self, cache: Dict[Tuple, List[Row]], key: Tuple, value: List[Row]) -> None:
        if len(cache) >= self.MAX_CACHE:
            # FIFO eviction
            cache.pop(next(iter(cache)))
        cache[key] = value
