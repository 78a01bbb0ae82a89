from __future__ import annotations

import logging
from typing import List

from .dataset import Dataset
from .view_state import ViewState

logger = logging.getLogger(__name__)


def parse_row_tokens(tokens) -> List[int]:
    """Selection tokens -> row ids. Unparseable tokens are dropped with a warning."""
    row_ids: List[int] = []
    for token in tokens:
        try:
            row_ids.append(int(token))
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid row token %r", token)
    return row_ids


def delete_selected(dataset: Dataset, state: ViewState) -> int:
    """
    Delete every selected row from the dataset, then clear the selection.

    Destructive and immediate; there is no undo. With nothing selected this is
    a no-op. Tokens refer to stable row ids, so the rows removed are exactly the
    ones the user picked regardless of the current sort, filter or page.

    :return: number of rows removed
    """
    if not state.selected_rows:
        return 0

    row_ids = parse_row_tokens(state.selected_rows)
    removed = dataset.delete_rows(row_ids)

    stale = len(state.selected_rows) - removed
    if stale > 0:
        logger.warning("%d selected row(s) no longer exist in %s", stale, dataset.name)

    state.clear_selection()
    return removed
