from __future__ import annotations

import logging
from typing import Optional

from table_browser.core.view_state import ViewState

logger = logging.getLogger(__name__)


def try_parse_view_state(data: object) -> Optional[ViewState]:
    if not isinstance(data, dict):
        return None
    try:
        return ViewState.from_dict(data)
    except Exception:
        logger.exception("Invalid view-state: %r", data)
        return None


def safe_view_state(data: object, default_page_size: int) -> ViewState:
    """Parsed view state, or a fresh default one if the store is empty/corrupt."""
    state = try_parse_view_state(data)
    if state is None:
        return ViewState(page_size=default_page_size)
    return state
