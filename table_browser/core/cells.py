from __future__ import annotations

import math
from typing import Any, Union

CellValue = Union[str, int, float, bool]

SUPPORTED_CELL_TYPES = (str, int, float, bool)


def is_number(value: Any) -> bool:
    """Booleans count as numbers (True == 1) so mixed bool/number columns still order numerically."""
    return isinstance(value, (int, float)) and not (isinstance(value, float) and math.isnan(value))


def cell_text(value: Any) -> str:
    """
    Canonical string form of a cell.

    - booleans render lower-case ("true"/"false")
    - integral floats drop the trailing ".0" (30.0 -> "30")
    - None renders as the empty string
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compare_cells(a: CellValue, b: CellValue) -> int:
    """
    Three-way comparison used by the sort stage.

    Both numeric -> numeric order, otherwise lexicographic order of cell_text().
    """
    if is_number(a) and is_number(b):
        left, right = a, b
    else:
        left, right = cell_text(a), cell_text(b)

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def matches_term(value: CellValue, term_lower: str) -> bool:
    return term_lower in cell_text(value).lower()
