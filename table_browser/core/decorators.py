from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Type

from .cells import CellValue, cell_text, is_number

logger = logging.getLogger(__name__)


class ColumnDecorator(ABC):
    """
    Presentation hook attached to a single column.

    The core never calls these; only the render layer does (see ui.helpers.render_cell).
    - classify(value): class/style token for the cell ("" for none)
    - render(value): presentation unit shown in the cell
    """

    name: str = "base"

    @abstractmethod
    def classify(self, value: CellValue) -> str:
        pass

    @abstractmethod
    def render(self, value: CellValue) -> Any:
        pass


class FunctionDecorator(ColumnDecorator):
    """
    Adapts the three optional per-column callables into a ColumnDecorator.

    Rendering order:
        1) render_value, if given
        2) render_boolean, for boolean cells
        3) the cell text
    An empty result falls back to render_boolean (if given) or the empty string.
    """

    name = "function"

    def __init__(
        self,
        class_names: Optional[Callable[[CellValue], str]] = None,
        render_value: Optional[Callable[[CellValue], Any]] = None,
        render_boolean: Optional[Callable[[bool], Any]] = None,
    ) -> None:
        self.class_names = class_names
        self.render_value = render_value
        self.render_boolean = render_boolean

    def classify(self, value: CellValue) -> str:
        if self.class_names is None:
            return ""
        return self.class_names(value) or ""

    def render(self, value: CellValue) -> Any:
        if self.render_value is not None:
            content = self.render_value(value)
        elif isinstance(value, bool) and self.render_boolean is not None:
            content = self.render_boolean(value)
        else:
            content = cell_text(value)

        if content is not None and content != "":
            return content
        if self.render_boolean is not None:
            return self.render_boolean(bool(value))
        return ""


# -------------------------------------------------------------------------
# Built-in decorators, addressable by name from table configs
# -------------------------------------------------------------------------
class BooleanMarksDecorator(FunctionDecorator):
    """Renders booleans as check/cross marks with an ok/error class."""

    name = "boolean_marks"

    def __init__(self, true_mark: str = "✓", false_mark: str = "✗") -> None:
        super().__init__(
            class_names=lambda v: ("tb-cell-ok" if v else "tb-cell-error") if isinstance(v, bool) else "",
            render_boolean=lambda v: true_mark if v else false_mark,
        )


class HighlightValuesDecorator(FunctionDecorator):
    name = "highlight_values"

    def __init__(self, values: Optional[list] = None, class_name: str = "tb-cell-highlight") -> None:
        wanted = set(values or [])
        super().__init__(class_names=lambda v: class_name if v in wanted else "")


class CurrencyThresholdDecorator(FunctionDecorator):
    """
    Formats numbers as currency and colours them against a threshold
    (above -> ok, at or below -> error). Non-numbers render unchanged.
    """

    name = "currency_threshold"

    def __init__(self, threshold: float = 0, symbol: str = "$") -> None:
        def _classify(v: CellValue) -> str:
            if not is_number(v) or isinstance(v, bool):
                return ""
            return "tb-cell-ok" if v > threshold else "tb-cell-error"

        def _render(v: CellValue) -> Any:
            if is_number(v) and not isinstance(v, bool):
                return f"{symbol}{v:,}"
            return v

        super().__init__(class_names=_classify, render_value=_render)


DECORATORS: Dict[str, Type[ColumnDecorator]] = {
    BooleanMarksDecorator.name: BooleanMarksDecorator,
    HighlightValuesDecorator.name: HighlightValuesDecorator,
    CurrencyThresholdDecorator.name: CurrencyThresholdDecorator,
}


def build_decorator(name: str, options: Optional[Dict[str, Any]] = None) -> ColumnDecorator:
    """
    Instantiate a registered decorator by name.

    Raises:
        KeyError: if no decorator with the given name exists
    """
    try:
        cls = DECORATORS[name]
    except KeyError:
        raise KeyError(f"Decorator '{name}' not found")
    logger.debug("Building decorator %s with options %r", name, options)
    return cls(**(options or {}))
