from __future__ import annotations

import pytest

from table_browser.core.cells import cell_text, compare_cells
from table_browser.core.decorators import (
    BooleanMarksDecorator,
    CurrencyThresholdDecorator,
    FunctionDecorator,
    HighlightValuesDecorator,
    build_decorator,
)


def test_cell_text_forms():
    assert cell_text(True) == "true"
    assert cell_text(30.0) == "30"
    assert cell_text(2.5) == "2.5"
    assert cell_text(None) == ""


def test_compare_cells_mixed_types_fall_back_to_text():
    assert compare_cells(2, 10) == -1
    assert compare_cells("2", "10") == 1
    assert compare_cells(5, "") == 1
    assert compare_cells("a", "a") == 0


def test_function_decorator_prefers_render_value():
    deco = FunctionDecorator(render_value=lambda v: f"<{v}>", render_boolean=lambda v: "B")
    assert deco.render(True) == "<True>"


def test_function_decorator_boolean_fallbacks():
    deco = FunctionDecorator(render_boolean=lambda v: "yes" if v else "no")
    assert deco.render(False) == "no"
    # empty content falls back to the boolean renderer
    assert deco.render("") == "no"
    assert FunctionDecorator().render("") == ""


def test_function_decorator_classify_defaults_to_empty():
    assert FunctionDecorator().classify("x") == ""
    assert FunctionDecorator(class_names=lambda v: None).classify("x") == ""


def test_builtin_decorators():
    marks = BooleanMarksDecorator()
    assert marks.render(True) == "✓"
    assert marks.classify(False) == "tb-cell-error"

    highlight = HighlightValuesDecorator(values=["Jane"])
    assert highlight.classify("Jane") == "tb-cell-highlight"
    assert highlight.classify("John") == ""

    money = CurrencyThresholdDecorator(threshold=8000)
    assert money.render(25000) == "$25,000"
    assert money.classify(25000) == "tb-cell-ok"
    assert money.classify(7000) == "tb-cell-error"
    assert money.render("n/a") == "n/a"


def test_build_decorator_by_name():
    deco = build_decorator("currency_threshold", {"threshold": 10, "symbol": "€"})
    assert deco.render(12) == "€12"

    with pytest.raises(KeyError):
        build_decorator("nope")


def test_compare_cells_keeps_large_ints_exact():
    big = 2 ** 53
    assert compare_cells(big + 1, big) == 1
    assert compare_cells(big, float(big)) == 0
    assert compare_cells(big + 1, float(big)) == 1
