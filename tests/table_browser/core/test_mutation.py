from __future__ import annotations

from table_browser.core.dataset import Dataset
from table_browser.core.mutation import delete_selected, parse_row_tokens
from table_browser.core.pipeline import derive_view
from table_browser.core.view_state import SortConfig, SortDirection, ViewState


def _letters() -> Dataset:
    return Dataset.from_records({"letter": ["A", "B", "C", "D", "E"]})


def test_delete_positions_one_and_three():
    ds = _letters()
    state = ViewState(selected_rows={"1", "3"})

    removed = delete_selected(ds, state)

    assert removed == 2
    assert ds.columns["letter"].values == ["A", "C", "E"]
    assert state.selected_rows == set()


def test_delete_without_selection_is_noop():
    ds = _letters()
    state = ViewState()

    assert delete_selected(ds, state) == 0
    assert ds.columns["letter"].values == ["A", "B", "C", "D", "E"]
    assert ds.version == 0


def test_delete_targets_rows_picked_in_sorted_view():
    ds = Dataset.from_records({"letter": ["A", "B", "C", "D", "E"], "n": [5, 4, 3, 2, 1]})
    state = ViewState(sort=SortConfig("n", SortDirection.ASCENDING), page_size=2)

    # first page of the sorted view shows E, D
    page = derive_view(ds, state).rows
    for row in page:
        state.toggle_row(row.token)

    delete_selected(ds, state)

    assert ds.columns["letter"].values == ["A", "B", "C"]
    assert ds.columns["n"].values == [5, 4, 3]


def test_delete_applies_to_every_column():
    ds = Dataset.from_records({"a": [1, 2, 3], "b": ["x", "y", "z"]})
    delete_selected(ds, ViewState(selected_rows={"0", "2"}))
    assert [dict(r) for r in ds.materialize_rows()] == [{"a": 2, "b": "y"}]


def test_stale_tokens_are_ignored():
    ds = _letters()
    delete_selected(ds, ViewState(selected_rows={"4"}))

    state = ViewState(selected_rows={"4", "0", "nope"})
    removed = delete_selected(ds, state)

    assert removed == 1
    assert ds.columns["letter"].values == ["B", "C", "D"]
    assert state.selected_rows == set()


def test_parse_row_tokens_drops_garbage():
    assert sorted(parse_row_tokens(["2", "x", None, "5"])) == [2, 5]
