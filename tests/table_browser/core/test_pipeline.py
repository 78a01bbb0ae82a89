from __future__ import annotations

import math

import pytest

from table_browser.core.dataset import Dataset
from table_browser.core.pipeline import (
    ViewPipeline,
    clamp_page,
    derive_view,
    filter_rows,
    paginate,
    sort_rows,
    total_pages,
)
from table_browser.core.view_state import SortConfig, SortDirection, ViewState


@pytest.fixture()
def people() -> Dataset:
    return Dataset.from_records(
        {
            "name": ["Ann", "bob", "Cid", "Dee", "Eve", "Fay"],
            "team": ["red", "blue", "red", "blue", "red", "green"],
            "score": [3, 10, 2, 10, 3, 1],
        },
        name="people",
    )


def _names(rows):
    return [r["name"] for r in rows]


def test_sort_none_and_unsorted_keep_original_order(people: Dataset):
    rows = people.materialize_rows()
    assert _names(sort_rows(rows, None)) == _names(rows)
    assert _names(sort_rows(rows, SortConfig("score", SortDirection.UNSORTED))) == _names(rows)


def test_numeric_sort_is_numeric_not_lexicographic(people: Dataset):
    rows = sort_rows(people.materialize_rows(), SortConfig("score", SortDirection.ASCENDING))
    assert [r["score"] for r in rows] == [1, 2, 3, 3, 10, 10]


def test_string_sort_is_lexicographic(people: Dataset):
    rows = sort_rows(people.materialize_rows(), SortConfig("name", SortDirection.ASCENDING))
    # uppercase sorts before lowercase
    assert _names(rows) == ["Ann", "Cid", "Dee", "Eve", "Fay", "bob"]


@pytest.mark.parametrize("direction", [SortDirection.ASCENDING, SortDirection.DESCENDING])
def test_sort_is_stable_in_both_directions(people: Dataset, direction: SortDirection):
    rows = sort_rows(people.materialize_rows(), SortConfig("team", direction))

    original = {r.row_id: r.index for r in people.materialize_rows()}
    for a, b in zip(rows, rows[1:]):
        if a["team"] == b["team"]:
            assert original[a.row_id] < original[b.row_id]


def test_descending_inverts_order(people: Dataset):
    rows = sort_rows(people.materialize_rows(), SortConfig("score", SortDirection.DESCENDING))
    assert [r["score"] for r in rows] == [10, 10, 3, 3, 2, 1]
    # ties keep original order: bob before Dee, Ann before Eve
    assert _names(rows)[:4] == ["bob", "Dee", "Ann", "Eve"]


def test_filter_is_case_insensitive_subset(people: Dataset):
    rows = list(people.materialize_rows())
    result = filter_rows(rows, "RED")

    assert _names(result) == ["Ann", "Cid", "Eve"]
    assert all(r in rows for r in result)
    assert all(any("red" in str(v).lower() for v in r.values()) for r in result)


def test_filter_empty_term_returns_everything(people: Dataset):
    rows = list(people.materialize_rows())
    assert filter_rows(rows, "") == rows


def test_filter_matches_numbers_and_booleans_by_text():
    ds = Dataset.from_records({"n": [10, 25], "flag": [True, False]})
    rows = ds.materialize_rows()
    assert [r["n"] for r in filter_rows(rows, "25")] == [25]
    assert [r["n"] for r in filter_rows(rows, "TRUE")] == [10]


@pytest.mark.parametrize("n,size", [(0, 3), (1, 3), (6, 3), (7, 3), (10, 4)])
def test_pages_cover_without_gap_or_overlap(n: int, size: int):
    rows = list(Dataset.from_records({"i": list(range(n))}).materialize_rows())
    pages = total_pages(len(rows), size)
    assert pages == math.ceil(n / size)

    joined = []
    for page in range(pages):
        chunk = paginate(rows, page, size)
        assert 0 < len(chunk) <= size
        joined.extend(chunk)
    assert [r["i"] for r in joined] == list(range(n))


def test_clamp_page():
    assert clamp_page(5, 2) == 1
    assert clamp_page(-1, 2) == 0
    assert clamp_page(3, 0) == 0


def test_derive_view_runs_sort_filter_paginate(people: Dataset):
    state = ViewState(search_term="e", page_size=2, sort=SortConfig("name"))
    view = derive_view(people, state)

    # "e" matches Dee, Eve, red/blue/green rows: everything except none
    assert view.filtered_count == 6
    assert view.total_pages == 3
    assert _names(view.rows) == ["Ann", "Cid"]


def test_derive_view_clamps_out_of_range_page(people: Dataset):
    state = ViewState(page_size=2, current_page=9)
    view = derive_view(people, state)
    assert view.current_page == 2
    assert _names(view.rows) == ["Eve", "Fay"]


def test_derive_view_with_no_matches(people: Dataset):
    view = derive_view(people, ViewState(search_term="zzz", current_page=3))
    assert view.rows == []
    assert view.total_pages == 0
    assert view.current_page == 0


def test_derive_view_unpaginated_keeps_semantics(people: Dataset):
    state = ViewState(search_term="red", page_size=1, sort=SortConfig("score", SortDirection.DESCENDING))
    paged = derive_view(people, state)
    whole = derive_view(people, state, paginated=False)

    assert whole.total_pages == 1
    assert _names(whole.rows) == ["Ann", "Eve", "Cid"]
    assert _names(paged.rows) == ["Ann"]


def test_search_matches_hidden_columns(people: Dataset):
    state = ViewState(search_term="green", column_visibility={"team": False})
    view = derive_view(people, state)
    assert _names(view.rows) == ["Fay"]


def test_pipeline_matches_pure_derivation(people: Dataset):
    pipeline = ViewPipeline()
    state = ViewState(search_term="r", page_size=2, sort=SortConfig("score"))
    assert _names(pipeline.derive(people, state).rows) == _names(derive_view(people, state).rows)


def test_pipeline_caches_until_dataset_changes(people: Dataset):
    pipeline = ViewPipeline()
    state = ViewState()

    first = pipeline.filtered_rows(people, state.sort, "")
    assert pipeline.filtered_rows(people, state.sort, "") is first

    people.delete_rows([0])
    refreshed = pipeline.filtered_rows(people, state.sort, "")
    assert refreshed is not first
    assert _names(refreshed) == ["bob", "Cid", "Dee", "Eve", "Fay"]


def test_pipeline_distinguishes_replaced_datasets():
    pipeline = ViewPipeline()
    old = Dataset.from_records({"x": ["old"]})
    new = Dataset.from_records({"x": ["new"]})

    assert pipeline.derive(old, ViewState()).rows[0]["x"] == "old"
    assert pipeline.derive(new, ViewState()).rows[0]["x"] == "new"


def test_pipeline_notices_in_place_cell_edits():
    pipeline = ViewPipeline()
    ds = Dataset.from_records({"x": ["old", "b"]})

    assert [r["x"] for r in pipeline.derive(ds, ViewState()).rows] == ["old", "b"]

    ds.columns["x"].values[0] = "new"

    assert [r["x"] for r in pipeline.derive(ds, ViewState()).rows] == ["new", "b"]
    assert [r["x"] for r in derive_view(ds, ViewState()).rows] == ["new", "b"]


def test_pipeline_notices_same_value_with_new_type():
    pipeline = ViewPipeline()
    ds = Dataset.from_records({"x": [1, 2]})
    pipeline.derive(ds, ViewState())

    ds.columns["x"].values[0] = True

    assert pipeline.derive(ds, ViewState()).rows[0]["x"] is True


def test_pipeline_clear_drops_cached_stages(people: Dataset):
    pipeline = ViewPipeline()
    pipeline.derive(people, ViewState(search_term="red"))
    assert pipeline.cache_size() == 2

    pipeline.clear()

    assert pipeline.cache_size() == 0
