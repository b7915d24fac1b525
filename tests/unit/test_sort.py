"""Tests for the table sort history."""

from typing import Callable

import pytest

from dg_columns import TMapColumn, TSortDirection
from dg_ctrl_table import TTable
from dg_errors import EMisconfiguration
from dg_events import EV_TABLE_SORT, SORT_CLICK, TActionParams
from dg_page import TPage


def _sortable_table(page: TPage, *ids: str, limit: int = 0) -> TTable:
    table = TTable(page, "T")
    for id in ids:
        table.add_column(TMapColumn(id.lower(), id, id).set_sortable())
    table.make_sortable()
    if limit:
        table.set_sort_history_limit(limit)
    return table


def _directions(table: TTable) -> dict[str, TSortDirection]:
    return {c.ID: c.sort_direction for c in table.columns()}


def test_first_click_sorts_ascending(page: TPage) -> None:
    """A click on an unsorted table makes the column primary ascending."""
    table = _sortable_table(page, "A", "B")
    table.sort_click("A")

    assert table.sort_history() == ["A"]
    assert table.get_column_by_id("A").sort_direction == TSortDirection.ASCENDING
    assert table.get_column_by_id("B").sort_direction == TSortDirection.NOT_SORTED


def test_repeated_clicks_flip_the_primary(page: TPage) -> None:
    """Second click on a new column: descending; third: ascending again."""
    table = _sortable_table(page, "A", "B")
    table.sort_click("A")

    table.sort_click("B")
    assert table.get_column_by_id("B").sort_direction == TSortDirection.ASCENDING
    table.sort_click("B")
    assert table.sort_history()[0] == "B"
    assert table.get_column_by_id("B").sort_direction == TSortDirection.DESCENDING
    table.sort_click("B")
    assert table.get_column_by_id("B").sort_direction == TSortDirection.ASCENDING


def test_history_is_trimmed_to_limit(page: TPage) -> None:
    """Limit 2: A, B, C → history [C, B]; the dropped and demoted columns are not sorted."""
    table = _sortable_table(page, "A", "B", "C", limit=2)
    for id in ("A", "B", "C"):
        table.sort_click(id)

    assert table.sort_history() == ["C", "B"]
    assert _directions(table) == {
        "A": TSortDirection.NOT_SORTED,
        "B": TSortDirection.NOT_SORTED,
        "C": TSortDirection.ASCENDING,
    }


def test_default_limit_keeps_one_column(page: TPage) -> None:
    """The configured default history limit is 1."""
    table = _sortable_table(page, "A", "B")
    table.sort_click("A")
    table.sort_click("B")

    assert table.sort_history() == ["B"]
    assert table.get_column_by_id("A").sort_direction == TSortDirection.NOT_SORTED


def test_clicks_on_non_sortable_or_missing_columns_are_ignored(page: TPage) -> None:
    """Nothing changes for columns that cannot sort."""
    table = _sortable_table(page, "A")
    table.add_column(TMapColumn("plain", "Plain", "P"))
    table.sort_click("A")

    table.sort_click("P")
    table.sort_click("nope")
    assert table.sort_history() == ["A"]
    assert table.get_column_by_id("A").sort_direction == TSortDirection.ASCENDING


def test_non_sortable_primary_freezes_sorting(page: TPage) -> None:
    """Making the primary column non-sortable stops further sort changes."""
    table = _sortable_table(page, "A", "B")
    table.sort_click("A")
    table.get_column_by_id("A").set_sort_direction(TSortDirection.NOT_SORTABLE)

    table.sort_click("B")
    assert table.sort_history() == ["A"]
    assert table.get_column_by_id("B").sort_direction == TSortDirection.NOT_SORTED


def test_removed_columns_drop_out_of_sorting(page: TPage) -> None:
    """sort_columns skips ids whose column is gone; the next click drops them from history."""
    table = _sortable_table(page, "A", "B", limit=2)
    table.sort_click("A")
    table.sort_click("B")
    table.remove_column_by_id("B")

    assert [c.ID for c in table.sort_columns()] == ["A"]
    table.sort_click("A")
    assert table.sort_history() == ["A"]
    assert table.get_column_by_id("A").sort_direction == TSortDirection.ASCENDING


def test_sort_keys_follow_history(page: TPage) -> None:
    """Providers receive (key, descending) pairs, most recent first."""
    table = _sortable_table(page, "A", "B", limit=2)
    table.sort_click("A")
    table.sort_click("B")
    table.sort_click("B")

    assert table.sort_keys() == [("b", True), ("a", False)]


def test_set_sort_column_ids(page: TPage) -> None:
    """Explicit history: first id ascending; non-sortable ids are a misconfiguration."""
    table = _sortable_table(page, "A", "B", limit=2)
    table.add_column(TMapColumn("plain", "Plain", "P"))

    table.set_sort_column_ids("B", "A")
    assert table.sort_history() == ["B", "A"]
    assert table.get_column_by_id("B").sort_direction == TSortDirection.ASCENDING

    with pytest.raises(EMisconfiguration):
        table.set_sort_column_ids("P")


def test_sort_click_arrives_as_private_action(page: TPage, make_ctx: Callable) -> None:
    """The TableSort binding routes to SORT_CLICK and marks the table for redraw."""
    table = _sortable_table(page, "A")
    binding = table.find_event(EV_TABLE_SORT)
    assert binding is not None and binding.private and binding.selector == "[data-gr-sort]"
    assert table.header_row_count == 1

    table.f_refresh = False
    page.dispatch_action(make_ctx(ajax=True), binding.params("A"))
    assert table.sort_history() == ["A"]
    assert table.needs_refresh


def test_sort_state_survives_marshalling(page: TPage) -> None:
    """Saved state restores history and the primary direction, skipping unknown ids."""
    table = _sortable_table(page, "A", "B")
    table.sort_click("A")
    table.sort_click("A")
    saved: dict = {}
    table.marshal_state(saved)
    assert saved == {"sortColumns": ["A"], "sortDirection": -1}

    other = _sortable_table(TPage(None, "Other"), "A", "B")
    other.unmarshal_state({"sortColumns": ["gone", "A"], "sortDirection": -1})
    assert other.sort_history() == ["A"]
    assert other.get_column_by_id("A").sort_direction == TSortDirection.DESCENDING


def test_restored_history_is_capped_at_the_limit(page: TPage) -> None:
    """A saved history longer than the current limit keeps only its head."""
    table = _sortable_table(page, "A", "B", "C")
    table.unmarshal_state({"sortColumns": ["A", "B", "C"], "sortDirection": 1})

    assert table.sort_history() == ["A"]
    assert _directions(table) == {"A": TSortDirection.ASCENDING, "B": TSortDirection.NOT_SORTED,
                                  "C": TSortDirection.NOT_SORTED}

    table.set_sort_history_limit(2)
    table.set_sort_column_ids("C", "B", "A")
    assert table.sort_history() == ["C", "B"]


def test_sort_button_in_header(page: TPage, make_ctx: Callable) -> None:
    """Sortable headers render a sort button with the direction icon and aria-sort."""
    table = _sortable_table(page, "A")
    table.set_data([{"a": 1}])
    table.sort_click("A")
    html = table.draw(make_ctx())

    assert '<th scope="col" aria-sort="ascending">' in html
    assert '<button type="button" data-gr-sort="A">A <i class="fa fa-sort-asc fa-lg"></i></button>' in html


def test_sort_action_params_ignore_non_sort_ids(page: TPage, make_ctx: Callable) -> None:
    """A SORT_CLICK for an unknown column leaves the history alone."""
    table = _sortable_table(page, "A")
    table.private_action(make_ctx(), TActionParams(action_id=SORT_CLICK, control_id="T", event_value="zzz"))
    assert table.sort_history() == []
