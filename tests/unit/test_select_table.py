"""Tests for the row-selecting table."""

from typing import Callable

from dg_columns import TMapColumn, TRowStyler
from dg_ctrl_table import TSelectTable
from dg_events import EV_ROW_SELECTED
from dg_html import TAttributes
from dg_page import TPage
from tests.unit.fakes import TKeyedRecord, TRecord, TValueRowStyler


def test_row_ids_from_various_rows() -> None:
    """ID(), primary_key(), an 'id' key or get('id'); anything else has no id."""

    class Getter:
        def get(self, name):
            return "g1" if name == "id" else None

    assert TSelectTable.row_data_id(TRecord("a")) == "a"
    assert TSelectTable.row_data_id(TKeyedRecord(12)) == "12"
    assert TSelectTable.row_data_id({"id": 5}) == "5"
    assert TSelectTable.row_data_id(Getter()) == "g1"
    assert TSelectTable.row_data_id(object()) == ""


def test_rows_are_options_with_ids(make_ctx: Callable) -> None:
    """Selectable rows carry data-id and a table-scoped id; the rest are marked nosel."""
    table = TSelectTable(None, "S")
    table.add_column(TMapColumn("name", "Name", "name"))
    table.set_data([{"id": "a", "name": "Ann"}, {"name": "Nobody"}])
    html = table.draw(make_ctx())

    assert '<tr data-id="a" id="S_a" role="option"><td>Ann</td></tr>' in html
    assert '<tr class="nosel" role="option"><td>Nobody</td></tr>' in html


def test_styler_supplied_id_wins(make_ctx: Callable) -> None:
    """An id from the row styler is used instead of the row's own."""

    class TIdStyler(TRowStyler):
        def row_attributes(self, ctx, row, data):
            return TAttributes({"id": "custom"})

    table = TSelectTable(None, "S")
    table.set_row_styler(TIdStyler())
    table.set_data([{"id": "a"}])
    html = table.draw(make_ctx())

    assert '<tr id="S_custom" data-id="custom" role="option">' in html


def test_styler_attributes_are_kept(make_ctx: Callable) -> None:
    """Styler attributes stay on the row next to the selection attributes."""
    table = TSelectTable(None, "S")
    table.set_row_styler(TValueRowStyler())
    table.set_data([{"id": "a"}])
    html = table.draw(make_ctx())

    assert 'data-value="a" data-id="a" id="S_a" role="option"' in html


def test_root_tag_attributes(make_ctx: Callable) -> None:
    """The table is a focusable listbox widget with its selection options."""
    table = TSelectTable(None, "S")
    table.set_data([])
    table.set_reselectable(True)
    table.f_selected_id = "a"
    html = table.draw(make_ctx())

    for fragment in ('data-grctl="selecttable"', 'class="gr-clickable-rows"', 'tabindex="0"', 'role="listbox"',
                     'data-gr-widget="goradd.selectTable"', 'data-gr-opt-selected-id="a"',
                     'data-gr-opt-reselect="1"'):
        assert fragment in html


def test_selection_from_event_and_custom_values(page: TPage, make_ctx: Callable) -> None:
    """RowSelected and the widget's custom value both update the selection."""
    table = TSelectTable(page, "S")
    binding = table.find_event(EV_ROW_SELECTED)
    assert binding is not None and binding.private

    page.dispatch_action(make_ctx(ajax=True), binding.params("b"))
    assert table.selected_id == "b"

    table.update_form_values(make_ctx(ajax=True, custom={"S": {"selectedId": "c"}}))
    assert table.selected_id == "c"


def test_set_selected_id_notifies_the_widget(page: TPage, make_ctx: Callable) -> None:
    """A table already on the client gets an option command instead of a redraw."""
    table = TSelectTable(page, "S")
    table.set_data([])
    table.draw(make_ctx())

    table.set_selected_id("r7")
    [cmd] = page.response.find_commands("option")
    assert cmd.kind == "control" and cmd.target == "S"
    assert cmd.args == ["selectedId", "r7"]

    table.refresh()
    table.set_selected_id("r8")
    assert len(page.response.find_commands("option")) == 1


def test_selection_is_saved(page: TPage) -> None:
    """selId round-trips through saved state."""
    table = TSelectTable(page, "S")
    table.f_selected_id = "x"
    saved: dict = {}
    table.marshal_state(saved)
    assert saved["selId"] == "x"

    other = TSelectTable(TPage(None, "Other"), "S")
    other.unmarshal_state(saved)
    assert other.selected_id == "x"
