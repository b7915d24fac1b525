"""Tests for the checkbox column: rendering, change tracking and check-all."""

from typing import Callable

import pytest

from dg_column_checkbox import TCheckboxColumn, TMapCheckboxProvider
from dg_ctrl_table import TTable
from dg_errors import EMisconfiguration, EProviderFailure
from dg_events import ALL_CLICK_ACTION, COLUMN_ACTION, EV_CHECKBOX_COLUMN_CLICK
from dg_page import TPage
from tests.unit.fakes import TBrokenUniverseProvider, TSetCheckboxProvider, make_rows


def _checkbox_table(page: TPage, provider, rows=None, show_check_all: bool = False) -> tuple[TTable, TCheckboxColumn]:
    table = TTable(page, "T")
    col = TCheckboxColumn(provider, "Pick", "chk").set_show_check_all(show_check_all)
    table.add_column(col)
    table.set_header_row_count(1)
    table.set_data(rows if rows is not None else make_rows(3))
    return table, col


def _draw(page: TPage, table: TTable, make_ctx: Callable) -> str:
    page.render_id += 1
    return table.draw(make_ctx())


def test_renders_one_checkbox_per_row(page: TPage, make_ctx: Callable) -> None:
    """Inputs are named after table and column; checked state comes from the provider."""
    table, col = _checkbox_table(page, TSetCheckboxProvider(checked={"r2": True}))
    html = _draw(page, table, make_ctx)

    assert ('<input id="T_chk_r1" data-gr-checkcol="1" name="T_chk" value="r1" type="checkbox">' in html)
    assert ('<input id="T_chk_r2" data-gr-checkcol="1" name="T_chk" value="r2" checked type="checkbox">'
            in html)
    assert col.current() == {"r1": False, "r2": True, "r3": False}


def test_check_all_box_in_header(page: TPage, make_ctx: Callable) -> None:
    """show_check_all puts a check-all input in the header and binds its click."""
    table, col = _checkbox_table(page, TSetCheckboxProvider(), show_check_all=True)
    html = _draw(page, table, make_ctx)

    assert '<th scope="col"><input id="T_chk_all" data-gr-all="1" type="checkbox">Pick</th>' in html
    binding = table.find_event(EV_CHECKBOX_COLUMN_CLICK, "chk")
    assert binding is not None
    assert binding.selector == "input[data-gr-all]"
    assert binding.action_id == COLUMN_ACTION and binding.action_value == ALL_CLICK_ACTION


def test_server_post_records_changes(page: TPage, make_ctx: Callable) -> None:
    """A full post lists only checked boxes; the diff is against what was shown."""
    table, col = _checkbox_table(page, TSetCheckboxProvider(checked={"r2": True}))
    _draw(page, table, make_ctx)

    table.update_form_values(make_ctx(form={"T_chk": ["r1"]}))
    assert col.changes() == {"r1": True, "r2": False}

    table.update_form_values(make_ctx(form={"T_chk": ["r2"]}))
    assert col.changes() == {}


def test_toggling_twice_returns_to_no_change(page: TPage, make_ctx: Callable) -> None:
    """Ajax posts carry toggled boxes; toggling back clears the entry."""
    table, col = _checkbox_table(page, TSetCheckboxProvider())
    _draw(page, table, make_ctx)

    table.update_form_values(make_ctx(form={"T_chk_r1": "1"}, ajax=True))
    assert col.changes() == {"r1": True}
    table.update_form_values(make_ctx(form={"T_chk_r1": "0"}, ajax=True))
    assert col.changes() == {}


def test_changes_override_provider_on_redraw(page: TPage, make_ctx: Callable) -> None:
    """A changed box keeps the user's value on the next draw."""
    table, col = _checkbox_table(page, TSetCheckboxProvider())
    _draw(page, table, make_ctx)
    table.update_form_values(make_ctx(form={"T_chk_r3": "true"}, ajax=True))

    html = _draw(page, table, make_ctx)
    assert 'value="r3" checked' in html
    assert col.current()["r3"] is False


def test_check_all_with_known_universe(page: TPage, make_ctx: Callable) -> None:
    """Known universe: changes hold exactly the flipped rows and the client sets every box."""
    provider = TSetCheckboxProvider(universe={"r1": False, "r2": False, "r3": True, "r4": True})
    table, col = _checkbox_table(page, provider, show_check_all=True)
    binding = table.find_event(EV_CHECKBOX_COLUMN_CLICK, "chk")

    page.dispatch_action(make_ctx(ajax=True), binding.params({"id": "T_chk_all", "checked": True}))

    assert col.changes() == {"r1": True, "r2": True}
    [cmd] = page.response.find_commands("prop")
    assert cmd.kind == "selector"
    assert cmd.target == "#T input[data-gr-checkcol]"
    assert cmd.args == ["checked", True]


def test_uncheck_all_with_known_universe(page: TPage) -> None:
    """Unchecking everything records the rows that were checked."""
    provider = TSetCheckboxProvider(universe={"r1": False, "r3": True})
    _, col = _checkbox_table(page, provider)
    col.all_click("T_chk_all", False)
    assert col.changes() == {"r3": False}


def test_check_all_with_unknown_universe(page: TPage, make_ctx: Callable) -> None:
    """Unknown universe: the client clicks the visible boxes and the changes arrive as toggles."""
    table, col = _checkbox_table(page, TSetCheckboxProvider(), rows=make_rows(10))
    _draw(page, table, make_ctx)

    col.all_click("T_chk_all", True)
    assert col.changes() == {}
    [cmd] = page.response.find_commands("click")
    assert cmd.target == "#T input[data-gr-checkcol]:not(:checked)"

    table.update_form_values(make_ctx(form={f"T_chk_r{i}": "1" for i in range(1, 11)}, ajax=True))
    assert col.changes() == {f"r{i}": True for i in range(1, 11)}


def test_check_all_payload_as_json(page: TPage, make_ctx: Callable) -> None:
    """The click payload may arrive as a JSON string; a bad payload is ignored."""
    provider = TSetCheckboxProvider(universe={"r1": False})
    table, col = _checkbox_table(page, provider, show_check_all=True)
    binding = table.find_event(EV_CHECKBOX_COLUMN_CLICK, "chk")

    page.dispatch_action(make_ctx(ajax=True), binding.params("not json"))
    assert col.changes() == {}
    page.dispatch_action(make_ctx(ajax=True), binding.params('{"id": "T_chk_all", "checked": true}'))
    assert col.changes() == {"r1": True}


def test_universe_failure_is_a_provider_failure(page: TPage) -> None:
    """An exception from all() surfaces as EProviderFailure."""
    _, col = _checkbox_table(page, TBrokenUniverseProvider())
    with pytest.raises(EProviderFailure):
        col.all_click("T_chk_all", True)


def test_saved_changes_need_the_same_data_version(page: TPage, make_ctx: Callable) -> None:
    """Changes restore only while the provider reports the same data id."""
    table, col = _checkbox_table(page, TSetCheckboxProvider(version="v1"))
    _draw(page, table, make_ctx)
    table.update_form_values(make_ctx(form={"T_chk": ["r1"]}))
    saved: dict = {}
    table.marshal_state(saved)
    assert saved["chk_changes"] == {"r1": True}
    assert saved["chk_dataid"] == "v1"

    same_page = TPage(None, "Same")
    _, same = _checkbox_table(same_page, TSetCheckboxProvider(version="v1"))
    same.unmarshal_state(saved)
    assert same.changes() == {"r1": True}

    newer_page = TPage(None, "Newer")
    _, newer = _checkbox_table(newer_page, TSetCheckboxProvider(version="v2"))
    newer.unmarshal_state(saved)
    assert newer.changes() == {}


def test_map_provider_reads_row_keys(page: TPage, make_ctx: Callable) -> None:
    """The map provider takes id and checked flag from row keys."""
    rows = [{"id": "a", "checked": True}, {"id": "b"}]
    table, col = _checkbox_table(page, TMapCheckboxProvider(), rows=rows)
    _draw(page, table, make_ctx)
    assert col.current() == {"a": True, "b": False}


def test_provider_is_required() -> None:
    """Columns need an object speaking the checkbox provider protocol."""
    with pytest.raises(EMisconfiguration):
        TCheckboxColumn(None)
    with pytest.raises(EMisconfiguration):
        TCheckboxColumn(object())
