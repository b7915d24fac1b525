"""Tests for table rendering, column management and the data manager."""

from typing import Callable

import pytest

from dg_columns import TButtonColumn, TMapColumn, TTemplateTexter
from dg_ctrl_table import TTable
from dg_errors import EBadData, EBadID, EMisconfiguration, EProviderFailure
from dg_events import EV_CLICK, VALUE_FROM_ROW
from dg_page import TPage
from tests.unit.fakes import (TCancellingProvider, TFailingProvider, TListProvider, TValueRowStyler,
                              make_rows)


def _name_table(rows=None) -> TTable:
    table = TTable(None, "T")
    table.add_column(TMapColumn("name", "Name", "name"))
    if rows is not None:
        table.set_data(rows)
    return table


def test_renders_body_rows(make_ctx: Callable) -> None:
    """One <tr> per data row, one <td> per column."""
    html = _name_table(make_rows(2)).draw(make_ctx())

    assert html == ('<table id="T" data-grctl="table"><tbody>'
                    '<tr><td>Row 1</td></tr><tr><td>Row 2</td></tr>'
                    '</tbody></table>')


def test_cell_text_is_escaped_unless_html(make_ctx: Callable) -> None:
    """Cell text goes through html escaping; html columns are trusted."""
    table = _name_table([{"name": "<b>x</b>"}])
    assert "<td>&lt;b&gt;x&lt;/b&gt;</td>" in table.draw(make_ctx())

    table.get_column(0).set_is_html(True)
    assert "<td><b>x</b></td>" in table.draw(make_ctx())


def test_header_and_footer_rows(make_ctx: Callable) -> None:
    """Header rows go to thead, footer rows to tfoot, before the body."""
    table = _name_table(make_rows(1))
    table.get_column(0).set_footer_texter(TTemplateTexter(template="Total"))
    table.set_header_row_count(1).set_footer_row_count(1)
    html = table.draw(make_ctx())

    assert ('<thead><tr><th scope="col">Name</th></tr></thead>'
            '<tfoot><tr><td>Total</td></tr></tfoot>'
            '<tbody><tr><td>Row 1</td></tr></tbody>') in html


def test_row_stylers(make_ctx: Callable) -> None:
    """The row styler decorates body rows; header rows get it with no data."""
    table = _name_table(make_rows(1))
    table.set_header_row_count(1)
    table.set_row_styler(TValueRowStyler())
    table.set_header_row_styler(TValueRowStyler())
    html = table.draw(make_ctx())

    assert '<tr class="head"><th scope="col">Name</th></tr>' in html
    assert '<tr data-value="r1"><td>Row 1</td></tr>' in html


def test_styler_without_row_attributes_is_rejected() -> None:
    """Only objects with row_attributes() can style rows."""
    with pytest.raises(EMisconfiguration):
        _name_table().set_row_styler(object())


def test_caption_is_escaped(make_ctx: Callable) -> None:
    """A string caption is escaped inside <caption>."""
    table = _name_table([])
    table.set_caption("<Users>")
    assert "<caption>&lt;Users&gt;</caption>" in table.draw(make_ctx())


def test_hide_if_empty(make_ctx: Callable) -> None:
    """An empty table is hidden but still rendered."""
    table = _name_table([])
    table.set_hide_if_empty(True)
    assert table.draw(make_ctx()).startswith('<table id="T" data-grctl="table" style="display:none">')

    table.set_data(make_rows(1))
    assert "display:none" not in table.draw(make_ctx())


def test_column_tags_step_over_spans(make_ctx: Callable) -> None:
    """A spanning <col> covers the following columns."""
    table = TTable(None, "T")
    table.add_columns(TMapColumn("a", "A", "c1").set_span(2), TMapColumn("b", "B", "c2"),
                      TMapColumn("c", "C", "c3"))
    table.set_render_column_tags(True)
    table.set_data([])

    assert '<col id="T_c1" span="2"><col id="T_c3">' in table.draw(make_ctx())


def test_hidden_columns_are_skipped(make_ctx: Callable) -> None:
    """Hidden columns draw neither header nor cells."""
    table = TTable(None, "T")
    table.add_columns(TMapColumn("name", "Name", "name"), TMapColumn("n", "N", "n"))
    table.set_header_row_count(1)
    table.set_data(make_rows(1))
    table.get_column_by_id("n").set_hidden(True)
    html = table.draw(make_ctx())

    assert "<th scope=\"col\">N</th>" not in html
    assert "<tr><td>Row 1</td></tr>" in html

    table.hide_columns()
    assert "<tr></tr>" in table.draw(make_ctx())
    table.show_columns()
    assert "<tr><td>Row 1</td><td>1</td></tr>" in table.draw(make_ctx())


def test_column_ids_come_from_a_counter() -> None:
    """Columns without an id are numbered; numbers are never reused."""
    table = TTable(None, "T")
    first = table.add_column(TMapColumn("a"))
    second = table.add_column(TMapColumn("b"))
    table.remove_column_by_id(second.ID)
    third = table.add_column(TMapColumn("c"))

    assert (first.ID, second.ID, third.ID) == ("1", "2", "3")
    assert second.parent_table is None
    assert third.parent_table is table


def test_duplicate_column_id_is_rejected() -> None:
    """Two columns with one id raise EBadID."""
    table = TTable(None, "T")
    table.add_column(TMapColumn("a", "A", "x"))
    with pytest.raises(EBadID):
        table.add_column(TMapColumn("b", "B", "x"))


def test_column_lookup_and_insert_position() -> None:
    """add_column_at inserts; lookups by index, id and title."""
    table = TTable(None, "T")
    table.add_columns(TMapColumn("a", "A", "a"), TMapColumn("c", "C", "c"))
    table.add_column_at(TMapColumn("b", "B", "b"), 1)

    assert [c.ID for c in table.columns()] == ["a", "b", "c"]
    assert table.get_column_by_title("C").ID == "c"
    assert table.get_column_by_id("zz") is None
    with pytest.raises(EBadID):
        table.get_column(3)

    table.remove_column_by_title("A")
    assert table.column_count == 2
    table.clear_columns()
    assert table.columns() == []


def test_removing_a_column_drops_its_events() -> None:
    """Bindings addressed to a removed column go with it."""
    table = TTable(None, "T")
    col = table.add_column(TButtonColumn("Edit", "edit"))
    binding = col.button_click_binding(3000)
    assert table.find_event(EV_CLICK, "edit") is binding

    table.remove_column_by_id("edit")
    assert table.find_event(EV_CLICK, "edit") is None


def test_button_clicks_carry_the_row_value() -> None:
    """The click binding tells the client to send the row's data-value."""
    table = TTable(None, "T")
    binding = table.add_column(TButtonColumn("Edit", "edit")).button_click_binding(3000)

    assert binding.value_from == VALUE_FROM_ROW
    assert binding.selector == "[data-gr-btn-col]" and not binding.private
    assert '"value_from":"tr:value"' in table.drawing_attributes().get_data("grEvents")


def test_provider_binds_before_draw_and_releases_after(page: TPage, make_ctx: Callable) -> None:
    """Provider data lives only for the draw."""
    provider = TListProvider(page, "Prov", rows=make_rows(3))
    table = TTable(page, "T")
    table.add_column(TMapColumn("name", "Name", "name"))
    table.set_data_provider(provider)
    html = table.draw(make_ctx())

    assert provider.calls == ["T"]
    assert "<td>Row 3</td>" in html
    assert table.data is None


def test_provider_failure_renders_empty_table(page: TPage, make_ctx: Callable) -> None:
    """A failing provider leaves an empty body and the error on the table."""
    table = TTable(page, "T")
    table.add_column(TMapColumn("name", "Name", "name"))
    table.set_data_provider(TFailingProvider(page, "Bad"))
    html = table.draw(make_ctx())

    assert "<tbody></tbody>" in html
    assert isinstance(table.data_error, EProviderFailure)
    assert "database is down" in str(table.data_error)


def test_cancelled_context_skips_the_provider(page: TPage, make_ctx: Callable) -> None:
    """A request cancelled before drawing never reaches the provider."""
    provider = TListProvider(page, "Prov", rows=make_rows(3))
    table = TTable(page, "T")
    table.set_data_provider(provider)
    ctx = make_ctx()
    ctx.cancel()

    assert "<tbody></tbody>" in table.draw(ctx)
    assert provider.calls == []


def test_cancel_during_bind_drops_the_data(page: TPage, make_ctx: Callable) -> None:
    """Whatever the provider set before the cancel is discarded."""
    table = TTable(page, "T")
    table.add_column(TMapColumn("id", "Id", "id"))
    table.set_data_provider(TCancellingProvider(page, "Half"))

    assert "<tbody></tbody>" in table.draw(make_ctx())


def test_provider_must_be_a_component() -> None:
    """Objects without bind_data() are not providers."""
    with pytest.raises(EMisconfiguration):
        TTable(None, "T").set_data_provider(object())


@pytest.mark.parametrize("bad", ["text", 42, {"a": 1}])
def test_data_must_be_a_sequence(bad) -> None:
    """Strings, scalars and mappings are not row sequences."""
    with pytest.raises(EBadData):
        TTable(None, "T").set_data(bad)


def test_negative_offset_is_bad_data() -> None:
    """Offsets start at zero."""
    with pytest.raises(EBadData):
        TTable(None, "T").set_data_with_offset([], -1)


def test_range_data_uses_absolute_indexes_and_stops_on_false() -> None:
    """The callback sees offset-based indexes and can stop early."""
    table = TTable(None, "T")
    table.set_data_with_offset(["a", "b", "c"], 20)
    seen = []

    def visit(i, row):
        seen.append((i, row))
        return i < 21

    table.range_data(visit)
    assert seen == [(20, "a"), (21, "b")]
