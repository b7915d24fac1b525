"""Tests for the hierarchical item list and its positional ids."""

import pytest

from dg_errors import EBadID
from dg_item_list import (TItemIdentified, TItemLabelOnly, TItemList, TItemPair, TListItem, id_sort_key,
                          sort_ids)


def _ids(lst: TItemList) -> list[str]:
    return [item.ID for item in lst]


def test_ids_follow_positions_after_inserts() -> None:
    """Inserting at the front renumbers everything behind it."""
    lst = TItemList("sel")
    lst.add_item("a")
    lst.add_item("b")
    lst.add_item_at(0, "first")

    assert _ids(lst) == ["sel_0", "sel_1", "sel_2"]
    assert [i.label for i in lst] == ["first", "a", "b"]


def test_ids_follow_positions_after_removal() -> None:
    """Removing an item closes the gap."""
    lst = TItemList("sel")
    for label in ("a", "b", "c"):
        lst.add_item(label)
    lst.remove_item_at(0)

    assert _ids(lst) == ["sel_0", "sel_1"]
    assert lst.get_item("sel_1").label == "c"


def test_nested_ids_are_reindexed_with_parent() -> None:
    """Sub-items carry the full path and move with their parent."""
    lst = TItemList("sel")
    parent = lst.add_item("parent")
    child = parent.add_item("child")
    assert child.ID == "sel_0_0"

    lst.add_item_at(0, "new head")
    assert parent.ID == "sel_1"
    assert child.ID == "sel_1_0"
    assert lst.get_item("sel_1_0") is child


def test_negative_and_oversized_insert_positions_are_clamped() -> None:
    """Negative index counts from the end; out of range goes to the edges."""
    lst = TItemList("x")
    lst.add_item("a")
    lst.add_item("b")
    lst.add_item_at(-1, "mid")
    lst.add_item_at(100, "tail")
    lst.add_item_at(-100, "head")

    assert [i.label for i in lst] == ["head", "a", "mid", "b", "tail"]
    assert _ids(lst) == [f"x_{i}" for i in range(5)]


@pytest.mark.parametrize("bad_id", ["other_0", "sel_x", "sel_9", "sel_0_5", "", "sel_²", "sel_0_²"])
def test_get_item_rejects_bad_ids(bad_id: str) -> None:
    """Foreign, malformed or out-of-range ids raise EBadID."""
    lst = TItemList("sel")
    lst.add_item("only")

    with pytest.raises(EBadID):
        lst.get_item(bad_id)


def test_get_item_at_out_of_range() -> None:
    """Index access outside the list raises EBadID."""
    with pytest.raises(EBadID):
        TItemList("sel").get_item_at(0)


def test_get_item_by_value_is_depth_first() -> None:
    """A child of an earlier item wins over a later sibling with the same value."""
    lst = TItemList("sel")
    first = lst.add_item("first", 1)
    first.add_item("deep", 42)
    lst.add_item("second", 42)

    found_id, found = lst.get_item_by_value(42)
    assert found_id == "sel_0_0"
    assert found is not None and found.label == "deep"
    assert lst.get_item_by_value("missing") == ("", None)


def test_add_list_items_accepts_mixed_sources() -> None:
    """Single sources and sequences of sources are converted in order."""

    class Tagged:
        def ID(self) -> int:
            return 7

        def __str__(self) -> str:
            return "tagged"

    lst = TItemList("sel")
    lst.add_list_items("plain", [TItemPair(1, "one"), TItemIdentified(2, "two")], TItemLabelOnly("label"),
                       Tagged(), TListItem("ready", "r"))

    assert [(i.label, i.value) for i in lst] == [
        ("plain", "plain"), ("one", 1), ("two", 2), ("label", "label"), ("tagged", 7), ("ready", "r"),
    ]
    assert _ids(lst) == [f"sel_{i}" for i in range(6)]


def test_render_label_escapes_and_links() -> None:
    """Labels are escaped unless told otherwise; an anchor wraps enabled items."""
    item = TListItem("<b>bold</b>")
    assert item.render_label() == "&lt;b&gt;bold&lt;/b&gt;"

    item.anchor = "/go"
    assert item.render_label() == '<a href="/go">&lt;b&gt;bold&lt;/b&gt;</a>'

    item.disabled = True
    assert item.render_label() == "&lt;b&gt;bold&lt;/b&gt;"

    item.set_should_escape_label(False)
    assert item.render_label() == "<b>bold</b>"


def test_id_sort_key_orders_numerically() -> None:
    """owner_1_10 sorts after owner_1_2."""
    assert id_sort_key("owner_1_10") == ("owner", (1, 10))
    assert sort_ids(["owner_1_10", "owner_1_2", "owner_0", "owner_1"]) == [
        "owner_0", "owner_1", "owner_1_2", "owner_1_10",
    ]


def test_sort_ids_tolerates_non_ascii_digits() -> None:
    """Segments like '²' are not positions; they stay in the owner part."""
    assert id_sort_key("o_1_²") == ("o_1_²", ())
    assert sort_ids(["o_1_²", "o_1_2"]) == ["o_1_2", "o_1_²"]


def test_add_list_items_flattens_any_iterable() -> None:
    """Generators and sets of sources are expanded; strings and items are not."""
    lst = TItemList("g")
    lst.add_list_items((TItemPair(i, f"n{i}") for i in range(2)), "abc", {"solo"}, TListItem("item"))

    assert [i.label for i in lst] == ["n0", "n1", "abc", "solo", "item"]
    assert _ids(lst) == [f"g_{i}" for i in range(5)]
