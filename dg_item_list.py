# ======================================================================================================================
# 📁 file        : dg_item_list.py - иерархический список элементов с позиционными ID
# 🕒 created     : 17.10.2025 11:52
# 🎉 contains    : TItemPair/TItemIdentified/TItemLabelOnly/TItemDisplayOnly (источники), TListItem, TItemList,
#                  item_from_source(), id_sort_key(), sort_ids()
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any, Iterator
from dg_errors import EBadID
from dg_html import TAttributes, render_tag, escape
from dg_logger import LoggableComponent
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TItemPair", "TItemIdentified", "TItemLabelOnly", "TItemDisplayOnly", "TListItem", "TItemList",
           "item_from_source", "id_sort_key", "sort_ids"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Источники элементов (то, что вызывающий код может отдать в add_list_items)
# ----------------------------------------------------------------------------------------------------------------------
@dataclass
class TItemPair:
    value: Any
    label: str


@dataclass
class TItemIdentified:
    id: Any
    display: str


@dataclass
class TItemLabelOnly:
    label: str


@dataclass
class TItemDisplayOnly:
    display: str
# ---
def _member(obj: Any, name: str) -> Any:
    """Атрибут или результат метода с тем же именем."""
    v = getattr(obj, name)
    return v() if callable(v) else v
# ---
def item_from_source(src: Any) -> "TListItem":
    """
    Любой поддерживаемый источник → TListItem:
    TListItem, явные источники, str, объекты с (value, label), с ID (+ str()), только с label, всё остальное по str().
    """
    if isinstance(src, TListItem):
        return src
    if isinstance(src, TItemPair):
        return TListItem(src.label, "" if src.value is None else src.value)
    if isinstance(src, TItemIdentified):
        return TListItem(src.display, src.id)
    if isinstance(src, TItemLabelOnly):
        return TListItem(src.label)
    if isinstance(src, TItemDisplayOnly):
        return TListItem(src.display)
    if isinstance(src, str):
        return TListItem(src)
    if hasattr(src, "value") and hasattr(src, "label"):
        v = _member(src, "value")
        return TListItem(str(_member(src, "label")), "" if v is None else v)
    if hasattr(src, "ID"):
        return TListItem(str(src), _member(src, "ID"))
    if hasattr(src, "label"):
        return TListItem(str(_member(src, "label")))
    return TListItem(str(src))
# ......................................................................................................................
# 🍒 Порядок ID
# ......................................................................................................................
def id_sort_key(id: str) -> tuple[str, tuple[int, ...]]:
    """
    'owner_1_10' → ('owner', (1, 10)). Всё после первого числового сегмента сравнивается как кортеж int,
    поэтому owner_1_2 < owner_1_10. Хвост, который не разбирается в числа, идёт в owner-часть.
    """
    parts = id.split("_")
    nums: list[int] = []
    while parts and parts[-1].isascii() and parts[-1].isdigit():
        nums.insert(0, int(parts.pop()))
    return "_".join(parts), tuple(nums)
# ---
def sort_ids(ids) -> list[str]:
    return sorted(ids, key=id_sort_key)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TListItem - элемент списка (сам тоже может содержать вложенный список)
# ----------------------------------------------------------------------------------------------------------------------
class TListItem:
    def __init__(self, label: str = "", value: Any = None):
        self.f_label = str(label)
        self.f_value = label if value is None else value
        self.f_id = ""
        self.f_attributes: TAttributes | None = None
        self.f_anchor_attributes: TAttributes | None = None
        self.f_disabled = False
        self.f_is_divider = False
        self.f_should_escape_label = True
        self.items = TItemList("")

    # 🏷️ ...идентичность...
    @property
    def ID(self) -> str:
        return self.f_id

    def set_id(self, id: str):
        """Задаёт ID и переиндексирует все вложенные элементы."""
        self.f_id = id
        self.items.set_owner_id(id)

    @property
    def value(self) -> Any:
        return self.f_value

    @value.setter
    def value(self, v: Any):
        self.f_value = v

    @property
    def label(self) -> str:
        return self.f_label

    @label.setter
    def label(self, v: str):
        self.f_label = str(v)

    def is_empty_value(self) -> bool:
        return self.f_value is None or self.f_value == ""

    # 🌱 ...флаги и атрибуты...
    @property
    def disabled(self) -> bool:
        return self.f_disabled

    @disabled.setter
    def disabled(self, v: bool):
        self.f_disabled = bool(v)

    @property
    def is_divider(self) -> bool:
        return self.f_is_divider

    @is_divider.setter
    def is_divider(self, v: bool):
        self.f_is_divider = bool(v)

    def set_should_escape_label(self, e: bool) -> "TListItem":
        self.f_should_escape_label = bool(e)
        return self

    @property
    def attributes(self) -> TAttributes:
        if self.f_attributes is None:
            self.f_attributes = TAttributes()
        return self.f_attributes

    @property
    def anchor_attributes(self) -> TAttributes:
        if self.f_anchor_attributes is None:
            self.f_anchor_attributes = TAttributes()
        return self.f_anchor_attributes

    @property
    def anchor(self) -> str:
        if self.f_anchor_attributes is None:
            return ""
        return self.f_anchor_attributes.get("href", "")

    @anchor.setter
    def anchor(self, href: str):
        self.anchor_attributes.set("href", href)

    def render_label(self) -> str:
        h = escape(self.f_label) if self.f_should_escape_label else self.f_label
        if self.anchor and not self.f_disabled:
            h = render_tag("a", self.f_anchor_attributes, h)
        return h

    # 👨‍👩‍👧 ...вложенные элементы...
    def add_item(self, label: str, value: Any = None) -> "TListItem":
        return self.items.add_item(label, value)

    def has_child_items(self) -> bool:
        return len(self.items) > 0

    # 💾 ...pagestate...
    def serialize(self, enc):
        enc.encode(self.f_value)
        enc.encode(self.f_id)
        enc.encode(self.f_label)
        enc.encode(self.f_attributes)
        enc.encode(self.f_should_escape_label)
        enc.encode(self.f_disabled)
        enc.encode(self.f_is_divider)
        enc.encode(self.f_anchor_attributes)
        self.items.serialize(enc)

    def deserialize(self, dec):
        self.f_value = dec.decode()
        self.f_id = dec.decode()
        self.f_label = dec.decode()
        self.f_attributes = dec.decode()
        self.f_should_escape_label = dec.decode()
        self.f_disabled = dec.decode()
        self.f_is_divider = dec.decode()
        self.f_anchor_attributes = dec.decode()
        self.items.deserialize(dec)

    def __repr__(self):
        return f"<TListItem id={self.f_id!r} label={self.f_label!r} value={self.f_value!r}>"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TItemList - упорядоченный список TListItem с ID вида owner_i_j_k
# ----------------------------------------------------------------------------------------------------------------------
class TItemList(LoggableComponent):
    def __init__(self, owner_id: str = ""):
        self.f_owner_id = owner_id
        self.f_items: list[TListItem] = []

    @property
    def owner_id(self) -> str:
        return self.f_owner_id

    def set_owner_id(self, owner_id: str):
        self.f_owner_id = owner_id
        self._reindex(0)

    def _reindex(self, start: int):
        """Восстанавливает ID от start до конца (и рекурсивно во вложенных списках)."""
        if not self.f_owner_id:
            return
        for i in range(max(start, 0), len(self.f_items)):
            self.f_items[i].set_id(f"{self.f_owner_id}_{i}")
    # ..................................................................................................................
    # ➕ Добавление
    # ..................................................................................................................
    def add_item(self, label: str, value: Any = None) -> TListItem:
        item = TListItem(label, value)
        self.add_list_item_at(len(self.f_items), item)
        return item

    def add_item_at(self, index: int, label: str, value: Any = None) -> TListItem:
        item = TListItem(label, value)
        self.add_list_item_at(index, item)
        return item

    def add_list_item_at(self, index: int, item: TListItem):
        """Отрицательный index считается с конца; выход за границы прижимается к ним."""
        n = len(self.f_items)
        if index < 0:
            index = max(n + index, 0)
        elif index > n:
            index = n
        self.f_items.insert(index, item)
        self._reindex(index)

    def add_list_items(self, *sources: Any):
        """Одиночные источники и последовательности источников вперемешку; переиндексация один раз в конце."""
        start = len(self.f_items)
        for src in sources:
            if isinstance(src, Iterable) and not isinstance(src, (str, bytes, Mapping, TListItem)):
                for one in src:
                    self.f_items.append(item_from_source(one))
            else:
                self.f_items.append(item_from_source(src))
        self._reindex(start)
    # ..................................................................................................................
    # 🔍 Доступ
    # ..................................................................................................................
    def get_item_at(self, index: int) -> TListItem:
        if index < 0 or index >= len(self.f_items):
            raise EBadID(f"TItemList.get_item_at(): index {index} out of range")
        return self.f_items[index]

    def list_items(self) -> list[TListItem]:
        return list(self.f_items)

    def get_item(self, id: str) -> TListItem:
        """
        'owner_2_0' → items[2].items[0]. Чужой owner, не-число или индекс вне диапазона → EBadID.
        """
        prefix = f"{self.f_owner_id}_"
        if not self.f_owner_id or not id.startswith(prefix):
            raise EBadID(f"TItemList.get_item(): id {id!r} does not belong to {self.f_owner_id!r}")
        rest = id[len(prefix):]
        head = rest.split("_", 1)[0]
        if not (head.isascii() and head.isdigit()):
            raise EBadID(f"TItemList.get_item(): malformed id {id!r}")
        index = int(head)
        if index >= len(self.f_items):
            raise EBadID(f"TItemList.get_item(): id {id!r} out of range")
        item = self.f_items[index]
        if "_" not in rest:
            return item
        return item.items.get_item(id)

    def get_item_by_value(self, value: Any) -> tuple[str, TListItem | None]:
        """Поиск в глубину: элемент, затем его потомки, затем следующий элемент."""
        for item in self.f_items:
            if item.value == value:
                return item.ID, item
            found_id, found = item.items.get_item_by_value(value)
            if found is not None:
                return found_id, found
        return "", None
    # ..................................................................................................................
    # ➖ Удаление
    # ..................................................................................................................
    def remove_item_at(self, index: int):
        if index < 0 or index >= len(self.f_items):
            raise EBadID(f"TItemList.remove_item_at(): index {index} out of range")
        del self.f_items[index]
        self._reindex(index)

    def clear(self):
        self.f_items.clear()

    def __len__(self) -> int:
        return len(self.f_items)

    def __iter__(self) -> Iterator[TListItem]:
        return iter(list(self.f_items))
    # ..................................................................................................................
    # 💾 pagestate
    # ..................................................................................................................
    def serialize(self, enc):
        enc.encode(self.f_owner_id)
        enc.encode(len(self.f_items))
        for item in self.f_items:
            item.serialize(enc)

    def deserialize(self, dec):
        self.f_owner_id = dec.decode()
        count = dec.decode()
        self.f_items = []
        for _ in range(count):
            item = TListItem()
            item.deserialize(dec)
            self.f_items.append(item)
# ======================================================================================================================
# 📁🌄 dg_item_list.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
