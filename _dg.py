# ======================================================================================================================
# 📁 file        : _dg.py - фасад: единая точка импорта и короткие конструкторы табличных контролов
# 🕒 created     : 08.11.2025 16:40
# 🎉 contains    : реэкспорт контролов/колонок, table(), paged_table(), select_table(), pager(), repeater(), ...
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from dg_ctrl_table import TTable, TPagedTable, TSelectTable
from dg_ctrl_pager import TDataPager
from dg_ctrl_repeater import TRepeater, TPagedRepeater, TItemHtmler, TTemplateHtmler
from dg_columns import (TColumn, TSliceColumn, TMapColumn, TGetterColumn, TNodeColumn, TAliasColumn,
                        TCustomColumn, TButtonColumn, TCellTexter, TCellStyler, TRowStyler, TTemplateTexter)
from dg_column_checkbox import TCheckboxColumn, TDefaultCheckboxProvider, TMapCheckboxProvider
from dg_page import TPage, TPageManager
# 💎 ... FACADE EXPORTS ...
__all__ = ["TTable", "TPagedTable", "TSelectTable", "TDataPager", "TRepeater", "TPagedRepeater",
           "TItemHtmler", "TTemplateHtmler",
           "TColumn", "TSliceColumn", "TMapColumn", "TGetterColumn", "TNodeColumn", "TAliasColumn",
           "TCustomColumn", "TButtonColumn", "TCellTexter", "TCellStyler", "TRowStyler", "TTemplateTexter",
           "TCheckboxColumn", "TDefaultCheckboxProvider", "TMapCheckboxProvider", "TPage", "TPageManager",
           "table", "paged_table", "select_table", "pager", "repeater", "paged_repeater",
           "slice_column", "map_column", "getter_column", "node_column", "alias_column", "custom_column",
           "button_column", "checkbox_column"]
# ......................................................................................................................
# 🍒 Общая настройка data-manager контролов
# ......................................................................................................................
def _setup(ctrl, data=None, provider=None, page_size: int = 0, save_state: bool = False):
    if provider is not None:
        ctrl.set_data_provider(provider)
    if data is not None:
        ctrl.set_data(data)
    if page_size:
        ctrl.set_page_size(page_size)
    if save_state:
        ctrl.save_state(True)
    return ctrl
# ......................................................................................................................
# 🍒 CONTROLS FACADE
# ......................................................................................................................
def table(owner, name=None, columns=(), data=None, provider=None, sortable: bool = False,
          save_state: bool = False) -> TTable:
    """ Фасад: TTable у owner, колонки добавляются по порядку. """
    t = _setup(TTable(owner, name), data, provider, save_state=save_state)
    for c in columns:
        t.add_column(c)
    if sortable:
        t.make_sortable()
    return t
# ---
def paged_table(owner, name=None, columns=(), data=None, provider=None, page_size: int = 0,
                sortable: bool = False, save_state: bool = False) -> TPagedTable:
    t = _setup(TPagedTable(owner, name), data, provider, page_size, save_state)
    for c in columns:
        t.add_column(c)
    if sortable:
        t.make_sortable()
    return t
# ---
def select_table(owner, name=None, columns=(), data=None, provider=None, save_state: bool = False) -> TSelectTable:
    t = _setup(TSelectTable(owner, name), data, provider, save_state=save_state)
    for c in columns:
        t.add_column(c)
    return t
# ---
def pager(owner, paged_control, name=None, max_page_buttons: int = 0, save_state: bool = False) -> TDataPager:
    """ Фасад: TDataPager, привязанный к paged_control (объект или ID). """
    p = TDataPager(owner, name, paged_control=paged_control)
    if max_page_buttons:
        p.set_max_page_buttons(max_page_buttons)
    if save_state:
        p.save_state(True)
    return p
# ---
def repeater(owner, name=None, htmler=None, data=None, provider=None) -> TRepeater:
    r = _setup(TRepeater(owner, name), data, provider)
    if htmler is not None:
        r.set_item_htmler(htmler)
    return r
# ---
def paged_repeater(owner, name=None, htmler=None, data=None, provider=None, page_size: int = 0,
                   save_state: bool = False) -> TPagedRepeater:
    r = _setup(TPagedRepeater(owner, name), data, provider, page_size, save_state)
    if htmler is not None:
        r.set_item_htmler(htmler)
    return r
# ......................................................................................................................
# 🍒 COLUMNS FACADE
# ......................................................................................................................
def slice_column(index: int, title: str = "", id: str = "", sortable: bool = False) -> TSliceColumn:
    c = TSliceColumn(index, title, id)
    return c.set_sortable() if sortable else c
# ---
def map_column(key: str, title: str = "", id: str = "", sortable: bool = False) -> TMapColumn:
    c = TMapColumn(key, title or key, id or key)
    return c.set_sortable() if sortable else c
# ---
def getter_column(key: str, title: str = "", id: str = "", sortable: bool = False) -> TGetterColumn:
    c = TGetterColumn(key, title or key, id or key)
    return c.set_sortable() if sortable else c
# ---
def node_column(path: str, title: str = "", id: str = "", sortable: bool = False) -> TNodeColumn:
    c = TNodeColumn(path, title, id)
    return c.set_sortable() if sortable else c
# ---
def alias_column(alias: str, title: str = "", id: str = "") -> TAliasColumn:
    return TAliasColumn(alias, title, id)
# ---
def custom_column(texter, title: str = "", id: str = "") -> TCustomColumn:
    return TCustomColumn(texter, title, id)
# ---
def button_column(title: str = "", id: str = "", button_html: str = "&#9998;") -> TButtonColumn:
    return TButtonColumn(title, id, button_html)
# ---
def checkbox_column(provider, title: str = "", id: str = "", show_check_all: bool = False) -> TCheckboxColumn:
    c = TCheckboxColumn(provider, title, id)
    return c.set_show_check_all(show_check_all)
# ======================================================================================================================
# 📁🌄 _dg.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
