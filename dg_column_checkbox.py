# ======================================================================================================================
# 📁 file        : dg_column_checkbox.py - колонка чекбоксов с учётом изменений относительно версии данных
# 🕒 created     : 05.11.2025 16:08
# 🎉 contains    : TCheckboxProvider (протокол), TDefaultCheckboxProvider, TMapCheckboxProvider, TCheckboxColumn
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, runtime_checkable
from pydantic import ValidationError
from dg_columns import TColumn
from dg_errors import EBadID, EGridError, EMisconfiguration, EProviderFailure
from dg_events import EV_CHECKBOX_COLUMN_CLICK, COLUMN_ACTION, ALL_CLICK_ACTION, TCheckboxClick, TJsPriority
from dg_html import TAttributes, render_void_tag, escape
from dg_pagestate import TSerializable, resolve_ref
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TCheckboxProvider", "TDefaultCheckboxProvider", "TMapCheckboxProvider", "TCheckboxColumn"]
# 💎 ... значения чекбокса, которые клиент шлёт как "включено" ...
_TRUE_VALUES = {"1", "true", "on", "yes", "checked"}
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCheckboxProvider - что колонка спрашивает про строки
# ----------------------------------------------------------------------------------------------------------------------
@runtime_checkable
class TCheckboxProvider(Protocol):
    def row_id(self, data: Any) -> str: ...
    def is_checked(self, data: Any) -> bool: ...
    def attributes(self, data: Any) -> Optional[TAttributes]: ...
    def all(self) -> Optional[Dict[str, bool]]: ...
    def data_id(self) -> str: ...


class TDefaultCheckboxProvider(TSerializable):
    """Ничего не знает: наследники переопределяют нужное."""

    def row_id(self, data: Any) -> str:
        return ""

    def is_checked(self, data: Any) -> bool:
        return False

    def attributes(self, data: Any) -> Optional[TAttributes]:
        return None

    def all(self) -> Optional[Dict[str, bool]]:
        return None

    def data_id(self) -> str:
        return ""


class TMapCheckboxProvider(TDefaultCheckboxProvider):
    """Строки-словари: id и признак отметки лежат по ключам."""
    id_key: str = "id"
    checked_key: str = "checked"
    version: str = ""

    def row_id(self, data: Any) -> str:
        v = data.get(self.id_key) if hasattr(data, "get") else None
        return "" if v is None else str(v)

    def is_checked(self, data: Any) -> bool:
        return bool(data.get(self.checked_key)) if hasattr(data, "get") else False

    def data_id(self) -> str:
        return self.version
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCheckboxColumn
# ----------------------------------------------------------------------------------------------------------------------
class TCheckboxColumn(TColumn):
    """
    current - что было показано в последнем рендере (row_id → bool),
    changes - что пользователь поменял относительно показанного.
    Сохранённые changes восстанавливаются только при той же data_id() провайдера.
    """

    def __init__(self, provider, title: str = "", id: str = ""):
        if provider is None:
            raise EMisconfiguration("TCheckboxColumn(): a checkbox provider is required")
        if not isinstance(provider, TCheckboxProvider):
            raise EMisconfiguration(f"TCheckboxColumn(): {type(provider).__name__} is not a checkbox provider")
        super().__init__(title, id)
        self.f_provider = provider
        self.f_is_html = True

    def _init_fields(self):
        super()._init_fields()
        self.f_provider: Any = None
        self.f_show_check_all: bool = False
        self.f_current: Dict[str, bool] = {}
        self.f_changes: Dict[str, bool] = {}

    @property
    def provider(self):
        return self.f_provider

    def set_show_check_all(self, on: bool) -> "TCheckboxColumn":
        self.f_show_check_all = bool(on)
        return self

    @property
    def show_check_all(self) -> bool:
        return self.f_show_check_all

    def changes(self) -> Dict[str, bool]:
        return dict(self.f_changes)

    def current(self) -> Dict[str, bool]:
        return dict(self.f_current)

    def reset_changes(self):
        self.f_changes = {}

    def input_name(self) -> str:
        table = self.require_parent("input_name")
        return f"{table.ID}_{self.f_id}"
    # ..................................................................................................................
    # 🎨 Рисование
    # ..................................................................................................................
    def checkbox_attributes(self, data: Any) -> TAttributes:
        """data=None → чекбокс "выбрать всё" в заголовке."""
        p = self.f_provider
        a = p.attributes(data)
        a = TAttributes() if a is None else TAttributes(a)
        name = self.input_name()
        if data is None:
            a.set("id", f"{name}_all")
            a.set_data("grAll", "1")
            return a
        row_id = p.row_id(data)
        if not row_id:
            raise EBadID(f"TCheckboxColumn.checkbox_attributes(): column '{self.f_id}' got an empty row id")
        checked = bool(p.is_checked(data))
        a.set("id", f"{name}_{row_id}")
        a.set_data("grCheckcol", "1")
        a.set("name", name)
        a.set("value", row_id)
        self.f_current[row_id] = checked
        if self.f_changes.get(row_id, checked):
            a.set("checked", True)
        return a

    def header_cell_html(self, ctx, row: int, col: int) -> str:
        if row != 0:
            return super().header_cell_html(ctx, row, col)
        h = ""
        if self.f_show_check_all:
            a = self.checkbox_attributes(None)
            a.set("type", "checkbox")
            h += render_void_tag("input", a)
        if self.is_sortable():
            h += self.render_sort_button(escape(self.f_title))
        elif self.f_title:
            h += escape(self.f_title)
        return h

    def cell_text(self, ctx, row: int, col: int, data: Any) -> str:
        a = self.checkbox_attributes(data)
        a.set("type", "checkbox")
        return render_void_tag("input", a)

    def pre_render(self, ctx=None):
        self.f_current = {}
    # ..................................................................................................................
    # 📥 Значения формы
    # ..................................................................................................................
    def update_form_values(self, ctx):
        name = self.input_name()
        if not ctx.is_ajax():
            # полный POST: пришли только отмеченные
            recent = set(ctx.form_values(name) or [])
            for k, v in self.f_current.items():
                self._record(k, v, k in recent)
        else:
            # ajax: пришли только переключённые
            for k, v in self.f_current.items():
                raw = ctx.form_value(f"{name}_{k}")
                if raw is not None:
                    self._record(k, v, str(raw).strip().lower() in _TRUE_VALUES)

    def _record(self, k: str, shown: bool, new: bool):
        if new != shown:
            self.f_changes[k] = new
        else:
            self.f_changes.pop(k, None)
    # ..................................................................................................................
    # 🎯 Действия
    # ..................................................................................................................
    def add_actions(self, ctrl):
        ctrl.on(EV_CHECKBOX_COLUMN_CLICK, COLUMN_ACTION, selector="input[data-gr-all]", sub_id=self.f_id,
                action_value=ALL_CLICK_ACTION, private=True)

    def do_action(self, ctx, params):
        if params.action_value_int() != ALL_CLICK_ACTION:
            return super().do_action(ctx, params)
        try:
            click = params.event_value_as(TCheckboxClick)
        except ValidationError as e:
            self.log("do_action", f"⚠ bad check-all payload: {e}")
            return
        self.all_click(click.id, click.checked, click.row, click.column)

    def all_click(self, id: str, checked: bool, row: int = -1, column: int = -1):
        table = self.require_parent("all_click")
        page = table.page()
        if page is None:
            raise EMisconfiguration(f"TCheckboxColumn.all_click(): table '{table.ID}' is not on a page")
        try:
            universe = self.f_provider.all()
        except EGridError:
            raise
        except Exception as e:
            raise EProviderFailure(f"TCheckboxColumn.all_click(): provider all() failed: {e}") from e

        response = page.response
        selector = f"#{table.ID} input[data-gr-checkcol]"
        if universe is not None:
            for k, v in universe.items():
                self._record(k, bool(v), checked)
            response.execute_selector_function(selector, "prop", TJsPriority.STANDARD, "checked", checked)
            self.log("all_click", f"{'✅' if checked else '⬜'} {len(universe)} rows, {len(self.f_changes)} changed")
        else:
            # вселенная неизвестна: клиент сам кликнет по строкам, изменения придут в update_form_values()
            sel = f"{selector}:not(:checked)" if checked else f"{selector}:checked"
            response.execute_selector_function(sel, "click", TJsPriority.STANDARD)
            self.log("all_click", f"client-side toggle of visible rows → {checked}")
    # ..................................................................................................................
    # 💾 Сохранённое состояние / pagestate
    # ..................................................................................................................
    def marshal_state(self, m: dict):
        m[f"{self.f_id}_changes"] = dict(self.f_changes)
        m[f"{self.f_id}_dataid"] = self.f_provider.data_id()

    def unmarshal_state(self, m: dict):
        data_id = m.get(f"{self.f_id}_dataid")
        if not isinstance(data_id, str) or data_id != self.f_provider.data_id():
            # данные поменялись - старый diff не имеет смысла
            self.f_changes = {}
            return
        changes = m.get(f"{self.f_id}_changes")
        if isinstance(changes, dict):
            self.f_changes = {str(k): bool(v) for k, v in changes.items()}

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_show_check_all)
        enc.encode_ref(self.f_provider)
        enc.encode(self.f_current)
        enc.encode(self.f_changes)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_show_check_all = dec.decode()
        self.f_provider = dec.decode()
        self.f_current = dict(dec.decode())
        self.f_changes = dict(dec.decode())

    def restore(self, table):
        super().restore(table)
        self.f_provider = resolve_ref(self.f_provider, table.page())
# ======================================================================================================================
# 📁🌄 dg_column_checkbox.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
