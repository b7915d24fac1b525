# ======================================================================================================================
# 📁 file        : dg_ctrl_pager.py - пейджер: тулбар кнопок страниц для постраничного контрола
# 🕒 created     : 07.11.2025 08:15
# 🎉 contains    : TButtonProxy, TDataPager
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Any, Optional
from dg_sys import *
from dg_ctrl_custom import TCustomControl
from dg_errors import EMisconfiguration, EProviderFailure, EStaleState
from dg_events import EV_PAGE_CLICK, PAGE_CLICK
from dg_html import TAttributes, render_tag, escape
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TButtonProxy", "TDataPager"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TButtonProxy - кнопки, чей клик приходит событием владельца
# ----------------------------------------------------------------------------------------------------------------------
class TButtonProxy:
    """
    Не контрол: метит кнопки data-gr-proxy=<id> и data-gr-av=<значение действия>.
    Владелец ловит клики делегированием по селектору proxy_selector().
    """

    def __init__(self, proxy_id: str):
        self.proxy_id = proxy_id

    def proxy_selector(self) -> str:
        return f'[data-gr-proxy="{self.proxy_id}"]'

    def action_attributes(self, action_value: str = "") -> TAttributes:
        a = TAttributes().set_data("grProxy", self.proxy_id)
        if action_value != "":
            a.set_data("grAv", action_value)
        return a

    def button_html(self, label: str, action_value: str = "", attrs: TAttributes | None = None,
                    raw_html: bool = False) -> str:
        a = TAttributes({"onclick": "return false", "type": "button"})
        a.merge(attrs)
        a.merge(self.action_attributes(action_value))
        return render_tag("button", a, label if raw_html else escape(label))
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TDataPager
# ----------------------------------------------------------------------------------------------------------------------
class TDataPager(TCustomControl):
    """
    Prev | 1 … | start..end | … N | Next. Клик по кнопке → PAGE_CLICK со значением номера страницы.
    Постраничный контрол хранится по ID и ищется через страницу.
    """
    prefix = "pager"
    GRCTL = "datapager"

    def _init_fields(self):
        super()._init_fields()
        self.f_paged_id: str = ""
        self.f_max_page_buttons: int = 0     # 0 → default_max_page_buttons из конфига
        self.f_object_name: str = ""
        self.f_object_plural_name: str = ""
        self.f_label_previous: str = ""
        self.f_label_next: str = ""
        self.add_attr("role", "tablist")

    def do_init(self, paged_control: Any = None, **options):
        super().do_init(**options)
        if self.f_restoring:
            # связь придёт из pagestate
            return
        if paged_control is None:
            self.fail("do_init", "a paged control is required", EMisconfiguration)
        pc = self._lookup_paged(paged_control) if isinstance(paged_control, str) else paged_control
        if pc is None:
            self.fail("do_init", f"paged control '{paged_control}' not found", EMisconfiguration)
        if not hasattr(pc, "add_data_pager") or not hasattr(pc, "calc_page_count"):
            self.fail("do_init", f"{type(pc).__name__} is not a paged control", EMisconfiguration)
        self.f_paged_id = pc.ID
        pc.add_data_pager(self)
        pc.set_page_num(1)
        self.on(EV_PAGE_CLICK, PAGE_CLICK, selector=self.button_proxy().proxy_selector(), private=True)

    def _lookup_paged(self, id: str):
        page = self.page()
        if page is not None:
            return page.get_control(id)
        return next((c for c in self.root().iter_tree() if c.Name == id), None)
    # ..................................................................................................................
    # ⚙️ Настройки
    # ..................................................................................................................
    def paged_control(self):
        pc = self._lookup_paged(self.f_paged_id)
        if pc is None:
            self.fail("paged_control", f"paged control '{self.f_paged_id}' no longer exists", EStaleState)
        return pc

    @property
    def paged_control_id(self) -> str:
        return self.f_paged_id

    def set_max_page_buttons(self, n: int) -> "TDataPager":
        if n < 5:
            self.fail("set_max_page_buttons", f"need at least 5 buttons, got {n}", EMisconfiguration)
        self.f_max_page_buttons = int(n)
        self.refresh()
        return self

    @property
    def max_page_buttons(self) -> int:
        return self.f_max_page_buttons or self.config().default_max_page_buttons

    def set_object_names(self, singular: str, plural: str) -> "TDataPager":
        self.f_object_name = singular
        self.f_object_plural_name = plural
        return self

    @property
    def object_name(self) -> str:
        return self.f_object_name

    @property
    def object_plural_name(self) -> str:
        return self.f_object_plural_name

    def set_labels(self, previous: str, next: str) -> "TDataPager":
        self.f_label_previous = previous
        self.f_label_next = next
        self.refresh()
        return self

    @property
    def label_previous(self) -> str:
        return self.f_label_previous or self.config().label_previous

    @property
    def label_next(self) -> str:
        return self.f_label_next or self.config().label_next

    def button_proxy(self) -> TButtonProxy:
        return TButtonProxy(f"{self.ID}_proxy")
    # 🌱 ...арифметика через постраничный контрол...
    def calc_bunch(self) -> tuple[int, int]:
        return self.paged_control().calc_bunch(self.max_page_buttons)

    def slice_offsets(self) -> tuple[int, int]:
        return self.paged_control().slice_offsets()

    def sql_limits(self) -> tuple[int, int]:
        return self.paged_control().sql_limits()
    # ..................................................................................................................
    # 🎨 Рисование
    # ..................................................................................................................
    def pre_render(self, ctx):
        # пейджер нарисован раньше своего контрола - данные нужны уже сейчас, иначе не знаем число страниц
        pc = self.paged_control()
        if pc.was_rendered() or pc.is_rendering():
            return
        if not (hasattr(pc, "has_data_provider") and pc.has_data_provider()):
            return
        try:
            pc.load_data(ctx)
        except EProviderFailure as e:
            pc.data_error = e
            self.log("pre_render", f"⚠ {pc.ID}: {e}")

    def render(self, ctx):
        pc = self.paged_control()
        page_num = pc.page_num
        page_count = pc.calc_page_count()
        start, end = self.calc_bunch()
        h = [self.previous_buttons_html(page_num, start)]
        for i in range(start, end + 1):
            h.append(self.page_button_html(i, page_num))
        h.append(self.next_buttons_html(page_num, end, page_count))
        self.text("".join(h))

    def previous_buttons_html(self, page_num: int, start: int) -> str:
        av = str(page_num - 1)
        a = TAttributes({"id": f"{self.ID}_arrow_{av}"}).add_class("arrow previous")
        if page_num <= 1:
            a.set_disabled(True)
            a.set_style("cursor", "not-allowed")
        h = self.button_proxy().button_html(self.label_previous, av, a)
        if start != 1:
            h += self.page_button_html(1, page_num)
            h += self.ellipsis_html()
        return h

    def next_buttons_html(self, page_num: int, end: int, page_count: int) -> str:
        av = str(page_num + 1)
        a = TAttributes({"id": f"{self.ID}_arrow_{av}"}).add_class("arrow next")
        if page_num >= page_count:
            a.set_disabled(True)
            a.set_style("cursor", "not-allowed")
        h = ""
        if end != page_count and page_count > 0:
            h += self.ellipsis_html()
            h += self.page_button_html(page_count, page_num)
        return h + self.button_proxy().button_html(self.label_next, av, a)

    def page_button_html(self, i: int, page_num: int) -> str:
        av = str(i)
        a = TAttributes({"id": f"{self.ID}_page_{av}", "role": "tab"}).add_class("page")
        if i == page_num:
            a.add_class("selected")
            a.set("aria-selected", "true")
            a.set("tabindex", "0")
        else:
            a.set("aria-selected", "false")
            a.set("tabindex", "-1")
        return self.button_proxy().button_html(av, av, a)

    @staticmethod
    def ellipsis_html() -> str:
        return '<span class="ellipsis" aria-disabled="true">&hellip;</span>'
    # ..................................................................................................................
    # 🎯 Действия
    # ..................................................................................................................
    def private_action(self, ctx, params):
        if params.action_id != PAGE_CLICK:
            return
        raw = params.event_value_string()
        try:
            n = int(raw)
        except ValueError:
            self.log("private_action", f"⚠ bad page number {raw!r}")
            return
        pc = self.paged_control()
        page_count = pc.calc_page_count()
        n = max(1, min(n, page_count)) if page_count >= 1 else 1
        pc.set_page_num(n)
        pc.refresh_pagers()
        self.log("private_action", f"📄 {pc.ID} → page {n} of {page_count}")
    # ..................................................................................................................
    # 💾 Сохранённое состояние / pagestate
    # ..................................................................................................................
    def marshal_state(self, m: dict):
        m["pageNum"] = self.paged_control().page_num

    def unmarshal_state(self, m: dict):
        n = m.get("pageNum")
        if isinstance(n, int) and n >= 1:
            self.paged_control().set_page_num(n)

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_paged_id)
        enc.encode(self.f_max_page_buttons)
        enc.encode(self.f_object_name)
        enc.encode(self.f_object_plural_name)
        enc.encode(self.f_label_previous)
        enc.encode(self.f_label_next)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_paged_id = dec.decode()
        self.f_max_page_buttons = dec.decode()
        self.f_object_name = dec.decode()
        self.f_object_plural_name = dec.decode()
        self.f_label_previous = dec.decode()
        self.f_label_next = dec.decode()

    def restore(self, page):
        super().restore(page)
        # постраничный контрол обязан быть на странице
        self.paged_control()
# ======================================================================================================================
# 📁🌄 dg_ctrl_pager.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
