# ======================================================================================================================
# 📁 file        : dg_ctrl_repeater.py - повторитель: строка данных → кусок html через htmler
# 🕒 created     : 07.11.2025 13:50
# 🎉 contains    : TItemHtmler, TTemplateHtmler, TRepeater, TPagedRepeater
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from collections.abc import Mapping
from typing import Any
from dg_sys import *
from dg_ctrl_custom import TCustomControl
from dg_ctrl_mixin import TDataManagerMixin, TPagedControlMixin
from dg_errors import EMisconfiguration, EProviderFailure
from dg_html import escape
from dg_pagestate import TSerializable, resolve_ref
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TItemHtmler", "TTemplateHtmler", "TRepeater", "TPagedRepeater"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TItemHtmler - inline htmler; контрол с repeater_html() тоже годится (хранится по ID)
# ----------------------------------------------------------------------------------------------------------------------
class TItemHtmler(TSerializable):
    def repeater_html(self, ctx, repeater: "TRepeater", index: int, data: Any) -> str:
        raise NotImplementedError


class TTemplateHtmler(TItemHtmler):
    """'<li>{name}</li>' по полям строки; значения экранируются."""
    template: str

    def repeater_html(self, ctx, repeater: "TRepeater", index: int, data: Any) -> str:
        if isinstance(data, Mapping):
            return self.template.format_map({k: escape(str(v)) for k, v in data.items()})
        return self.template.format(escape(str(data)))
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TRepeater
# ----------------------------------------------------------------------------------------------------------------------
class TRepeater(TCustomControl, TDataManagerMixin):
    prefix = "repeater"
    GRCTL = "repeater"

    def _init_fields(self):
        super()._init_fields()
        self._init_data_manager()
        self.f_item_htmler: Any = None

    def set_item_htmler(self, htmler) -> "TRepeater":
        if htmler is not None and not callable(getattr(htmler, "repeater_html", None)):
            self.fail("set_item_htmler", f"{type(htmler).__name__} has no repeater_html()", EMisconfiguration)
        self.f_item_htmler = htmler
        self.refresh()
        return self

    @property
    def item_htmler(self):
        return self.f_item_htmler

    def draw_tag(self, ctx):
        provider_backed = self.has_data_provider()
        self.data_error = None
        try:
            if provider_backed:
                try:
                    self.load_data(ctx)
                except EProviderFailure as e:
                    self.data_error = e
                    self.log("draw_tag", f"⚠ {e}")
            super().draw_tag(ctx)
        finally:
            if provider_backed:
                self.reset_data()

    def render(self, ctx):
        for i, row in self.iter_data():
            self.draw_item(ctx, i, row)

    def draw_item(self, ctx, index: int, data: Any):
        """Без htmler-а строка ничего не рисует."""
        if self.f_item_htmler is not None:
            self.text(self.f_item_htmler.repeater_html(ctx, self, index, data))

    def serialize(self, enc):
        super().serialize(enc)
        self.serialize_data_manager(enc)
        enc.encode_ref(self.f_item_htmler)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.deserialize_data_manager(dec)
        self.f_item_htmler = dec.decode()

    def restore(self, page):
        super().restore(page)
        self.f_item_htmler = resolve_ref(self.f_item_htmler, page)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPagedRepeater
# ----------------------------------------------------------------------------------------------------------------------
class TPagedRepeater(TRepeater, TPagedControlMixin):
    def _init_fields(self):
        super()._init_fields()
        self._init_paged_control()

    def marshal_state(self, m: dict):
        self.marshal_paged_state(m)

    def unmarshal_state(self, m: dict):
        self.unmarshal_paged_state(m)

    def serialize(self, enc):
        super().serialize(enc)
        self.serialize_paged_control(enc)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.deserialize_paged_control(dec)
# ======================================================================================================================
# 📁🌄 dg_ctrl_repeater.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
