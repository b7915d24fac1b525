# ======================================================================================================================
# 📁 file        : dg_ctrl_custom.py - базовый визуальный компонент и фундамент UI
# 🕒 created     : 02.11.2025 15:02
# 🎉 contains    : TCustomControl (Canvas, tg/etg/text, корневые атрибуты, события, цикл рендера, refresh),
#                  TCompositeControl (визуальные дети)
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import json
from typing import Any, TYPE_CHECKING
from dg_sys import *
from dg_errors import EBadID
from dg_events import TEventBinding
from dg_html import TAttributes, render_tag
if TYPE_CHECKING:
    from dg_context import TContext
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TCustomControl", "TCompositeControl"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCustomControl - базовый визуальный компонент
# ----------------------------------------------------------------------------------------------------------------------
class TCustomControl(TComponent):
    prefix = "ctrl"  # базовый префикс для css-класса и логов
    # 💎 значение data-grctl (вид контрола для JS); пусто → атрибут не пишется
    GRCTL = ""

    def __init_subclass__(cls, **kwargs):
        # html() запрещён - единая точка вывода HTML
        super().__init_subclass__(**kwargs)
        if "html" in cls.__dict__:
            raise TypeError(f"❌ {cls.__name__} пытается переопределить html(), это запрещено!")

    def _init_fields(self):
        super()._init_fields()
        # --- Дерево UI ---
        self.last_render_id: int = -1
        self.f_rendering: bool = False
        self.f_refresh: bool = False
        self.f_visible: bool = True
        self.Canvas: list[str] = []
        # --- Корневой тег этого контрола: единый источник правды ---
        self.classes: list[str] = []          # add_class() пишет сюда
        self.styles: list[str] = []           # add_style() пишет сюда
        self.attrs: TAttributes = TAttributes()  # add_attr() / set_data_attribute()
        self.f_events: list[TEventBinding] = []
        # автоподключение к родителю
        if self.Owner is not None and hasattr(self.Owner, "add_control"):
            self.Owner.add_control(self)
    # ..................................................................................................................
    # ✍️ Canvas
    # ..................................................................................................................
    def text(self, html: str):
        self.Canvas.append(str(html))

    def tg(self, tag: str, cls: str | None = None, attr: TAttributes | str | None = None):
        if isinstance(attr, TAttributes):
            a = attr.copy()
            if cls:
                a.add_class(cls)
            self.text(f"<{tag}{a.render()}>")
            return
        cls_part = f' class="{cls}"' if cls else ""
        attr_part = f" {attr}" if attr else ""
        self.text(f"<{tag}{cls_part}{attr_part}>")

    def etg(self, tag: str):
        self.text(f"</{tag}>")

    def html(self) -> str:
        return "".join(self.Canvas)
    # 🌱 ...Параметры корневого тега...
    def root_tag(self) -> str:
        """HTML-тег корня. По умолчанию <div>, потомки переопределяют."""
        return "div"
    # 🌱🧲 ...Публичные билд-хелперы корневого тега...
    def add_class(self, *tokens):
        """
        Идемпотентное добавление css-классов: порядок сохраняется, дубликаты не добавляются,
        принимаются как отдельные токены, так и строки с пробелами.
        """
        for tok in tokens:
            if not tok:
                continue
            for t in str(tok).split():
                if t and t not in self.classes:
                    self.classes.append(t)

    def remove_class(self, *tokens):
        for tok in tokens:
            if not tok:
                continue
            for t in str(tok).split():
                if t in self.classes:
                    self.classes.remove(t)

    def has_class(self, token: str) -> bool:
        return token in self.classes

    def add_style(self, style_fragment: str | None):
        """Кусок inline-style. Если фрагмент не заканчивается ; - добавляем."""
        if not style_fragment:
            return
        frag = style_fragment.strip()
        if not frag.endswith(";"):
            frag += ";"
        self.styles.append(frag)

    def add_attr(self, name: str, value: Any = ""):
        """Атрибут корневого тега: add_attr('role', 'tablist'), add_attr('disabled')."""
        self.attrs.set(name, value)

    def set_data_attribute(self, name: str, value: Any):
        self.attrs.set_data(name, value)

    def drawing_attributes(self, ctx: "TContext | None" = None) -> TAttributes:
        """Итоговые атрибуты корневого тега. Потомки расширяют через super()."""
        a = TAttributes()
        a.set("id", self.ID)
        if self.GRCTL:
            a.set_data("grctl", self.GRCTL)
        if self.classes:
            a.add_class(*self.classes)
        style_txt = " ".join(s for s in self.styles if s)
        if style_txt:
            a.set("style", style_txt)
        a.merge(self.attrs)
        if self.f_events:
            a.set_data("grEvents", json.dumps([e.model_dump(mode="json", exclude_defaults=True)
                                                for e in self.f_events], separators=(",", ":")))
        return a
    # ..................................................................................................................
    # 🎯 События
    # ..................................................................................................................
    def on(self, event: str, action_id: int, *, selector: str = "", sub_id: str = "", action_value: Any = None,
           private: bool = False, destination: str | None = None, value_from: str = "") -> TEventBinding:
        """Привязывает клиентское событие к действию; по умолчанию получатель - сам контрол."""
        binding = TEventBinding(
            event=event,
            action_id=action_id,
            destination=destination or self.ID,
            sub_id=sub_id,
            selector=selector,
            action_value=action_value,
            value_from=value_from,
            private=private,
        )
        self.f_events.append(binding)
        return binding

    def events(self) -> list[TEventBinding]:
        return list(self.f_events)

    def find_event(self, event: str, sub_id: str = "") -> TEventBinding | None:
        for e in self.f_events:
            if e.event == event and (not sub_id or e.sub_id == sub_id):
                return e
        return None

    def off(self, event: str, sub_id: str = ""):
        self.f_events = [e for e in self.f_events if not (e.event == event and (not sub_id or e.sub_id == sub_id))]
    # ..................................................................................................................
    # 👁️ Видимость / перерисовка
    # ..................................................................................................................
    @property
    def visible(self) -> bool:
        return self.f_visible

    @visible.setter
    def visible(self, v: bool):
        if bool(v) != self.f_visible:
            self.f_visible = bool(v)
            self.refresh()

    def refresh(self):
        """Пометить контрол к перерисовке (ajax-ответ отдаст его html)."""
        self.f_refresh = True

    @property
    def needs_refresh(self) -> bool:
        return self.f_refresh

    def is_rendering(self) -> bool:
        return self.f_rendering

    def was_rendered(self) -> bool:
        """Уже нарисован в текущем проходе рендера страницы."""
        page = self.page()
        return page is not None and self.last_render_id == page.render_id and not self.f_rendering
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def pre_render(self, ctx: "TContext"):
        """Хук перед рисованием корневого тега."""
        pass

    def _render(self, ctx: "TContext"):
        page = self.page()
        cur_id = page.render_id if page is not None else None
        if cur_id is not None and self.last_render_id == cur_id:
            # уже рендерились в этом цикле - просто выходим
            return
        self.Canvas.clear()
        self.f_rendering = True
        try:
            self.pre_render(ctx)
            if self.f_visible:
                self.draw_tag(ctx)
            else:
                self.text(render_tag("span", TAttributes({"id": self.ID, "style": "display:none"})))
        except Exception as e:
            self.log("_render", f"⚠ render() failed: {e}")
            raise
        finally:
            self.f_rendering = False
            if cur_id is not None:
                self.last_render_id = cur_id
            self.f_refresh = False

    def draw_tag(self, ctx: "TContext"):
        tag = self.root_tag()
        self.tg(tag, attr=self.drawing_attributes(ctx))
        self.render(ctx)
        self.etg(tag)

    def render(self, ctx: "TContext"):
        """Внутренность корневого тега. Атомы ничего не рисуют."""
        pass

    def draw(self, ctx: "TContext") -> str:
        self._render(ctx)
        return self.html()
    # ..................................................................................................................
    # 💾 Pagestate
    # ..................................................................................................................
    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.classes)
        enc.encode(self.styles)
        enc.encode(self.attrs)
        enc.encode([e.model_dump(mode="json") for e in self.f_events])
        enc.encode(self.f_visible)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.classes = list(dec.decode())
        self.styles = list(dec.decode())
        self.attrs = dec.decode()
        self.f_events = [TEventBinding.model_validate(e) for e in dec.decode()]
        self.f_visible = bool(dec.decode())
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCompositeControl - визуальный контейнер
# ----------------------------------------------------------------------------------------------------------------------
class TCompositeControl(TCustomControl):
    """
    Визуальный КОМПОЗИТНЫЙ блок: хранит визуальных детей в Controls и рисует их по порядку.
    """
    def _init_fields(self):
        # контейнерное состояние - до super(), чтобы быть готовым к детям
        self.Controls: dict[str, TCustomControl] = {}
        super()._init_fields()

    def add_control(self, ctrl: TCustomControl):
        if ctrl.Name in self.Controls:
            self.fail("add_control", f"duplicate control {ctrl.Name}", EBadID)
        self.Controls[ctrl.Name] = ctrl
        return ctrl

    def remove(self, child):
        super().remove(child)
        self.Controls.pop(child.Name, None)
    # ..................................................................................................................
    # 🎨 Рендеринг для композитных контролов
    # ..................................................................................................................
    def render_children(self, ctx: "TContext"):
        """Отрисовывает всех дочерних контролов и вносит их Canvas в текущий Canvas."""
        for child in self.Controls.values():
            child._render(ctx)
            self.Canvas.extend(child.Canvas)

    def render(self, ctx: "TContext"):
        self.render_children(ctx)
# ======================================================================================================================
# 📁🌄 dg_ctrl_custom.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
