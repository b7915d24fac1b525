# ======================================================================================================================
# 📁 file        : dg_page.py - страница: реестр контролов, цикл запроса, pagestate; менеджер страниц
# 🕒 created     : 08.11.2025 10:05
# 🎉 contains    : TPage, TPageManager
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Any, Dict, Optional, Type
from dg_sys import *
from dg_config import TGridConfig, DEFAULT_CONFIG
from dg_context import TContext
from dg_ctrl_custom import TCompositeControl
from dg_errors import EBadID, EMisconfiguration, EStaleState
from dg_events import TActionParams
from dg_logger import LoggableComponent
from dg_pagestate import TEncoder, TDecoder, TPageStateStore, type_kind, lookup_type
from dg_response import TResponse
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TPage", "TPageManager"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPage - корень дерева контролов
# ----------------------------------------------------------------------------------------------------------------------
class TPage(TCompositeControl):
    """
    Страница - корень владения и реестр всех компонентов по ID.
    Наполнение - в create_controls() (не вызывается при восстановлении из pagestate).
    Действия, адресованные не самим контролам, приходят в do_action().
    """
    prefix = "pg"

    def _init_fields(self):
        self.f_registry: Dict[str, TComponent] = {}
        self.f_config: TGridConfig = DEFAULT_CONFIG
        self.render_id: int = 0
        self.response: Optional[TResponse] = None
        super()._init_fields()

    def do_init(self, config: TGridConfig | None = None, **options):
        super().do_init(**options)
        if config is not None:
            self.f_config = config
        if not self.f_restoring:
            self.create_controls()

    @classmethod
    def page_name(cls) -> str:
        n = cls.__name__
        return n[1:] if n.startswith("T") and len(n) > 1 else n

    def _allowed_owner_types(self) -> tuple[type, ...] | None:
        # страница всегда корень
        return ()

    def root_tag(self) -> str:
        return "form"
    # ..................................................................................................................
    # 🧱 Хуки приложения
    # ..................................................................................................................
    def create_controls(self):
        """Потомки строят здесь свои контролы."""
        pass

    def do_action(self, ctx: TContext, params: TActionParams):
        """Публичное действие (не private). Потомки переопределяют."""
        self.debug("do_action", f"unhandled action {params.action_id} from {params.control_id}")
    # ..................................................................................................................
    # 📒 Реестр
    # ..................................................................................................................
    def register_global(self, component):
        id = component.ID
        other = self.f_registry.get(id)
        if other is not None and other is not component:
            self.fail("register_global", f"duplicate control id '{id}'", EBadID)
        self.f_registry[id] = component
        self.debug("register_global", f"📌 {id} ({component.__class__.__name__})")

    def release_global(self, component):
        self.f_registry.pop(component.ID, None)

    def get_control(self, id: str):
        if id == self.ID:
            return self
        return self.f_registry.get(id)

    def controls(self) -> list:
        """Все компоненты страницы, родитель раньше детей."""
        return [c for c in self.iter_tree() if c is not self]
    # ..................................................................................................................
    # 🔁 Цикл запроса
    # ..................................................................................................................
    def run(self, ctx: TContext) -> TResponse:
        """
        Значения формы → действие → рисование → сброс данных → сохранение состояния в сессию.
        Ошибки не гасятся: логируем и отдаём наверх.
        """
        self.response = TResponse()
        self.response.state_id = ctx.state_id
        self.render_id += 1
        try:
            for c in self.controls():
                c.update_form_values(ctx)
            if ctx.action is not None:
                self.dispatch_action(ctx, ctx.action)
            if ctx.is_ajax():
                self.draw_refreshed(ctx)
            else:
                self.response.html = self.draw(ctx)
            self.reset_all_data()
            self.save_controls_state(ctx)
        except Exception as e:
            self.log("run", f"💥 {type(e).__name__}: {e}")
            raise
        self.debug("run", f"✅ render {self.render_id}, {len(self.response.controls)} ajax controls")
        return self.response

    def dispatch_action(self, ctx: TContext, params: TActionParams):
        ctrl = self.get_control(params.control_id)
        if ctrl is None:
            self.fail("dispatch_action", f"action for unknown control '{params.control_id}'", EBadID)
        self.log("dispatch_action", f"🎯 {params.event or '-'} #{params.action_id} → {params.control_id}"
                                    f"{'/' + params.sub_id if params.sub_id else ''}")
        if params.private:
            ctrl.private_action(ctx, params)
        else:
            self.do_action(ctx, params)

    def draw_refreshed(self, ctx: TContext):
        """Ajax: перерисовываем только помеченные контролы; потомков перерисованного рисует он сам."""
        marked = [c for c in self.controls() if is_visual_node(c) and c.needs_refresh]
        ids = {c.ID for c in marked}
        for c in marked:
            if self._has_marked_ancestor(c, ids):
                continue
            self.response.controls[c.ID] = c.draw(ctx)

    def _has_marked_ancestor(self, c, ids: set) -> bool:
        p = c.Owner
        while p is not None and p is not self:
            if p.ID in ids:
                return True
            p = p.Owner
        return False

    def reset_all_data(self):
        for c in self.controls():
            if hasattr(c, "reset_data"):
                c.reset_data()
    # ..................................................................................................................
    # 💾 Сохранённое состояние в сессии
    # ..................................................................................................................
    def state_key(self, ctrl) -> str:
        return f"{self.page_name()}.{ctrl.ID}"

    def save_controls_state(self, ctx: TContext):
        for c in self.controls():
            if c.saves_state:
                m: dict = {}
                c.marshal_state(m)
                ctx.session[self.state_key(c)] = m

    def restore_saved_state(self, ctx: TContext):
        """Непостраничные первыми, постраничные последними - при конфликте побеждает постраничный контрол."""
        saving = [c for c in self.controls() if c.saves_state]
        ordered = [c for c in saving if not hasattr(c, "calc_page_count")] + \
                  [c for c in saving if hasattr(c, "calc_page_count")]
        for c in ordered:
            m = ctx.session.get(self.state_key(c))
            if isinstance(m, dict):
                c.unmarshal_state(m)
                self.debug("restore_saved_state", f"♻️ {c.ID}")
    # ..................................................................................................................
    # 🗜️ Pagestate
    # ..................................................................................................................
    def serialize(self, enc: TEncoder):
        super().serialize(enc)
        enc.encode(self.render_id)
        self._serialize_children(self, enc)

    def _serialize_children(self, node, enc: TEncoder):
        kids = list(node.Components.values())
        enc.encode(len(kids))
        for k in kids:
            enc.encode(type_kind(type(k)))
            enc.encode(k.Name)
            k.serialize(enc)
            self._serialize_children(k, enc)
        # порядок рисования визуальных детей может отличаться от порядка владения
        enc.encode(list(node.Controls) if isinstance(node, TCompositeControl) else None)

    def deserialize(self, dec: TDecoder):
        super().deserialize(dec)
        self.render_id = dec.decode()
        self._deserialize_children(self, dec)

    def _deserialize_children(self, node, dec: TDecoder):
        count = dec.decode()
        for _ in range(count):
            cls = lookup_type(dec.decode())
            name = dec.decode()
            k = cls.create_blank(node, name)
            k.deserialize(dec)
            self._deserialize_children(k, dec)
        order = dec.decode()
        if order is not None and isinstance(node, TCompositeControl):
            node.Controls = {n: node.Controls[n] for n in order if n in node.Controls}

    def to_pagestate(self) -> str:
        enc = TEncoder()
        enc.encode(type_kind(type(self)))
        enc.encode(self.Name)
        self.serialize(enc)
        return enc.dumps()

    @classmethod
    def from_pagestate(cls, blob: str, config: TGridConfig | None = None) -> "TPage":
        """Два прохода: всё дерево из blob, затем restore() разрешает ссылки по ID."""
        dec = TDecoder(blob)
        page_cls = lookup_type(dec.decode())
        if not (isinstance(page_cls, type) and issubclass(page_cls, cls)):
            raise EStaleState(f"TPage.from_pagestate(): {page_cls!r} is not a {cls.__name__}")
        page = page_cls.create_blank(None, dec.decode(), config=config)
        page.deserialize(dec)
        for c in page.iter_tree():
            c.restore(page)
        page.log("from_pagestate", f"♻️ {len(page.f_registry)} components restored")
        return page
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPageManager - связывает хранилище pagestate с классами страниц
# ----------------------------------------------------------------------------------------------------------------------
class TPageManager(LoggableComponent):
    def __init__(self, config: TGridConfig | None = None, store: TPageStateStore | None = None):
        self.config = config or DEFAULT_CONFIG
        self.store = store or TPageStateStore(self.config.pagestate_max_pages)
        self.f_pages: Dict[str, Type[TPage]] = {}

    def register_page(self, path: str, page_cls: Type[TPage]):
        if not (isinstance(page_cls, type) and issubclass(page_cls, TPage)):
            raise EMisconfiguration(f"TPageManager.register_page(): {page_cls!r} is not a page class")
        self.f_pages[path] = page_cls

    def page_class(self, path: str) -> Type[TPage]:
        cls = self.f_pages.get(path)
        if cls is None:
            raise EBadID(f"TPageManager.page_class(): no page registered for '{path}'")
        return cls

    def run(self, path: str, ctx: TContext) -> TResponse:
        """
        Страница из pagestate (если клиент прислал state_id и он ещё жив) или новая.
        Запросы одной сессии идут строго по одному.
        """
        cls = self.page_class(path)
        with self.store.hold(ctx.session_id):
            page = None
            state_id = ctx.state_id
            if state_id:
                blob = self.store.load(ctx.session_id, state_id)
                if blob is not None:
                    page = cls.from_pagestate(blob, self.config)
                else:
                    self.log("run", f"pagestate {state_id} expired, new page")
            if page is None:
                page = cls(None, cls.page_name(), config=self.config)
                page.restore_saved_state(ctx)
                state_id = self.store.new_state_id()
                ctx.state_id = state_id
            response = page.run(ctx)
            self.store.save(ctx.session_id, state_id, page.to_pagestate())
            response.state_id = state_id
            return response
# ======================================================================================================================
# 📁🌄 dg_page.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
