# ======================================================================================================================
# 📁 file        : dg_ctrl_table.py - таблица данных: колонки, строки, заголовки, история сортировки
# 🕒 created     : 06.11.2025 11:31
# 🎉 contains    : TTable, TPagedTable, TSelectTable
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional
from dg_sys import *
from dg_ctrl_custom import TCustomControl
from dg_ctrl_mixin import TDataManagerMixin, TPagedControlMixin
from dg_columns import TColumn, TSortDirection, sort_keys
from dg_errors import EBadID, EMisconfiguration, EProviderFailure
from dg_events import EV_TABLE_SORT, EV_ROW_SELECTED, COLUMN_ACTION, SORT_CLICK, ROW_SELECTED, TJsPriority
from dg_html import TAttributes, render_tag, escape
from dg_pagestate import type_kind, lookup_type, resolve_ref
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TTable", "TPagedTable", "TSelectTable"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TTable - <table> с колонками и строками от менеджера данных
# ----------------------------------------------------------------------------------------------------------------------
class TTable(TCustomControl, TDataManagerMixin):
    prefix = "table"
    GRCTL = "table"

    def _init_fields(self):
        super()._init_fields()
        self._init_data_manager()
        self.f_columns: list[TColumn] = []
        self.f_caption: Any = None               # str или контрол (владелец - сама таблица)
        self.f_hide_if_empty: bool = False
        self.f_render_column_tags: bool = False
        self.f_header_row_count: int = 0
        self.f_footer_row_count: int = 0
        self.f_row_styler: Any = None
        self.f_header_row_styler: Any = None
        self.f_footer_row_styler: Any = None
        self.f_column_id_counter: int = 0
        self.f_sort_history: list[str] = []      # самый свежий клик - первым
        self.f_sort_history_limit: int = 0       # 0 → default_sort_history_limit из конфига

    def root_tag(self) -> str:
        return "table"
    # ..................................................................................................................
    # ⚙️ Настройки
    # ..................................................................................................................
    def set_hide_if_empty(self, on: bool) -> "TTable":
        if self.f_hide_if_empty != bool(on):
            self.f_hide_if_empty = bool(on)
            self.refresh()
        return self

    @property
    def hide_if_empty(self) -> bool:
        return self.f_hide_if_empty

    def set_render_column_tags(self, on: bool) -> "TTable":
        self.f_render_column_tags = bool(on)
        return self

    def set_caption(self, caption: Any) -> "TTable":
        """Строка (экранируется) или контрол, нарисованный внутри <caption>."""
        self.f_caption = caption
        self.refresh()
        return self

    @property
    def caption(self) -> Any:
        return self.f_caption

    def set_header_row_count(self, count: int) -> "TTable":
        self.f_header_row_count = max(0, int(count))
        return self

    @property
    def header_row_count(self) -> int:
        return self.f_header_row_count

    def set_footer_row_count(self, count: int) -> "TTable":
        self.f_footer_row_count = max(0, int(count))
        return self

    @property
    def footer_row_count(self) -> int:
        return self.f_footer_row_count

    def set_row_styler(self, styler) -> "TTable":
        self._check_styler(styler, "set_row_styler")
        self.f_row_styler = styler
        return self

    def set_header_row_styler(self, styler) -> "TTable":
        self._check_styler(styler, "set_header_row_styler")
        self.f_header_row_styler = styler
        return self

    def set_footer_row_styler(self, styler) -> "TTable":
        self._check_styler(styler, "set_footer_row_styler")
        self.f_footer_row_styler = styler
        return self

    def _check_styler(self, styler, where: str):
        if styler is not None and not callable(getattr(styler, "row_attributes", None)):
            self.fail(where, f"{type(styler).__name__} has no row_attributes()", EMisconfiguration)
    # ..................................................................................................................
    # 🧱 Колонки
    # ..................................................................................................................
    def add_column(self, column: TColumn) -> TColumn:
        self.add_column_at(column, -1)
        return column

    def add_column_at(self, column: TColumn, loc: int):
        """loc < 0 или за концом → в конец. Без ID колонка получает номер из счётчика (номера не переиспользуются)."""
        self.f_column_id_counter += 1
        if not column.ID:
            column.set_id(str(self.f_column_id_counter))
        if self.get_column_by_id(column.ID) is not None:
            self.fail("add_column_at", f"duplicate column id '{column.ID}'", EBadID)
        column.set_parent_table(self)
        if loc < 0 or loc >= len(self.f_columns):
            self.f_columns.append(column)
        else:
            self.f_columns.insert(loc, column)
        column.add_actions(self)
        self.refresh()

    def add_columns(self, *columns: TColumn) -> "TTable":
        for c in columns:
            self.add_column(c)
        return self

    def columns(self) -> list[TColumn]:
        return list(self.f_columns)

    @property
    def column_count(self) -> int:
        return len(self.f_columns)

    def get_column(self, loc: int) -> TColumn:
        if loc < 0 or loc >= len(self.f_columns):
            self.fail("get_column", f"column index {loc} out of range", EBadID)
        return self.f_columns[loc]

    def get_column_by_id(self, id: str) -> Optional[TColumn]:
        return next((c for c in self.f_columns if c.ID == id), None)

    def get_column_by_title(self, title: str) -> Optional[TColumn]:
        return next((c for c in self.f_columns if c.title == title), None)

    def remove_column(self, loc: int):
        col = self.get_column(loc)
        del self.f_columns[loc]
        self.off_column_events(col)
        col.set_parent_table(None)
        self.refresh()

    def remove_column_by_id(self, id: str):
        for i, c in enumerate(self.f_columns):
            if c.ID == id:
                self.remove_column(i)
                return

    def remove_column_by_title(self, title: str):
        for i, c in enumerate(self.f_columns):
            if c.title == title:
                self.remove_column(i)
                return

    def off_column_events(self, col: TColumn):
        self.f_events = [e for e in self.f_events if e.sub_id != col.ID]

    def clear_columns(self):
        if self.f_columns:
            for c in self.f_columns:
                self.off_column_events(c)
                c.set_parent_table(None)
            self.f_columns = []
            self.refresh()

    def hide_columns(self):
        for c in self.f_columns:
            c.set_hidden(True)
        self.refresh()

    def show_columns(self):
        for c in self.f_columns:
            c.set_hidden(False)
        self.refresh()
    # ..................................................................................................................
    # ↕️ Сортировка
    # ..................................................................................................................
    def make_sortable(self) -> "TTable":
        """Клик по кнопке сортировки → приватное SORT_CLICK; заголовок нужен хотя бы в одну строку."""
        if self.find_event(EV_TABLE_SORT) is None:
            self.on(EV_TABLE_SORT, SORT_CLICK, selector="[data-gr-sort]", private=True)
        if self.f_header_row_count == 0:
            self.f_header_row_count = 1
        return self

    @property
    def sort_history_limit(self) -> int:
        return self.f_sort_history_limit or self.config().default_sort_history_limit

    def set_sort_history_limit(self, n: int) -> "TTable":
        self.f_sort_history_limit = max(0, int(n))
        self.refresh()
        return self

    def sort_history(self) -> list[str]:
        return list(self.f_sort_history)

    def sort_click(self, id: str):
        col = self.get_column_by_id(id)
        if col is None or not col.is_sortable():
            self.debug("sort_click", f"ignored click on '{id}'")
            return
        # выпавшие из таблицы колонки не держат историю
        while self.f_sort_history and self.get_column_by_id(self.f_sort_history[0]) is None:
            self.f_sort_history.pop(0)

        if not self.f_sort_history:
            self.f_sort_history = [id]
            col.set_sort_direction(TSortDirection.ASCENDING)
        else:
            first = self.get_column_by_id(self.f_sort_history[0])
            if first.sort_direction == TSortDirection.NOT_SORTABLE:
                # первичную колонку сделали несортируемой - сортировка заморожена
                self.log("sort_click", f"🧊 primary column '{first.ID}' is not sortable, click on '{id}' ignored")
                return
            if first is col:
                d = col.sort_direction
                col.set_sort_direction(TSortDirection.ASCENDING if d == TSortDirection.NOT_SORTED else d.flipped())
            else:
                first.set_sort_direction(TSortDirection.NOT_SORTED)
                if id in self.f_sort_history:
                    self.f_sort_history.remove(id)
                self.f_sort_history.insert(0, id)
                col.set_sort_direction(TSortDirection.ASCENDING)

        limit = self.sort_history_limit
        while len(self.f_sort_history) > limit:
            dropped = self.get_column_by_id(self.f_sort_history.pop())
            if dropped is not None and dropped.is_sortable():
                dropped.set_sort_direction(TSortDirection.NOT_SORTED)
        self.log("sort_click", f"↕️ {id} → {col.sort_direction.name}, history={self.f_sort_history}")

    def set_sort_column_ids(self, *ids: str):
        """Явно задать историю: первая колонка - первичная по возрастанию, хвост сверх лимита отбрасывается."""
        for c in self.f_columns:
            if c.is_sortable():
                c.set_sort_direction(TSortDirection.NOT_SORTED)
        for id in ids:
            c = self.get_column_by_id(id)
            if c is not None and not c.is_sortable():
                self.fail("set_sort_column_ids", f"column '{id}' is not sortable", EMisconfiguration)
        ids = ids[:self.sort_history_limit]
        self.f_sort_history = list(ids)
        if ids:
            first = self.get_column_by_id(ids[0])
            if first is not None:
                first.set_sort_direction(TSortDirection.ASCENDING)

    def sort_columns(self) -> list[TColumn]:
        """Колонки в порядке истории; пропавшие ID пропускаются."""
        return [c for c in (self.get_column_by_id(i) for i in self.f_sort_history) if c is not None]

    def sort_keys(self) -> list[tuple[Any, bool]]:
        return sort_keys(self.sort_columns())
    # ..................................................................................................................
    # 🔁 Цикл запроса
    # ..................................................................................................................
    def update_form_values(self, ctx):
        for c in self.f_columns:
            c.update_form_values(ctx)

    def private_action(self, ctx, params):
        if params.action_id == COLUMN_ACTION:
            if not params.sub_id:
                self.fail("private_action", "column action without a column id", EBadID)
            col = self.get_column_by_id(params.sub_id)
            if col is not None:
                col.do_action(ctx, params)
        elif params.action_id == SORT_CLICK:
            self.sort_click(params.event_value_string())
            self.refresh()
    # ..................................................................................................................
    # 🎨 Рисование
    # ..................................................................................................................
    def draw_tag(self, ctx):
        provider_backed = self.has_data_provider()
        self.data_error = None
        try:
            if provider_backed:
                try:
                    self.load_data(ctx)
                except EProviderFailure as e:
                    # рисуем пустую таблицу, ошибка остаётся приложению
                    self.data_error = e
                    self.log("draw_tag", f"⚠ {e}")
            for c in self.f_columns:
                c.pre_render(ctx)
            super().draw_tag(ctx)
        finally:
            if provider_backed:
                self.reset_data()

    def drawing_attributes(self, ctx=None) -> TAttributes:
        a = super().drawing_attributes(ctx)
        if self.f_hide_if_empty and self.data_len() == 0:
            a.set_style("display", "none")
        return a

    def render(self, ctx):
        self.draw_caption(ctx)
        if self.f_render_column_tags:
            self.draw_column_tags(ctx)
        if self.f_header_row_count > 0:
            self.text(render_tag("thead", None, self.header_rows_html(ctx)))
        if self.f_footer_row_count > 0:
            self.text(render_tag("tfoot", None, self.footer_rows_html(ctx)))
        rows = [self.row_html(ctx, i, row) for i, row in self.iter_data()]
        self.text(render_tag("tbody", None, rows))

    def draw_caption(self, ctx):
        cap = self.f_caption
        if cap is None or cap == "":
            return
        if isinstance(cap, str):
            self.text(f"<caption>{escape(cap)}</caption>\n")
        elif isinstance(cap, TCustomControl):
            cap._render(ctx)
            self.text(f"<caption>{cap.html()}</caption>\n")
        else:
            self.fail("draw_caption", f"unsupported caption {type(cap).__name__}", EMisconfiguration)

    def draw_column_tags(self, ctx):
        n = 0
        while n < len(self.f_columns):
            col = self.f_columns[n]
            self.text(col.draw_column_tag(ctx))
            n += col.span

    def header_rows_html(self, ctx) -> str:
        out = []
        for r in range(self.f_header_row_count):
            cells = "".join(c.draw_header_cell(ctx, r, i) for i, c in enumerate(self.f_columns))
            out.append(render_tag("tr", self._styler_attrs(self.f_header_row_styler, ctx, r, None), cells))
        return "".join(out)

    def footer_rows_html(self, ctx) -> str:
        out = []
        for r in range(self.f_footer_row_count):
            cells = "".join(c.draw_footer_cell(ctx, r, i) for i, c in enumerate(self.f_columns))
            out.append(render_tag("tr", self._styler_attrs(self.f_footer_row_styler, ctx, r, None), cells))
        return "".join(out)

    def row_html(self, ctx, row: int, data: Any) -> str:
        cells = "".join(c.draw_cell(ctx, row, i, data) for i, c in enumerate(self.f_columns))
        return render_tag("tr", self.row_attributes(ctx, row, data), cells)

    def row_attributes(self, ctx, row: int, data: Any) -> Optional[TAttributes]:
        return self._styler_attrs(self.f_row_styler, ctx, row, data)

    @staticmethod
    def _styler_attrs(styler, ctx, row: int, data: Any) -> Optional[TAttributes]:
        if styler is None:
            return None
        a = styler.row_attributes(ctx, row, data)
        return None if a is None else TAttributes(a)
    # ..................................................................................................................
    # 💾 Сохранённое состояние / pagestate
    # ..................................................................................................................
    def marshal_state(self, m: dict):
        m["sortColumns"] = list(self.f_sort_history)
        first = self.get_column_by_id(self.f_sort_history[0]) if self.f_sort_history else None
        if first is not None:
            m["sortDirection"] = int(first.sort_direction)
        for c in self.f_columns:
            c.marshal_state(m)

    def unmarshal_state(self, m: dict):
        ids = m.get("sortColumns")
        if isinstance(ids, list) and all(isinstance(i, str) for i in ids):
            sortable = [i for i in ids if (c := self.get_column_by_id(i)) is not None and c.is_sortable()]
            self.set_sort_column_ids(*sortable)
            first = self.get_column_by_id(sortable[0]) if sortable else None
            if first is not None and m.get("sortDirection") == int(TSortDirection.DESCENDING):
                first.set_sort_direction(TSortDirection.DESCENDING)
        for c in self.f_columns:
            c.unmarshal_state(m)

    def serialize(self, enc):
        super().serialize(enc)
        self.serialize_data_manager(enc)
        enc.encode_ref(self.f_caption)
        enc.encode(self.f_header_row_count)
        enc.encode(self.f_footer_row_count)
        enc.encode(len(self.f_columns))
        for c in self.f_columns:
            enc.encode(type_kind(type(c)))
            c.serialize(enc)
        enc.encode(self.f_sort_history)
        enc.encode(self.f_sort_history_limit)
        enc.encode(self.f_column_id_counter)
        enc.encode(self.f_hide_if_empty)
        enc.encode(self.f_render_column_tags)
        enc.encode_ref(self.f_row_styler)
        enc.encode_ref(self.f_header_row_styler)
        enc.encode_ref(self.f_footer_row_styler)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.deserialize_data_manager(dec)
        self.f_caption = dec.decode()
        self.f_header_row_count = dec.decode()
        self.f_footer_row_count = dec.decode()
        count = dec.decode()
        self.f_columns = []
        for _ in range(count):
            cls = lookup_type(dec.decode())
            col = cls.create_blank()
            col.deserialize(dec)
            col.set_parent_table(self)
            self.f_columns.append(col)
        self.f_sort_history = list(dec.decode())
        self.f_sort_history_limit = dec.decode()
        self.f_column_id_counter = dec.decode()
        self.f_hide_if_empty = dec.decode()
        self.f_render_column_tags = dec.decode()
        self.f_row_styler = dec.decode()
        self.f_header_row_styler = dec.decode()
        self.f_footer_row_styler = dec.decode()

    def restore(self, page):
        super().restore(page)
        self.f_caption = resolve_ref(self.f_caption, page)
        self.f_row_styler = resolve_ref(self.f_row_styler, page)
        self.f_header_row_styler = resolve_ref(self.f_header_row_styler, page)
        self.f_footer_row_styler = resolve_ref(self.f_footer_row_styler, page)
        for c in self.f_columns:
            c.restore(self)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPagedTable - таблица + арифметика страниц
# ----------------------------------------------------------------------------------------------------------------------
class TPagedTable(TTable, TPagedControlMixin):
    """
    Провайдер берёт окно строк через slice_offsets() / sql_limits() и сообщает set_total_items().
    """

    def _init_fields(self):
        super()._init_fields()
        self._init_paged_control()

    def marshal_state(self, m: dict):
        super().marshal_state(m)
        self.marshal_paged_state(m)

    def unmarshal_state(self, m: dict):
        super().unmarshal_state(m)
        self.unmarshal_paged_state(m)

    def serialize(self, enc):
        super().serialize(enc)
        self.serialize_paged_control(enc)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.deserialize_paged_control(dec)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TSelectTable - таблица с выбором строки
# ----------------------------------------------------------------------------------------------------------------------
class TSelectTable(TTable):
    GRCTL = "selecttable"

    def _init_fields(self):
        super()._init_fields()
        self.f_selected_id: str = ""
        self.f_reselectable: bool = False
        # вся таблица фокусируемая
        self.add_attr("tabindex", "0")
        self.add_class("gr-clickable-rows")
        self.on(EV_ROW_SELECTED, ROW_SELECTED, private=True)

    @property
    def selected_id(self) -> str:
        return self.f_selected_id

    def set_selected_id(self, id: str) -> "TSelectTable":
        self.f_selected_id = "" if id is None else str(id)
        page = self.page()
        if page is not None and page.response is not None and not self.f_refresh:
            # таблица уже на клиенте и не перерисовывается - сообщаем виджету
            page.response.execute_control_command(self.ID, "option", TJsPriority.STANDARD,
                                                  "selectedId", self.f_selected_id)
        return self

    def set_reselectable(self, on: bool) -> "TSelectTable":
        self.f_reselectable = bool(on)
        return self

    @property
    def reselectable(self) -> bool:
        return self.f_reselectable

    def drawing_attributes(self, ctx=None) -> TAttributes:
        a = super().drawing_attributes(ctx)
        a.set("role", "listbox")
        a.set_data("grWidget", "goradd.selectTable")
        if self.f_selected_id:
            a.set_data("grOptSelectedId", self.f_selected_id)
        if self.f_reselectable:
            a.set_data("grOptReselect", "1")
        return a

    @staticmethod
    def row_data_id(data: Any) -> str:
        """ID строки: ID() / primary_key() / ['id'] / get('id'); пусто → строку выбрать нельзя."""
        for name in ("ID", "primary_key"):
            v = getattr(data, name, None)
            if v is not None and not isinstance(data, Mapping):
                v = v() if callable(v) else v
                return "" if v is None else str(v)
        if isinstance(data, Mapping):
            v = data.get("id")
            return "" if v is None else str(v)
        getter = getattr(data, "get", None)
        if callable(getter):
            v = getter("id")
            return "" if v is None else str(v)
        return ""

    def row_attributes(self, ctx, row: int, data: Any) -> Optional[TAttributes]:
        a = super().row_attributes(ctx, row, data) or TAttributes()
        id = a.get("id", "")     # styler может дать id сам
        if not id:
            id = self.row_data_id(data)
        if id:
            a.set_data("id", id)
            a.set("id", f"{self.ID}_{id}")
        else:
            a.add_class("nosel")
        a.set("role", "option")
        return a

    def update_form_values(self, ctx):
        super().update_form_values(ctx)
        v = ctx.custom_control_value(self.ID, "selectedId")
        if v is not None:
            self.f_selected_id = str(v)

    def private_action(self, ctx, params):
        if params.action_id == ROW_SELECTED:
            self.f_selected_id = params.event_value_string()
            self.debug("private_action", f"row selected: {self.f_selected_id}")
            return
        super().private_action(ctx, params)

    def marshal_state(self, m: dict):
        super().marshal_state(m)
        m["selId"] = self.f_selected_id

    def unmarshal_state(self, m: dict):
        super().unmarshal_state(m)
        v = m.get("selId")
        if isinstance(v, str):
            self.f_selected_id = v

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_selected_id)
        enc.encode(self.f_reselectable)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_selected_id = dec.decode()
        self.f_reselectable = dec.decode()
# ======================================================================================================================
# 📁🌄 dg_ctrl_table.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
