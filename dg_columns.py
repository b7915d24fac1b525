# ======================================================================================================================
# 📁 file        : dg_columns.py - колонки таблицы: базовый контракт и варианты
# 🕒 created     : 04.11.2025 10:20
# 🎉 contains    : TSortDirection, TCellInfo, TCellTexter/TCellStyler/TRowStyler, TTemplateTexter,
#                  TColumn, TSliceColumn, TMapColumn, TGetterColumn, TNodeColumn, TAliasColumn, TCustomColumn,
#                  TButtonColumn, sort_keys()
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any, Optional, TYPE_CHECKING
from dg_errors import EBadData, EMisconfiguration
from dg_events import EV_CLICK, VALUE_FROM_ROW, TEventBinding
from dg_fmt import apply_format
from dg_html import TAttributes, render_tag, render_void_tag, escape
from dg_logger import LoggableComponent
from dg_pagestate import TSerializable, register_type, resolve_ref
if TYPE_CHECKING:
    from dg_ctrl_table import TTable
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TSortDirection", "TCellInfo", "TCellTexter", "TCellStyler", "TRowStyler", "TTemplateTexter",
           "TColumn", "TSliceColumn", "TMapColumn", "TGetterColumn", "TNodeColumn", "TAliasColumn",
           "TCustomColumn", "TButtonColumn", "sort_keys"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TSortDirection
# ----------------------------------------------------------------------------------------------------------------------
class TSortDirection(IntEnum):
    NOT_SORTABLE = 0
    ASCENDING = 1
    DESCENDING = -1
    NOT_SORTED = -100   # сортировать можно, но сейчас не сортируется

    def flipped(self) -> "TSortDirection":
        if self in (TSortDirection.ASCENDING, TSortDirection.DESCENDING):
            return TSortDirection(self.value * -1)
        return self
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCellInfo и внедряемые texter / styler
# ----------------------------------------------------------------------------------------------------------------------
@dataclass
class TCellInfo:
    row: int
    col: int
    data: Any = None
    is_header: bool = False
    is_footer: bool = False


class TCellTexter(TSerializable):
    """Inline-texter: текст ячейки. Контрол с методом cell_text() тоже годится, он хранится по ID."""

    def cell_text(self, ctx, col: "TColumn", info: TCellInfo) -> str:
        raise NotImplementedError


class TCellStyler(TSerializable):
    def cell_attributes(self, ctx, col: "TColumn", info: TCellInfo) -> Optional[TAttributes]:
        raise NotImplementedError


class TRowStyler(TSerializable):
    def row_attributes(self, ctx, row: int, data: Any) -> Optional[TAttributes]:
        raise NotImplementedError


class TTemplateTexter(TCellTexter):
    """'{name} ({age})' по полям строки-словаря."""
    template: str

    def cell_text(self, ctx, col: "TColumn", info: TCellInfo) -> str:
        if isinstance(info.data, Mapping):
            return self.template.format_map(info.data)
        return self.template.format(info.data)
# ......................................................................................................................
def _check_texter(obj: Any, method: str, where: str):
    if obj is not None and not callable(getattr(obj, method, None)):
        raise EMisconfiguration(f"TColumn.{where}(): {type(obj).__name__} has no {method}()")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TColumn - базовая колонка
# ----------------------------------------------------------------------------------------------------------------------
class TColumn(LoggableComponent):
    """
    Колонка не контрол: живёт в списке колонок таблицы и хранит прямую ссылку на неё.
    В pagestate пишется таблицей (тег типа + поля), после чтения таблица заново связывает её с собой.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        register_type(cls)

    def __init__(self, title: str = "", id: str = ""):
        self._init_fields()
        self.f_title = title
        self.f_id = id

    def _init_fields(self):
        self.f_id: str = ""
        self.f_parent: "TTable | None" = None
        self.f_title: str = ""
        self.attributes: TAttributes = TAttributes()          # статические атрибуты каждой ячейки
        self.f_header_attrs: list[Optional[TAttributes]] = []
        self.f_footer_attrs: list[Optional[TAttributes]] = []
        self.f_col_tag_attrs: Optional[TAttributes] = None
        self.f_span: int = 0
        self.f_as_header: bool = False
        self.f_is_html: bool = False
        self.f_is_hidden: bool = False
        self.f_sort_direction: TSortDirection = TSortDirection.NOT_SORTABLE
        self.f_cell_texter: Any = None
        self.f_header_texter: Any = None
        self.f_footer_texter: Any = None
        self.f_cell_styler: Any = None
        self.f_format: str = ""
        self.f_time_format: str = ""
        self.f_show_local_time: bool = False

    @classmethod
    def create_blank(cls) -> "TColumn":
        """Пустая колонка для чтения из pagestate (конструктор с аргументами не вызывается)."""
        obj = cls.__new__(cls)
        obj._init_fields()
        return obj
    # ..................................................................................................................
    # 🏷️ Идентичность
    # ..................................................................................................................
    @property
    def ID(self) -> str:
        return self.f_id

    def set_id(self, id: str) -> "TColumn":
        self.f_id = id
        return self

    @property
    def parent_table(self) -> "TTable | None":
        return self.f_parent

    def set_parent_table(self, table: "TTable | None"):
        self.f_parent = table

    def require_parent(self, where: str) -> "TTable":
        if self.f_parent is None:
            raise EMisconfiguration(f"{self.__class__.__name__}.{where}(): column '{self.f_id}' has no parent table")
        return self.f_parent

    def config(self):
        if self.f_parent is not None:
            return self.f_parent.config()
        from dg_config import DEFAULT_CONFIG
        return DEFAULT_CONFIG

    @property
    def title(self) -> str:
        return self.f_title

    def set_title(self, title: str) -> "TColumn":
        self.f_title = title
        return self

    @property
    def span(self) -> int:
        return self.f_span if self.f_span >= 2 else 1

    def set_span(self, span: int) -> "TColumn":
        self.f_span = int(span)
        return self

    @property
    def is_hidden(self) -> bool:
        return self.f_is_hidden

    def set_hidden(self, hidden: bool) -> "TColumn":
        self.f_is_hidden = bool(hidden)
        return self

    @property
    def as_header(self) -> bool:
        return self.f_as_header

    def set_as_header(self, as_header: bool) -> "TColumn":
        self.f_as_header = bool(as_header)
        return self

    @property
    def is_html(self) -> bool:
        return self.f_is_html

    def set_is_html(self, is_html: bool) -> "TColumn":
        """Текст ячеек не экранируется. Только для доверенного HTML."""
        self.f_is_html = bool(is_html)
        return self
    # 🌱 ...формат...
    def set_format(self, fmt: str) -> "TColumn":
        self.f_format = fmt
        return self

    def set_time_format(self, time_format: str) -> "TColumn":
        self.f_time_format = time_format
        return self

    def set_show_local_time(self, on: bool) -> "TColumn":
        self.f_show_local_time = bool(on)
        return self

    def apply_format(self, data: Any) -> str:
        return apply_format(data, self.f_format, self.f_time_format, self.config().default_time_format)
    # 🌱 ...texter / styler...
    def set_cell_texter(self, texter) -> "TColumn":
        _check_texter(texter, "cell_text", "set_cell_texter")
        self.f_cell_texter = texter
        return self

    @property
    def cell_texter(self):
        return self.f_cell_texter

    def set_header_texter(self, texter) -> "TColumn":
        _check_texter(texter, "cell_text", "set_header_texter")
        self.f_header_texter = texter
        return self

    def set_footer_texter(self, texter) -> "TColumn":
        _check_texter(texter, "cell_text", "set_footer_texter")
        self.f_footer_texter = texter
        return self

    def set_cell_styler(self, styler) -> "TColumn":
        _check_texter(styler, "cell_attributes", "set_cell_styler")
        self.f_cell_styler = styler
        return self
    # ..................................................................................................................
    # 🎨 Атрибуты
    # ..................................................................................................................
    def header_attributes(self, row: int, col: int = 0) -> TAttributes:
        while len(self.f_header_attrs) < row + 1:
            self.f_header_attrs.append(None)
        if self.f_header_attrs[row] is None:
            self.f_header_attrs[row] = TAttributes()
        a = self.f_header_attrs[row]
        if row == 0:
            # для скринридеров
            a.set("scope", "col")
            if self.is_sortable():
                if self.f_sort_direction == TSortDirection.ASCENDING:
                    a.set("aria-sort", "ascending")
                elif self.f_sort_direction == TSortDirection.DESCENDING:
                    a.set("aria-sort", "descending")
                else:
                    a.remove("aria-sort")
        return a

    def footer_attributes(self, row: int, col: int = 0) -> TAttributes:
        while len(self.f_footer_attrs) < row + 1:
            self.f_footer_attrs.append(None)
        if self.f_footer_attrs[row] is None:
            self.f_footer_attrs[row] = TAttributes()
        return self.f_footer_attrs[row]

    def col_tag_attributes(self) -> TAttributes:
        if self.f_col_tag_attrs is None:
            self.f_col_tag_attrs = TAttributes()
        return self.f_col_tag_attrs

    def cell_attributes(self, ctx, row: int, col: int, data: Any) -> Optional[TAttributes]:
        if not self.attributes and self.f_cell_styler is None:
            return None
        a = self.attributes.copy()
        if self.f_cell_styler is not None:
            a.merge(self.f_cell_styler.cell_attributes(ctx, self, TCellInfo(row, col, data)))
        return a
    # ..................................................................................................................
    # 🎨 Рисование ячеек
    # ..................................................................................................................
    def draw_column_tag(self, ctx) -> str:
        if self.f_is_hidden:
            return ""
        table = self.require_parent("draw_column_tag")
        a = self.col_tag_attributes().copy()
        a.set("id", f"{table.ID}_{self.f_id}")
        if self.f_span > 1:
            a.set("span", self.f_span)
        return render_void_tag("col", a)

    def header_cell_html(self, ctx, row: int, col: int) -> str:
        if self.f_header_texter is not None:
            return self.f_header_texter.cell_text(ctx, self, TCellInfo(row, col, is_header=True))
        if row == 0:
            h = escape(self.f_title)
            if self.is_sortable():
                h = self.render_sort_button(h)
            return h
        return ""

    def draw_header_cell(self, ctx, row: int, col: int) -> str:
        if self.f_is_hidden:
            return ""
        html = self.header_cell_html(ctx, row, col)
        return render_tag("th", self.header_attributes(row, col), html)

    def footer_cell_html(self, ctx, row: int, col: int) -> str:
        if self.f_footer_texter is not None:
            # без экранирования
            return self.f_footer_texter.cell_text(ctx, self, TCellInfo(row, col, is_footer=True))
        return ""

    def draw_footer_cell(self, ctx, row: int, col: int) -> str:
        if self.f_is_hidden:
            return ""
        html = self.footer_cell_html(ctx, row, col)
        return render_tag("th" if self.f_as_header else "td", self.footer_attributes(row, col), html)

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        return ""

    def cell_text(self, ctx, row: int, col: int, data: Any) -> str:
        if self.f_cell_texter is not None:
            return self.f_cell_texter.cell_text(ctx, self, TCellInfo(row, col, data))
        d = self.cell_data(ctx, row, col, data)
        if self.f_show_local_time and isinstance(d, datetime) and ctx is not None:
            d = self._to_client_time(d, ctx.tz_offset)
        return self.apply_format(d)

    @staticmethod
    def _to_client_time(d: datetime, tz_offset: int) -> datetime:
        """tz_offset - минуты к востоку от UTC. Наивное время считается UTC."""
        tz = timezone(timedelta(minutes=tz_offset))
        if d.tzinfo is None:
            d = d.replace(tzinfo=timezone.utc)
        return d.astimezone(tz)

    def draw_cell(self, ctx, row: int, col: int, data: Any) -> str:
        if self.f_is_hidden:
            return ""
        html = self.cell_text(ctx, row, col, data)
        if not self.f_is_html:
            html = escape(html)
        return render_tag("th" if self.f_as_header else "td", self.cell_attributes(ctx, row, col, data), html)
    # ..................................................................................................................
    # ↕️ Сортировка
    # ..................................................................................................................
    def set_sortable(self) -> "TColumn":
        self.f_sort_direction = TSortDirection.NOT_SORTED
        return self

    def is_sortable(self) -> bool:
        return self.f_sort_direction != TSortDirection.NOT_SORTABLE

    @property
    def sort_direction(self) -> TSortDirection:
        return self.f_sort_direction

    def set_sort_direction(self, d: TSortDirection | int) -> "TColumn":
        self.f_sort_direction = TSortDirection(d)
        return self

    def sort_key(self) -> Any:
        """Ключ, по которому провайдер сортирует строки этой колонки."""
        return self.f_id

    def render_sort_button(self, label_html: str) -> str:
        icons = self.config().sort_icons
        d = self.f_sort_direction
        icon = icons.get(int(d) if d in (TSortDirection.ASCENDING, TSortDirection.DESCENDING) else 0, "")
        a = TAttributes({"type": "button"}).set_data("grSort", self.f_id)
        return render_tag("button", a, f"{label_html} {icon}")
    # ..................................................................................................................
    # 🔁 Цикл запроса
    # ..................................................................................................................
    def update_form_values(self, ctx):
        pass

    def add_actions(self, ctrl):
        pass

    def do_action(self, ctx, params):
        """Не обработано колонкой → обработчик страницы."""
        table = self.f_parent
        page = table.page() if table is not None else None
        if page is not None:
            page.do_action(ctx, params)

    def pre_render(self, ctx=None):
        pass

    def marshal_state(self, m: dict):
        pass

    def unmarshal_state(self, m: dict):
        pass
    # ..................................................................................................................
    # 💾 Pagestate
    # ..................................................................................................................
    def serialize(self, enc):
        enc.encode(self.f_id)
        enc.encode(self.f_title)
        enc.encode(self.attributes)
        enc.encode(self.f_header_attrs)
        enc.encode(self.f_footer_attrs)
        enc.encode(self.f_col_tag_attrs)
        enc.encode(self.f_span)
        enc.encode(self.f_as_header)
        enc.encode(self.f_is_html)
        enc.encode(self.f_is_hidden)
        enc.encode(self.f_sort_direction)
        enc.encode_ref(self.f_cell_texter)
        enc.encode_ref(self.f_header_texter)
        enc.encode_ref(self.f_footer_texter)
        enc.encode_ref(self.f_cell_styler)
        enc.encode(self.f_format)
        enc.encode(self.f_time_format)
        enc.encode(self.f_show_local_time)

    def deserialize(self, dec):
        self.f_id = dec.decode()
        self.f_title = dec.decode()
        self.attributes = dec.decode()
        self.f_header_attrs = list(dec.decode())
        self.f_footer_attrs = list(dec.decode())
        self.f_col_tag_attrs = dec.decode()
        self.f_span = dec.decode()
        self.f_as_header = dec.decode()
        self.f_is_html = dec.decode()
        self.f_is_hidden = dec.decode()
        self.f_sort_direction = TSortDirection(dec.decode())
        # здесь могут оказаться TControlRef - их разрешает restore()
        self.f_cell_texter = dec.decode()
        self.f_header_texter = dec.decode()
        self.f_footer_texter = dec.decode()
        self.f_cell_styler = dec.decode()
        self.f_format = dec.decode()
        self.f_time_format = dec.decode()
        self.f_show_local_time = dec.decode()

    def restore(self, table: "TTable"):
        self.f_parent = table
        page = table.page()
        self.f_cell_texter = resolve_ref(self.f_cell_texter, page)
        self.f_header_texter = resolve_ref(self.f_header_texter, page)
        self.f_footer_texter = resolve_ref(self.f_footer_texter, page)
        self.f_cell_styler = resolve_ref(self.f_cell_styler, page)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.f_id!r} title={self.f_title!r}>"


register_type(TColumn)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Варианты колонок
# ----------------------------------------------------------------------------------------------------------------------
class TSliceColumn(TColumn):
    """Строка - последовательность, ячейка - row[index]."""

    def __init__(self, index: int, title: str = "", id: str = ""):
        super().__init__(title, id)
        self.f_index = int(index)

    @property
    def index(self) -> int:
        return self.f_index

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
            raise EBadData(f"TSliceColumn.cell_data(): row {row} is not a sequence")
        if not -len(data) <= self.f_index < len(data):
            raise EBadData(f"TSliceColumn.cell_data(): index {self.f_index} out of range for row {row}")
        return data[self.f_index]

    def sort_key(self) -> Any:
        return self.f_index

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_index)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_index = dec.decode()


class TMapColumn(TColumn):
    """Строка - словарь, ячейка - row[key] (нет ключа → пусто)."""

    def __init__(self, key: str, title: str = "", id: str = ""):
        super().__init__(title, id)
        self.f_key = key

    @property
    def key(self) -> str:
        return self.f_key

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise EBadData(f"TMapColumn.cell_data(): row {row} is not a mapping")
        return data.get(self.f_key)

    def sort_key(self) -> Any:
        return self.f_key

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_key)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_key = dec.decode()


class TGetterColumn(TMapColumn):
    """Строка - объект с get(key) (ORM-запись и т.п.). Без get() → пустая ячейка."""

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        getter = getattr(data, "get", None)
        if not callable(getter):
            return ""
        return getter(self.f_key)


class TNodeColumn(TColumn):
    """
    Путь 'project.manager.name': по цепочке get() до последнего поля.
    Промежуточного объекта нет или он не умеет get() → EBadData (связь не загружена).
    """

    def __init__(self, path: str, title: str = "", id: str = ""):
        names = [n for n in path.split(".") if n]
        if not names:
            raise EMisconfiguration("TNodeColumn(): empty node path")
        super().__init__(title or names[-1], id)
        self.f_path = ".".join(names)

    @property
    def path(self) -> str:
        return self.f_path

    @staticmethod
    def _get(obj: Any, name: str) -> Any:
        getter = getattr(obj, "get", None)
        if callable(getter):
            return getter(name)
        return getattr(obj, name, None)

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        names = self.f_path.split(".")
        obj = data
        for name in names[:-1]:
            obj = self._get(obj, name)
            if obj is None:
                raise EBadData(f"TNodeColumn.cell_data(): '{name}' of '{self.f_path}' is not loaded in row {row}")
        return self._get(obj, names[-1])

    def sort_key(self) -> Any:
        return self.f_path

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_path)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_path = dec.decode()


class TAliasColumn(TColumn):
    """Значение алиаса запроса: row.get_alias(alias)."""

    def __init__(self, alias: str, title: str = "", id: str = ""):
        super().__init__(title or alias, id)
        self.f_alias = alias

    @property
    def alias(self) -> str:
        return self.f_alias

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        getter = getattr(data, "get_alias", None)
        if not callable(getter):
            return ""
        return getter(self.f_alias)

    def sort_key(self) -> Any:
        return self.f_alias

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_alias)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_alias = dec.decode()


class TCustomColumn(TColumn):
    """Текст ячейки целиком от внедрённого texter-а (inline или контрол)."""

    def __init__(self, texter, title: str = "", id: str = ""):
        if texter is None:
            raise EMisconfiguration("TCustomColumn(): texter is required")
        super().__init__(title, id)
        self.set_cell_texter(texter)


class TButtonColumn(TColumn):
    """
    Кнопка в каждой ячейке. Клик приходит событием таблицы, event_value - data-value строки
    (его ставит row styler таблицы).
    """

    def __init__(self, title: str = "", id: str = "", button_html: str = "&#9998;"):
        super().__init__(title, id)
        self.f_button_html = button_html
        self.f_button_attrs = TAttributes().add_class("gr-transparent-btn")
        self.f_is_html = True

    def _init_fields(self):
        super()._init_fields()
        self.f_button_html = "&#9998;"
        self.f_button_attrs = TAttributes()

    @property
    def button_attributes(self) -> TAttributes:
        return self.f_button_attrs

    def set_button_html(self, h: str) -> "TButtonColumn":
        self.f_button_html = h
        return self

    def cell_data(self, ctx, row: int, col: int, data: Any) -> Any:
        a = self.f_button_attrs.copy()
        a.set("type", "button")
        a.set_data("grBtnCol", "1")
        return render_tag("button", a, self.f_button_html)

    def apply_format(self, data: Any) -> str:
        return str(data)

    def button_click_binding(self, action_id: int) -> TEventBinding:
        """Привязывает клик по кнопкам колонки к таблице; действие уходит в do_action() страницы."""
        table = self.require_parent("button_click_binding")
        return table.on(EV_CLICK, action_id, selector="[data-gr-btn-col]", sub_id=self.f_id,
                        value_from=VALUE_FROM_ROW)

    def serialize(self, enc):
        super().serialize(enc)
        enc.encode(self.f_button_html)
        enc.encode(self.f_button_attrs)

    def deserialize(self, dec):
        super().deserialize(dec)
        self.f_button_html = dec.decode()
        self.f_button_attrs = dec.decode()
# ......................................................................................................................
# 🍒 Ключи сортировки для провайдера
# ......................................................................................................................
def sort_keys(columns) -> list[tuple[Any, bool]]:
    """[(sort_key, descending), ...] в порядке истории сортировки."""
    return [(c.sort_key(), c.sort_direction == TSortDirection.DESCENDING) for c in columns]
# ======================================================================================================================
# 📁🌄 dg_columns.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
