# ======================================================================================================================
# 📁 file        : dg_events.py - события клиента, действия и JS-команды Tradition Grid
# 🕒 created     : 18.10.2025 07:26
# 🎉 contains    : имена событий (контракт с JS), id действий, TActionParams, TEventBinding, TCheckboxClick,
#                  TJsPriority, TJsCommand
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import json
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, Field
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["EV_CLICK", "EV_TABLE_SORT", "EV_ROW_SELECTED", "EV_CHECKBOX_COLUMN_CLICK", "EV_PAGE_CLICK", "VALUE_FROM_ROW",
           "PAGE_CLICK", "COLUMN_ACTION", "SORT_CLICK", "ROW_SELECTED", "ALL_CLICK_ACTION",
           "TEventBinding", "TActionParams", "TCheckboxClick", "TJsPriority", "TJsCommand"]
# 💎 ... имена событий (контракт с JS) ...
EV_CLICK = "click"
EV_TABLE_SORT = "TableSort"
EV_ROW_SELECTED = "RowSelected"
EV_CHECKBOX_COLUMN_CLICK = "CheckboxColumnClick"
EV_PAGE_CLICK = "PageClick"
VALUE_FROM_ROW = "tr:value"       # event_value = data-value строки, в которой случился клик
# 💎 ... id приватных действий ...
PAGE_CLICK = 1000         # DataPager: клик по кнопке страницы
COLUMN_ACTION = 2000      # Table: действие, адресованное колонке (sub_id = id колонки)
SORT_CLICK = 2001         # Table: клик по кнопке сортировки
ROW_SELECTED = 2002       # SelectTable: выбор строки
ALL_CLICK_ACTION = 1000   # CheckboxColumn: клик по "выбрать всё" (action_value колоночного действия)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TEventBinding - привязка клиентского события к действию на сервере
# ----------------------------------------------------------------------------------------------------------------------
class TEventBinding(BaseModel):
    event: str
    action_id: int
    destination: str                 # ID контрола-получателя
    sub_id: str = ""                 # адрес внутри контрола (например, id колонки)
    selector: str = ""               # делегирование на дочерние элементы
    action_value: Any = None
    value_from: str = ""             # откуда клиент берёт event_value: "tr:value" → data-value ближайшего <tr>
    private: bool = False            # True → private_action() получателя, иначе do_action() страницы

    def params(self, event_value: Any = None) -> "TActionParams":
        """Параметры действия, которые придут с клиента при срабатывании этой привязки."""
        return TActionParams(
            action_id=self.action_id,
            control_id=self.destination,
            sub_id=self.sub_id,
            event=self.event,
            event_value=event_value,
            action_value=self.action_value,
            private=self.private,
        )
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TActionParams - то, что клиент присылает при срабатывании события
# ----------------------------------------------------------------------------------------------------------------------
class TActionParams(BaseModel):
    action_id: int
    control_id: str
    sub_id: str = ""
    event: str = ""
    event_value: Any = None
    action_value: Any = None
    private: bool = False

    def event_value_string(self) -> str:
        v = self.event_value
        return "" if v is None else str(v)

    def action_value_string(self) -> str:
        v = self.action_value
        return "" if v is None else str(v)

    def action_value_int(self, default: int = 0) -> int:
        try:
            return int(self.action_value)
        except (TypeError, ValueError):
            return default

    def event_value_as(self, model: type[BaseModel]) -> BaseModel:
        """event_value → pydantic-модель (dict или JSON-строка)."""
        v = self.event_value
        if isinstance(v, str):
            return model.model_validate_json(v)
        return model.model_validate(v or {})
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCheckboxClick - полезная нагрузка события CheckboxColumnClick
# ----------------------------------------------------------------------------------------------------------------------
class TCheckboxClick(BaseModel):
    id: str
    checked: bool
    row: int = -1
    column: int = -1
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TJsPriority / TJsCommand - канал JS-команд
# ----------------------------------------------------------------------------------------------------------------------
class TJsPriority(str, Enum):
    HIGH = "high"
    STANDARD = "standard"
    LOW = "low"
    EXCLUSIVE = "exclusive"


class TJsCommand(BaseModel):
    kind: str                      # control | selector | function
    target: str = ""               # id контрола / css-селектор / имя функции
    name: str = ""                 # команда или функция
    priority: TJsPriority = TJsPriority.STANDARD
    args: List[Any] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, json_str: str) -> Optional["TJsCommand"]:
        return cls(**json.loads(json_str))
# ======================================================================================================================
# 📁🌄 dg_events.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
