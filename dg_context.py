# ======================================================================================================================
# 📁 file        : dg_context.py - контекст запроса: значения формы, режим, сессия, отмена
# 🕒 created     : 20.10.2025 14:02
# 🎉 contains    : TRequestMode, TContext
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, parse_qs
from dg_events import TActionParams
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TRequestMode", "TContext"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TRequestMode - полный POST формы или инкрементальный ajax
# ----------------------------------------------------------------------------------------------------------------------
class TRequestMode(str, Enum):
    SERVER = "server"
    AJAX = "ajax"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TContext - контейнер запроса, проходит через каждую точку draw/action
# ----------------------------------------------------------------------------------------------------------------------
class TContext:
    def __init__(
        self,
        form: Dict[str, Any] | None = None,
        mode: TRequestMode = TRequestMode.SERVER,
        action: TActionParams | None = None,
        session_id: str = "",
        state_id: str = "",
        session: Dict[str, Any] | None = None,
        custom: Dict[str, Dict[str, Any]] | None = None,
        checkable: Dict[str, Any] | None = None,
        tz_offset: int = 0,
    ):
        """
        form      - значения формы: name → str или list[str];
        custom    - значения кастомных контролов (ajax): control_id → {key: value};
        checkable - значения чекбоксов/радио, которые клиент шлёт отдельно: id → value;
        session   - словарь сессии (сохранённое состояние контролов живёт здесь).
        """
        self.form: Dict[str, List[str]] = {}
        for k, v in (form or {}).items():
            self.form[k] = [str(x) for x in v] if isinstance(v, (list, tuple)) else [str(v)]
        self.mode = TRequestMode(mode)
        self.action = action
        self.session_id = session_id
        self.state_id = state_id
        self.session: Dict[str, Any] = session if session is not None else {}
        self.custom: Dict[str, Dict[str, Any]] = custom or {}
        self.checkable: Dict[str, Any] = checkable or {}
        self.tz_offset = int(tz_offset)
        self._cancelled = False

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "TContext":
        """GET-запрос: значения формы из query string."""
        parsed = urlparse(url)
        return cls(form=parse_qs(parsed.query, keep_blank_values=True), **kwargs)
    # ..................................................................................................................
    # 📥 Значения формы
    # ..................................................................................................................
    def form_value(self, name: str) -> Optional[str]:
        values = self.form.get(name)
        if not values:
            return None
        return values[0]

    def form_values(self, name: str) -> Optional[List[str]]:
        values = self.form.get(name)
        if values is None:
            return None
        return list(values)

    def checkable_value(self, id: str) -> tuple[Any, bool]:
        if id in self.checkable:
            return self.checkable[id], True
        return None, False

    def custom_control_value(self, id: str, key: str) -> Any:
        return self.custom.get(id, {}).get(key)

    def request_mode(self) -> TRequestMode:
        return self.mode

    def is_ajax(self) -> bool:
        return self.mode == TRequestMode.AJAX
    # ..................................................................................................................
    # ⛔ Отмена
    # ..................................................................................................................
    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __getitem__(self, key: str) -> str:
        """Позволяет обращаться как к словарю: ctx['name']"""
        return self.form_value(key) or ""

    def __repr__(self):
        return f"<TContext mode={self.mode.value} action={self.action} form={self.form}>"
# ======================================================================================================================
# 📁🌄 dg_context.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
