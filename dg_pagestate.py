# ======================================================================================================================
# 📁 file        : dg_pagestate.py - сериализация дерева контролов в pagestate и хранилище pagestate
# 🕒 created     : 19.10.2025 18:40
# 🎉 contains    : реестр типов, TSerializable (pydantic), TControlRef, TEncoder/TDecoder, TPageStateStore
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import json
import secrets
import threading
from collections import OrderedDict
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Any, Dict
from pydantic import BaseModel, ValidationError
from dg_errors import EEncodingFailure, EStaleState
from dg_html import TAttributes
from dg_logger import LoggableComponent
# 💎 ... CONFIG / CONSTS ...
PAGESTATE_VERSION = 1
_TYPES: Dict[str, type] = {}
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["PAGESTATE_VERSION", "type_kind", "register_type", "lookup_type", "TSerializable", "TControlRef",
           "resolve_ref", "TEncoder", "TDecoder", "TPageStateStore"]
# ......................................................................................................................
# 🍒 Реестр типов (контролы, колонки, inline-объекты)
# ......................................................................................................................
def type_kind(cls: type) -> str:
    """Тег типа в pagestate: модуль + qualname, без коллизий одноимённых классов."""
    return f"{cls.__module__}.{cls.__qualname__}"
# ---
def register_type(cls: type) -> type:
    _TYPES[type_kind(cls)] = cls
    return cls
# ---
def lookup_type(kind: str) -> type:
    cls = _TYPES.get(kind)
    if cls is None:
        raise EEncodingFailure(f"pagestate: unknown type kind '{kind}'")
    return cls
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TSerializable - inline-объекты (texter, styler, провайдер чекбоксов), которые живут внутри pagestate
# ----------------------------------------------------------------------------------------------------------------------
class TSerializable(BaseModel):
    """
    Pydantic-модель, которую можно положить в pagestate по значению.
    Каждый потомок автоматически регистрируется в реестре типов.
    """

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs):
        super().__pydantic_init_subclass__(**kwargs)
        register_type(cls)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TControlRef - ссылка на контрол по ID (разрешается в restore())
# ----------------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True)
class TControlRef:
    control_id: str

    def resolve(self, page) -> Any:
        ctrl = page.get_control(self.control_id) if page is not None else None
        if ctrl is None:
            raise EStaleState(f"pagestate: control '{self.control_id}' no longer exists")
        return ctrl
# ---
def resolve_ref(ref: Any, page) -> Any:
    """TControlRef → контрол со страницы, inline-значение возвращается как есть."""
    if isinstance(ref, TControlRef):
        return ref.resolve(page)
    return ref
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TEncoder - последовательная запись полей в порядке сериализации
# ----------------------------------------------------------------------------------------------------------------------
class TEncoder(LoggableComponent):
    def __init__(self):
        self.items: list[Any] = []

    def encode(self, value: Any):
        self.items.append(self.pack(value))

    def encode_ref(self, obj: Any):
        """
        Интерфейсное поле: контрол пишется по ID ($ctl), всё остальное inline (обычно $o).
        """
        if obj is not None and hasattr(obj, "Components") and hasattr(obj, "ID"):
            self.items.append({"$ctl": obj.ID})
        else:
            self.items.append(self.pack(obj))

    def pack(self, v: Any) -> Any:
        if v is None or isinstance(v, (bool, str)):
            return v
        if isinstance(v, Enum):
            return self.pack(v.value)
        if isinstance(v, (int, float)):
            return v
        if isinstance(v, datetime):
            return {"$dt": v.isoformat()}
        if isinstance(v, date):
            return {"$d": v.isoformat()}
        if isinstance(v, TControlRef):
            return {"$ctl": v.control_id}
        if isinstance(v, TAttributes):
            return {"$a": dict(v.items())}
        if isinstance(v, TSerializable):
            return {"$o": type_kind(type(v)), "v": v.model_dump(mode="json")}
        if isinstance(v, Mapping):
            out = {}
            for k, val in v.items():
                if not isinstance(k, str):
                    raise EEncodingFailure(f"pagestate: map key {k!r} is not a string")
                out[k] = self.pack(val)
            return {"$m": out}
        if isinstance(v, (list, tuple)):
            return [self.pack(x) for x in v]
        raise EEncodingFailure(f"pagestate: cannot encode value of type {type(v).__name__}")

    def dumps(self) -> str:
        try:
            return json.dumps({"v": PAGESTATE_VERSION, "items": self.items}, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise EEncodingFailure(f"pagestate: {e}") from e
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TDecoder - последовательное чтение полей в том же порядке
# ----------------------------------------------------------------------------------------------------------------------
class TDecoder(LoggableComponent):
    def __init__(self, blob: str):
        try:
            doc = json.loads(blob)
        except (TypeError, ValueError) as e:
            raise EEncodingFailure(f"pagestate: malformed blob: {e}") from e
        if not isinstance(doc, dict) or doc.get("v") != PAGESTATE_VERSION or not isinstance(doc.get("items"), list):
            raise EEncodingFailure("pagestate: unsupported blob layout")
        self.items: list[Any] = doc["items"]
        self.pos = 0

    def decode(self) -> Any:
        if self.pos >= len(self.items):
            raise EEncodingFailure("pagestate: read past the end of the blob")
        v = self.unpack(self.items[self.pos])
        self.pos += 1
        return v

    def at_end(self) -> bool:
        return self.pos >= len(self.items)

    def unpack(self, v: Any) -> Any:
        if isinstance(v, list):
            return [self.unpack(x) for x in v]
        if not isinstance(v, dict):
            return v
        if "$m" in v:
            return {k: self.unpack(val) for k, val in v["$m"].items()}
        if "$a" in v:
            return TAttributes(v["$a"])
        if "$ctl" in v:
            return TControlRef(v["$ctl"]) if v["$ctl"] is not None else None
        if "$dt" in v:
            return datetime.fromisoformat(v["$dt"])
        if "$d" in v:
            return date.fromisoformat(v["$d"])
        if "$o" in v:
            cls = lookup_type(v["$o"])
            try:
                return cls.model_validate(v.get("v") or {})
            except ValidationError as e:
                raise EEncodingFailure(f"pagestate: cannot rebuild {v['$o']}: {e}") from e
        raise EEncodingFailure(f"pagestate: untagged object {sorted(v)}")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPageStateStore - in-memory LRU хранилище с эксклюзивным удержанием сессии
# ----------------------------------------------------------------------------------------------------------------------
class TPageStateStore(LoggableComponent):
    """
    Ключ - (session_id, state_id). Запросы одной сессии сериализуются через hold(session_id).
    """
    def __init__(self, max_pages: int = 1000):
        self.max_pages = max(1, int(max_pages))
        self._pages: "OrderedDict[tuple[str, str], str]" = OrderedDict()
        self._lock = threading.Lock()
        # session_id → [lock, число держателей и ожидающих]; запись живёт, пока счётчик > 0
        self._session_locks: dict[str, list] = {}

    @staticmethod
    def new_state_id() -> str:
        return secrets.token_urlsafe(12)

    def _acquire_session_lock(self, session_id: str) -> threading.Lock:
        with self._lock:
            entry = self._session_locks.get(session_id)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._session_locks[session_id] = entry
            entry[1] += 1
            return entry[0]

    def _release_session_lock(self, session_id: str):
        with self._lock:
            entry = self._session_locks.get(session_id)
            if entry is None:
                return
            entry[1] -= 1
            if entry[1] <= 0:
                del self._session_locks[session_id]

    @contextmanager
    def hold(self, session_id: str):
        """Эксклюзивное удержание pagestate сессии на время запроса."""
        lock = self._acquire_session_lock(session_id)
        try:
            with lock:
                yield self
        finally:
            self._release_session_lock(session_id)

    def held_sessions(self) -> int:
        """Сколько сессий сейчас удерживаются или ждут удержания."""
        with self._lock:
            return len(self._session_locks)

    def save(self, session_id: str, state_id: str, blob: str):
        with self._lock:
            key = (session_id, state_id)
            self._pages[key] = blob
            self._pages.move_to_end(key)
            while len(self._pages) > self.max_pages:
                old, _ = self._pages.popitem(last=False)
                self.log("save", f"evicted pagestate {old[1]} of session {old[0]}")

    def load(self, session_id: str, state_id: str) -> str | None:
        with self._lock:
            key = (session_id, state_id)
            blob = self._pages.get(key)
            if blob is not None:
                self._pages.move_to_end(key)
            return blob

    def drop(self, session_id: str, state_id: str):
        with self._lock:
            self._pages.pop((session_id, state_id), None)

    def __len__(self) -> int:
        return len(self._pages)
# ======================================================================================================================
# 📁🌄 dg_pagestate.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
