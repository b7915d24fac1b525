# ======================================================================================================================
# 📁 file        : dg_sys.py - базовые классы Tradition Grid
# 🕒 created     : 11.10.2025 12:23
# 🎉 contains    : ENV-конфиг (_key/key_int/key_bool), TOwnerObject, TComponent, is_visual_node
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import os
import traceback
from datetime import datetime
from typing import MutableMapping, Dict, Any, TYPE_CHECKING
from dg_logger import format_log_line, emit_log_line
from dg_errors import EMisconfiguration, EBadID
from dg_pagestate import register_type
if TYPE_CHECKING:
    from dg_page import TPage
    from dg_config import TGridConfig
# 💎 ... Переназначаемая ENV-мапа ...
_GLOBAL_AUTO_COUNTERS: Dict[str, int] = {}  # для объектов без Owner (корни)
_ENV: MutableMapping[str, str] = os.environ
# 🍍 ... global utilities ...
def set_env_mapping(mapping: MutableMapping[str, str] | None) -> None:
    global _ENV
    _ENV = os.environ if mapping is None else mapping
# ---
def _key(name: str | None, default: str = '') -> str | None:
    if not name:
        return None
    v = _ENV.get(name)
    if v is not None and v != '':
        return v
    _ENV[name] = str(default)
    return str(default)
# ---
def key_int(name: str, default: int = 0) -> int:
    try:
        return int(float(_key(name, str(default))))
    except ValueError:
        return int(default)
# ---
def key_bool(name: str, default: bool = False) -> bool:
    val = str(_key(name, '1' if default else '0')).strip().lower()
    if val in ("1", "true", "yes", "on", "y", "t"):
        return True
    if val in ("0", "false", "no", "off", "n", "none", ""):
        return False
    return bool(default)
# 💎 ... CONFIG / CONSTS ...
TRACE_LIMIT = key_int('TRACE_LIMIT', 12)
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TOwnerObject', 'TComponent',
    'set_env_mapping',
    '_key', 'key_int', 'key_bool',
    'is_visual_node',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TOwnerObject - иерархия владения, регистрация и логика родословной
# ----------------------------------------------------------------------------------------------------------------------
class TOwnerObject:
    # ⚡🛠️ ▸ __init__
    def __init__(self, Owner: "TOwnerObject | None" = None, Name: str | None = None):
        """
        Базовый узел дерева владения.
        💠 объект знает своего Owner, хранит детей в self.Components,
        получает человекопонятное имя вида Table1 / DataPager2
        и автоматически регистрируется у Owner (а через него на странице).
        """
        self.f_name = ""
        # --- PHASE 0.1: Политика владения (валидация до присвоения полей) ---
        if Owner is None and self._owner_required():
            raise EMisconfiguration(f"{self.__class__.__name__} requires an Owner")
        allowed_owner = self._allowed_owner_types()
        if Owner is not None and allowed_owner is not None:
            if not isinstance(Owner, allowed_owner):
                raise EMisconfiguration(f"{self.__class__.__name__} cannot have Owner {Owner.__class__.__name__}")
        # ✔️ --- владелец формально валиден ---
        self.Owner: "TOwnerObject | None" = Owner
        if Name:
            self.f_name = Name
        # 👨‍👩‍👧‍👧 ... Дочерние компоненты ...
        self.Components: Dict[str, "TOwnerObject"] = {}
        # --- Регистрация в родителе ---
        self.register_in_owner()
        # ⚡🛠️ TOwnerObject ▸ End of __init__
    # ..................................................................................................................
    # 🛡️ Политики владения / допустимых связей
    # ..................................................................................................................
    def _owner_required(self) -> bool:
        """Должен ли этот класс ВСЕГДА иметь Owner? По умолчанию False."""
        return False
    # ---
    def _allowed_owner_types(self) -> tuple[type, ...] | None:
        return None
    # ---
    def _allowed_child_types(self) -> tuple[type, ...] | None:
        return None
    # ..................................................................................................................
    # 🏷️👨‍👩‍👧‍👧 Идентичность и родословная
    # ..................................................................................................................
    @property
    def Name(self) -> str:
        if not getattr(self, "f_name", ""):
            self.f_name = self._get_unique_name()
        return self.f_name
    # ---
    @Name.setter
    def Name(self, value: str | None):
        self.f_name = "" if value is None else str(value)
    # ---
    @property
    def ID(self) -> str:
        """HTML id контрола. Уникален в пределах страницы, совпадает с Name."""
        return self.Name
    # ---
    def _get_unique_name(self) -> str:
        """
        Имя = ИмяКласса без ведущей 'T' + порядковый номер.
        TTable     → Table1
        TDataPager → DataPager1
        Счётчики живут на корне дерева (обычно это страница), уникальность тоже по всему дереву.
        """
        raw_class = self.__class__.__name__
        if raw_class.startswith("T") and len(raw_class) > 1:
            human_name = raw_class[1:]
        else:
            human_name = raw_class

        root = self.Owner.root() if self.Owner is not None else None
        if root is not None:
            counters = getattr(root, "_auto_counters", None)
            if counters is None:
                counters = {}
                setattr(root, "_auto_counters", counters)
        else:
            counters = _GLOBAL_AUTO_COUNTERS

        n = counters.get(human_name, 0) + 1
        candidate = f"{human_name}{n}"
        if root is not None:
            while root._name_taken(candidate):
                n += 1
                candidate = f"{human_name}{n}"

        counters[human_name] = n
        return candidate
    # ---
    def _name_taken(self, name: str) -> bool:
        return any(getattr(c, "f_name", "") == name for c in self.iter_tree())
    # ---
    def root(self) -> "TOwnerObject":
        """Корень дерева владения. Цикл глубже 1024 шагов → fail()."""
        node = self
        guard = 0
        while node.Owner is not None and guard < 1024:
            node = node.Owner
            guard += 1
        if guard >= 1024:
            self.fail("root", "Ownership cycle detected", RuntimeError)
        return node
    # ---
    def path(self) -> str:
        """Полный путь владения через дефис, от корня до текущего узла (для логов)."""
        names = [self.Name]
        p = self.Owner
        while p is not None:
            names.append(p.Name)
            p = p.Owner
        return "-".join(reversed(names))
    # ---
    def page(self) -> "TPage | None":
        """Ближайшая страница вверх по Owner (или сам объект, если он страница)."""
        from dg_page import TPage
        node = self
        while node is not None:
            if isinstance(node, TPage):
                return node
            node = node.Owner
        return None
    # ..................................................................................................................
    # ⚙️ Register & Release
    # ..................................................................................................................
    def register_global(self, component: "TOwnerObject"):
        """Поднимает регистрацию вверх по дереву. Страница переопределяет и ведёт реестр по ID."""
        if self.Owner is not None:
            self.Owner.register_global(component)
    # ---
    def release_global(self, component: "TOwnerObject"):
        if self.Owner is not None:
            self.Owner.release_global(component)
    # ---
    def register_in_owner(self):
        """
        Регистрирует self у Owner.Components и проверяет,
        что Owner вообще имеет право иметь ребёнка такого типа.
        """
        if not self.Owner:
            return

        allowed_kids = self.Owner._allowed_child_types()
        if allowed_kids is not None and not isinstance(self, allowed_kids):
            self.fail(
                "register_in_owner",
                f"{self.Owner.__class__.__name__} cannot own {self.__class__.__name__}",
                EMisconfiguration
            )

        if self.Name in self.Owner.Components:
            self.fail("register_in_owner", f"Duplicate component: {self.Name}", EBadID)

        self.Owner.Components[self.Name] = self
        self.Owner.register_global(self)
    # ..................................................................................................................
    # 📡 Log / Debug / Fail
    # ..................................................................................................................
    def log(self, function: str, *parts, window: int = 1):
        """Базовый логгер для всех owner-компонентов: TLogRouter (rich) или консоль."""
        emit_log_line(format_log_line(self.Name, function, *parts), window=window)
    # ---
    def debug(self, func: str, *parts):
        """Отладочный вывод (🔍). Только при DEBUG_MODE == '1'."""
        if _key("DEBUG_MODE", "0") != "1":
            return
        msg = " ".join(str(p) for p in parts)
        emit_log_line(f"🔍 [DEBUG][{self.__class__.__name__}.{func}] {msg}")
    # ---
    def fail(self, function: str, msg: str, exc_type: type = Exception):
        """
        Аварийный выход: логируем сообщение и стек, при заданном FAIL_LOG дописываем в файл,
        затем бросаем exc_type("Class.function(): msg").
        """
        stack = "".join(traceback.format_stack(limit=TRACE_LIMIT))
        cls_name = self.__class__.__name__
        owner_name = getattr(getattr(self, "Owner", None), "f_name", None)
        owner_part = f"\n📦 owner: {owner_name}" if owner_name else ""
        text = (
            f"\n💥 {cls_name}.{function}() FAILED{owner_part}\n⚙️ message: {msg}"
            f"\n\n🧩 Traceback (most recent calls):\n{stack}"
        )

        self.log("fail", msg)
        self.debug("fail", text)

        fail_log = _key("FAIL_LOG", "")
        if fail_log:
            folder = os.path.dirname(fail_log)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(fail_log, "a", encoding="utf-8") as f:
                f.write(f"[{datetime.now().isoformat()}]{text}\n{'-' * 80}\n")

        raise exc_type(f"{cls_name}.{function}(): {msg}")
    # ..................................................................................................................
    # ♻️ Обход и уничтожение
    # ..................................................................................................................
    def iter_tree(self):
        """Генератор обхода вниз по иерархии: self, затем рекурсивно все дети (родитель раньше детей)."""
        yield self
        for child in list(self.Components.values()):
            yield from child.iter_tree()
    # ---
    def free(self):
        """Рекурсивно освобождает детей, снимает себя с Owner и с реестра страницы."""
        for child in list(self.Components.values()):
            child.free()
        self.Components.clear()
        if self.Owner:
            self.Owner.remove(self)
            self.Owner.release_global(self)
            self.Owner = None
    # ---
    def remove(self, child: "TOwnerObject"):
        """Удаляет дочерний компонент из self.Components. Если такого ребёнка нет → fail()."""
        if child.Name not in self.Components:
            self.fail("remove", f"Component not found: {child.Name}", EBadID)
        del self.Components[child.Name]
        self.debug("remove", f"{child.Name} removed")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TComponent - базовый компонент страницы (невизуальный: провайдеры, texter-ы)
# ----------------------------------------------------------------------------------------------------------------------
class TComponent(TOwnerObject):
    # ⚡🛠️ ▸ __init__
    def __init__(self, Owner: "TOwnerObject | None" = None, Name: str | None = None, **options):
        """
        Компонент живёт в дереве владения и в реестре страницы. Участвует в цикле запроса
        (update_form_values → действие → рендер → marshal_state) и в сериализации pagestate.
        Дополнительная инициализация только через do_init(**options).
        """
        super().__init__(Owner, Name)
        # --- восстановление из pagestate выставляет флаг ДО __init__ (см. create_blank) ---
        self.f_restoring: bool = getattr(self, "f_restoring", False)
        self.f_save_state: bool = False
        self._init_fields()
        self.do_init(**options)
        # ... 🔊 ...
        self.debug("__init__", f"⚙️ {self.__class__.__name__} {self.Name} created")
        # ⚡🛠️ TComponent ▸ End of __init__

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # 1) __init__() запрещён для всех, кроме базовых классов
        base_init_whitelist = {"TComponent", "TCustomControl", "TCompositeControl"}
        if "__init__" in cls.__dict__ and cls.__name__ not in base_init_whitelist:
            raise TypeError(
                f"❌ {cls.__name__} не должен переопределять __init__(). "
                f"Используй do_init() для дополнительной инициализации."
            )
        # 2) каждый компонент известен реестру типов pagestate
        register_type(cls)

    def _init_fields(self):
        """Служебные поля базовых классов. Вызывается и при создании, и при восстановлении."""
        pass

    def do_init(self, **options):
        """Хук инициализации потомков. Неизвестные опции - ошибка конфигурации."""
        if options:
            self.fail("do_init", f"unknown options: {', '.join(sorted(options))}", EMisconfiguration)

    @classmethod
    def create_blank(cls, Owner: "TOwnerObject | None", Name: str, **options) -> "TComponent":
        """
        Пустой экземпляр для восстановления из pagestate: do_init() видит f_restoring=True
        и не требует соучастников, поля затем перезаписывает deserialize().
        """
        obj = cls.__new__(cls)
        obj.f_restoring = True
        obj.__init__(Owner, Name, **options)
        return obj
    # ..................................................................................................................
    # 🔧 Вспомогательное
    # ..................................................................................................................
    def config(self) -> "TGridConfig":
        page = self.page()
        if page is not None:
            return page.f_config
        from dg_config import DEFAULT_CONFIG
        return DEFAULT_CONFIG
    # ---
    def save_state(self, on: bool = True):
        """Сохранять состояние (marshal_state) в сессии между визитами страницы."""
        self.f_save_state = bool(on)
    # ---
    @property
    def saves_state(self) -> bool:
        return self.f_save_state
    # ..................................................................................................................
    # 🔁 Цикл запроса (потомки переопределяют)
    # ..................................................................................................................
    def update_form_values(self, ctx):
        pass
    # ---
    def private_action(self, ctx, params):
        pass
    # ---
    def marshal_state(self, m: dict):
        pass
    # ---
    def unmarshal_state(self, m: dict):
        pass
    # ..................................................................................................................
    # 💾 Pagestate
    # ..................................................................................................................
    def serialize(self, enc):
        enc.encode(self.f_save_state)
    # ---
    def deserialize(self, dec):
        self.f_save_state = bool(dec.decode())
    # ---
    def restore(self, page: "TPage"):
        """Второй проход после десериализации всего дерева: разрешаем ссылки по ID."""
        self.f_restoring = False
# ---
def is_visual_node(x):
    """
    Узел считается визуальным, если он умеет сам себя рендерить
    и хранит результат рендера в Canvas.
    """
    return hasattr(x, "_render") and hasattr(x, "Canvas")
# ======================================================================================================================
# 📁🌄 dg_sys.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
