# ======================================================================================================================
# 📁 file        : dg_ctrl_mixin.py - миксины табличных контролов: менеджер данных и постраничность
# 🕒 created     : 03.11.2025 09:40
# 🎉 contains    : calc_bunch(), TDataManagerMixin, TPagedControlMixin
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from collections.abc import Sequence
from typing import Any, Callable, Iterator, Optional
from dg_errors import EGridError, EBadData, EMisconfiguration, EProviderFailure, EStaleState
# 💎🧩⚙️🧪 ... __ALL__ ...
__all__ = ["calc_bunch", "TDataManagerMixin", "TPagedControlMixin"]
# ......................................................................................................................
# 🍒 Окно кнопок пейджера
# ......................................................................................................................
def _div(a: int, b: int) -> int:
    # целочисленное деление с отсечением к нулю: (-3) / 2 → -1
    return int(a / b)
# ---
def calc_bunch(page_count: int, page_num: int, max_buttons: int = 10) -> tuple[int, int]:
    """
    Окно [page_start, page_end] номерных кнопок пейджера.
    Если страниц не больше max_buttons - показываем все. Иначе окно строится так,
    чтобы текущая страница была внутри, а крайние страницы выходили отдельными кнопками за многоточием.
    """
    if page_count <= max_buttons:
        return 1, page_count

    min_end_of_bunch = min(max_buttons - 2, page_count)
    max_start_of_bunch = max(page_count - max_buttons + 3, 1)
    left_of_bunch = _div(max_buttons - 5, 2)
    right_of_bunch = _div(max_buttons - 4, 2)
    left_bunch_trigger = left_of_bunch + 4
    right_bunch_trigger = max_start_of_bunch + _div(max_buttons - 7, 2)

    if page_num < left_bunch_trigger:
        page_start = 1
    else:
        page_start = min(max_start_of_bunch, page_num - left_of_bunch)

    if page_num > right_bunch_trigger:
        page_end = page_count
    else:
        page_end = max(min_end_of_bunch, page_num + right_of_bunch)
    return page_start, page_end
# ----------------------------------------------------------------------------------------------------------------------
# 🧪 TDataManagerMixin - срез данных, окно (offset) и ленивый провайдер
# ----------------------------------------------------------------------------------------------------------------------
class TDataManagerMixin:
    """
    Контрол, которому отдают строки для отрисовки.
    Провайдер - компонент страницы с методом bind_data(ctx, owner), обязанный вызвать owner.set_data().
    Между запросами данные провайдера не хранятся: load_data() перед рисованием, reset_data() после.
    """

    def _init_data_manager(self):
        self.f_data: Optional[list] = None
        self.f_data_offset: int = 0
        self.f_provider_id: str = ""
        self.data_error: Optional[EProviderFailure] = None
    # ..................................................................................................................
    # 🔌 Провайдер
    # ..................................................................................................................
    def set_data_provider(self, provider):
        if provider is None:
            self.f_provider_id = ""
            return
        if not hasattr(provider, "bind_data") or not hasattr(provider, "ID"):
            self.fail("set_data_provider", f"{provider!r} is not a data provider component", EMisconfiguration)
        self.f_provider_id = provider.ID

    def has_data_provider(self) -> bool:
        return bool(self.f_provider_id)

    @property
    def data_provider_id(self) -> str:
        return self.f_provider_id

    def data_provider(self):
        """Провайдер по ID: через реестр страницы, без страницы - по дереву владения."""
        if not self.f_provider_id:
            return None
        page = self.page()
        if page is not None:
            provider = page.get_control(self.f_provider_id)
        else:
            provider = next((c for c in self.root().iter_tree() if c.Name == self.f_provider_id), None)
        if provider is None:
            self.fail("data_provider", f"data provider '{self.f_provider_id}' not found", EStaleState)
        return provider
    # ..................................................................................................................
    # 📦 Данные
    # ..................................................................................................................
    def set_data(self, data: Any):
        self.set_data_with_offset(data, 0)

    def set_data_with_offset(self, data: Any, offset: int):
        """data - последовательность строк, offset - абсолютный индекс первой строки в полном наборе."""
        if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
            self.fail("set_data", f"data must be a sequence, got {type(data).__name__}", EBadData)
        if offset < 0:
            self.fail("set_data", f"negative offset {offset}", EBadData)
        self.f_data = list(data)
        self.f_data_offset = int(offset)

    @property
    def data(self) -> Optional[list]:
        return self.f_data

    @property
    def data_offset(self) -> int:
        return self.f_data_offset

    def has_data(self) -> bool:
        return self.f_data is not None

    def data_len(self) -> int:
        return len(self.f_data) if self.f_data is not None else 0

    def load_data(self, ctx):
        """Ленивая загрузка через провайдера. Отменённый контекст оставляет прежнее состояние."""
        if not self.f_provider_id or self.f_data is not None:
            return
        if ctx is not None and ctx.cancelled:
            self.log("load_data", "⛔ context cancelled, skip bind")
            return
        provider = self.data_provider()
        prev = (self.f_data, self.f_data_offset)
        self.debug("load_data", f"bind via {provider.ID}")
        try:
            provider.bind_data(ctx, self)
        except EGridError:
            raise
        except Exception as e:
            self.log("load_data", f"⚠ provider {provider.ID} failed: {e}")
            raise EProviderFailure(f"{self.__class__.__name__}.load_data(): provider {provider.ID} failed: {e}") from e
        if ctx is not None and ctx.cancelled:
            self.f_data, self.f_data_offset = prev
            self.log("load_data", "⛔ context cancelled during bind, data dropped")

    def reset_data(self):
        if self.f_provider_id:
            self.f_data = None
            self.f_data_offset = 0
            self.debug("reset_data", "data released")

    def range_data(self, f: Callable[[int, Any], Any]):
        """f(абсолютный индекс, строка) по порядку; f вернул False → стоп."""
        for i, row in self.iter_data():
            if f(i, row) is False:
                break

    def iter_data(self) -> Iterator[tuple[int, Any]]:
        if not self.f_data:
            return
        for i, row in enumerate(list(self.f_data)):
            yield self.f_data_offset + i, row
    # ..................................................................................................................
    # 💾 Pagestate
    # ..................................................................................................................
    def serialize_data_manager(self, enc):
        enc.encode(self.f_provider_id)
        # данные провайдера живут только в пределах запроса
        enc.encode(None if self.f_provider_id else self.f_data)
        enc.encode(0 if self.f_provider_id else self.f_data_offset)

    def deserialize_data_manager(self, dec):
        self.f_provider_id = dec.decode()
        self.f_data = dec.decode()
        self.f_data_offset = dec.decode()
# ----------------------------------------------------------------------------------------------------------------------
# 🧪 TPagedControlMixin - арифметика страниц и список подключённых пейджеров
# ----------------------------------------------------------------------------------------------------------------------
class TPagedControlMixin:
    def _init_paged_control(self):
        self.f_total_items: int = 0
        self.f_page_size: int = 0      # 0 → default_page_size из конфига
        self.f_page_num: int = 1
        self.f_data_pager_ids: list[str] = []
    # ..................................................................................................................
    # 🔢 Итоги / размер / номер
    # ..................................................................................................................
    def set_total_items(self, count: int):
        if count < 0:
            self.fail("set_total_items", f"negative total {count}", EBadData)
        self.f_total_items = int(count)
        self.limit_page_number()

    @property
    def total_items(self) -> int:
        return self.f_total_items

    def set_page_size(self, size: int):
        if size < 0:
            self.fail("set_page_size", f"negative page size {size}", EBadData)
        self.f_page_size = int(size)

    @property
    def page_size(self) -> int:
        return self.f_page_size or self.config().default_page_size

    @property
    def page_num(self) -> int:
        return self.f_page_num

    def set_page_num(self, n: int):
        """Без прижатия к диапазону - прижимает вызывающий."""
        n = int(n)
        if n != self.f_page_num:
            self.f_page_num = n
            self.refresh()

    def limit_page_number(self):
        page_count = self.calc_page_count()
        if self.f_page_num > page_count:
            self.f_page_num = page_count if page_count >= 1 else 1

    def calc_page_count(self) -> int:
        size = self.page_size
        if size == 0 or self.f_total_items == 0:
            return 0
        return (self.f_total_items - 1) // size + 1

    def slice_offsets(self) -> tuple[int, int]:
        """[start, end) текущей страницы в полном наборе."""
        size = self.page_size
        start = (self.f_page_num - 1) * size
        end = min(start + size, self.f_total_items)
        return start, max(end, start)

    def sql_limits(self) -> tuple[int, int]:
        """(max_rows, offset) для LIMIT/OFFSET."""
        size = self.page_size
        return size, (self.f_page_num - 1) * size

    def calc_bunch(self, max_buttons: int | None = None) -> tuple[int, int]:
        return calc_bunch(self.calc_page_count(), self.f_page_num,
                          max_buttons or self.config().default_max_page_buttons)
    # ..................................................................................................................
    # 📟 Пейджеры
    # ..................................................................................................................
    def add_data_pager(self, pager):
        if pager.ID not in self.f_data_pager_ids:
            self.f_data_pager_ids.append(pager.ID)

    def data_pager_ids(self) -> list[str]:
        return list(self.f_data_pager_ids)

    def has_data_pagers(self) -> bool:
        return bool(self.f_data_pager_ids)

    def data_pagers(self) -> list:
        page = self.page()
        if page is None:
            return []
        return [p for p in (page.get_control(i) for i in self.f_data_pager_ids) if p is not None]

    def refresh_pagers(self):
        """Перерисовать сам контрол и все подключённые пейджеры."""
        self.refresh()
        for pager in self.data_pagers():
            pager.refresh()
    # ..................................................................................................................
    # 💾 Сохранённое состояние / pagestate
    # ..................................................................................................................
    def marshal_paged_state(self, m: dict):
        m["pageNum"] = self.f_page_num

    def unmarshal_paged_state(self, m: dict):
        n = m.get("pageNum")
        if isinstance(n, int) and n >= 1:
            self.f_page_num = n

    def serialize_paged_control(self, enc):
        enc.encode(self.f_total_items)
        enc.encode(self.f_page_size)
        enc.encode(self.f_page_num)
        enc.encode(self.f_data_pager_ids)

    def deserialize_paged_control(self, dec):
        self.f_total_items = dec.decode()
        self.f_page_size = dec.decode()
        self.f_page_num = dec.decode()
        self.f_data_pager_ids = list(dec.decode())
# ======================================================================================================================
# 📁🌄 dg_ctrl_mixin.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
