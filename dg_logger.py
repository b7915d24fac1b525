# ======================================================================================================================
# 📁 file        : dg_logger.py - Rich LogRouter для Tradition Grid
# 🕒 created     : 13.10.2025 09:12
# 🎉 contains    : TLogRouter, LOG_ROUTER, init_log_router(), LoggableComponent
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import threading
import time
from datetime import datetime
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TLogRouter", "LOG_ROUTER", "init_log_router", "stop_log_router", "format_log_line",
           "emit_log_line", "LoggableComponent"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TLogRouter - глобальный Rich лог-центр с несколькими окнами
# ----------------------------------------------------------------------------------------------------------------------
class TLogRouter:
    """Глобальный Rich лог-центр с несколькими окнами."""

    def __init__(self, window_count: int = 3, refresh_rate: float = 0.5, live: bool = True,
                 console: Console | None = None):
        self.console = console or Console()
        self.window_count = window_count
        self.refresh_rate = refresh_rate
        self.buffers = {i: [] for i in range(1, window_count + 1)}
        self.lock = threading.Lock()
        self._stop = False

        # Подписчики на логи: callables вида fn(message: str, window: int)
        self.subscribers = []

        # поток рендера (live=False → только буферы и подписчики, удобно для тестов)
        self.thread = None
        if live:
            self.thread = threading.Thread(target=self._render_loop, daemon=True)
            self.thread.start()

    # ------------------------------------------------------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------------------------------------------------------
    def write(self, message: str, window: int = 1):
        """Добавляет строку в окно и рассылает подписчикам."""
        with self.lock:
            buf = self.buffers.setdefault(window, [])
            buf.append(message)
            if len(buf) > 200:
                buf.pop(0)

        for fn in list(self.subscribers):
            fn(message, window)

    def lines(self, window: int = 1) -> list[str]:
        with self.lock:
            return list(self.buffers.get(window, []))

    def add_subscriber(self, fn):
        """Регистрирует внешнего подписчика логов.

        fn: callable(message: str, window: int)
        """
        if not fn:
            return
        if fn not in self.subscribers:
            self.subscribers.append(fn)

    def remove_subscriber(self, fn):
        """Отписывает подписчика логов."""
        if fn in self.subscribers:
            self.subscribers.remove(fn)

    def stop(self):
        """Останавливает обновление консоли."""
        self._stop = True
        if self.thread is not None:
            self.thread.join(timeout=2)

    # ..................................................................................................................
    # 🎨 Render
    # ..................................................................................................................
    def _render_loop(self):
        """Фоновый цикл обновления Rich Live Console."""
        with Live(console=self.console, refresh_per_second=max(1, int(1 / self.refresh_rate))) as live:
            while not self._stop:
                live.update(self._layout())
                time.sleep(self.refresh_rate)

    def _layout(self):
        """Создаёт layout из панелей (по окнам)."""
        panels = []
        with self.lock:
            for i in range(1, self.window_count + 1):
                lines = self.buffers.get(i, [])
                text = "\n".join(lines[-20:]) or "(no logs)"
                panels.append(Panel(Text(text), title=f"Grid Log {i}"))

        return Panel.fit(
            Text("\n\n".join(p.renderable.plain for p in panels)),
            title="Tradition Grid Log Console",
        )
# ----------------------------------------------------------------------------------------------------------------------
# 🌍 Global instance
# ----------------------------------------------------------------------------------------------------------------------
LOG_ROUTER: TLogRouter | None = None


def init_log_router(live: bool = True) -> TLogRouter:
    global LOG_ROUTER
    if LOG_ROUTER is None:
        LOG_ROUTER = TLogRouter(live=live)
    return LOG_ROUTER


def stop_log_router():
    global LOG_ROUTER
    if LOG_ROUTER is not None:
        LOG_ROUTER.stop()
        LOG_ROUTER = None
# ......................................................................................................................
# 🍍 Формат строки и вывод
# ......................................................................................................................
def format_log_line(source: str, function: str, *parts) -> str:
    from dg_sys import _key

    project_symbol = _key('PROJECT_SYMBOL', 'DG')
    project_version = _key('PROJECT_VERSION', '1')
    now = datetime.now().strftime('%H:%M:%S')
    msg = ' '.join(str(p) for p in parts)
    return f'[{project_symbol}_{project_version}][{now}][{source}]{function}(): {msg}'


def emit_log_line(text: str, window: int = 1):
    """Строка в TLogRouter, если он поднят, иначе в консоль (LOG_ECHO=1)."""
    from dg_sys import _key

    if LOG_ROUTER is not None:
        LOG_ROUTER.write(text, window=window)
    elif _key('LOG_ECHO', '1') == '1':
        print(text, flush=True)


class LoggableComponent:
    """
    Базовый миксин, добавляющий поддержку централизованного логгирования.
    Для объектов вне дерева владения: колонки, списки, провайдеры, хранилище pagestate.
    """

    def log(self, function: str, *parts, window: int = 1):
        emit_log_line(format_log_line(self.__class__.__name__, function, *parts), window=window)
# ======================================================================================================================
# 📁🌄 dg_logger.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
