# ======================================================================================================================
# 📁 file        : dg_response.py - ответ на запрос: JS-команды и перерисованный HTML
# 🕒 created     : 21.10.2025 10:31
# 🎉 contains    : TResponse
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import json
from typing import Any, Dict, List
from dg_events import TJsCommand, TJsPriority
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TResponse"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TResponse - канал JS-команд + html
# ----------------------------------------------------------------------------------------------------------------------
class TResponse:
    def __init__(self):
        self.commands: List[TJsCommand] = []
        self.controls: Dict[str, str] = {}   # ajax: control_id → html
        self.html: str = ""                  # server: вся страница
        self.state_id: str = ""

    def execute_control_command(self, id: str, command: str, priority: TJsPriority = TJsPriority.STANDARD,
                                *args: Any):
        self.commands.append(TJsCommand(kind="control", target=id, name=command, priority=priority,
                                        args=list(args)))

    def execute_selector_function(self, selector: str, function: str,
                                  priority: TJsPriority = TJsPriority.STANDARD, *args: Any):
        self.commands.append(TJsCommand(kind="selector", target=selector, name=function, priority=priority,
                                        args=list(args)))

    def execute_js_function(self, name: str, priority: TJsPriority = TJsPriority.STANDARD, *args: Any):
        self.commands.append(TJsCommand(kind="function", name=name, priority=priority, args=list(args)))

    def find_commands(self, name: str) -> List[TJsCommand]:
        return [c for c in self.commands if c.name == name]

    def ordered_commands(self) -> List[TJsCommand]:
        """EXCLUSIVE и HIGH - раньше, LOW - в конце; внутри приоритета порядок добавления."""
        rank = {TJsPriority.EXCLUSIVE: 0, TJsPriority.HIGH: 1, TJsPriority.STANDARD: 2, TJsPriority.LOW: 3}
        return sorted(self.commands, key=lambda c: rank[c.priority])

    def to_json(self) -> str:
        return json.dumps({
            "state": self.state_id,
            "controls": self.controls,
            "commands": [c.model_dump(mode="json") for c in self.ordered_commands()],
        })
# ======================================================================================================================
# 📁🌄 dg_response.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
