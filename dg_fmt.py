# ======================================================================================================================
# 📁 file        : dg_fmt.py - форматирование значения ячейки
# 🕒 created     : 16.10.2025 05:45
# 🎉 contains    : apply_format(), resolve_time_format(), TIME_FORMAT_ALIASES
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from datetime import datetime, date, time
from decimal import Decimal
from typing import Any
from dg_errors import EBadData
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TIME_FORMAT_ALIASES", "resolve_time_format", "apply_format"]
# 💎 ... Маппинг пользовательских форматов на strftime ...
TIME_FORMAT_ALIASES = {
    'dd-mm-yyyy': '%d-%m-%Y',
    'dd.mm.yyyy': '%d.%m.%Y',
    'dd/mm/yyyy': '%d/%m/%Y',
    'mm/dd/yyyy': '%m/%d/%Y',
    'yyyy-mm-dd': '%Y-%m-%d',
    'dd-mm-yyyy HH:MM:SS': '%d-%m-%Y %H:%M:%S',
    'dd.mm.yyyy HH:MM:SS': '%d.%m.%Y %H:%M:%S',
    'dd/mm/yyyy HH:MM:SS': '%d/%m/%Y %H:%M:%S',
    'yyyy-mm-dd HH:MM:SS': '%Y-%m-%d %H:%M:%S',
    'dd.mm.yyyy HH:MM': '%d.%m.%Y %H:%M',
    'yyyy-mm-dd HH:MM': '%Y-%m-%d %H:%M',
    'HH:MM:SS': '%H:%M:%S',
    'HH:MM': '%H:%M',
    'full': '%d %B %Y %H:%M:%S',
    'short': '%d %b %Y %H:%M:%S',
    'iso': '%Y-%m-%dT%H:%M:%S',
}
# ---
def resolve_time_format(fmt: str) -> str:
    """Алиас ('iso', 'dd.mm.yyyy HH:MM') → strftime; строки с '%' возвращаются как есть."""
    if fmt in TIME_FORMAT_ALIASES:
        return TIME_FORMAT_ALIASES[fmt]
    if "%" in fmt:
        return fmt
    # пользовательские плейсхолдеры → strftime
    custom = fmt
    for src, dst in (('yyyy', '%Y'), ('yy', '%y'), ('dd', '%d'), ('mm', '%m'),
                     ('HH', '%H'), ('MM', '%M'), ('SS', '%S')):
        custom = custom.replace(src, dst)
    return custom
# ---
def _printf(fmt: str, value: Any) -> str:
    try:
        return fmt.replace("%v", "%s") % (value,)
    except (TypeError, ValueError) as e:
        raise EBadData(f"apply_format(): format {fmt!r} does not fit {type(value).__name__}: {e}") from e
# ---
def apply_format(data: Any, fmt: str = "", time_format: str = "", default_time_format: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Текст ячейки из произвольного значения.
    int  → '%d' по умолчанию; float/Decimal → '%f';
    datetime/date/time → strftime(time_format или default_time_format), затем printf-формат, если задан;
    list/tuple → каждый элемент отдельно, через ', ';
    всё остальное → str(), либо printf-формат.
    """
    if data is None:
        return ""
    if isinstance(data, bool):
        return _printf(fmt, data) if fmt else str(data).lower()
    if isinstance(data, int):
        return _printf(fmt or "%d", data)
    if isinstance(data, (float, Decimal)):
        return _printf(fmt or "%f", data)
    if isinstance(data, (datetime, date, time)):
        text = data.strftime(resolve_time_format(time_format or default_time_format))
        return _printf(fmt, text) if fmt else text
    if isinstance(data, (list, tuple)):
        # последовательность: формат к каждому элементу, через запятую
        return ", ".join(apply_format(x, fmt, time_format, default_time_format) for x in data)
    if fmt:
        return _printf(fmt, data)
    return str(data)
# ======================================================================================================================
# 📁🌄 dg_fmt.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
