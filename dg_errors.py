# ======================================================================================================================
# 📁 file        : dg_errors.py - виды ошибок табличной подсистемы
# 🕒 created     : 14.10.2025 10:05
# 🎉 contains    : EGridError и наследники: EBadID, EMisconfiguration, EBadData, EProviderFailure, EStaleState,
#                  EEncodingFailure
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["EGridError", "EBadID", "EMisconfiguration", "EBadData", "EProviderFailure", "EStaleState",
           "EEncodingFailure"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 EGridError - корень всех ошибок Tradition Grid
# ----------------------------------------------------------------------------------------------------------------------
class EGridError(RuntimeError):
    """Структурная ошибка ядра. Внутри ядра не гасится, всплывает до границы запроса."""


class EBadID(EGridError, LookupError):
    """ID не соответствует ожидаемой структуре или диапазону (item id, дубликат колонки, индекс вне диапазона)."""


class EMisconfiguration(EGridError):
    """Нет обязательного соучастника: провайдер чекбоксов, paged control у пейджера, таблица у колонки."""


class EBadData(EGridError, ValueError):
    """Данные не последовательность, отрицательный offset и т.п."""


class EProviderFailure(EGridError):
    """bind_data() или CheckboxProvider.all() упали. Исходное исключение лежит в __cause__."""


class EStaleState(EGridError):
    """Сохранённая ссылка (контрол-texter, провайдер) при восстановлении не найдена на странице."""


class EEncodingFailure(EGridError):
    """Ошибка записи/чтения pagestate."""
# ======================================================================================================================
# 📁🌄 dg_errors.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
