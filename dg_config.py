# ======================================================================================================================
# 📁 file        : dg_config.py - конфигурация табличной подсистемы
# 🕒 created     : 16.10.2025 08:44
# 🎉 contains    : TGridConfig (pydantic), DEFAULT_CONFIG
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Dict
from pydantic import BaseModel, Field, field_validator
from dg_sys import _key, key_int
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TGridConfig", "DEFAULT_CONFIG"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TGridConfig - значения по умолчанию, передаются странице при создании
# ----------------------------------------------------------------------------------------------------------------------
class TGridConfig(BaseModel):
    default_page_size: int = 10
    default_max_page_buttons: int = 10
    default_sort_history_limit: int = 1
    default_time_format: str = "%Y-%m-%d %H:%M:%S"
    label_previous: str = "Previous"
    label_next: str = "Next"
    # иконка сортировки по направлению: 0 - без сортировки, 1 - asc, -1 - desc
    sort_icons: Dict[int, str] = Field(default_factory=lambda: {
        0: '<i class="fa fa-sort fa-lg"></i>',
        1: '<i class="fa fa-sort-asc fa-lg"></i>',
        -1: '<i class="fa fa-sort-desc fa-lg"></i>',
    })
    pagestate_max_pages: int = 1000

    @field_validator("default_page_size", "default_sort_history_limit", "pagestate_max_pages")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("default_max_page_buttons")
    @classmethod
    def _enough_buttons(cls, v: int) -> int:
        if v < 5:
            raise ValueError("max page buttons must be >= 5")
        return v

    @classmethod
    def from_env(cls) -> "TGridConfig":
        """Сборка из ENV (DG_*) через _key(); незаданные ключи получают значения по умолчанию."""
        return cls(
            default_page_size=key_int("DG_PAGE_SIZE", 10),
            default_max_page_buttons=key_int("DG_MAX_PAGE_BUTTONS", 10),
            default_sort_history_limit=key_int("DG_SORT_HISTORY_LIMIT", 1),
            default_time_format=_key("DG_TIME_FORMAT", "%Y-%m-%d %H:%M:%S"),
            label_previous=_key("DG_LABEL_PREVIOUS", "Previous"),
            label_next=_key("DG_LABEL_NEXT", "Next"),
            pagestate_max_pages=key_int("DG_PAGESTATE_MAX_PAGES", 1000),
        )
# 💎 ... DEFAULTS ...
DEFAULT_CONFIG = TGridConfig()
# ======================================================================================================================
# 📁🌄 dg_config.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
