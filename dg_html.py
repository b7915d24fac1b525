# ======================================================================================================================
# 📁 file        : dg_html.py - мешок HTML-атрибутов и рендер тегов
# 🕒 created     : 15.10.2025 21:17
# 🎉 contains    : TAttributes, render_tag(), render_void_tag(), data_attr_name()
# 🌅 project     : Tradition Grid 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import re
from html import escape
from typing import Any, Iterable
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TAttributes", "render_tag", "render_void_tag", "data_attr_name", "escape"]
# 💎 ... CONFIG / CONSTS ...
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")
# ---
def data_attr_name(name: str) -> str:
    """'grCtl' → 'data-gr-ctl', 'grctl' → 'data-grctl', 'data-id' остаётся как есть."""
    if name.startswith("data-"):
        return name
    return "data-" + _CAMEL_RE.sub("-", name).lower()
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TAttributes - упорядоченный мешок атрибутов тега
# ----------------------------------------------------------------------------------------------------------------------
class TAttributes(dict):
    """
    name → str. Пустая строка рендерится как булев атрибут (disabled, checked).
    class и style - обычные ключи, но с отдельными идемпотентными билдерами.
    """

    def set(self, name: str, value: Any = "") -> "TAttributes":
        if value is None or value is False:
            self.pop(name, None)
        elif value is True:
            self[name] = ""
        else:
            self[name] = str(value)
        return self

    def has(self, name: str) -> bool:
        return name in self

    def remove(self, name: str) -> "TAttributes":
        self.pop(name, None)
        return self
    # 🌱🧲 ...class...
    def classes(self) -> list[str]:
        return [t for t in self.get("class", "").split() if t]

    def add_class(self, *tokens: str | None) -> "TAttributes":
        """Идемпотентно: порядок сохраняется, дубликаты не добавляются."""
        current = self.classes()
        for tok in tokens:
            if not tok:
                continue
            for t in str(tok).split():
                if t not in current:
                    current.append(t)
        if current:
            self["class"] = " ".join(current)
        return self

    def remove_class(self, *tokens: str) -> "TAttributes":
        drop = {t for tok in tokens if tok for t in str(tok).split()}
        current = [t for t in self.classes() if t not in drop]
        if current:
            self["class"] = " ".join(current)
        else:
            self.pop("class", None)
        return self

    def has_class(self, token: str) -> bool:
        return token in self.classes()
    # 🌱🧲 ...style...
    def styles(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for frag in self.get("style", "").split(";"):
            if ":" in frag:
                prop, value = frag.split(":", 1)
                out[prop.strip()] = value.strip()
        return out

    def set_style(self, prop: str, value: str | None) -> "TAttributes":
        st = self.styles()
        if value is None:
            st.pop(prop, None)
        else:
            st[prop] = str(value)
        if st:
            self["style"] = ";".join(f"{k}:{v}" for k, v in st.items())
        else:
            self.pop("style", None)
        return self

    def get_style(self, prop: str) -> str | None:
        return self.styles().get(prop)
    # 🌱🧲 ...data-* и прочее...
    def set_data(self, name: str, value: Any) -> "TAttributes":
        return self.set(data_attr_name(name), value)

    def get_data(self, name: str) -> str | None:
        return self.get(data_attr_name(name))

    def set_disabled(self, disabled: bool = True) -> "TAttributes":
        return self.set("disabled", True if disabled else None)

    def merge(self, other: "TAttributes | dict | None") -> "TAttributes":
        """Классы и стили объединяются, остальные ключи перезаписываются."""
        if not other:
            return self
        for k, v in other.items():
            if k == "class":
                self.add_class(v)
            elif k == "style":
                for frag in str(v).split(";"):
                    if ":" in frag:
                        prop, val = frag.split(":", 1)
                        self.set_style(prop.strip(), val.strip())
            else:
                self[k] = v
        return self

    def copy(self) -> "TAttributes":
        return TAttributes(self)

    def render(self) -> str:
        parts = []
        for k, v in self.items():
            if v == "":
                parts.append(f" {k}")
            else:
                parts.append(f' {k}="{escape(str(v), quote=True)}"')
        return "".join(parts)

    def __str__(self) -> str:
        return self.render().lstrip()
# ......................................................................................................................
# 🎨 Рендер тегов
# ......................................................................................................................
def render_tag(tag: str, attrs: TAttributes | dict | None = None, inner: str | Iterable[str] = "") -> str:
    a = attrs if isinstance(attrs, TAttributes) else TAttributes(attrs or {})
    body = inner if isinstance(inner, str) else "".join(inner)
    return f"<{tag}{a.render()}>{body}</{tag}>"
# ---
def render_void_tag(tag: str, attrs: TAttributes | dict | None = None) -> str:
    a = attrs if isinstance(attrs, TAttributes) else TAttributes(attrs or {})
    return f"<{tag}{a.render()}>"
# ======================================================================================================================
# 📁🌄 dg_html.py 🜂 The End - See You Next Session 2025 💹
# ======================================================================================================================
