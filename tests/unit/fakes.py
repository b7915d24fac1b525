"""Fake collaborators for the grid tests: data providers, checkbox providers and row objects."""

from typing import Any, Optional

from dg_columns import TRowStyler
from dg_column_checkbox import TDefaultCheckboxProvider
from dg_html import TAttributes
from dg_page import TPage
from dg_sys import TComponent


def make_rows(n: int) -> list[dict[str, Any]]:
    """Rows r1..rn as plain dicts."""
    return [{"id": f"r{i}", "name": f"Row {i}", "n": i} for i in range(1, n + 1)]


class TListProvider(TComponent):
    """In-memory data provider.

    Paged owners get their current window and the total count; sortable owners get rows sorted
    by their sort keys. Every bind is recorded in ``calls``.
    """

    def _init_fields(self) -> None:
        super()._init_fields()
        self.rows: list[dict[str, Any]] = []
        self.calls: list[str] = []

    def do_init(self, rows: Optional[list] = None, **options: Any) -> None:
        super().do_init(**options)
        self.rows = list(rows or [])

    def bind_data(self, ctx: Any, owner: Any) -> None:
        self.calls.append(owner.ID)
        rows = list(self.rows)
        if hasattr(owner, "sort_keys"):
            for key, descending in reversed(owner.sort_keys()):
                rows.sort(key=lambda r: r[key], reverse=descending)
        if hasattr(owner, "set_total_items"):
            owner.set_total_items(len(rows))
            start, end = owner.slice_offsets()
            owner.set_data_with_offset(rows[start:end], start)
        else:
            owner.set_data(rows)

    def serialize(self, enc: Any) -> None:
        super().serialize(enc)
        enc.encode(self.rows)

    def deserialize(self, dec: Any) -> None:
        super().deserialize(dec)
        self.rows = list(dec.decode())


class TFailingProvider(TComponent):
    """Provider whose backend is down."""

    def bind_data(self, ctx: Any, owner: Any) -> None:
        raise RuntimeError("database is down")


class TCancellingProvider(TComponent):
    """Provider that sees the request cancelled while it is binding."""

    def bind_data(self, ctx: Any, owner: Any) -> None:
        owner.set_data([{"id": "half"}])
        ctx.cancel()


class TSetCheckboxProvider(TDefaultCheckboxProvider):
    """Checkbox provider over dict rows with an optional known universe."""

    checked: dict[str, bool] = {}
    universe: Optional[dict[str, bool]] = None
    version: str = "v1"

    def row_id(self, data: Any) -> str:
        return str(data["id"])

    def is_checked(self, data: Any) -> bool:
        return self.checked.get(str(data["id"]), False)

    def all(self) -> Optional[dict[str, bool]]:
        return self.universe

    def data_id(self) -> str:
        return self.version


class TBrokenUniverseProvider(TSetCheckboxProvider):
    def all(self) -> Optional[dict[str, bool]]:
        raise RuntimeError("universe query failed")


class TValueRowStyler(TRowStyler):
    """Puts the row id into data-value, the way button columns expect it."""

    def row_attributes(self, ctx: Any, row: int, data: Any) -> Optional[TAttributes]:
        if data is None:
            return TAttributes({"class": "head"})
        return TAttributes().set_data("value", data["id"])


class TRecord:
    def __init__(self, id: str) -> None:
        self._id = id

    def ID(self) -> str:
        return self._id


class TKeyedRecord:
    def __init__(self, pk: int) -> None:
        self._pk = pk

    def primary_key(self) -> int:
        return self._pk


class TGetterRecord:
    """ORM-like row: fields through get(), related rows may be missing."""

    def __init__(self, **fields: Any) -> None:
        self._fields = fields

    def get(self, name: str) -> Any:
        return self._fields.get(name)

    def get_alias(self, name: str) -> Any:
        return self._fields.get(f"alias:{name}")


class TGridPage(TPage):
    """Page with a provider, a pager drawn before its paged table, and saved state."""

    def create_controls(self) -> None:
        from dg_columns import TMapColumn
        from dg_ctrl_pager import TDataPager
        from dg_ctrl_table import TPagedTable

        provider = TListProvider(self, "Provider", rows=make_rows(25))
        table = TPagedTable(self, "Grid")
        pager = TDataPager(self, "Pager", paged_control=table)
        pager.save_state(True)
        # the pager is drawn before its table
        self.Controls["Grid"] = self.Controls.pop("Grid")
        table.set_page_size(10)
        table.set_data_provider(provider)
        table.add_column(TMapColumn("n", "N", "n").set_sortable())
        table.make_sortable()
        table.save_state(True)
