"""Tests for grid configuration, env helpers and the log router."""

from typing import Iterator

import pytest
from pydantic import ValidationError

from dg_columns import TMapColumn
from dg_config import DEFAULT_CONFIG, TGridConfig
from dg_ctrl_table import TPagedTable, TTable
from dg_events import TJsPriority
from dg_logger import TLogRouter, format_log_line, init_log_router, stop_log_router
from dg_page import TPage
from dg_response import TResponse
from dg_sys import key_bool, key_int


@pytest.fixture
def router() -> Iterator[TLogRouter]:
    r = init_log_router(live=False)
    yield r
    stop_log_router()


def test_defaults() -> None:
    """The shipped defaults."""
    assert DEFAULT_CONFIG.default_page_size == 10
    assert DEFAULT_CONFIG.default_max_page_buttons == 10
    assert DEFAULT_CONFIG.default_sort_history_limit == 1
    assert DEFAULT_CONFIG.label_previous == "Previous"


def test_from_env_reads_dg_keys(quiet_env: dict) -> None:
    """DG_* keys override defaults; missing keys are filled in."""
    quiet_env.update({"DG_PAGE_SIZE": "25", "DG_LABEL_NEXT": "Weiter"})
    config = TGridConfig.from_env()

    assert config.default_page_size == 25
    assert config.label_next == "Weiter"
    assert config.default_max_page_buttons == 10
    assert quiet_env["DG_MAX_PAGE_BUTTONS"] == "10"


@pytest.mark.parametrize("field, value", [("default_page_size", 0), ("default_max_page_buttons", 4),
                                          ("default_sort_history_limit", 0), ("pagestate_max_pages", 0)])
def test_invalid_values_are_rejected(field: str, value: int) -> None:
    """Sizes and limits must be usable."""
    with pytest.raises(ValidationError):
        TGridConfig(**{field: value})


def test_env_helpers(quiet_env: dict) -> None:
    """Typed env reads with fallbacks."""
    quiet_env.update({"A_INT": "7.0", "A_BAD": "x", "A_BOOL": "yes"})
    assert key_int("A_INT") == 7
    assert key_int("A_BAD", 3) == 3
    assert key_bool("A_BOOL") is True
    assert key_bool("A_MISSING", True) is True


def test_page_config_reaches_controls() -> None:
    """Controls on a page read defaults from the page's config."""
    page = TPage(None, "P", config=TGridConfig(default_page_size=3, default_sort_history_limit=4))
    table = TPagedTable(page, "Grid")
    assert table.page_size == 3
    assert table.sort_history_limit == 4
    assert TPagedTable(None, "Loose").page_size == 10


def test_router_collects_component_logs(router: TLogRouter, page: TPage) -> None:
    """Component log lines land in the router buffer with source and function."""
    table = TTable(page, "T")
    table.add_column(TMapColumn("a", "A", "a").set_sortable())
    table.sort_click("a")

    lines = router.lines()
    assert any("[T]sort_click():" in line for line in lines)


def test_router_subscribers_and_buffer_limit() -> None:
    """Subscribers see every line; buffers keep the last 200."""
    router = TLogRouter(live=False)
    seen = []

    def subscriber(msg: str, window: int) -> None:
        seen.append((msg, window))

    router.add_subscriber(subscriber)
    for i in range(205):
        router.write(f"line {i}", window=2)

    assert len(seen) == 205
    assert router.lines(2)[0] == "line 5"
    assert len(router.lines(2)) == 200

    router.remove_subscriber(subscriber)
    router.write("after")
    assert len(seen) == 205
    router.stop()


def test_format_log_line() -> None:
    """Project tag, time, source and function prefix every line."""
    line = format_log_line("Grid", "draw", "hello", 3)
    assert line.startswith("[DG_1][")
    assert line.endswith("[Grid]draw(): hello 3")


def test_response_orders_commands_by_priority() -> None:
    """Exclusive and high commands run before standard and low ones."""
    response = TResponse()
    response.execute_js_function("late", TJsPriority.LOW)
    response.execute_js_function("normal")
    response.execute_js_function("first", TJsPriority.EXCLUSIVE)
    response.execute_control_command("T", "option", TJsPriority.HIGH, "selectedId", "a")

    assert [c.name for c in response.ordered_commands()] == ["first", "option", "normal", "late"]
    assert '"option"' in response.to_json()
