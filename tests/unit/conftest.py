"""Shared test fixtures."""

from typing import Any, Callable, Iterator

import pytest

from dg_context import TContext, TRequestMode
from dg_page import TPage
from dg_sys import set_env_mapping


@pytest.fixture(autouse=True)
def quiet_env() -> Iterator[dict[str, str]]:
    """Isolated env mapping with console echo off."""
    env = {"LOG_ECHO": "0", "DEBUG_MODE": "0"}
    set_env_mapping(env)
    yield env
    set_env_mapping(None)


@pytest.fixture
def page() -> TPage:
    """Empty page; a server-mode response is attached so JS commands can be recorded."""
    from dg_response import TResponse

    p = TPage(None, "Page")
    p.response = TResponse()
    p.render_id = 1
    return p


@pytest.fixture
def make_ctx() -> Callable[..., TContext]:
    """Factory for request contexts with sensible defaults."""

    def _make(form: dict[str, Any] | None = None, ajax: bool = False, **kwargs: Any) -> TContext:
        mode = TRequestMode.AJAX if ajax else TRequestMode.SERVER
        return TContext(form=form, mode=mode, session_id=kwargs.pop("session_id", "s1"), **kwargs)

    return _make
