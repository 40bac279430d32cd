"""Root conftest: resets all global state after every test."""

import pytest

from overlay_agent.core.utils.lazy import LazyMap


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Drop every lazily built instance (the parser cache included) after each test."""
    yield
    LazyMap.reset_all()
