"""Pytest fixtures for async_hook tests."""

import pytest

from async_hook import ErrorPolicy, Hook, HookSettings, disable_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep library logging off between tests."""
    disable_logging()
    yield
    disable_logging()


@pytest.fixture
def hook() -> Hook:
    """Fresh hook collection using the default (continue) error policy."""
    return Hook(settings=HookSettings(ERROR_POLICY=ErrorPolicy.CONTINUE))


@pytest.fixture
def calls() -> list:
    """Shared log that hooks append to, to check ordering."""
    return []
