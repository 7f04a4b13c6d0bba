"""Shared pytest fixture: fresh registry and no background timers per test."""

import pytest

from arena.config import settings
from arena.main import app, get_registry
from arena.registry import AgentRegistry


@pytest.fixture(autouse=True)
def registry():
    original_enabled = settings.scheduler_enabled
    settings.scheduler_enabled = False
    fresh = AgentRegistry()
    app.dependency_overrides[get_registry] = lambda: fresh
    yield fresh
    app.dependency_overrides.clear()
    settings.scheduler_enabled = original_enabled
