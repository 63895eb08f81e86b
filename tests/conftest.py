"""
Shared pytest fixtures for overridefromenv tests.

This module provides:
- A fresh ``FlagSet`` per test
- Isolation of the process-wide ``command_line`` registry
- Settings cache and logging reset between tests
"""

from pathlib import Path

import pytest

from overridefromenv import flagset
from overridefromenv.flagset import FlagSet
from overridefromenv.logging import _reset_for_testing
from overridefromenv.settings import get_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fs() -> FlagSet:
    return FlagSet("test")


@pytest.fixture
def command_line(monkeypatch: pytest.MonkeyPatch) -> FlagSet:
    """Swap the process-wide registry for an empty one."""
    fresh = FlagSet("test-command-line")
    monkeypatch.setattr(flagset, "command_line", fresh)
    return fresh


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("OVERRIDEFROMENV_LOG_LEVEL", raising=False)
    monkeypatch.delenv("OVERRIDEFROMENV_LOG_FORMAT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    _reset_for_testing()
