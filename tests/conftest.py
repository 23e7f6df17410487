"""Pytest configuration and fixtures."""

import pytest

from ticketcrew.agents.factory import AgentFactory, build_default_registry
from ticketcrew.agents.protocol import Ticket
from ticketcrew.agents.registry import AgentRegistry, SingletonCache
from ticketcrew.config.manager import ConfigManager
from ticketcrew.output import formatter as formatter_module


@pytest.fixture(autouse=True)
def reset_globals(tmp_path, monkeypatch):
    """Isolate config lookup and the global formatter for each test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    ConfigManager.reset()
    formatter_module._formatter = None
    yield
    ConfigManager.reset()
    formatter_module._formatter = None


@pytest.fixture
def cache():
    """A fresh singleton cache, disposed after the test."""
    cache = SingletonCache()
    yield cache
    cache.dispose()


@pytest.fixture
def registry(cache):
    """An empty registry backed by the test's cache."""
    return AgentRegistry(cache)


@pytest.fixture
def default_factory(cache):
    """Factory with every built-in agent registered as a singleton."""
    return AgentFactory(build_default_registry(cache))


@pytest.fixture
def make_ticket():
    """Build tickets with sensible defaults."""
    def _make(subject, description="", ticket_id=1, priority="normal"):
        return Ticket(id=ticket_id, subject=subject, description=description, priority=priority)
    return _make
