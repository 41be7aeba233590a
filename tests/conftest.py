"""Shared pytest configuration and fixtures for Messages Relay tests."""

import pytest

from messages_relay.core.config import ConfigSchema, RelayConfig
from tests.fixtures.mock_http import TARGET_API_URL

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]


@pytest.fixture(autouse=True)
def clean_relay_environment(monkeypatch):
    """Remove every relay setting from the environment (and any .env leftovers)."""
    for spec in ConfigSchema.all_specs().values():
        monkeypatch.delenv(spec.name, raising=False)
    yield


@pytest.fixture
def make_config():
    """Build a RelayConfig pointed at the mocked backend."""

    def _make(**overrides) -> RelayConfig:
        values = {"target_api_url": TARGET_API_URL}
        values.update(overrides)
        return RelayConfig(**values)

    return _make


@pytest.fixture
def relay_config(make_config):
    return make_config()


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
