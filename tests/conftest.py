"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no network, no Redis)
- integration: End-to-end tests across modules
- external: Tests that call the live OSRS Wiki API (requires internet)

Integration tests are deselected by default (see pyproject.toml):
    pytest -m integration
"""

import pytest

import config.settings as settings_module


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line("markers", "integration: End-to-end tests across modules")
    config.addinivalue_line("markers", "external: Wiki API tests (requires internet)")


@pytest.fixture(autouse=True)
def reset_settings_singleton():
    """Drop the cached Settings so env changes in one test never leak into another"""
    settings_module._settings_instance = None
    yield
    settings_module._settings_instance = None
