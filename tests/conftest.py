"""
Pytest configuration and shared fixtures for mockup-kit tests.
"""

import logging
from collections.abc import Generator
from io import StringIO

import pytest
from rich.console import Console

from mockup_kit.config import BuilderConfig
from mockup_kit.core.descriptors import describe_properties


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (fast, isolated)")
    config.addinivalue_line("markers", "property: mark test as property-based test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)


@pytest.fixture
def fresh_descriptor_cache() -> Generator[None, None, None]:
    """Run the test against an empty descriptor cache."""
    describe_properties.cache_clear()
    yield
    describe_properties.cache_clear()


@pytest.fixture
def default_config() -> BuilderConfig:
    """Default builder configuration."""
    return BuilderConfig.default()


@pytest.fixture
def strict_config() -> BuilderConfig:
    """Configuration that type-checks overrides."""
    return BuilderConfig(validate_overrides=True)


@pytest.fixture
def record_console() -> Console:
    """Rich console writing to an in-memory buffer."""
    return Console(file=StringIO(), width=120, color_system=None, record=True)


@pytest.fixture
def builder_logs(caplog) -> pytest.LogCaptureFixture:
    """Capture debug logs from the builder package."""
    caplog.set_level(logging.DEBUG, logger="mockup_kit")
    return caplog
