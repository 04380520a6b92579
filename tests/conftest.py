"""
Shared fixtures for the promdress test suite.
"""

import pytest

from promdress.metrics import CollectorRegistry, set_default_registry


@pytest.fixture(autouse=True)
def default_registry():
    """Give every test its own default registry."""
    registry = CollectorRegistry()
    previous = set_default_registry(registry)
    yield registry
    set_default_registry(previous)


@pytest.fixture
def registry():
    """Create an explicit, empty registry."""
    return CollectorRegistry()
