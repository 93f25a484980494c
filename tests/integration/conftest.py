"""Pytest configuration for integration tests."""

import pytest


def pytest_collection_modifyitems(config, items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def shipped_registry():
    """The process-wide registry with the shipped backends registered."""
    import backends  # noqa: F401
    from core.backends import REGISTRY

    return REGISTRY
