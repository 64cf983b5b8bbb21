"""Pytest-bdd configuration and shared fixtures for store feature tests."""

import pytest

from shopstate import Store


@pytest.fixture
def context():
    """Shared test context for scenario state."""
    return {}


@pytest.fixture
def store(context):
    """Fresh store that records every snapshot it publishes."""
    store = Store()
    context["snapshots"] = []
    store.subscribe(context["snapshots"].append)
    context["store"] = store
    return store
