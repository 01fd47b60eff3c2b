"""Test fixtures for Flare Food."""

from tests.fixtures.mocks import InMemoryDataSource

__all__ = [
    "InMemoryDataSource",
]
