"""Pytest fixtures for storefront controller tests."""

from decimal import Decimal

import pytest

from techcart.database.session_store import InMemorySessionStore
from techcart.integrations.contracts.catalog import Product


class RecordingSessionStore(InMemorySessionStore):
    """In-memory store that remembers every write."""

    def __init__(self, token=None):
        super().__init__(token)
        self.writes = []

    def set(self, token: str) -> None:
        self.writes.append(token)
        super().set(token)


@pytest.fixture
def session_store():
    return RecordingSessionStore()


@pytest.fixture
def ryzen():
    return Product(id=1, name="Ryzen 7", category="cpu", price=Decimal("299.99"), brand="AMD")
