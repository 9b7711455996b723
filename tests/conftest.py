"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from dex.api.endpoints import get_pool
from dex.api.main import app
from dex.events import EventBus
from dex.ledger import InMemoryAssetLedger
from dex.pool import Pool
from tests.helpers import ALICE, BOB, CAROL, make_ledger, make_pool


@pytest.fixture
def ledger() -> InMemoryAssetLedger:
    """Ledger with alice, bob and carol funded and approved in both assets."""
    return make_ledger(ALICE, BOB, CAROL)


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def pool(ledger: InMemoryAssetLedger, events: EventBus) -> Pool:
    """Empty TKA/TKB pool."""
    return make_pool(ledger, events=events)


@pytest.fixture
def funded_pool(pool: Pool) -> Pool:
    """Pool at reserves (100, 200) with 141 shares owned by alice."""
    pool.add_liquidity(100, 200, ALICE)
    return pool


@pytest.fixture
def square_pool(pool: Pool) -> Pool:
    """Pool at reserves (100, 200) with exactly 100 shares owned by alice.

    Seeded at (50, 50) for 50 shares, then topped up with (50, 150), which
    the ratio rule credits for only 50 more shares.
    """
    pool.add_liquidity(50, 50, ALICE)
    pool.add_liquidity(50, 150, ALICE)
    return pool


@pytest.fixture
def api_pool() -> Pool:
    """Empty pool over an empty ledger, funded through the API."""
    return make_pool()


@pytest.fixture
def client(api_pool: Pool) -> Iterator[TestClient]:
    """Test client serving a fresh pool."""
    app.dependency_overrides[get_pool] = lambda: api_pool
    yield TestClient(app)
    app.dependency_overrides.clear()
