"""Shared test configuration and fixtures.

Every test gets a fresh in-memory store and a clock frozen at
2024-01-01 09:00, so "today" and "the past" are stable across runs.
"""

from collections.abc import AsyncGenerator, Callable, Iterator
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lodging.api.deps import get_store
from lodging.main import app
from lodging.schemas.guest import Guest
from lodging.schemas.room import Room
from lodging.services import guest_service, room_service
from lodging.store import InMemoryStore

FROZEN_NOW = datetime(2024, 1, 1, 9, 0)


# ---------------------------------------------------------------------------
# Clock and store
# ---------------------------------------------------------------------------


@pytest.fixture
def frozen_now() -> Iterator[datetime]:
    """Pin ``lodging.clock.now`` (and therefore ``today``) for the test."""
    with patch("lodging.clock.now", return_value=FROZEN_NOW):
        yield FROZEN_NOW


@pytest.fixture
def store(frozen_now: datetime) -> InMemoryStore:
    """An empty store with all three collections initialized."""
    return InMemoryStore()


@pytest_asyncio.fixture
async def client(store: InMemoryStore) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test store."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: rooms and guests created through the services
# ---------------------------------------------------------------------------


def _create_guest(store: InMemoryStore, name: str, tax_id: str, **extra) -> Guest:
    """Create a guest whose e-mail is derived from the name."""
    data = {
        "name": name,
        "tax_id": tax_id,
        "phone": "+5548990000000",
        "email": f"{name.lower().replace(' ', '.')}@test.com",
        **extra,
    }
    return guest_service.create_guest(store, data)


@pytest.fixture
def make_guest(store: InMemoryStore) -> Callable[..., Guest]:
    """Factory: ``make_guest("Name", "tax-id", **extra)``."""
    return lambda name, tax_id, **extra: _create_guest(store, name, tax_id, **extra)


@pytest.fixture
def room(store: InMemoryStore) -> Room:
    """Room 101: capacity 2, 100 per night."""
    return room_service.create_room(
        store,
        {"number": "101", "room_type": "Standard", "floor": 1, "capacity": 2, "nightly_rate": Decimal("100")},
    )


@pytest.fixture
def guest(store: InMemoryStore) -> Guest:
    return _create_guest(store, "Alice Walker", "111.111.111-11")


@pytest.fixture
def other_guest(store: InMemoryStore) -> Guest:
    return _create_guest(store, "Bruno Lima", "222.222.222-22")
