"""Tests for application startup."""

import pytest

from parking_reservations.config import Settings
from parking_reservations.core.domain import SlotStatus
from parking_reservations.main import build_manager
from parking_reservations.services.store import InMemoryStore, SqlAlchemyStore


@pytest.mark.asyncio
async def test_memory_backend_seeds_inventory():
    """Test that an empty store is seeded on startup."""
    config = Settings(STORE_BACKEND="memory", SEED_SLOT_COUNT=32, SEED_OCCUPIED_COUNT=8)

    manager, engine = await build_manager(config)

    assert engine is None
    assert isinstance(manager.store, InMemoryStore)
    slots = manager.list_slots()
    assert len(slots) == 32
    assert slots[0].number == "A1"
    assert slots[-1].number == "D8"
    assert sum(1 for s in slots if s.status == SlotStatus.OCCUPIED) == 8
    assert manager.admin_session is None


@pytest.mark.asyncio
async def test_database_backend_seeds_once(tmp_path):
    """Test that a populated database is not seeded again."""
    config = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'db' / 'parking.db'}",
        SEED_SLOT_COUNT=4,
        SEED_OCCUPIED_COUNT=1,
    )

    manager, engine = await build_manager(config)
    assert isinstance(manager.store, SqlAlchemyStore)
    assert len(manager.list_slots()) == 4
    await engine.dispose()

    manager, engine = await build_manager(config)
    assert len(manager.list_slots()) == 4
    assert len(manager.list_bookings()) == 1
    await engine.dispose()


@pytest.mark.asyncio
async def test_seeding_disabled():
    """Test that a zero seed count leaves the inventory empty."""
    manager, _ = await build_manager(Settings(STORE_BACKEND="memory", SEED_SLOT_COUNT=0))

    assert manager.list_slots() == []
