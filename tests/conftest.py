"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from parking_reservations.api.deps import get_manager
from parking_reservations.core.errors import PersistenceFailure
from parking_reservations.db.base import Base
from parking_reservations.db.session import create_engine, create_sessionmaker, create_tables
from parking_reservations.main import app
from parking_reservations.services.parking_manager import ParkingManager
from parking_reservations.services.store import ChangeSet, InMemoryStore, SqlAlchemyStore

TEST_DATABASE_URL = "sqlite+aiosqlite://"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


class FlakyStore(InMemoryStore):
    """In-memory store whose writes can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    async def write(self, changes: ChangeSet) -> None:
        if self.fail_writes:
            raise PersistenceFailure("Store is unavailable")
        await super().write(changes)


@pytest.fixture(scope="function")
def store() -> FlakyStore:
    """Create an empty in-memory store."""
    return FlakyStore()


@pytest.fixture(scope="function")
async def manager(store: FlakyStore) -> ParkingManager:
    """Create a loaded state manager over the in-memory store."""
    parking = ParkingManager(store, ADMIN_USERNAME, ADMIN_PASSWORD)
    await parking.load()
    return parking


@pytest.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a clean in-memory database for each test."""
    engine = create_engine(TEST_DATABASE_URL)
    await create_tables(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def sql_store(db_engine: AsyncEngine) -> SqlAlchemyStore:
    return SqlAlchemyStore(create_sessionmaker(db_engine))


@pytest.fixture(scope="function")
async def async_client(manager: ParkingManager) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client bound to the test manager."""
    app.dependency_overrides[get_manager] = lambda: manager

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def admin_client(async_client: AsyncClient) -> AsyncClient:
    """Async test client with an open admin session."""
    response = await async_client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return async_client
