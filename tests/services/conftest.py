"""Service test fixtures — async in-memory DB, store, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so routes share the test write lock

Design Decisions:
    - SQLite in-memory with StaticPool: fast, no external dependency, one shared
      connection so every session sees the same data
    - Tests that expect a rollback read ids into locals first: a rollback expires
      every object the session holds
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from maintenance_api.db.base import Base
from maintenance_api.infrastructure.database import get_db, DatabaseSessionManager
import maintenance_api.infrastructure.database as db_module
from maintenance_api.main import app
from maintenance_api.schemas.maintenance import MaintenanceCreate
from maintenance_api.services.maintenance_store import MaintenanceStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def write_lock():
    return asyncio.Lock()


@pytest.fixture
def store(test_db, write_lock):
    return MaintenanceStore(test_db, write_lock)


@pytest.fixture
async def client(test_engine, test_session_factory, write_lock):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    fake_manager.write_lock = write_lock
    fake_manager.single_connection = False
    fake_manager._connection_lock = None
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def _heater_draft(number: int = 101) -> MaintenanceCreate:
    return MaintenanceCreate.model_validate({
        "number": number,
        "description": "Main maintenance task",
        "Settings": [
            {
                "name": "Temperature",
                "description": "Temperature settings",
                "Items": [
                    {
                        "name": "Heater",
                        "description": "Heater control",
                        "itemData": 25,
                        "DataVariants": [
                            {"value": 20, "description": "Low"},
                            {"value": 25, "description": "Normal"},
                            {"value": 30, "description": "High"},
                        ],
                    },
                ],
            },
        ],
    })


@pytest.fixture
def heater_draft():
    """Factory for the Temperature/Heater aggregate: itemData 25, variants 20/25/30."""
    return _heater_draft
