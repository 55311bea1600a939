"""Database Session Manager — the real manager behind the routes.

Invariants:
    - SQLAlchemy failures inside a session surface as DatabaseError (503), never
      as ResourceNotFoundError
    - Domain errors pass through session() unchanged
    - In-memory SQLite hands its single connection to one session at a time, so
      concurrent requests all complete

Design Decisions:
    - No get_db override here: requests go through DatabaseSessionManager.session()
      exactly as they do in production
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

import maintenance_api.infrastructure.database as db_module
from maintenance_api.core.errors import DatabaseError, ResourceNotFoundError
from maintenance_api.infrastructure.database import (
    DatabaseSessionManager, is_in_memory_sqlite,
)
from maintenance_api.main import app


@pytest.fixture
async def manager():
    original = db_module.db_manager
    live = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await live.create_schema()
    db_module.db_manager = live
    yield live
    db_module.db_manager = original
    await live.dispose()


@pytest.fixture
async def live_client(manager):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


# ─── Engine selection ────────────────────────────────────────────

@pytest.mark.parametrize("url,expected", [
    ("sqlite+aiosqlite:///:memory:", True),
    ("sqlite+aiosqlite://", True),
    ("sqlite+aiosqlite:///./maintenance.db", False),
    ("postgresql+asyncpg://user:pw@localhost/maintenance", False),
])
def test_is_in_memory_sqlite(url, expected):
    assert is_in_memory_sqlite(url) is expected


async def test_in_memory_manager_uses_one_connection(manager):
    assert manager.single_connection is True


# ─── Error mapping ───────────────────────────────────────────────

async def test_sqlalchemy_error_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.code == "DATABASE_ERROR"
    assert exc.value.http_status == 503


async def test_domain_error_passes_through_session(manager):
    with pytest.raises(ResourceNotFoundError):
        async with manager.session():
            raise ResourceNotFoundError("Maintenance", 1)


async def test_health_check_reports_healthy(manager):
    assert await manager.health_check() is True


async def test_missing_table_returns_503_not_404(live_client, manager, heater_draft):
    body = heater_draft().model_dump(by_alias=True)
    created = (await live_client.post("/api/maintenance", json=body)).json()
    async with manager.engine.begin() as conn:
        await conn.execute(text("DROP TABLE data_variants"))

    res = await live_client.get(f"/api/maintenance/{created['id']}")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"


# ─── Single-connection turn-taking ───────────────────────────────

async def test_concurrent_requests_through_real_manager(live_client, heater_draft):
    body = heater_draft().model_dump(by_alias=True)
    created = (await live_client.post("/api/maintenance", json=body)).json()
    item_id = created["Settings"][0]["Items"][0]["id"]
    url = f"/api/maintenance/settingitem/{item_id}"

    responses = await asyncio.gather(
        live_client.patch(url, json=[{"op": "replace", "path": "/itemData", "value": 20}]),
        live_client.patch(url, json=[{"op": "replace", "path": "/itemData", "value": 30}]),
        live_client.get(url),
        live_client.get("/api/health/ready"),
    )

    assert [r.status_code for r in responses] == [204, 204, 200, 200]
    assert responses[2].json()["itemData"] in (20, 25, 30)
    assert (await live_client.get(url)).json()["itemData"] in (20, 30)
