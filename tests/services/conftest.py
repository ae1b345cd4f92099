"""Service test fixtures: ledger over in-memory store, async DB, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory store and a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: all sessions share one connection, so
      state committed by one request is visible to the next
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from asset_ledger.db.base import Base
from asset_ledger.infrastructure.database import get_db, DatabaseSessionManager
from asset_ledger.infrastructure.memory_store import InMemoryStateStore
from asset_ledger.services.asset_ledger import AssetLedger
import asset_ledger.infrastructure.database as db_module
import asset_ledger.models  # noqa: F401
from asset_ledger.main import app


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def ledger(store):
    return AssetLedger(store)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def failing_store():
    """In-memory store whose primitives can be switched to raise.

    Set failing_store.fail_on to a set of primitive names
    ("get", "put", "delete", "range_scan").
    """

    class _FailingStore(InMemoryStateStore):
        def __init__(self):
            super().__init__()
            self.fail_on: set[str] = set()
            self.fail_after: int = 0

        def _check(self, primitive: str):
            if primitive in self.fail_on:
                raise OSError(f"{primitive} unavailable")

        async def get(self, key):
            self._check("get")
            return await super().get(key)

        async def put(self, key, value):
            self._check("put")
            await super().put(key, value)

        async def delete(self, key):
            self._check("delete")
            await super().delete(key)

        async def range_scan(self, start_key, end_key):
            yielded = 0
            async for item in super().range_scan(start_key, end_key):
                if "range_scan" in self.fail_on and yielded >= self.fail_after:
                    raise OSError("range_scan unavailable")
                yielded += 1
                yield item

    return _FailingStore()
