"""Service test fixtures — async DB, SQL store/ledger, seed helpers, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - store/ledger autocommit, exactly as the running service does by default
    - get_db dependency overridden to use the test session factory

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for engine tests
      (PostgreSQL-specific features are not exercised)
    - Seeding goes through the store/ledger so records have the production shape
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app import models  # noqa: F401
from app.db.base import Base
from app.infrastructure.account_ledger import SqlAccountLedger
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.ticket_store import SqlTicketStore
from app.services.account_service import hash_password
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
def store(test_db):
    return SqlTicketStore(test_db)


@pytest.fixture
def ledger(test_db):
    return SqlAccountLedger(test_db)


@pytest.fixture
def make_account(ledger):
    """Create an account with a given balance."""
    async def _make(username: str, balance: int = 0, password: str = "secret"):
        return await ledger.create_account(
            username, hash_password(password), balance,
        )
    return _make


@pytest.fixture
def make_ticket(store):
    """Insert a ticket record; defaults describe a fresh listed mint."""
    async def _make(ticket_id: str, owner: str, price: int = 100, **overrides):
        record = {
            "id": ticket_id,
            "type": "VIP",
            "event": "Concert",
            "date": "2026-12-01",
            "price": price,
            "image": "",
            "owner": owner,
            "created_at": datetime(2026, 10, 1, tzinfo=timezone.utc),
            "resale": True,
            "sold": False,
        }
        record.update(overrides)
        await store.insert(record)
        return record
    return _make


@pytest.fixture
def id_sequence():
    """Deterministic id factory: T2, T3, ..."""
    counter = {"n": 1}

    def _next() -> str:
        counter["n"] += 1
        return f"T{counter['n']}"
    return _next


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
