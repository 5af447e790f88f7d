from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import get_session
from app.main import app
from app.models import SQLModel
from app.services.employee import InMemoryEmployeeService, set_employee_service

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine

# In-memory SQLite by default; point at PostgreSQL with TEST_DATABASE_URL.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Have SQLAlchemy emit BEGIN itself so SAVEPOINT nests inside the test transaction."""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, _record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine with all tables for one test."""
    is_sqlite = TEST_DATABASE_URL.startswith("sqlite")
    kwargs = {"poolclass": StaticPool} if is_sqlite else {}
    _engine = create_async_engine(TEST_DATABASE_URL, **kwargs)
    if is_sqlite:
        _enable_sqlite_savepoints(_engine)
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session wrapped in a transaction that rolls back after each test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def employee_service() -> Iterator[InMemoryEmployeeService]:
    """Install a fresh in-memory employee service for the test."""
    svc = InMemoryEmployeeService()
    set_employee_service(svc)
    yield svc
    set_employee_service(InMemoryEmployeeService())
