# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Provides an engine, a persistence gateway and seeded reference data.
Tests run against TEST_DATABASE_URL, or an in-memory SQLite database
with foreign keys enforced when it is not set.
"""

import os
from datetime import time
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.domains.class_.repository import ClassRepository
from src.infrastructure.database.connection import PersistenceGateway
from src.infrastructure.database.models import Base, Day, Period

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]
PERIOD_STARTS = [time(8), time(9), time(10), time(11), time(12), time(13), time(14)]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="session")
def database_url() -> str:
    """Get database URL for tests."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine with a fresh schema."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=False, poolclass=StaticPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def gateway(db_engine: AsyncEngine) -> PersistenceGateway:
    """Create persistence gateway over the test engine."""
    return PersistenceGateway(
        async_sessionmaker(
            db_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    )


@pytest_asyncio.fixture(scope="function")
async def week(gateway: PersistenceGateway) -> None:
    """Seed a 5-day week with 7 periods per day."""
    async with gateway.transaction() as session:
        session.add_all([Day(name=name) for name in DAY_NAMES])
        # Inserted in reverse so id order differs from start-time order
        session.add_all(
            [
                Period(start_time=start, end_time=start.replace(minute=45))
                for start in reversed(PERIOD_STARTS)
            ]
        )


@pytest_asyncio.fixture(scope="function")
async def repository(gateway: PersistenceGateway) -> ClassRepository:
    """Create class repository over the test gateway."""
    return ClassRepository(gateway=gateway)
