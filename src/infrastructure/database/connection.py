# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

This module owns the engine/session lifecycle for the school database and
exposes it through PersistenceGateway, the only object repositories talk to.

Uses SQLAlchemy 2.0 async API with asyncpg driver.

Example:
    from src.infrastructure.database.connection import (
        init_database,
        get_gateway,
    )

    # Initialize at application startup
    await init_database(settings)

    # Read path
    rows = await get_gateway().fetch_all(select(Class))

    # Write path
    async with get_gateway().transaction() as session:
        session.add(Class(class_name="Grade 10A", floor_number=2))
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Optional, TypeVar

from sqlalchemy import RowMapping, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql import Executable

if TYPE_CHECKING:
    from src.core.config.settings import Settings

T = TypeVar("T")

# Module-level state for the process-wide connection pool
_engine: Optional[AsyncEngine] = None
_gateway: Optional["PersistenceGateway"] = None


class PersistenceError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the persistence error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class PersistenceGateway:
    """Executes queries and transactions against the school database.

    Every query issued through a session obtained from transaction()
    participates in the same transaction and is rolled back together on
    any exception raised inside the block. SQLAlchemy errors are wrapped
    in PersistenceError; other exceptions propagate unchanged.

    Attributes:
        sessionmaker: Factory for AsyncSession objects.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a read session.

        Nothing is committed; the implicit transaction is rolled back
        when the session closes.

        Yields:
            AsyncSession for read queries.

        Raises:
            PersistenceError: If a database operation fails.
        """
        async with self.sessionmaker() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                raise PersistenceError("Database query failed", e) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Open a session inside an explicit transaction.

        Commits when the block exits normally and rolls back otherwise.

        Yields:
            AsyncSession bound to the open transaction.

        Raises:
            PersistenceError: If a database operation or the commit fails.
        """
        async with self.sessionmaker() as session:
            try:
                async with session.begin():
                    yield session
            except SQLAlchemyError as e:
                raise PersistenceError("Database transaction failed", e) from e

    async def run_in_transaction(
        self,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T:
        """Call fn(session, *args) inside a single transaction.

        Args:
            fn: Coroutine function receiving the transaction-scoped session.
            *args: Extra positional arguments for fn.

        Returns:
            Whatever fn returns.
        """
        async with self.transaction() as session:
            return await fn(session, *args)

    async def fetch_all(self, statement: Executable) -> list[RowMapping]:
        """Execute a statement and return all rows as mappings."""
        async with self.session() as session:
            result = await session.execute(statement)
            return list(result.mappings().all())

    async def fetch_one(self, statement: Executable) -> RowMapping | None:
        """Execute a statement and return the first row, if any."""
        async with self.session() as session:
            result = await session.execute(statement)
            return result.mappings().first()

    async def scalar(self, statement: Executable) -> Any:
        """Execute a statement and return the first column of the first row."""
        async with self.session() as session:
            result = await session.execute(statement)
            return result.scalar()


async def init_database(settings: "Settings") -> PersistenceGateway:
    """Initialize the database connection pool.

    This should be called once at application startup.

    Args:
        settings: Application settings containing database configuration.

    Returns:
        The process-wide PersistenceGateway.

    Raises:
        PersistenceError: If connection pool creation fails.
    """
    global _engine, _gateway

    engine_options: dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.debug and settings.log_level == "DEBUG",
    }
    if not settings.db.is_sqlite:
        engine_options.update(
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.max_overflow,
            pool_recycle=settings.db.pool_recycle,
        )

    try:
        _engine = create_async_engine(settings.db.url, **engine_options)
    except SQLAlchemyError as e:
        raise PersistenceError("Failed to initialize database connection", e) from e

    _gateway = PersistenceGateway(
        async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    )
    return _gateway


async def close_database() -> None:
    """Close the database connection pool.

    This should be called at application shutdown to properly
    close all connections in the pool.
    """
    global _engine, _gateway

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _gateway = None


def get_gateway() -> PersistenceGateway:
    """Get the process-wide persistence gateway.

    Raises:
        PersistenceError: If the database has not been initialized.
    """
    if _gateway is None:
        raise PersistenceError("Database not initialized. Call init_database() first.")
    return _gateway


async def check_database_connection() -> bool:
    """Check if the database is reachable.

    Returns:
        True if the database is reachable, False otherwise.
    """
    if _engine is None:
        return False

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
