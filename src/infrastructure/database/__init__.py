# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for PostgreSQL connections.

This package provides the SQLAlchemy async engine and the
PersistenceGateway that repositories receive by injection.

Example:
    from src.infrastructure.database import init_database

    gateway = await init_database(settings)
    async with gateway.transaction() as session:
        ...
"""

from src.infrastructure.database.connection import (
    PersistenceError,
    PersistenceGateway,
    check_database_connection,
    close_database,
    get_gateway,
    init_database,
)

__all__ = [
    "PersistenceError",
    "PersistenceGateway",
    "check_database_connection",
    "close_database",
    "get_gateway",
    "init_database",
]
