# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get the persistence gateway
- Get repository instances bound to it
- Read the caller identity set by upstream authentication

Example:
    @router.get("/classes")
    async def list_classes(
        repository: ClassRepository = Depends(get_class_repository),
    ):
        ...
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from src.core.config import get_settings
from src.domains.class_.repository import ClassRepository
from src.infrastructure.database import connection
from src.infrastructure.database.connection import PersistenceError, PersistenceGateway

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await connection.init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await connection.close_database()


def get_gateway() -> PersistenceGateway:
    """Get the persistence gateway.

    Returns:
        The process-wide PersistenceGateway.

    Raises:
        HTTPException: If the database has not been initialized.
    """
    try:
        return connection.get_gateway()
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized",
        ) from e


def get_class_repository(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ClassRepository:
    """Get a class repository bound to the gateway."""
    return ClassRepository(gateway=gateway)


def get_current_user_id(request: Request) -> str | None:
    """Get the caller id stored by the authentication middleware.

    Permissions are enforced upstream; the id is only used for
    log attribution.
    """
    user_id = getattr(request.state, "user_id", None)
    return str(user_id) if user_id is not None else None
