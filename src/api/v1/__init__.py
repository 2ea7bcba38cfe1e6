# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    classes: Class lifecycle, schedule grid and class views.
"""

from fastapi import APIRouter

from src.api.v1 import classes

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(classes.router, prefix="/classes", tags=["Classes"])

__all__ = ["router"]
