# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

This package provides class lifecycle functionality including:
- Class CRUD with atomic schedule grid generation
- Guarded deletion (no students assigned)
- Grade groups, weekly schedule, subject roster and attendance views
"""

from src.domains.class_.deletion import DeletionGuard
from src.domains.class_.exceptions import (
    ClassNotFoundError,
    ClassServiceError,
    ClassValidationError,
    HasDependentsError,
)
from src.domains.class_.repository import ClassRepository
from src.domains.class_.schedule import ScheduleGenerator
from src.domains.class_.views import ClassViews

__all__ = [
    "ClassRepository",
    "ClassViews",
    "DeletionGuard",
    "ScheduleGenerator",
    "ClassServiceError",
    "ClassValidationError",
    "ClassNotFoundError",
    "HasDependentsError",
]
