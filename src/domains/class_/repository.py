# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class repository for managing class lifecycle operations.

This module provides the ClassRepository class for:
- Class creation together with its schedule grid
- Class lookup, listing and full update
- Guarded deletion (see deletion.py)
- Read-only views (see views.py)

The repository receives its PersistenceGateway explicitly; it holds no
connection state of its own and keeps no cache.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.class_.deletion import DeletionGuard
from src.domains.class_.exceptions import ClassValidationError
from src.domains.class_.schedule import ScheduleGenerator
from src.domains.class_.views import ClassViews
from src.infrastructure.database.connection import PersistenceGateway
from src.infrastructure.database.models.school import Class, Grade
from src.models.class_ import (
    ClassCreatedResponse,
    ClassResponse,
    DaySchedule,
    DeletionCheck,
    GradeGroup,
    StudentAttendanceSummary,
    SubjectWithTeachers,
)

logger = logging.getLogger(__name__)


def _validate_class_fields(
    class_name: Any,
    floor_number: Any,
    level_grade: Any,
) -> tuple[str, int, Grade]:
    """Re-check required class fields.

    Args:
        class_name: Display name.
        floor_number: Floor number.
        level_grade: Grade value.

    Returns:
        Normalized (class_name, floor_number, level_grade).

    Raises:
        ClassValidationError: If a field is missing or malformed.
    """
    missing = [
        field
        for field, value in (
            ("class_name", class_name),
            ("floor_number", floor_number),
            ("level_grade", level_grade),
        )
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ClassValidationError(
            "class_name, floor_number, and level_grade are required "
            f"(missing: {', '.join(missing)})"
        )

    if not isinstance(class_name, str):
        raise ClassValidationError("class_name must be a string", code="INVALID_CLASS_DATA")

    if isinstance(floor_number, bool) or not isinstance(floor_number, int) or floor_number < 1:
        raise ClassValidationError(
            "floor_number must be a positive integer",
            code="INVALID_CLASS_DATA",
        )

    if isinstance(level_grade, int) and not isinstance(level_grade, bool):
        level_grade = str(level_grade)

    try:
        grade = Grade(level_grade)
    except ValueError:
        valid = ", ".join(g.value for g in Grade)
        raise ClassValidationError(
            f"level_grade must be one of: {valid}",
            code="INVALID_CLASS_DATA",
        ) from None

    return class_name.strip(), floor_number, grade


class ClassRepository:
    """Repository for classes and their schedule grid.

    Attributes:
        gateway: Persistence gateway for queries and transactions.
        schedule_generator: Builds the empty grid of a new class.
        deletion_guard: Checks and performs safe deletion.
        views: Read-only aggregated projections.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        """Initialize class repository.

        Args:
            gateway: Persistence gateway for the school database.
        """
        self.gateway = gateway
        self.schedule_generator = ScheduleGenerator()
        self.deletion_guard = DeletionGuard(gateway)
        self.views = ClassViews(gateway)

    async def create(
        self,
        class_name: str,
        floor_number: int,
        level_grade: Grade | str,
    ) -> ClassCreatedResponse:
        """Create a class and its full schedule grid atomically.

        Args:
            class_name: Display name.
            floor_number: Floor the class is located on.
            level_grade: Grade level.

        Returns:
            Identity of the new class and the number of slots generated.

        Raises:
            ClassValidationError: If required fields are missing or invalid.
        """
        name, floor, grade = _validate_class_fields(class_name, floor_number, level_grade)
        return await self.gateway.run_in_transaction(self._create, name, floor, grade)

    async def _create(
        self,
        session: AsyncSession,
        class_name: str,
        floor_number: int,
        level_grade: Grade,
    ) -> ClassCreatedResponse:
        class_ = Class(
            class_name=class_name,
            floor_number=floor_number,
            level_grade=level_grade,
        )
        session.add(class_)
        # Slots reference the generated identity
        await session.flush()

        slots_created = await self.schedule_generator.generate(session, class_.id)

        logger.info(
            "Created class: %s (%s) with %d schedule slots",
            class_.class_name,
            class_.id,
            slots_created,
        )

        return ClassCreatedResponse(class_id=class_.id, slots_created=slots_created)

    async def get_by_id(self, class_id: int) -> ClassResponse | None:
        """Get class by ID.

        Args:
            class_id: Class identifier.

        Returns:
            Class projection, or None if not found.
        """
        async with self.gateway.session() as session:
            result = await session.execute(select(Class).where(Class.id == class_id))
            class_ = result.scalar_one_or_none()
            return ClassResponse.model_validate(class_) if class_ else None

    async def list_all(self) -> list[ClassResponse]:
        """List every class in identity order."""
        async with self.gateway.session() as session:
            result = await session.execute(select(Class).order_by(Class.id))
            return [ClassResponse.model_validate(c) for c in result.scalars().all()]

    async def list_grouped_by_grade(self) -> list[GradeGroup]:
        """List classes partitioned by grade with student counts."""
        return await self.views.grouped_by_grade()

    async def update(
        self,
        class_id: int,
        class_name: str,
        floor_number: int,
        level_grade: Grade | str,
    ) -> ClassResponse | None:
        """Replace name, floor and grade of a class.

        Args:
            class_id: Class identifier.
            class_name: New display name.
            floor_number: New floor number.
            level_grade: New grade level.

        Returns:
            Updated class projection, or None if not found.

        Raises:
            ClassValidationError: If required fields are missing or invalid.
        """
        name, floor, grade = _validate_class_fields(class_name, floor_number, level_grade)

        async with self.gateway.transaction() as session:
            result = await session.execute(select(Class).where(Class.id == class_id))
            class_ = result.scalar_one_or_none()
            if class_ is None:
                return None

            class_.class_name = name
            class_.floor_number = floor
            class_.level_grade = grade
            await session.flush()

            logger.info("Updated class: %s", class_id)
            return ClassResponse.model_validate(class_)

    async def can_delete(self, class_id: int) -> DeletionCheck:
        """Preview whether a class can be deleted, without side effects."""
        return await self.deletion_guard.check(class_id)

    async def delete(self, class_id: int) -> int:
        """Delete a class and its schedule slots.

        Args:
            class_id: Class identifier.

        Returns:
            Number of class rows deleted.

        Raises:
            ClassNotFoundError: If the class does not exist.
            HasDependentsError: If students are still assigned to the class.
        """
        return await self.deletion_guard.delete(class_id)

    async def students_in_class(self, class_id: int) -> list[StudentAttendanceSummary]:
        """List students of a class with their attendance percentage."""
        return await self.views.students_in_class(class_id)

    async def schedule_for(self, class_id: int) -> list[DaySchedule]:
        """Weekly schedule of a class grouped by day."""
        return await self.views.schedule_for(class_id)

    async def subjects_with_teachers(self, class_id: int) -> list[SubjectWithTeachers]:
        """Curriculum subjects of a class with their assigned teachers."""
        return await self.views.subjects_with_teachers(class_id)
