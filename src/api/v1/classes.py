# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class management API endpoints.

This module provides endpoints for the class lifecycle:
- POST / - Create a class with its schedule grid
- GET / - List classes
- GET /grade_group - Classes grouped by grade with student counts
- GET /schedule?id= - Weekly schedule of a class
- GET /students?id= - Students of a class with attendance percentage
- GET /subjects-with-teachers/{class_id} - Subject roster of a class
- GET /{class_id}/can-delete - Deletion preview
- GET /{class_id} - Get class
- PUT /{class_id} - Replace class fields
- DELETE /{class_id} - Delete class and its schedule slots

Permissions are enforced by upstream middleware. Errors are raised as
domain exceptions and rendered by the handlers in src.api.errors.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_class_repository, get_current_user_id
from src.domains.class_.exceptions import ClassNotFoundError
from src.domains.class_.repository import ClassRepository
from src.models.class_ import (
    ClassCreateRequest,
    ClassCreatedResponse,
    ClassResponse,
    ClassUpdateRequest,
    DaySchedule,
    DeleteClassResponse,
    DeletionCheck,
    GradeGroup,
    StudentAttendanceSummary,
    SubjectWithTeachers,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ClassIdQuery = Annotated[int, Query(alias="id", ge=1, description="Class identifier")]


async def _require_class(repository: ClassRepository, class_id: int) -> ClassResponse:
    """Get a class or raise ClassNotFoundError."""
    class_ = await repository.get_by_id(class_id)
    if class_ is None:
        raise ClassNotFoundError("Class not found")
    return class_


@router.post(
    "",
    response_model=ClassCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create class",
    description="Create a class and generate its empty day x period schedule grid.",
)
async def create_class(
    data: ClassCreateRequest,
    repository: ClassRepository = Depends(get_class_repository),
    user_id: str | None = Depends(get_current_user_id),
) -> ClassCreatedResponse:
    """Create a new class.

    Args:
        data: Class creation request.
        repository: Class repository.
        user_id: Caller id for attribution.

    Returns:
        Class identity and number of schedule slots created.
    """
    logger.info(
        "Creating class: %s (grade %s) by %s",
        data.class_name,
        data.level_grade.value,
        user_id,
    )

    return await repository.create(
        class_name=data.class_name,
        floor_number=data.floor_number,
        level_grade=data.level_grade,
    )


@router.get(
    "",
    response_model=list[ClassResponse],
    summary="List classes",
)
async def list_classes(
    repository: ClassRepository = Depends(get_class_repository),
) -> list[ClassResponse]:
    """List all classes."""
    return await repository.list_all()


@router.get(
    "/grade_group",
    response_model=list[GradeGroup],
    summary="Classes grouped by grade",
)
async def list_classes_grouped_by_grade(
    repository: ClassRepository = Depends(get_class_repository),
) -> list[GradeGroup]:
    """List classes grouped by grade with their student counts."""
    return await repository.list_grouped_by_grade()


@router.get(
    "/schedule",
    response_model=list[DaySchedule],
    summary="Class weekly schedule",
)
async def get_class_schedule(
    class_id: ClassIdQuery,
    repository: ClassRepository = Depends(get_class_repository),
) -> list[DaySchedule]:
    """Get the weekly schedule of a class grouped by day.

    Raises:
        ClassNotFoundError: If the class does not exist.
    """
    await _require_class(repository, class_id)
    return await repository.schedule_for(class_id)


@router.get(
    "/students",
    response_model=list[StudentAttendanceSummary],
    summary="Students of a class",
)
async def get_students_in_class(
    class_id: ClassIdQuery,
    repository: ClassRepository = Depends(get_class_repository),
) -> list[StudentAttendanceSummary]:
    """List students of a class with their attendance percentage.

    Raises:
        ClassNotFoundError: If the class does not exist.
    """
    await _require_class(repository, class_id)
    return await repository.students_in_class(class_id)


@router.get(
    "/subjects-with-teachers/{class_id}",
    response_model=list[SubjectWithTeachers],
    summary="Class subjects with teachers",
)
async def get_class_subjects_with_teachers(
    class_id: int,
    repository: ClassRepository = Depends(get_class_repository),
) -> list[SubjectWithTeachers]:
    """List the curriculum subjects of a class with their assigned teachers."""
    return await repository.subjects_with_teachers(class_id)


@router.get(
    "/{class_id}/can-delete",
    response_model=DeletionCheck,
    response_model_exclude_none=True,
    summary="Check class deletion",
)
async def can_delete_class(
    class_id: int,
    repository: ClassRepository = Depends(get_class_repository),
) -> DeletionCheck:
    """Preview whether a class can be deleted."""
    return await repository.can_delete(class_id)


@router.get(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Get class",
)
async def get_class(
    class_id: int,
    repository: ClassRepository = Depends(get_class_repository),
) -> ClassResponse:
    """Get class details.

    Raises:
        ClassNotFoundError: If the class does not exist.
    """
    return await _require_class(repository, class_id)


@router.put(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Update class",
)
async def update_class(
    class_id: int,
    data: ClassUpdateRequest,
    repository: ClassRepository = Depends(get_class_repository),
    user_id: str | None = Depends(get_current_user_id),
) -> ClassResponse:
    """Replace name, floor and grade of a class.

    Raises:
        ClassNotFoundError: If the class does not exist.
    """
    logger.info("Updating class: %s by %s", class_id, user_id)

    updated = await repository.update(
        class_id,
        class_name=data.class_name,
        floor_number=data.floor_number,
        level_grade=data.level_grade,
    )
    if updated is None:
        raise ClassNotFoundError("Class not found")
    return updated


@router.delete(
    "/{class_id}",
    response_model=DeleteClassResponse,
    summary="Delete class",
    description="Delete a class and its schedule slots. Fails while students are assigned.",
)
async def delete_class(
    class_id: int,
    repository: ClassRepository = Depends(get_class_repository),
    user_id: str | None = Depends(get_current_user_id),
) -> DeleteClassResponse:
    """Delete a class.

    Raises:
        ClassNotFoundError: If the class does not exist.
        HasDependentsError: If students are still assigned.
    """
    logger.info("Deleting class: %s by %s", class_id, user_id)

    deleted = await repository.delete(class_id)
    if not deleted:
        raise ClassNotFoundError("Class not found")
    return DeleteClassResponse()
