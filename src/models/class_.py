# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class API schemas.

Request/response models for class lifecycle endpoints and the
read-only class views (grade groups, weekly schedule, subject roster,
student attendance).

Creation and deletion-check responses serialize with camelCase keys
(classId, slotsCreated, canDelete, ...) to match the public API.
"""

from datetime import time
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.infrastructure.database.models.school import Grade

# Bucket key for classes that have no grade
UNGROUPED: Final = "Ungrouped"


class ClassCreateRequest(BaseModel):
    """Request to create a class."""

    class_name: str = Field(min_length=1, max_length=255, description="Display name")
    floor_number: int = Field(ge=1, description="Floor the class is located on")
    level_grade: Grade = Field(description="Grade level (9-12)")

    @field_validator("level_grade", mode="before")
    @classmethod
    def coerce_integer_grade(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Class name cannot be empty")
        return v.strip()


class ClassUpdateRequest(ClassCreateRequest):
    """Full replacement of a class's name, floor and grade."""


class ClassResponse(BaseModel):
    """Class projection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    class_name: str
    floor_number: int
    level_grade: Grade | None = None


class ClassCreatedResponse(BaseModel):
    """Result of class creation with its generated schedule grid."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    class_id: int = Field(alias="classId")
    slots_created: int = Field(alias="slotsCreated")


class GradeGroupClass(BaseModel):
    """Class entry inside a grade group."""

    id: int
    class_name: str
    floor_number: int
    capacity: int = Field(description="Number of students assigned to the class")


class GradeGroup(BaseModel):
    """Classes sharing the same grade level."""

    grade_level: str = Field(description=f"Grade value or '{UNGROUPED}'")
    classes: list[GradeGroupClass] = Field(default_factory=list)


class DeletionCheck(BaseModel):
    """Outcome of a class deletability check."""

    model_config = ConfigDict(populate_by_name=True)

    can_delete: bool = Field(alias="canDelete")
    reason: str
    student_count: int | None = Field(default=None, alias="studentCount")
    schedule_count: int | None = Field(default=None, alias="scheduleCount")


class DeleteClassResponse(BaseModel):
    """Confirmation of a class deletion."""

    message: str = "Class deleted successfully"


class StudentAttendanceSummary(BaseModel):
    """A student of a class with its attendance percentage."""

    id: int
    grade_level: int | None = None
    class_id: int
    student_name: str
    class_name: str
    level_grade: Grade | None = None
    attendance_percentage: float = Field(
        description="Share of 'present' records, 0-100 rounded to 2 decimals",
    )


class ScheduledPeriod(BaseModel):
    """A period of a day with the subject taught in it."""

    period_id: int
    start_time: time
    end_time: time
    subject_name: str


class DaySchedule(BaseModel):
    """All scheduled periods of one day, ordered by start time."""

    day_id: int
    day_name: str
    subjects: list[ScheduledPeriod] = Field(default_factory=list)


class TeacherRef(BaseModel):
    """Teacher assigned to a subject."""

    teacher_id: int
    teacher_name: str


class SubjectWithTeachers(BaseModel):
    """Subject of the class curriculum with every teacher assigned to it."""

    sub_id: int
    sub_name: str
    teachers: list[TeacherRef] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: str
    code: str
    details: list[dict] | None = None
