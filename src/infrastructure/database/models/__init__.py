# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the school database."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.school import (
    AttendanceStatus,
    AttendanceStudent,
    Class,
    Curriculum,
    Day,
    Grade,
    Period,
    ScheduleSlot,
    Student,
    Subject,
    Teacher,
    TeacherSubject,
    User,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "AttendanceStatus",
    "AttendanceStudent",
    "Class",
    "Curriculum",
    "Day",
    "Grade",
    "Period",
    "ScheduleSlot",
    "Student",
    "Subject",
    "Teacher",
    "TeacherSubject",
    "User",
]
