# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School database models.

Tables owned by the class lifecycle:
- classes: Class/section rows with floor and grade
- schedules: One slot per class/day/period

Reference and collaborator tables the class views read from:
- days, periods: Weekly grid axes
- users, students, attendance_students
- curriculums, subjects, teachers, teachers_subjects
"""

import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin


class Grade(str, Enum):
    """Valid class grade levels."""

    NINE = "9"
    TEN = "10"
    ELEVEN = "11"
    TWELVE = "12"


class AttendanceStatus(str, Enum):
    """Student attendance record status."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


GradeColumn = SAEnum(
    Grade,
    name="level_grade",
    values_callable=_enum_values,
    validate_strings=True,
)


class Class(TimestampMixin, Base):
    """A class/section of students on a given floor and grade."""

    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_name: Mapped[str] = mapped_column(String(255), nullable=False)
    floor_number: Mapped[int] = mapped_column(Integer, nullable=False)
    # Nullable so legacy rows without a grade can still be listed (Ungrouped)
    level_grade: Mapped[Grade | None] = mapped_column(GradeColumn, nullable=True)


class Day(Base):
    """School day of the weekly grid."""

    __tablename__ = "days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class Period(Base):
    """Teaching period of the daily grid."""

    __tablename__ = "periods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)


class User(Base):
    """User account; only the display name is used here."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Student(Base):
    """Student record, assigned to at most one class."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    class_id: Mapped[int | None] = mapped_column(
        ForeignKey("classes.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    grade_level: Mapped[int | None] = mapped_column(Integer, nullable=True)


class AttendanceStudent(Base):
    """Daily attendance record of a student."""

    __tablename__ = "attendance_students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    status: Mapped[AttendanceStatus] = mapped_column(
        SAEnum(
            AttendanceStatus,
            name="attendance_status",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )


class Curriculum(TimestampMixin, Base):
    """Curriculum of a grade level."""

    __tablename__ = "curriculums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    level_grade: Mapped[Grade] = mapped_column(GradeColumn, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Subject(TimestampMixin, Base):
    """Subject taught within a curriculum."""

    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    curriculum_id: Mapped[int | None] = mapped_column(
        ForeignKey("curriculums.id", ondelete="SET NULL"),
        nullable=True,
    )


class Teacher(Base):
    """Teacher record linked to a user account."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    specialization: Mapped[str | None] = mapped_column(String(255), nullable=True)


class TeacherSubject(Base):
    """Assignment of a teacher to a subject."""

    __tablename__ = "teachers_subjects"
    __table_args__ = (
        UniqueConstraint("teacher_id", "subject_id", name="uq_teachers_subjects"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    teacher_id: Mapped[int] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )


class ScheduleSlot(TimestampMixin, Base):
    """One cell of a class's weekly grid.

    At most one row exists per (class, day, period); subject and teacher
    are filled in after the grid is generated.
    """

    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint("class_id", "day_id", "period_id", name="uq_schedules_class_day_period"),
        UniqueConstraint(
            "teacher_id",
            "class_id",
            "day_id",
            "period_id",
            name="uq_schedules_teacher_class_day_period",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    day_id: Mapped[int] = mapped_column(
        ForeignKey("days.id", ondelete="CASCADE"),
        nullable=False,
    )
    period_id: Mapped[int] = mapped_column(
        ForeignKey("periods.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject_id: Mapped[int | None] = mapped_column(
        ForeignKey("subjects.id", ondelete="RESTRICT"),
        nullable=True,
    )
    teacher_id: Mapped[int | None] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=True,
    )
