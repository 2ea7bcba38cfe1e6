# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests table definitions, constraints and enum columns.
"""

import pytest

from src.infrastructure.database.models import (
    AttendanceStatus,
    Base,
    Class,
    Grade,
    ScheduleSlot,
    Student,
    TimestampMixin,
)


def _unique_column_sets(model) -> set[tuple[str, ...]]:
    return {
        tuple(column.name for column in constraint.columns)
        for constraint in model.__table__.constraints
        if constraint.__class__.__name__ == "UniqueConstraint"
    }


class TestBase:
    """Test base model functionality."""

    def test_base_inherits_declarative_base(self):
        """Verify Base is a declarative base."""
        assert hasattr(Base, "metadata")
        assert hasattr(Base, "registry")

    def test_timestamp_mixin_has_created_at(self):
        """Verify TimestampMixin has created_at field."""
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_all_tables_registered(self):
        """Verify every school table is part of the metadata."""
        assert {
            "classes",
            "days",
            "periods",
            "users",
            "students",
            "attendance_students",
            "curriculums",
            "subjects",
            "teachers",
            "teachers_subjects",
            "schedules",
        } <= set(Base.metadata.tables)


class TestClassModel:
    """Test the classes table."""

    def test_class_columns(self):
        """Verify Class has the required columns."""
        columns = Class.__table__.columns

        assert Class.__tablename__ == "classes"
        assert columns["class_name"].nullable is False
        assert columns["floor_number"].nullable is False
        assert columns["level_grade"].nullable is True

    def test_grade_values(self):
        """Verify only grades 9 to 12 exist."""
        assert [g.value for g in Grade] == ["9", "10", "11", "12"]

    def test_grade_column_stores_values(self):
        """Verify the grade enum column persists values, not member names."""
        assert Class.__table__.columns["level_grade"].type.enums == ["9", "10", "11", "12"]


class TestScheduleSlotModel:
    """Test the schedules table."""

    def test_slot_is_unique_per_class_day_period(self):
        """Verify at most one slot per (class, day, period)."""
        assert ("class_id", "day_id", "period_id") in _unique_column_sets(ScheduleSlot)

    def test_teacher_booked_once_per_class_day_period(self):
        """Verify a teacher holds at most one slot per (class, day, period)."""
        assert ("teacher_id", "class_id", "day_id", "period_id") in _unique_column_sets(
            ScheduleSlot
        )

    def test_subject_and_teacher_optional(self):
        """Verify generated slots may be empty."""
        columns = ScheduleSlot.__table__.columns

        assert columns["subject_id"].nullable is True
        assert columns["teacher_id"].nullable is True

    @pytest.mark.parametrize("model", [ScheduleSlot, Student])
    def test_class_reference_restricts_delete(self, model):
        """Verify rows referencing a class block its deletion at the database."""
        foreign_key = next(iter(model.__table__.columns["class_id"].foreign_keys))

        assert foreign_key.column.table.name == "classes"
        assert foreign_key.ondelete == "RESTRICT"


class TestAttendanceModel:
    """Test attendance enum values."""

    def test_status_values(self):
        """Verify attendance statuses."""
        assert {s.value for s in AttendanceStatus} == {"present", "absent", "late"}
