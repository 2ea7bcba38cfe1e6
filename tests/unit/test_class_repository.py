# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Class repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domains.class_.exceptions import ClassValidationError
from src.domains.class_.repository import ClassRepository
from src.infrastructure.database.models.school import Class, Grade
from src.models.class_ import ClassCreatedResponse, DeletionCheck


@pytest.fixture
def mock_gateway():
    """Create mock persistence gateway."""
    gateway = MagicMock()
    gateway.run_in_transaction = AsyncMock()
    gateway.fetch_all = AsyncMock(return_value=[])
    gateway.fetch_one = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
def mock_db():
    """Create mock transaction-scoped session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def class_repository(mock_gateway):
    """Create class repository with mock gateway."""
    return ClassRepository(gateway=mock_gateway)


class TestClassRepositoryValidation:
    """Tests for field re-validation before any database work."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("class_name", "floor_number", "level_grade"),
        [
            (None, 2, "10"),
            ("", 2, "10"),
            ("   ", 2, "10"),
            ("Grade 10A", None, "10"),
            ("Grade 10A", 2, None),
            ("Grade 10A", 2, ""),
        ],
    )
    async def test_create_missing_fields(
        self, class_repository, mock_gateway, class_name, floor_number, level_grade
    ):
        """Test missing fields are rejected with MISSING_REQUIRED_FIELDS."""
        with pytest.raises(ClassValidationError) as exc_info:
            await class_repository.create(class_name, floor_number, level_grade)

        assert exc_info.value.code == "MISSING_REQUIRED_FIELDS"
        mock_gateway.run_in_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("class_name", "floor_number", "level_grade"),
        [
            (123, 2, "10"),
            ("Grade 10A", 0, "10"),
            ("Grade 10A", -1, "10"),
            ("Grade 10A", "2", "10"),
            ("Grade 10A", True, "10"),
            ("Grade 10A", 2, "13"),
            ("Grade 10A", 2, 13),
            ("Grade 10A", 2, True),
        ],
    )
    async def test_create_invalid_fields(
        self, class_repository, mock_gateway, class_name, floor_number, level_grade
    ):
        """Test malformed fields are rejected with INVALID_CLASS_DATA."""
        with pytest.raises(ClassValidationError) as exc_info:
            await class_repository.create(class_name, floor_number, level_grade)

        assert exc_info.value.code == "INVALID_CLASS_DATA"
        mock_gateway.run_in_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_rejects_missing_fields(self, class_repository, mock_gateway):
        """Test update re-checks fields before opening a transaction."""
        mock_gateway.transaction = MagicMock()

        with pytest.raises(ClassValidationError):
            await class_repository.update(1, "Grade 10A", None, "10")

        mock_gateway.transaction.assert_not_called()


class TestClassRepositoryCreate:
    """Tests for class creation."""

    @pytest.mark.asyncio
    async def test_create_runs_in_single_transaction(self, class_repository, mock_gateway):
        """Test create delegates normalized fields to one transaction."""
        expected = ClassCreatedResponse(class_id=7, slots_created=35)
        mock_gateway.run_in_transaction.return_value = expected

        result = await class_repository.create("  Grade 10A ", 2, "10")

        assert result is expected
        mock_gateway.run_in_transaction.assert_awaited_once_with(
            class_repository._create, "Grade 10A", 2, Grade.TEN
        )

    @pytest.mark.asyncio
    async def test_create_accepts_integer_grade(self, class_repository, mock_gateway):
        """Test an integer grade is read as its string value."""
        mock_gateway.run_in_transaction.return_value = ClassCreatedResponse(
            class_id=7, slots_created=35
        )

        await class_repository.create("Grade 9B", 1, 9)

        mock_gateway.run_in_transaction.assert_awaited_once_with(
            class_repository._create, "Grade 9B", 1, Grade.NINE
        )

    @pytest.mark.asyncio
    async def test_create_inserts_class_then_grid(self, class_repository, mock_db):
        """Test the class row is flushed before the grid is generated."""

        async def assign_identity():
            added = mock_db.add.call_args.args[0]
            added.id = 7

        mock_db.flush.side_effect = assign_identity
        class_repository.schedule_generator = MagicMock()
        class_repository.schedule_generator.generate = AsyncMock(return_value=35)

        result = await class_repository._create(mock_db, "Grade 10A", 2, Grade.TEN)

        added = mock_db.add.call_args.args[0]
        assert isinstance(added, Class)
        assert added.class_name == "Grade 10A"
        assert added.floor_number == 2
        assert added.level_grade == Grade.TEN
        class_repository.schedule_generator.generate.assert_awaited_once_with(mock_db, 7)
        assert result.success is True
        assert result.class_id == 7
        assert result.slots_created == 35

    def test_created_response_uses_camel_case(self):
        """Test creation result serializes with public key names."""
        response = ClassCreatedResponse(class_id=7, slots_created=35)

        assert response.model_dump(by_alias=True) == {
            "success": True,
            "classId": 7,
            "slotsCreated": 35,
        }


class TestClassRepositoryDelegation:
    """Tests for operations delegated to the guard and the views."""

    @pytest.mark.asyncio
    async def test_can_delete_delegates_to_guard(self, class_repository):
        """Test can_delete returns the guard verdict."""
        verdict = DeletionCheck(can_delete=True, reason="Class can be deleted safely", schedule_count=35)
        class_repository.deletion_guard = MagicMock()
        class_repository.deletion_guard.check = AsyncMock(return_value=verdict)

        result = await class_repository.can_delete(3)

        assert result is verdict
        class_repository.deletion_guard.check.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_delete_delegates_to_guard(self, class_repository):
        """Test delete returns the number of deleted rows."""
        class_repository.deletion_guard = MagicMock()
        class_repository.deletion_guard.delete = AsyncMock(return_value=1)

        assert await class_repository.delete(3) == 1
        class_repository.deletion_guard.delete.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_views_are_delegated(self, class_repository):
        """Test read views are served by ClassViews."""
        class_repository.views = MagicMock()
        class_repository.views.grouped_by_grade = AsyncMock(return_value=[])
        class_repository.views.students_in_class = AsyncMock(return_value=[])
        class_repository.views.schedule_for = AsyncMock(return_value=[])
        class_repository.views.subjects_with_teachers = AsyncMock(return_value=[])

        assert await class_repository.list_grouped_by_grade() == []
        assert await class_repository.students_in_class(1) == []
        assert await class_repository.schedule_for(1) == []
        assert await class_repository.subjects_with_teachers(1) == []

        class_repository.views.students_in_class.assert_awaited_once_with(1)
        class_repository.views.schedule_for.assert_awaited_once_with(1)
        class_repository.views.subjects_with_teachers.assert_awaited_once_with(1)
