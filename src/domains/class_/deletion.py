# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class deletion guard.

Deleting a class is a two-step flow at the API boundary: a read-only
preview (check) followed by the actual delete. The delete re-validates
every precondition inside its own transaction and never relies on an
earlier preview, since students may have been assigned in between.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.class_.exceptions import ClassNotFoundError, HasDependentsError
from src.infrastructure.database.connection import PersistenceGateway
from src.infrastructure.database.models.school import Class, ScheduleSlot, Student
from src.models.class_ import DeletionCheck

logger = logging.getLogger(__name__)

CLASS_NOT_FOUND_REASON = "Class not found"
HAS_STUDENTS_REASON = (
    "Cannot delete class: There are students assigned to this class. "
    "Please remove all students first."
)
DELETABLE_REASON = "Class can be deleted safely"


async def _count_students(session: AsyncSession, class_id: int) -> int:
    query = select(func.count()).select_from(Student).where(Student.class_id == class_id)
    return (await session.execute(query)).scalar() or 0


async def _count_slots(session: AsyncSession, class_id: int) -> int:
    query = select(func.count()).select_from(ScheduleSlot).where(
        ScheduleSlot.class_id == class_id
    )
    return (await session.execute(query)).scalar() or 0


class DeletionGuard:
    """Checks and performs safe class deletion.

    Attributes:
        gateway: Persistence gateway used for reads and the delete transaction.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    async def check(self, class_id: int) -> DeletionCheck:
        """Report whether a class can currently be deleted.

        Read-only; the answer may be stale by the time delete() runs.

        Args:
            class_id: Class identifier.

        Returns:
            DeletionCheck with the verdict, the reason and the relevant count.
        """
        async with self.gateway.session() as session:
            exists = await session.execute(select(Class.id).where(Class.id == class_id))
            if exists.scalar_one_or_none() is None:
                return DeletionCheck(can_delete=False, reason=CLASS_NOT_FOUND_REASON)

            student_count = await _count_students(session, class_id)
            if student_count > 0:
                return DeletionCheck(
                    can_delete=False,
                    reason=HAS_STUDENTS_REASON,
                    student_count=student_count,
                )

            return DeletionCheck(
                can_delete=True,
                reason=DELETABLE_REASON,
                schedule_count=await _count_slots(session, class_id),
            )

    async def delete(self, class_id: int) -> int:
        """Delete a class and its schedule slots in one transaction.

        Args:
            class_id: Class identifier.

        Returns:
            Number of class rows deleted.

        Raises:
            ClassNotFoundError: If the class does not exist.
            HasDependentsError: If students are still assigned to the class.
        """
        return await self.gateway.run_in_transaction(self._delete, class_id)

    async def _delete(self, session: AsyncSession, class_id: int) -> int:
        # Lock the class row so no one can repoint students to it mid-delete
        locked = await session.execute(
            select(Class.id).where(Class.id == class_id).with_for_update()
        )
        if locked.scalar_one_or_none() is None:
            raise ClassNotFoundError(f"Class {class_id} not found")

        student_count = await _count_students(session, class_id)
        if student_count > 0:
            logger.info(
                "Refusing to delete class %s: %d students assigned",
                class_id,
                student_count,
            )
            raise HasDependentsError(HAS_STUDENTS_REASON, student_count=student_count)

        slots = await session.execute(
            delete(ScheduleSlot).where(ScheduleSlot.class_id == class_id)
        )
        deleted = await session.execute(delete(Class).where(Class.id == class_id))

        logger.info(
            "Deleted class %s with %d schedule slots",
            class_id,
            slots.rowcount,
        )
        return deleted.rowcount
