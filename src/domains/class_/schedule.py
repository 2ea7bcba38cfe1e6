# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schedule grid generation for newly created classes."""

import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models.school import Day, Period, ScheduleSlot

logger = logging.getLogger(__name__)


class ScheduleGenerator:
    """Produces the empty day x period grid of a class.

    Runs on the caller's transaction-scoped session, so the grid is
    committed or rolled back together with the class row.
    """

    async def generate(self, session: AsyncSession, class_id: int) -> int:
        """Insert one empty slot per (day, period) pair for a class.

        Args:
            session: Session bound to the open class-creation transaction.
            class_id: Identity of the class just inserted.

        Returns:
            Number of slots created.
        """
        day_ids = (await session.execute(select(Day.id).order_by(Day.id))).scalars().all()
        period_ids = (
            await session.execute(select(Period.id).order_by(Period.start_time))
        ).scalars().all()

        slots = [
            {
                "class_id": class_id,
                "day_id": day_id,
                "period_id": period_id,
                "subject_id": None,
                "teacher_id": None,
            }
            for day_id in day_ids
            for period_id in period_ids
        ]

        if not slots:
            logger.warning(
                "No schedule slots generated for class %s: %d days, %d periods",
                class_id,
                len(day_ids),
                len(period_ids),
            )
            return 0

        await session.execute(insert(ScheduleSlot), slots)

        logger.info("Generated %d schedule slots for class %s", len(slots), class_id)
        return len(slots)
