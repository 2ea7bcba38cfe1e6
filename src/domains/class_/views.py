# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Read-only class projections.

Views never mutate and run without an explicit transaction:
- Classes grouped by grade with student counts
- Students of a class with attendance percentage
- Weekly schedule of a class grouped by day
- Curriculum subjects of a class with their assigned teachers
"""

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func, select

from src.domains.class_.exceptions import ClassNotFoundError
from src.infrastructure.database.connection import PersistenceGateway
from src.infrastructure.database.models.school import (
    AttendanceStatus,
    AttendanceStudent,
    Class,
    Curriculum,
    Day,
    Period,
    ScheduleSlot,
    Student,
    Subject,
    Teacher,
    TeacherSubject,
    User,
)
from src.models.class_ import (
    UNGROUPED,
    DaySchedule,
    GradeGroup,
    GradeGroupClass,
    ScheduledPeriod,
    StudentAttendanceSummary,
    SubjectWithTeachers,
    TeacherRef,
)

_CENT = Decimal("0.01")


def attendance_percentage(present: int, total: int) -> float:
    """Percentage of present records, rounded half-up to 2 decimals.

    Returns 0 when there are no records at all.
    """
    if total == 0:
        return 0.0
    ratio = Decimal(100 * present) / Decimal(total)
    return float(ratio.quantize(_CENT, rounding=ROUND_HALF_UP))


class ClassViews:
    """Aggregated read models over classes and their relations.

    Attributes:
        gateway: Persistence gateway for read queries.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway

    async def grouped_by_grade(self) -> list[GradeGroup]:
        """Partition all classes by grade, each with its student count.

        Returns:
            Grade groups in first-seen order; classes without a grade go
            into the UNGROUPED bucket.
        """
        classes = await self.gateway.fetch_all(
            select(Class.id, Class.class_name, Class.floor_number, Class.level_grade)
            .order_by(Class.id)
        )
        counts = await self.gateway.fetch_all(
            select(Student.class_id, func.count().label("student_count"))
            .where(Student.class_id.is_not(None))
            .group_by(Student.class_id)
        )
        student_counts = {row["class_id"]: row["student_count"] for row in counts}

        groups: dict[str, GradeGroup] = {}
        for row in classes:
            grade = row["level_grade"]
            key = grade.value if grade is not None else UNGROUPED
            group = groups.setdefault(key, GradeGroup(grade_level=key))
            group.classes.append(
                GradeGroupClass(
                    id=row["id"],
                    class_name=row["class_name"],
                    floor_number=row["floor_number"],
                    capacity=student_counts.get(row["id"], 0),
                )
            )

        return list(groups.values())

    async def students_in_class(self, class_id: int) -> list[StudentAttendanceSummary]:
        """List the students of a class with their attendance percentage.

        Args:
            class_id: Class identifier.

        Returns:
            One entry per student assigned to the class.
        """
        present_count = func.count(
            case((AttendanceStudent.status == AttendanceStatus.PRESENT, AttendanceStudent.id))
        ).label("present_count")
        total_count = func.count(AttendanceStudent.id).label("total_count")

        query = (
            select(
                Student.id,
                Student.grade_level,
                Student.class_id,
                User.name.label("student_name"),
                Class.class_name,
                Class.level_grade,
                present_count,
                total_count,
            )
            .select_from(Class)
            .join(Student, Student.class_id == Class.id)
            .join(User, User.id == Student.user_id)
            .outerjoin(AttendanceStudent, AttendanceStudent.student_id == Student.id)
            .where(Class.id == class_id)
            .group_by(
                Student.id,
                Student.grade_level,
                Student.class_id,
                User.name,
                Class.class_name,
                Class.level_grade,
            )
            .order_by(Student.id)
        )
        rows = await self.gateway.fetch_all(query)

        return [
            StudentAttendanceSummary(
                id=row["id"],
                grade_level=row["grade_level"],
                class_id=row["class_id"],
                student_name=row["student_name"],
                class_name=row["class_name"],
                level_grade=row["level_grade"],
                attendance_percentage=attendance_percentage(
                    row["present_count"], row["total_count"]
                ),
            )
            for row in rows
        ]

    async def schedule_for(self, class_id: int) -> list[DaySchedule]:
        """Weekly schedule of a class, grouped by day.

        Only slots with an assigned subject are listed.

        Args:
            class_id: Class identifier.

        Returns:
            Days in day order, each with its periods in start-time order.
        """
        query = (
            select(
                Period.id.label("period_id"),
                Period.start_time,
                Period.end_time,
                Day.id.label("day_id"),
                Day.name.label("day_name"),
                Subject.name.label("subject_name"),
            )
            .select_from(ScheduleSlot)
            .join(Day, Day.id == ScheduleSlot.day_id)
            .join(Period, Period.id == ScheduleSlot.period_id)
            .join(Subject, Subject.id == ScheduleSlot.subject_id)
            .where(ScheduleSlot.class_id == class_id)
            .order_by(Day.id, Period.start_time)
        )
        rows = await self.gateway.fetch_all(query)

        by_day: dict[str, DaySchedule] = {}
        for row in rows:
            day = by_day.setdefault(
                row["day_name"],
                DaySchedule(day_id=row["day_id"], day_name=row["day_name"]),
            )
            day.subjects.append(
                ScheduledPeriod(
                    period_id=row["period_id"],
                    start_time=row["start_time"],
                    end_time=row["end_time"],
                    subject_name=row["subject_name"],
                )
            )

        return list(by_day.values())

    async def subjects_with_teachers(self, class_id: int) -> list[SubjectWithTeachers]:
        """Curriculum subjects of the class grade with their teachers.

        Args:
            class_id: Class identifier.

        Returns:
            Subjects in id order; subjects nobody teaches have no teachers.

        Raises:
            ClassNotFoundError: If the class does not exist.
        """
        class_row = await self.gateway.fetch_one(
            select(Class.id, Class.level_grade).where(Class.id == class_id)
        )
        if class_row is None:
            raise ClassNotFoundError(f"Class {class_id} not found")

        grade = class_row["level_grade"]
        if grade is None:
            return []

        subjects = await self.gateway.fetch_all(
            select(Subject.id.label("sub_id"), Subject.name.label("sub_name"))
            .join(Curriculum, Curriculum.id == Subject.curriculum_id)
            .where(Curriculum.level_grade == grade)
            .order_by(Subject.id)
        )
        roster = {
            row["sub_id"]: SubjectWithTeachers(sub_id=row["sub_id"], sub_name=row["sub_name"])
            for row in subjects
        }
        if not roster:
            return []

        teachers = await self.gateway.fetch_all(
            select(
                TeacherSubject.subject_id.label("sub_id"),
                Teacher.id.label("teacher_id"),
                User.name.label("teacher_name"),
            )
            .join(Teacher, Teacher.id == TeacherSubject.teacher_id)
            .join(User, User.id == Teacher.user_id)
            .where(TeacherSubject.subject_id.in_(list(roster)))
            .order_by(TeacherSubject.subject_id, Teacher.id)
        )
        for row in teachers:
            roster[row["sub_id"]].teachers.append(
                TeacherRef(teacher_id=row["teacher_id"], teacher_name=row["teacher_name"])
            )

        return list(roster.values())
