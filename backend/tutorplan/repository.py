"""
Collaborateur de persistance du coeur métier.

Le guard et le mutateur de leçons ne dépendent que du protocole LessonRepository ;
SqlRepository en est l'implémentation SQLAlchemy. Les fonctions to_* convertissent
une ligne de résultat en objet valeur, indépendamment de l'API d'accès aux données.
"""

import logging
from dataclasses import dataclass
from datetime import time
from typing import List, Optional, Protocol, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from tutorplan.core.intervals import LessonRange
from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionedRange:
    """Plage d'une leçon telle que lue en base, avec sa version pour l'écriture conditionnelle."""
    range: LessonRange
    version: int


class LessonRepository(Protocol):
    def owner_of_school(self, school_id: int) -> Optional[int]: ...

    def owner_of_student(self, student_id: int) -> Optional[int]: ...

    def owner_of_lesson(self, lesson_id: int) -> Optional[int]: ...

    def read_lesson_range(self, lesson_id: int) -> Optional[VersionedRange]: ...

    def write_lesson_range(self, lesson_id: int, lesson_range: LessonRange, expected_version: int) -> int: ...

    def lesson_exists(self, lesson_id: int) -> bool: ...

    def student_intervals(self, student_id: int) -> List[Tuple[time, time]]: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


def to_lesson_range(row) -> VersionedRange:
    """Ligne (date, start_time, end_time, version) → VersionedRange."""
    return VersionedRange(
        range=LessonRange.from_lesson(row.date, row.start_time, row.end_time),
        version=row.version,
    )


def to_interval(row) -> Tuple[time, time]:
    """Ligne (start_time, end_time) → tuple utilisable par le calcul d'heures."""
    return row.start_time, row.end_time


class SqlRepository:
    """Implémentation SQLAlchemy de LessonRepository, liée à une session."""

    def __init__(self, db: Session):
        self.db = db

    # --- Résolution de propriété ---

    def owner_of_school(self, school_id: int) -> Optional[int]:
        return self.db.execute(
            select(School.teacher_id).where(School.id == school_id)
        ).scalar()

    def owner_of_student(self, student_id: int) -> Optional[int]:
        return self.db.execute(
            select(School.teacher_id)
            .join(Student, Student.school_id == School.id)
            .where(Student.id == student_id)
        ).scalar()

    def owner_of_lesson(self, lesson_id: int) -> Optional[int]:
        return self.db.execute(
            select(School.teacher_id)
            .join(Student, Student.school_id == School.id)
            .join(Lesson, Lesson.student_id == Student.id)
            .where(Lesson.id == lesson_id)
        ).scalar()

    # --- Plages de leçons ---

    def read_lesson_range(self, lesson_id: int) -> Optional[VersionedRange]:
        row = self.db.execute(
            select(Lesson.date, Lesson.start_time, Lesson.end_time, Lesson.version)
            .where(Lesson.id == lesson_id)
        ).first()
        if row is None:
            return None
        return to_lesson_range(row)

    def write_lesson_range(self, lesson_id: int, lesson_range: LessonRange, expected_version: int) -> int:
        """
        UPDATE conditionnel (compare-and-swap sur version).
        Retourne 0 si la leçon a été supprimée ou modifiée depuis la lecture.
        """
        result = self.db.execute(
            update(Lesson)
            .where(Lesson.id == lesson_id, Lesson.version == expected_version)
            .values(
                date=lesson_range.start.date(),
                start_time=lesson_range.start.time(),
                end_time=lesson_range.end.time(),
                version=Lesson.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def lesson_exists(self, lesson_id: int) -> bool:
        count = self.db.execute(
            select(func.count()).select_from(Lesson).where(Lesson.id == lesson_id)
        ).scalar()
        return bool(count)

    # --- Heures ---

    def student_intervals(self, student_id: int) -> List[Tuple[time, time]]:
        rows = self.db.execute(
            select(Lesson.start_time, Lesson.end_time).where(Lesson.student_id == student_id)
        ).all()
        return [to_interval(row) for row in rows]

    # --- Transaction ---

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
