"""
Service métier pour les leçons : création, planning, détail, modification,
suppression, leçons mensuelles d'un élève, et déplacements depuis le planning.
"""

import calendar
import logging
from datetime import date, datetime
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from tutorplan.core import hours
from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.intervals import LessonChange, LessonRange
from tutorplan.core.outcomes import Ack, Failure, IdResult, Result
from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student
from tutorplan.repository import SqlRepository
from tutorplan.schemas.lesson import (
    LessonDetails,
    LessonForm,
    LessonStudent,
    LessonSummary,
    StudentLesson,
    StudentLessons,
)
from tutorplan.services import comment_service, coordinates_service
from tutorplan.services.lesson_mutator import LessonMutator
from tutorplan.services.ownership_guard import OwnershipGuard
from tutorplan.services.student_service import to_summary as to_student_summary

logger = logging.getLogger(__name__)

INVALID_TIME_ORDER = "L'heure de fin doit être après l'heure de début."


def create_lesson(db: Session, teacher_id: int, data: LessonForm) -> IdResult:
    """
    Crée une leçon pour un élève de l'enseignant.
    Retourne INVALID_RANGE si end_time <= start_time (aucune écriture).
    """
    if data.end_time <= data.start_time:
        return IdResult.fail(Failure.INVALID_RANGE, INVALID_TIME_ORDER)
    outcome = OwnershipGuard(SqlRepository(db)).check_student(teacher_id, data.student_id)
    if not outcome.success:
        return IdResult.from_outcome(outcome)

    lesson = Lesson(
        student_id=data.student_id,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        location=data.location,
        version=1,
    )
    db.add(lesson)
    db.commit()
    db.refresh(lesson)

    logger.info(
        "Leçon créée : %s pour l'élève %s le %s (%s - %s)",
        lesson.id, data.student_id, data.date, data.start_time, data.end_time,
    )
    return IdResult.ok(lesson.id)


def list_lessons(db: Session, teacher_id: int, start: datetime, end: datetime) -> List[LessonSummary]:
    """
    Planning : leçons de l'enseignant comprises entièrement dans [start, end],
    triées chronologiquement.
    Des bornes avec fuseau sont ramenées à l'heure locale du serveur, celle des leçons.
    """
    start, end = local_naive(start), local_naive(end)
    rows = db.execute(
        select(Lesson, Student, School)
        .join(Student, Student.id == Lesson.student_id)
        .join(School, School.id == Student.school_id)
        .where(
            School.teacher_id == teacher_id,
            Lesson.date >= start.date(),
            Lesson.date <= end.date(),
        )
        .order_by(Lesson.date, Lesson.start_time)
    ).all()

    lessons = []
    for lesson, student, school in rows:
        lesson_range = LessonRange.from_lesson(lesson.date, lesson.start_time, lesson.end_time)
        if lesson_range.start < start or lesson_range.end > end:
            continue
        lessons.append(LessonSummary(
            id=lesson.id,
            student=to_student_summary(student, school),
            date=lesson.date,
            start_time=lesson.start_time,
            end_time=lesson.end_time,
            location=lesson.location,
        ))
    logger.debug("Planning enseignant %s : %d leçons entre %s et %s", teacher_id, len(lessons), start, end)
    return lessons


def get_lesson(db: Session, teacher_id: int, lesson_id: int) -> Result[LessonDetails]:
    """Détail d'une leçon avec l'élève, son école et leurs coordonnées."""
    outcome = OwnershipGuard(SqlRepository(db)).check_lesson(teacher_id, lesson_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    row = db.execute(
        select(Lesson, Student, School)
        .join(Student, Student.id == Lesson.student_id)
        .join(School, School.id == Student.school_id)
        .where(Lesson.id == lesson_id)
    ).first()
    if row is None:
        return Result.fail(Failure.NOT_FOUND, "Leçon introuvable.")
    lesson, student, school = row

    student_summary = to_student_summary(student, school)
    return Result.ok(LessonDetails(
        id=lesson.id,
        student=LessonStudent(
            **student_summary.model_dump(),
            coordinates=coordinates_service.load_coordinates(db, EntityKind.STUDENT, student.id),
            school_coordinates=coordinates_service.load_coordinates(db, EntityKind.SCHOOL, school.id),
        ),
        date=lesson.date,
        start_time=lesson.start_time,
        end_time=lesson.end_time,
        location=lesson.location,
        hours=hours.duration(lesson.start_time, lesson.end_time),
    ))


def update_lesson(db: Session, teacher_id: int, lesson_id: int, data: LessonForm) -> Ack:
    """
    Réécrit tous les champs d'une leçon. Si l'élève change,
    le nouvel élève doit aussi appartenir à l'enseignant.
    """
    if data.end_time <= data.start_time:
        return Ack.fail(Failure.INVALID_RANGE, INVALID_TIME_ORDER)
    guard = OwnershipGuard(SqlRepository(db))
    outcome = guard.check_lesson(teacher_id, lesson_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)
    outcome = guard.check_student(teacher_id, data.student_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    result = db.execute(
        update(Lesson)
        .where(Lesson.id == lesson_id)
        .values(
            student_id=data.student_id,
            date=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
            location=data.location,
            version=Lesson.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return Ack.of(result.rowcount)


def delete_lesson(db: Session, teacher_id: int, lesson_id: int) -> Ack:
    outcome = OwnershipGuard(SqlRepository(db)).check_lesson(teacher_id, lesson_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    comment_service.purge_comments(db, EntityKind.LESSON, [lesson_id])
    result = db.execute(delete(Lesson).where(Lesson.id == lesson_id))
    db.commit()
    logger.info("Leçon %s supprimée", lesson_id)
    return Ack.of(result.rowcount)


def get_student_lessons(db: Session, teacher_id: int, student_id: int, day: date) -> Result[StudentLessons]:
    """Leçons de l'élève sur le mois de `day` (du 1er au dernier jour), avec leurs heures."""
    outcome = OwnershipGuard(SqlRepository(db)).check_student(teacher_id, student_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    first_day = day.replace(day=1)
    last_day = day.replace(day=calendar.monthrange(day.year, day.month)[1])

    lessons = db.execute(
        select(Lesson)
        .where(
            Lesson.student_id == student_id,
            Lesson.date >= first_day,
            Lesson.date <= last_day,
        )
        .order_by(Lesson.date, Lesson.start_time)
    ).scalars().all()

    items = [
        StudentLesson(
            id=lesson.id,
            date=lesson.date,
            start_time=lesson.start_time,
            end_time=lesson.end_time,
            location=lesson.location,
            hours=hours.duration(lesson.start_time, lesson.end_time),
        )
        for lesson in lessons
    ]
    return Result.ok(StudentLessons(
        date=day,
        lessons=items,
        hours=hours.sum_hours(item.hours for item in items),
    ))


def change_lesson(db: Session, teacher_id: int, lesson_id: int, delta: LessonChange) -> Ack:
    """Redimensionnement depuis le planning : décale la date, ne bouge que la fin."""
    return _mutator(db).change_lesson(teacher_id, lesson_id, delta)


def move_lesson(db: Session, teacher_id: int, lesson_id: int, delta: LessonChange) -> Ack:
    """Glisser-déposer depuis le planning : décale la leçon en conservant sa durée."""
    return _mutator(db).move_lesson(teacher_id, lesson_id, delta)


def local_naive(value: datetime) -> datetime:
    """Ramène une date avec fuseau à l'heure locale du serveur, sans fuseau."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _mutator(db: Session) -> LessonMutator:
    repository = SqlRepository(db)
    return LessonMutator(repository, OwnershipGuard(repository))
