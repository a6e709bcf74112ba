"""
Service métier pour les élèves.
Un élève est rattaché à une école : la propriété se résout via l'école.
"""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from tutorplan.core import hours
from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.outcomes import Ack, Failure, IdResult, Result
from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student
from tutorplan.repository import SqlRepository
from tutorplan.schemas.student import StudentDetails, StudentForm, StudentSummary
from tutorplan.services import comment_service, coordinates_service
from tutorplan.services.ownership_guard import OwnershipGuard
from tutorplan.services.school_service import to_summary as to_school_summary

logger = logging.getLogger(__name__)


def list_students(db: Session, teacher_id: int) -> List[StudentSummary]:
    """Retourne tous les élèves de l'enseignant (toutes écoles), triés par nom."""
    rows = db.execute(
        select(Student, School)
        .join(School, School.id == Student.school_id)
        .where(School.teacher_id == teacher_id)
        .order_by(Student.name)
    ).all()
    return [to_summary(student, school) for student, school in rows]


def get_student(db: Session, teacher_id: int, student_id: int) -> Result[StudentDetails]:
    repository = SqlRepository(db)
    outcome = OwnershipGuard(repository).check_student(teacher_id, student_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    row = db.execute(
        select(Student, School)
        .join(School, School.id == Student.school_id)
        .where(Student.id == student_id)
    ).first()
    if row is None:
        return Result.fail(Failure.NOT_FOUND, "Élève introuvable.")
    student, school = row

    summary = to_summary(student, school)
    return Result.ok(StudentDetails(
        **summary.model_dump(),
        coordinates=coordinates_service.load_coordinates(db, EntityKind.STUDENT, student_id),
        hours=hours.aggregate(repository.student_intervals(student_id)),
    ))


def get_student_hours(db: Session, teacher_id: int, student_id: int) -> Result[Decimal]:
    """Total des heures de toutes les leçons de l'élève."""
    repository = SqlRepository(db)
    outcome = OwnershipGuard(repository).check_student(teacher_id, student_id)
    if not outcome.success:
        return Result.from_outcome(outcome)
    return Result.ok(hours.aggregate(repository.student_intervals(student_id)))


def create_student(db: Session, teacher_id: int, data: StudentForm) -> IdResult:
    """Crée un élève dans une école de l'enseignant."""
    outcome = OwnershipGuard(SqlRepository(db)).check_school(teacher_id, data.school_id)
    if not outcome.success:
        return IdResult.from_outcome(outcome)

    student = Student(school_id=data.school_id, subject=data.subject, name=data.name)
    db.add(student)
    db.flush()
    coordinates_service.replace_coordinates(db, EntityKind.STUDENT, student.id, data.coordinates)
    db.commit()

    logger.info("Élève créé : %s (%s) dans l'école %s", student.name, student.id, data.school_id)
    return IdResult.ok(student.id)


def update_student(db: Session, teacher_id: int, student_id: int, data: StudentForm) -> Ack:
    """
    Met à jour un élève. Si l'école change, la nouvelle école doit
    aussi appartenir à l'enseignant.
    """
    guard = OwnershipGuard(SqlRepository(db))
    outcome = guard.check_student(teacher_id, student_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)
    outcome = guard.check_school(teacher_id, data.school_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    result = db.execute(
        update(Student)
        .where(Student.id == student_id)
        .values(school_id=data.school_id, subject=data.subject, name=data.name)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount:
        coordinates_service.replace_coordinates(db, EntityKind.STUDENT, student_id, data.coordinates)
    db.commit()
    return Ack.of(result.rowcount)


def delete_student(db: Session, teacher_id: int, student_id: int) -> Ack:
    """Supprime un élève ; ses leçons suivent par cascade."""
    outcome = OwnershipGuard(SqlRepository(db)).check_student(teacher_id, student_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    lesson_ids = db.execute(
        select(Lesson.id).where(Lesson.student_id == student_id)
    ).scalars().all()
    comment_service.purge_comments(db, EntityKind.LESSON, lesson_ids)
    comment_service.purge_comments(db, EntityKind.STUDENT, [student_id])
    coordinates_service.purge_coordinates(db, EntityKind.STUDENT, [student_id])

    result = db.execute(delete(Student).where(Student.id == student_id))
    db.commit()
    logger.info("Élève %s supprimé (%d leçons)", student_id, len(lesson_ids))
    return Ack.of(result.rowcount)


def disable_student(db: Session, teacher_id: int, student_id: int) -> Ack:
    return _set_disabled(db, teacher_id, student_id, True)


def enable_student(db: Session, teacher_id: int, student_id: int) -> Ack:
    return _set_disabled(db, teacher_id, student_id, False)


def _set_disabled(db: Session, teacher_id: int, student_id: int, disabled: bool) -> Ack:
    outcome = OwnershipGuard(SqlRepository(db)).check_student(teacher_id, student_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    result = db.execute(
        update(Student)
        .where(Student.id == student_id)
        .values(disabled=disabled)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return Ack.of(result.rowcount)


def to_summary(student: Student, school: School) -> StudentSummary:
    return StudentSummary(
        id=student.id,
        subject=student.subject,
        name=student.name,
        school=to_school_summary(school),
        disabled=student.disabled,
    )
