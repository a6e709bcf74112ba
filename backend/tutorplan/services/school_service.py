"""
Service métier pour les écoles d'un enseignant.
Chaque opération sur une école existante passe d'abord par le guard de propriété.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tutorplan.core import hours
from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.outcomes import Ack, Failure, IdResult, Result
from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student
from tutorplan.repository import SqlRepository
from tutorplan.schemas.school import SchoolDetails, SchoolForm, SchoolStudent, SchoolSummary
from tutorplan.services import comment_service, coordinates_service
from tutorplan.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)

# PostgreSQL cite le nom de la contrainte, SQLite les colonnes
NAME_CONSTRAINT_MARKERS = ("uq_schools_teacher_name", "schools.teacher_id, schools.name")


def list_schools(db: Session, teacher_id: int) -> List[SchoolSummary]:
    """Retourne les écoles de l'enseignant, triées par nom."""
    schools = db.execute(
        select(School).where(School.teacher_id == teacher_id).order_by(School.name)
    ).scalars().all()
    return [to_summary(s) for s in schools]


def get_school(db: Session, teacher_id: int, school_id: int) -> Result[SchoolDetails]:
    """
    Détail d'une école : coordonnées, élèves avec leurs heures,
    total d'heures (somme des totaux élèves) et montant facturé.
    """
    repository = SqlRepository(db)
    outcome = OwnershipGuard(repository).check_school(teacher_id, school_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    school = db.get(School, school_id)
    if school is None:
        return Result.fail(Failure.NOT_FOUND, "École introuvable.")

    students = db.execute(
        select(Student).where(Student.school_id == school_id).order_by(Student.name)
    ).scalars().all()

    school_students = [
        SchoolStudent(
            id=s.id,
            name=s.name,
            subject=s.subject,
            disabled=s.disabled,
            hours=hours.aggregate(repository.student_intervals(s.id)),
        )
        for s in students
    ]
    total_hours = hours.sum_hours(s.hours for s in school_students)

    return Result.ok(SchoolDetails(
        id=school.id,
        name=school.name,
        color=school.color,
        hourly_rate=school.hourly_rate,
        coordinates=coordinates_service.load_coordinates(db, EntityKind.SCHOOL, school.id),
        students=school_students,
        total_hours=total_hours,
        amount=hours.amount(total_hours, school.hourly_rate),
    ))


def create_school(db: Session, teacher_id: int, data: SchoolForm) -> IdResult:
    """
    Crée une école pour l'enseignant.
    Retourne NAME_CONFLICT si l'enseignant a déjà une école de ce nom.
    """
    school = School(
        teacher_id=teacher_id,
        name=data.name,
        color=data.color,
        hourly_rate=data.hourly_rate,
    )
    db.add(school)
    try:
        db.flush()  # Obtenir l'ID (et détecter le doublon) avant les coordonnées
        coordinates_service.replace_coordinates(db, EntityKind.SCHOOL, school.id, data.coordinates)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _is_name_conflict(exc):
            raise
        return IdResult.fail(Failure.NAME_CONFLICT, f"Une école avec le nom '{data.name}' existe déjà.")

    logger.info("École créée : %s (%s) pour l'enseignant %s", school.name, school.id, teacher_id)
    return IdResult.ok(school.id)


def update_school(db: Session, teacher_id: int, school_id: int, data: SchoolForm) -> Ack:
    outcome = OwnershipGuard(SqlRepository(db)).check_school(teacher_id, school_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    try:
        result = db.execute(
            update(School)
            .where(School.id == school_id, School.teacher_id == teacher_id)
            .values(name=data.name, color=data.color, hourly_rate=data.hourly_rate)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            coordinates_service.replace_coordinates(db, EntityKind.SCHOOL, school_id, data.coordinates)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _is_name_conflict(exc):
            raise
        return Ack.fail(Failure.NAME_CONFLICT, f"Une école avec le nom '{data.name}' existe déjà.")
    return Ack.of(result.rowcount)


def delete_school(db: Session, teacher_id: int, school_id: int) -> Ack:
    """
    Supprime une école. Les élèves et leçons suivent par cascade (FK),
    les commentaires et coordonnées rattachés sont purgés explicitement.
    """
    outcome = OwnershipGuard(SqlRepository(db)).check_school(teacher_id, school_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    student_ids = db.execute(
        select(Student.id).where(Student.school_id == school_id)
    ).scalars().all()
    lesson_ids = db.execute(
        select(Lesson.id).join(Student, Student.id == Lesson.student_id).where(Student.school_id == school_id)
    ).scalars().all()

    comment_service.purge_comments(db, EntityKind.LESSON, lesson_ids)
    comment_service.purge_comments(db, EntityKind.STUDENT, student_ids)
    comment_service.purge_comments(db, EntityKind.SCHOOL, [school_id])
    coordinates_service.purge_coordinates(db, EntityKind.STUDENT, student_ids)
    coordinates_service.purge_coordinates(db, EntityKind.SCHOOL, [school_id])

    result = db.execute(
        delete(School).where(School.id == school_id, School.teacher_id == teacher_id)
    )
    db.commit()
    logger.info(
        "École %s supprimée (%d élèves, %d leçons)", school_id, len(student_ids), len(lesson_ids)
    )
    return Ack.of(result.rowcount)


def to_summary(school: School) -> SchoolSummary:
    return SchoolSummary(
        id=school.id,
        name=school.name,
        color=school.color,
        hourly_rate=school.hourly_rate,
    )


def _is_name_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in NAME_CONSTRAINT_MARKERS)
