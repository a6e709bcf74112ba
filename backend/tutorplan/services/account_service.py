"""
Service du profil de compte : identité de l'enseignant et volumes de données.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student
from tutorplan.models.teacher import Teacher
from tutorplan.schemas.account import AccountProfile


def get_profile(db: Session, teacher_id: int) -> Optional[AccountProfile]:
    """Retourne le profil de l'enseignant, ou None s'il n'existe pas."""
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        return None

    school_count = db.execute(
        select(func.count()).select_from(School).where(School.teacher_id == teacher_id)
    ).scalar() or 0

    student_count = db.execute(
        select(func.count())
        .select_from(Student)
        .join(School, School.id == Student.school_id)
        .where(School.teacher_id == teacher_id)
    ).scalar() or 0

    lesson_count = db.execute(
        select(func.count())
        .select_from(Lesson)
        .join(Student, Student.id == Lesson.student_id)
        .join(School, School.id == Student.school_id)
        .where(School.teacher_id == teacher_id)
    ).scalar() or 0

    return AccountProfile(
        id=teacher.id,
        first_name=teacher.first_name,
        last_name=teacher.last_name,
        email=teacher.email,
        administrator=teacher.is_administrator,
        school_count=school_count,
        student_count=student_count,
        lesson_count=lesson_count,
    )
