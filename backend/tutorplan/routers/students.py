"""
Router pour les élèves de l'enseignant connecté.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tutorplan.database import get_db
from tutorplan.routers.errors import ack_response, raise_for_failure
from tutorplan.schemas.lesson import StudentLessons
from tutorplan.schemas.outcome import AckResponse, IdResponse
from tutorplan.schemas.student import StudentDetails, StudentForm, StudentHours, StudentSummary
from tutorplan.security import get_current_teacher_id
from tutorplan.services import lesson_service, student_service

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])


@router.get("", response_model=List[StudentSummary], summary="Lister mes élèves")
def list_students(teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    """Retourne les élèves de toutes les écoles de l'enseignant, triés par nom."""
    return student_service.list_students(db, teacher_id)


@router.post("", response_model=IdResponse, status_code=201, summary="Créer un élève")
def create_student(
    data: StudentForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    result = student_service.create_student(db, teacher_id, data)
    raise_for_failure(result)
    return IdResponse(success=True, id=result.value)


@router.get("/{student_id}", response_model=StudentDetails, summary="Détail d'un élève")
def get_student(student_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    result = student_service.get_student(db, teacher_id, student_id)
    raise_for_failure(result)
    return result.value


@router.put("/{student_id}", response_model=AckResponse, summary="Modifier un élève")
def update_student(
    student_id: int,
    data: StudentForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    return ack_response(student_service.update_student(db, teacher_id, student_id, data))


@router.delete("/{student_id}", response_model=AckResponse, summary="Supprimer un élève")
def delete_student(student_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    """Supprime définitivement un élève. Ses leçons sont supprimées en cascade."""
    return ack_response(student_service.delete_student(db, teacher_id, student_id))


@router.post("/{student_id}/disable", response_model=AckResponse, summary="Désactiver un élève")
def disable_student(student_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    return ack_response(student_service.disable_student(db, teacher_id, student_id))


@router.post("/{student_id}/enable", response_model=AckResponse, summary="Réactiver un élève")
def enable_student(student_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    return ack_response(student_service.enable_student(db, teacher_id, student_id))


@router.get("/{student_id}/hours", response_model=StudentHours, summary="Total d'heures d'un élève")
def get_student_hours(student_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    result = student_service.get_student_hours(db, teacher_id, student_id)
    raise_for_failure(result)
    return StudentHours(student_id=student_id, hours=result.value)


@router.get("/{student_id}/lessons", response_model=StudentLessons, summary="Leçons du mois d'un élève")
def get_student_lessons(
    student_id: int,
    day: Optional[date] = Query(None, alias="date"),
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Leçons du mois contenant `date` (mois courant par défaut) et total d'heures."""
    result = lesson_service.get_student_lessons(db, teacher_id, student_id, day or date.today())
    raise_for_failure(result)
    return result.value
