"""
Router pour les leçons : planning, CRUD et déplacements (change / move).
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from tutorplan.core.intervals import LessonChange
from tutorplan.database import get_db
from tutorplan.routers.errors import ack_response, raise_for_failure
from tutorplan.schemas.lesson import LessonChangeRequest, LessonDetails, LessonForm, LessonSummary
from tutorplan.schemas.outcome import AckResponse, IdResponse
from tutorplan.security import get_current_teacher_id
from tutorplan.services import lesson_service

router = APIRouter(prefix="/api/v1/lessons", tags=["Leçons"])


@router.get("", response_model=List[LessonSummary], summary="Planning des leçons")
def list_lessons(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Retourne les leçons de l'enseignant comprises entre `from` et `to`."""
    start, end = lesson_service.local_naive(start), lesson_service.local_naive(end)
    if end < start:
        raise HTTPException(status_code=422, detail="La borne 'to' doit être après 'from'.")
    return lesson_service.list_lessons(db, teacher_id, start, end)


@router.post("", response_model=IdResponse, status_code=201, summary="Créer une leçon")
def create_lesson(
    data: LessonForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Crée une leçon. L'heure de fin doit être strictement après l'heure de début (422 sinon)."""
    result = lesson_service.create_lesson(db, teacher_id, data)
    raise_for_failure(result)
    return IdResponse(success=True, id=result.value)


@router.get("/{lesson_id}", response_model=LessonDetails, summary="Détail d'une leçon")
def get_lesson(lesson_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    result = lesson_service.get_lesson(db, teacher_id, lesson_id)
    raise_for_failure(result)
    return result.value


@router.put("/{lesson_id}", response_model=AckResponse, summary="Modifier une leçon")
def update_lesson(
    lesson_id: int,
    data: LessonForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    return ack_response(lesson_service.update_lesson(db, teacher_id, lesson_id, data))


@router.delete("/{lesson_id}", response_model=AckResponse, summary="Supprimer une leçon")
def delete_lesson(lesson_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    return ack_response(lesson_service.delete_lesson(db, teacher_id, lesson_id))


@router.post("/{lesson_id}/change", response_model=AckResponse, summary="Redimensionner une leçon")
def change_lesson(
    lesson_id: int,
    data: LessonChangeRequest,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """
    Décale la date de `day_delta` jours et la fin de `minute_delta` minutes.
    L'heure de début reste fixe : la durée change.
    409 si la leçon a été modifiée par ailleurs entre-temps.
    """
    delta = LessonChange(day_delta=data.day_delta, minute_delta=data.minute_delta)
    return ack_response(lesson_service.change_lesson(db, teacher_id, lesson_id, delta))


@router.post("/{lesson_id}/move", response_model=AckResponse, summary="Déplacer une leçon")
def move_lesson(
    lesson_id: int,
    data: LessonChangeRequest,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """
    Décale la leçon de `day_delta` jours et `minute_delta` minutes, début et fin.
    La durée est conservée.
    """
    delta = LessonChange(day_delta=data.day_delta, minute_delta=data.minute_delta)
    return ack_response(lesson_service.move_lesson(db, teacher_id, lesson_id, delta))
