"""
Router pour les écoles de l'enseignant connecté.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tutorplan.database import get_db
from tutorplan.routers.errors import ack_response, raise_for_failure
from tutorplan.schemas.outcome import AckResponse, IdResponse
from tutorplan.schemas.school import SchoolDetails, SchoolForm, SchoolSummary
from tutorplan.security import get_current_teacher_id
from tutorplan.services import school_service

router = APIRouter(prefix="/api/v1/schools", tags=["Écoles"])


@router.get("", response_model=List[SchoolSummary], summary="Lister mes écoles")
def list_schools(teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    return school_service.list_schools(db, teacher_id)


@router.post("", response_model=IdResponse, status_code=201, summary="Créer une école")
def create_school(
    data: SchoolForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Crée une école. Le nom doit être unique parmi les écoles de l'enseignant (409 sinon)."""
    result = school_service.create_school(db, teacher_id, data)
    raise_for_failure(result)
    return IdResponse(success=True, id=result.value)


@router.get("/{school_id}", response_model=SchoolDetails, summary="Détail d'une école")
def get_school(school_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    """Retourne l'école avec ses élèves, leurs heures, le total d'heures et le montant dû."""
    result = school_service.get_school(db, teacher_id, school_id)
    raise_for_failure(result)
    return result.value


@router.put("/{school_id}", response_model=AckResponse, summary="Modifier une école")
def update_school(
    school_id: int,
    data: SchoolForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    return ack_response(school_service.update_school(db, teacher_id, school_id, data))


@router.delete("/{school_id}", response_model=AckResponse, summary="Supprimer une école")
def delete_school(school_id: int, teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    """Supprime l'école ainsi que ses élèves et leurs leçons."""
    return ack_response(school_service.delete_school(db, teacher_id, school_id))
