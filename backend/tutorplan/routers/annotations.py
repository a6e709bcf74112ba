"""
Router pour les commentaires (écoles, élèves, leçons) et les coordonnées (écoles, élèves).
Le segment {target} désigne le type d'entité ; la propriété est vérifiée par le service.
"""

from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from tutorplan.config import settings
from tutorplan.core.entity_kind import EntityKind
from tutorplan.database import get_db
from tutorplan.routers.errors import ack_response, raise_for_failure
from tutorplan.schemas.comment import CommentForm, CommentResponse, CommentsPage
from tutorplan.schemas.coordinate import CoordinateItem, CoordinatesUpdate
from tutorplan.schemas.outcome import AckResponse
from tutorplan.security import get_current_teacher_id
from tutorplan.services import comment_service, coordinates_service

router = APIRouter(prefix="/api/v1", tags=["Commentaires & coordonnées"])


class Target(str, Enum):
    schools = "schools"
    students = "students"
    lessons = "lessons"


TARGET_KINDS = {
    Target.schools: EntityKind.SCHOOL,
    Target.students: EntityKind.STUDENT,
    Target.lessons: EntityKind.LESSON,
}


# --- Commentaires ---

@router.get("/{target}/{entity_id}/comments", response_model=CommentsPage, summary="Lister les commentaires")
def list_comments(
    target: Target,
    entity_id: int,
    offset: int = Query(0, ge=0),
    count: Optional[int] = Query(None, ge=1, le=100),
    max_length: Optional[int] = Query(None, ge=0),
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Commentaires du plus récent au plus ancien ; `max_length` tronque le contenu."""
    result = comment_service.list_comments(
        db,
        teacher_id,
        TARGET_KINDS[target],
        entity_id,
        offset=offset,
        count=count or settings.COMMENT_PAGE_SIZE,
        max_length=settings.COMMENT_MAX_LENGTH if max_length is None else max_length,
    )
    raise_for_failure(result)
    return result.value


@router.post("/{target}/{entity_id}/comments", response_model=CommentResponse, summary="Écrire un commentaire")
def save_comment(
    target: Target,
    entity_id: int,
    data: CommentForm,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    """Crée un commentaire, ou modifie celui désigné par `id`."""
    result = comment_service.save_comment(db, teacher_id, TARGET_KINDS[target], entity_id, data)
    raise_for_failure(result)
    return result.value


@router.get("/{target}/{entity_id}/comments/{comment_id}", response_model=CommentResponse,
            summary="Lire un commentaire")
def get_comment(
    target: Target,
    entity_id: int,
    comment_id: int,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    result = comment_service.get_comment(db, teacher_id, TARGET_KINDS[target], entity_id, comment_id)
    raise_for_failure(result)
    return result.value


@router.delete("/{target}/{entity_id}/comments/{comment_id}", response_model=AckResponse,
               summary="Supprimer un commentaire")
def delete_comment(
    target: Target,
    entity_id: int,
    comment_id: int,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    return ack_response(
        comment_service.delete_comment(db, teacher_id, TARGET_KINDS[target], entity_id, comment_id)
    )


# --- Coordonnées ---

def _coordinates_kind(target: Target) -> EntityKind:
    if target == Target.lessons:
        raise HTTPException(status_code=404, detail="Les leçons n'ont pas de coordonnées.")
    return TARGET_KINDS[target]


@router.get("/{target}/{entity_id}/coordinates", response_model=List[CoordinateItem], summary="Lire les coordonnées")
def get_coordinates(
    target: Target,
    entity_id: int,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    result = coordinates_service.get_coordinates(db, teacher_id, _coordinates_kind(target), entity_id)
    raise_for_failure(result)
    return result.value


@router.put("/{target}/{entity_id}/coordinates", response_model=AckResponse, summary="Remplacer les coordonnées")
def set_coordinates(
    target: Target,
    entity_id: int,
    data: CoordinatesUpdate,
    teacher_id: int = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
):
    return ack_response(
        coordinates_service.set_coordinates(db, teacher_id, _coordinates_kind(target), entity_id, data.coordinates)
    )
