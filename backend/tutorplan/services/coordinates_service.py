"""
Service des coordonnées (téléphone, email, site...) des écoles et des élèves.
Simple passe-plat clé (entity_kind, entity_id) : toujours appelé après le guard.
"""

import logging
from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.outcomes import Ack, Result
from tutorplan.models.coordinate import Coordinate
from tutorplan.repository import SqlRepository
from tutorplan.schemas.coordinate import CoordinateItem
from tutorplan.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)


def get_coordinates(
    db: Session, teacher_id: int, kind: EntityKind, entity_id: int
) -> Result[List[CoordinateItem]]:
    """Retourne les coordonnées d'une école ou d'un élève de l'enseignant."""
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Result.from_outcome(outcome)
    return Result.ok(load_coordinates(db, kind, entity_id))


def set_coordinates(
    db: Session, teacher_id: int, kind: EntityKind, entity_id: int, items: List[CoordinateItem]
) -> Ack:
    """Remplace l'ensemble des coordonnées d'une école ou d'un élève."""
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)
    replace_coordinates(db, kind, entity_id, items)
    db.commit()
    return Ack.ok(len(items))


def load_coordinates(db: Session, kind: EntityKind, entity_id: int) -> List[CoordinateItem]:
    rows = db.execute(
        select(Coordinate)
        .where(Coordinate.entity_kind == kind.value, Coordinate.entity_id == entity_id)
        .order_by(Coordinate.coordinate_type)
    ).scalars().all()
    return [CoordinateItem(type=c.coordinate_type, value=c.value) for c in rows]


def replace_coordinates(db: Session, kind: EntityKind, entity_id: int, items: List[CoordinateItem]) -> None:
    """Supprime puis réinsère les coordonnées. Pas de commit : fait partie de la transaction appelante."""
    db.execute(
        delete(Coordinate).where(
            Coordinate.entity_kind == kind.value, Coordinate.entity_id == entity_id
        )
    )
    for item in items:
        db.add(Coordinate(
            entity_kind=kind.value,
            entity_id=entity_id,
            coordinate_type=item.type,
            value=item.value,
        ))
    logger.debug("Coordonnées %s %s : %d valeur(s)", kind.value, entity_id, len(items))


def purge_coordinates(db: Session, kind: EntityKind, entity_ids: Iterable[int]) -> None:
    """Supprime les coordonnées d'entités supprimées. Pas de commit."""
    ids = list(entity_ids)
    if not ids:
        return
    db.execute(
        delete(Coordinate).where(
            Coordinate.entity_kind == kind.value, Coordinate.entity_id.in_(ids)
        )
    )
