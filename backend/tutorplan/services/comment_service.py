"""
Service des commentaires attachés aux écoles, élèves et leçons.
Chaque opération vérifie d'abord la propriété de l'entité commentée.
"""

import logging
from datetime import datetime
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.outcomes import Ack, Failure, Result
from tutorplan.models.comment import Comment
from tutorplan.repository import SqlRepository
from tutorplan.schemas.comment import CommentForm, CommentResponse, CommentsPage
from tutorplan.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


def list_comments(
    db: Session,
    teacher_id: int,
    kind: EntityKind,
    entity_id: int,
    offset: int = 0,
    count: int = 10,
    max_length: int = 0,
) -> Result[CommentsPage]:
    """
    Retourne une page de commentaires, du plus récent au plus ancien.
    Si max_length > 0, le contenu est tronqué (avec "...") à cette longueur.
    """
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    total = db.execute(
        select(func.count())
        .select_from(Comment)
        .where(Comment.entity_kind == kind.value, Comment.entity_id == entity_id)
    ).scalar() or 0

    comments = db.execute(
        select(Comment)
        .where(Comment.entity_kind == kind.value, Comment.entity_id == entity_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset(offset)
        .limit(count)
    ).scalars().all()

    return Result.ok(CommentsPage(
        offset=offset,
        count=len(comments),
        more=offset + len(comments) < total,
        comments=[_to_response(c, max_length) for c in comments],
    ))


def get_comment(
    db: Session, teacher_id: int, kind: EntityKind, entity_id: int, comment_id: int
) -> Result[CommentResponse]:
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    comment = _find(db, kind, entity_id, comment_id)
    if comment is None:
        return Result.fail(Failure.NOT_FOUND, "Commentaire introuvable.")
    return Result.ok(_to_response(comment))


def save_comment(
    db: Session, teacher_id: int, kind: EntityKind, entity_id: int, data: CommentForm
) -> Result[CommentResponse]:
    """Crée un commentaire (data.id absent) ou modifie un commentaire existant."""
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Result.from_outcome(outcome)

    if data.id is None:
        comment = Comment(entity_kind=kind.value, entity_id=entity_id, content=data.content)
        db.add(comment)
    else:
        comment = _find(db, kind, entity_id, data.id)
        if comment is None:
            return Result.fail(Failure.NOT_FOUND, "Commentaire introuvable.")
        comment.content = data.content
        comment.edited_at = datetime.now()

    db.commit()
    db.refresh(comment)
    logger.info("Commentaire %s enregistré sur %s %s", comment.id, kind.value, entity_id)
    return Result.ok(_to_response(comment))


def delete_comment(
    db: Session, teacher_id: int, kind: EntityKind, entity_id: int, comment_id: int
) -> Ack:
    outcome = OwnershipGuard(SqlRepository(db)).authorize(teacher_id, kind, entity_id)
    if not outcome.success:
        return Ack.from_outcome(outcome)

    result = db.execute(
        delete(Comment).where(
            Comment.id == comment_id,
            Comment.entity_kind == kind.value,
            Comment.entity_id == entity_id,
        )
    )
    db.commit()
    return Ack.of(result.rowcount)


def purge_comments(db: Session, kind: EntityKind, entity_ids: Iterable[int]) -> None:
    """Supprime les commentaires d'entités supprimées. Pas de commit."""
    ids = list(entity_ids)
    if not ids:
        return
    db.execute(
        delete(Comment).where(Comment.entity_kind == kind.value, Comment.entity_id.in_(ids))
    )


def _find(db: Session, kind: EntityKind, entity_id: int, comment_id: int):
    return db.execute(
        select(Comment).where(
            Comment.id == comment_id,
            Comment.entity_kind == kind.value,
            Comment.entity_id == entity_id,
        )
    ).scalar()


def _to_response(comment: Comment, max_length: int = 0) -> CommentResponse:
    content = comment.content
    if max_length > 0 and len(content) > max_length:
        content = content[:max_length] + ELLIPSIS
    return CommentResponse(
        id=comment.id,
        created_at=comment.created_at,
        edited_at=comment.edited_at,
        content=content,
    )
