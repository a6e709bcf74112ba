"""
Identification de l'enseignant à l'origine de la requête.

L'authentification (mot de passe, OpenID, session) est faite en amont ;
l'identifiant de l'enseignant arrive dans l'en-tête settings.TEACHER_HEADER.
Un compte inconnu ou non vérifié n'atteint jamais le guard de propriété.
"""

import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tutorplan.config import settings
from tutorplan.database import get_db
from tutorplan.models.teacher import Teacher

logger = logging.getLogger(__name__)


def get_current_teacher_id(request: Request, db: Session = Depends(get_db)) -> int:
    """Dépendance FastAPI : retourne l'ID de l'enseignant authentifié."""
    raw = request.headers.get(settings.TEACHER_HEADER)
    if not raw:
        raise HTTPException(status_code=401, detail="Enseignant non identifié.")
    try:
        teacher_id = int(raw)
    except ValueError:
        raise HTTPException(status_code=401, detail="Identifiant d'enseignant invalide.")

    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        logger.warning("Enseignant inconnu : %s", teacher_id)
        raise HTTPException(status_code=403, detail="Compte enseignant inconnu.")
    if settings.REQUIRE_VERIFIED_TEACHER and not teacher.is_verified:
        logger.warning("Enseignant non vérifié : %s", teacher_id)
        raise HTTPException(status_code=403, detail="Compte enseignant non vérifié.")
    return teacher_id
