"""
Router pour le profil du compte enseignant.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tutorplan.database import get_db
from tutorplan.schemas.account import AccountProfile
from tutorplan.security import get_current_teacher_id
from tutorplan.services import account_service

router = APIRouter(prefix="/api/v1/account", tags=["Compte"])


@router.get("/profile", response_model=AccountProfile, summary="Profil de l'enseignant connecté")
def get_profile(teacher_id: int = Depends(get_current_teacher_id), db: Session = Depends(get_db)):
    """Identité de l'enseignant et nombre d'écoles, d'élèves et de leçons."""
    profile = account_service.get_profile(db, teacher_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Compte introuvable.")
    return profile
