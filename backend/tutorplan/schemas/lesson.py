"""
Schémas Pydantic pour les leçons.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator

from tutorplan.schemas.coordinate import CoordinateItem
from tutorplan.schemas.student import StudentSummary


class LessonForm(BaseModel):
    """
    Création ou modification d'une leçon.
    L'ordre des heures (fin > début) est vérifié par le service, pas ici :
    il produit une erreur métier INVALID_RANGE.
    """
    student_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: Optional[str] = None

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > 200:
            raise ValueError("Le lieu ne peut pas dépasser 200 caractères.")
        return v or None


class LessonChangeRequest(BaseModel):
    """Décalage envoyé par le planning : jours et minutes, positifs ou négatifs."""
    day_delta: int = 0
    minute_delta: int = 0


class LessonSummary(BaseModel):
    id: int
    student: StudentSummary
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: Optional[str]


class LessonStudent(StudentSummary):
    """Élève d'une leçon, avec ses coordonnées et celles de son école."""
    coordinates: List[CoordinateItem]
    school_coordinates: List[CoordinateItem]


class LessonDetails(BaseModel):
    id: int
    student: LessonStudent
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: Optional[str]
    hours: Decimal


class StudentLesson(BaseModel):
    id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: Optional[str]
    hours: Decimal


class StudentLessons(BaseModel):
    """Leçons d'un élève sur le mois contenant `date`, avec le total d'heures."""
    date: dt.date
    lessons: List[StudentLesson]
    hours: Decimal
