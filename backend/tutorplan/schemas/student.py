"""
Schémas Pydantic pour les élèves.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, field_validator

from tutorplan.schemas.coordinate import CoordinateItem, unique_types
from tutorplan.schemas.school import SchoolSummary


class StudentForm(BaseModel):
    """Création ou modification d'un élève."""
    school_id: int
    subject: str
    name: str
    coordinates: List[CoordinateItem] = []

    @field_validator("subject", "name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        if len(v.strip()) > 80:
            raise ValueError("Le champ ne peut pas dépasser 80 caractères.")
        return v.strip()

    @field_validator("coordinates")
    @classmethod
    def no_duplicate_type(cls, v: List[CoordinateItem]) -> List[CoordinateItem]:
        return unique_types(v)


class StudentSummary(BaseModel):
    id: int
    subject: str
    name: str
    school: SchoolSummary
    disabled: bool


class StudentDetails(StudentSummary):
    coordinates: List[CoordinateItem]
    hours: Decimal


class StudentHours(BaseModel):
    student_id: int
    hours: Decimal
