"""
Schémas Pydantic pour les écoles.
"""

import re
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator

from tutorplan.schemas.coordinate import CoordinateItem, unique_types

COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class SchoolForm(BaseModel):
    """Création ou modification d'une école."""
    name: str
    color: str
    hourly_rate: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    coordinates: List[CoordinateItem] = []

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de l'école ne peut pas être vide.")
        if len(v.strip()) > 80:
            raise ValueError("Le nom de l'école ne peut pas dépasser 80 caractères.")
        return v.strip()

    @field_validator("color")
    @classmethod
    def valid_color(cls, v: str) -> str:
        if not COLOR_PATTERN.match(v.strip()):
            raise ValueError("La couleur doit être au format #RRGGBB.")
        return v.strip()

    @field_validator("hourly_rate")
    @classmethod
    def rate_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Le taux horaire ne peut pas être négatif.")
        return v

    @field_validator("coordinates")
    @classmethod
    def no_duplicate_type(cls, v: List[CoordinateItem]) -> List[CoordinateItem]:
        return unique_types(v)


class SchoolSummary(BaseModel):
    id: int
    name: str
    color: str
    hourly_rate: Decimal

    model_config = {"from_attributes": True}


class SchoolStudent(BaseModel):
    """Élève tel qu'affiché dans le détail d'une école, avec ses heures."""
    id: int
    name: str
    subject: str
    disabled: bool
    hours: Decimal


class SchoolDetails(SchoolSummary):
    coordinates: List[CoordinateItem]
    students: List[SchoolStudent]
    total_hours: Decimal
    amount: Decimal
