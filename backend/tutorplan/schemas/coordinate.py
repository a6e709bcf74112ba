"""
Schémas Pydantic pour les coordonnées d'une école ou d'un élève.
"""

from typing import List

from pydantic import BaseModel, field_validator

VALID_COORDINATE_TYPES = {"PHONE", "MOBILE", "EMAIL", "WEB", "ADDRESS"}


class CoordinateItem(BaseModel):
    type: str
    value: str

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in VALID_COORDINATE_TYPES:
            raise ValueError(f"Type de coordonnée invalide. Valeurs acceptées : {VALID_COORDINATE_TYPES}")
        return v

    @field_validator("value")
    @classmethod
    def value_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("La valeur ne peut pas être vide.")
        return v.strip()


def unique_types(items: List[CoordinateItem]) -> List[CoordinateItem]:
    """Un même type ne peut apparaître qu'une fois par école ou élève."""
    types = [c.type for c in items]
    if len(types) != len(set(types)):
        raise ValueError("Chaque type de coordonnée ne peut apparaître qu'une fois.")
    return items


class CoordinatesUpdate(BaseModel):
    """Corps de requête : remplace l'ensemble des coordonnées."""
    coordinates: List[CoordinateItem] = []

    @field_validator("coordinates")
    @classmethod
    def no_duplicate_type(cls, v: List[CoordinateItem]) -> List[CoordinateItem]:
        return unique_types(v)
