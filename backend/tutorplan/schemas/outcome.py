"""
Schémas Pydantic des acquittements renvoyés par les endpoints d'écriture.
"""

from pydantic import BaseModel


class AckResponse(BaseModel):
    success: bool
    count: int


class IdResponse(BaseModel):
    success: bool
    id: int
