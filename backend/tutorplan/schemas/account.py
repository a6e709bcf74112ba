"""
Schéma Pydantic du profil de compte enseignant.
"""

from typing import Optional

from pydantic import BaseModel


class AccountProfile(BaseModel):
    id: int
    first_name: Optional[str]
    last_name: Optional[str]
    email: str
    administrator: bool
    school_count: int
    student_count: int
    lesson_count: int
