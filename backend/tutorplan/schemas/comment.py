"""
Schémas Pydantic pour les commentaires (écoles, élèves, leçons).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class CommentForm(BaseModel):
    """Sans id → création ; avec id → modification du commentaire existant."""
    id: Optional[int] = None
    content: str

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le commentaire ne peut pas être vide.")
        return v.strip()


class CommentResponse(BaseModel):
    id: int
    created_at: datetime
    edited_at: Optional[datetime]
    content: str

    model_config = {"from_attributes": True}


class CommentsPage(BaseModel):
    offset: int
    count: int
    more: bool            # True s'il reste des commentaires après cette page
    comments: List[CommentResponse]
