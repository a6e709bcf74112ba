"""
Modèle SQLAlchemy pour les commentaires attachés à une école, un élève ou une leçon.
Clé logique : (entity_kind, entity_id), pas de FK, la propriété est vérifiée par le guard.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from tutorplan.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_kind = Column(String(20), nullable=False, index=True)  # SCHOOL, STUDENT, LESSON
    entity_id = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    edited_at = Column(DateTime, nullable=True)                  # NULL = jamais modifié
