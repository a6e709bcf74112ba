"""
Modèle SQLAlchemy pour la table students.
Un élève appartient à exactement une école.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from tutorplan.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    school_id = Column(Integer, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    subject = Column(String(80), nullable=False)
    name = Column(String(80), nullable=False)
    disabled = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
