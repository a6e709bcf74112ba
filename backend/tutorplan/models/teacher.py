"""
Modèle SQLAlchemy pour les enseignants.
Le compte est créé par la couche d'authentification (hors périmètre) ;
ici on ne conserve que ce qui sert à la résolution de propriété et au profil.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from tutorplan.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_administrator = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
