"""
Modèle SQLAlchemy pour les coordonnées (téléphone, email, site web...) d'une école ou d'un élève.
"""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from tutorplan.database import Base


class Coordinate(Base):
    __tablename__ = "coordinates"
    __table_args__ = (
        UniqueConstraint("entity_kind", "entity_id", "coordinate_type", name="uq_coordinates_entity_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_kind = Column(String(20), nullable=False)      # SCHOOL, STUDENT
    entity_id = Column(Integer, nullable=False)
    coordinate_type = Column(String(20), nullable=False)  # PHONE, MOBILE, EMAIL, WEB, ADDRESS
    value = Column(String(255), nullable=False)
