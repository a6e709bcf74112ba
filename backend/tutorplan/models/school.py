"""
Modèle SQLAlchemy pour les écoles (premier niveau sous l'enseignant).
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint, func

from tutorplan.database import Base


class School(Base):
    __tablename__ = "schools"
    __table_args__ = (
        UniqueConstraint("teacher_id", "name", name="uq_schools_teacher_name"),
        CheckConstraint("hourly_rate >= 0", name="ck_schools_hourly_rate_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(80), nullable=False)
    color = Column(String(7), nullable=False)                 # Ex: "#1a73e8"
    hourly_rate = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
