"""
Modèle SQLAlchemy pour les leçons.

Une leçon est stockée comme une date + deux heures (début, fin) : elle ne peut
donc pas chevaucher minuit. La colonne version sert au contrôle de concurrence
optimiste lors des déplacements (voir services/lesson_mutator.py).
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Time, func

from tutorplan.database import Base


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    location = Column(String(200), nullable=True)
    version = Column(Integer, nullable=False, default=1)      # Incrémenté à chaque écriture de plage
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
