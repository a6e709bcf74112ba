"""
Configuration partagée pour tous les tests.

- client     : client HTTP avec la BDD mockée et l'enseignant courant forcé (tests API)
- db_session : session SQLite en mémoire avec le schéma complet (tests services / repository)
- seeded     : deux enseignants avec chacun école → élève → leçon
"""

import os

# Avant tout import de tutorplan : le moteur est créé à l'import de tutorplan.database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tutorplan.models  # noqa: F401
from tutorplan.database import Base, build_engine, get_db
from tutorplan.main import app
from tutorplan.models.lesson import Lesson
from tutorplan.models.school import School
from tutorplan.models.student import Student
from tutorplan.models.teacher import Teacher
from tutorplan.security import get_current_teacher_id

TEACHER_ID = 1


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée et l'enseignant 1 connecté."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_teacher_id] = lambda: TEACHER_ID
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Session sur une base SQLite en mémoire, clés étrangères activées (cascades)."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def seeded(db_session):
    """
    Enseignant A (vérifié) : école S1 → élève St1 → leçon L1 le 2024-03-01 09:00-10:00
    Enseignant B (vérifié) : école S2 → élève St2 → leçon L2
    """
    teacher_a = Teacher(email="a@tutorplan.test", first_name="Alice", last_name="Martin", is_verified=True)
    teacher_b = Teacher(email="b@tutorplan.test", first_name="Bruno", last_name="Leroy", is_verified=True)
    db_session.add_all([teacher_a, teacher_b])
    db_session.flush()

    school_a = School(teacher_id=teacher_a.id, name="Lycée Hergé", color="#1a73e8", hourly_rate=Decimal("40.00"))
    school_b = School(teacher_id=teacher_b.id, name="Collège Brel", color="#ff0000", hourly_rate=Decimal("35.00"))
    db_session.add_all([school_a, school_b])
    db_session.flush()

    student_a = Student(school_id=school_a.id, subject="Mathématiques", name="Emma")
    student_b = Student(school_id=school_b.id, subject="Physique", name="Louis")
    db_session.add_all([student_a, student_b])
    db_session.flush()

    lesson_a = Lesson(student_id=student_a.id, date=date(2024, 3, 1),
                      start_time=time(9, 0), end_time=time(10, 0), location="Bibliothèque", version=1)
    lesson_b = Lesson(student_id=student_b.id, date=date(2024, 3, 1),
                      start_time=time(14, 0), end_time=time(15, 0), version=1)
    db_session.add_all([lesson_a, lesson_b])
    db_session.commit()

    return SimpleNamespace(
        teacher_a=teacher_a.id, teacher_b=teacher_b.id,
        school_a=school_a.id, school_b=school_b.id,
        student_a=student_a.id, student_b=student_b.id,
        lesson_a=lesson_a.id, lesson_b=lesson_b.id,
    )
