"""
Tests de la construction du moteur selon l'URL configurée.
"""

from sqlalchemy import text

from tutorplan.database import build_engine, is_sqlite


def test_is_sqlite():
    assert is_sqlite("sqlite://") is True
    assert is_sqlite("postgresql://tutorplan@localhost/tutorplan") is False


def test_build_engine_sqlite_active_les_cles_etrangeres():
    engine = build_engine("sqlite://")
    try:
        with engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
    finally:
        engine.dispose()
