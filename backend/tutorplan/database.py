"""
Moteur SQLAlchemy, fabrique de sessions et dépendance FastAPI.

PostgreSQL en production. Une URL sqlite:// est acceptée pour le développement
local : les clés étrangères y sont activées à chaque connexion, sans quoi les
suppressions en cascade école → élèves → leçons ne seraient pas appliquées.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tutorplan.config import settings


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Exécute PRAGMA foreign_keys=ON sur chaque nouvelle connexion SQLite."""

    @event.listens_for(target, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs) -> Engine:
    if not is_sqlite(url):
        return create_engine(url, pool_pre_ping=True, **kwargs)
    target = create_engine(url, connect_args={"check_same_thread": False}, **kwargs)
    enable_sqlite_foreign_keys(target)
    return target


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Une session par requête, fermée après la réponse."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
