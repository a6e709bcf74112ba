"""
Point d'entrée principal de l'API Tutorplan.
Démarrage : uvicorn tutorplan.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import tutorplan.models  # noqa: F401  enregistre tous les modèles dans Base.metadata avant les routers
from tutorplan.config import settings
from tutorplan.database import Base, engine
from tutorplan.routers import account, annotations, lessons, schools, students

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie : crée le schéma en développement si demandé."""
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Schéma de base de données créé (AUTO_CREATE_TABLES).")
    logger.info("Tutorplan API démarrée (env=%s).", settings.ENV)
    yield
    logger.info("Tutorplan API arrêtée.")


app = FastAPI(
    title="Tutorplan API",
    description="API de planification de cours particuliers : écoles, élèves, leçons et heures facturées",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : autorise localhost en développement (à restreindre en production via CORS_ORIGIN_REGEX).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", settings.TEACHER_HEADER],
)


app.include_router(schools.router)
app.include_router(students.router)
app.include_router(lessons.router)
app.include_router(annotations.router)
app.include_router(account.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées (BDD indisponible, données corrompues)
    pour garantir une réponse 500 qui passe par CORSMiddleware.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Tutorplan API", "version": "0.1.0"}
