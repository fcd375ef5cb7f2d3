"""
library_service/main.py

Servicio de Librería (FastAPI) con relación Uno-a-Muchos Autor -> Libros.

- Un autor puede tener varios libros.
- Un libro pertenece siempre a un único autor (FK obligatoria).
- Al borrar un autor se borran sus libros.

Además de los endpoints de autores y libros expone:
- GET /health   -> healthcheck con verificación DB
- GET /metrics  -> métricas Prometheus (ver observability.py)
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import engine, Base
from .observability import setup_observability
from .routers import authors_router, books_router
from . import models  # noqa: F401  registra las tablas en Base.metadata

logger = logging.getLogger("library_service")


def configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )


def create_tables() -> None:
    """Crea authors/books si no existen (en producción usar migraciones)."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tablas authors/books verificadas en %s", engine.url.get_backend_name())
    except SQLAlchemyError as e:
        # Otra réplica puede estar creando las tablas a la vez
        logger.warning("No se pudieron crear las tablas (¿ya existen?): %s", e)


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    create_tables()

    application = FastAPI(
        title=settings.project_name,
        description="Servicio encargado de la gestión de autores y sus libros",
        version=settings.api_version,
    )
    setup_observability(application)

    @application.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """
        Errores del motor (FK inexistente, NOT NULL...) que llegan hasta aquí:
        se registran y se responde un 500 sin detalles internos.
        """
        logger.error("method=%s path=%s database error: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    application.include_router(authors_router)
    application.include_router(books_router)
    application.include_router(_utility_routes())
    return application


def _utility_routes() -> APIRouter:
    router = APIRouter(tags=["utility"])

    @router.get("/")
    def read_root():
        return {
            "service": "Library Service",
            "status": "Online",
            "message": "Bienvenido al sistema de gestión de autores y libros",
        }

    @router.get("/health")
    def health_check():
        """
        Healthcheck simple:
        - Devuelve healthy si puede abrir una conexión y ejecutar SELECT 1.
        - Cualquier fallo (driver, red, credenciales) se informa como unhealthy.
        """
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "connected"}
        except Exception as e:
            logger.warning("Healthcheck fallido: %s", e)
            return {"status": "unhealthy", "error": str(e)}

    return router


app = create_app()
