from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def _build_engine(url: str):
    """
    Crea el engine según el dialecto.

    - PostgreSQL (psycopg2): configuración por defecto.
    - SQLite: se permite usar la conexión desde otros hilos (TestClient/uvicorn)
      y, si es en memoria, se comparte una única conexión (StaticPool).
    """
    kwargs = {"echo": settings.sql_echo}
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if parsed.get_backend_name() == "sqlite":
        # SQLite no aplica las FOREIGN KEY si no se activa en cada conexión
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = _build_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Aquí se define la base para que models.py la pueda importar
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
