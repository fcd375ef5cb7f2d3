import os

# Base de datos en memoria compartida; debe fijarse antes de importar la app
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from library_service.database import Base, SessionLocal, engine
import library_service.main  # noqa: F401  crea la app y las tablas


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
