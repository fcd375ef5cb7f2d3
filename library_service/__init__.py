"""Servicio de librería: API REST de autores y libros (FastAPI + SQLAlchemy)."""
