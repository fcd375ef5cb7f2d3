"""
Configuración leída de variables de entorno.

Valores por defecto pensados para desarrollo local (SQLite). En Docker se
sobreescribe DATABASE_URL con la URL de PostgreSQL.
"""

import os
from dataclasses import dataclass


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    project_name: str = os.getenv("PROJECT_NAME", "Servicio de Librería")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./library.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    sql_echo: bool = _flag("SQL_ECHO")


settings = Settings()
