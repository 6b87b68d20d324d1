"""
Módulo de configuración de la aplicación

Usa pydantic-settings para gestionar variables de entorno y configuración
"""
from functools import lru_cache
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import json

# Directorio raíz del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Clase de configuración de la aplicación"""

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Configuración base
    app_name: str = "Postulaciones-API"
    app_env: str = "development"
    debug: bool = True

    # Base de datos
    database_url: str = f"sqlite+aiosqlite:///{BASE_DIR / 'data' / 'postulaciones.db'}"

    # CORS
    cors_origins: List[str] = ["*"]

    # Exportación de documentos
    export_compression_level: int = Field(9, ge=0, le=9)
    export_filename_prefix: str = "Postulaciones"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_path(cls, v):
        if isinstance(v, str) and "./data/" in v:
            return v.replace("./data/", str(BASE_DIR / "data") + "/")
        return v


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración (singleton)"""
    return Settings()


# Instancia global de configuración
settings = get_settings()
