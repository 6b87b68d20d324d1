"""
Módulo base de SQLModel

Define campos comunes y clases mixin
"""
import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class SQLModelBase(SQLModel):
    """
    Configuración base de SQLModel

    Todos los Schema deben heredar de esta clase
    """
    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class TimestampMixin(SQLModel):
    """Mixin de marcas de tiempo - para modelos de tabla"""
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        description="Fecha de creación"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        description="Fecha de actualización"
    )


class IDMixin(SQLModel):
    """Mixin de ID - para modelos de tabla"""
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        description="ID primario"
    )


class TimestampResponse(SQLModelBase):
    """Respuesta base con marcas de tiempo"""
    id: str
    created_at: datetime
    updated_at: datetime
