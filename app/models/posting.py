"""
Modelo de postulación (formulario) - versión SQLModel

Une Model y Schema para reducir la duplicación
"""
from datetime import date
from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse

if TYPE_CHECKING:
    from .applicant import Applicant


class PostingStatus(str, Enum):
    """Estado de la postulación"""
    ACTIVE = "Activo"
    INACTIVE = "Inactivo"


# ==================== Campos base ====================

class PostingBase(SQLModelBase):
    """Campos base de la postulación"""
    title: str = Field(..., min_length=1, max_length=150, description="Cargo", index=True)
    description: Optional[str] = Field(None, description="Descripción del cargo")
    requirements: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Requisitos")
    start_date: date = Field(..., description="Fecha de inicio")
    end_date: date = Field(..., description="Fecha de término")
    status: PostingStatus = Field(PostingStatus.ACTIVE, index=True, description="Estado")


# ==================== Modelo de tabla ====================

class Posting(PostingBase, TimestampMixin, IDMixin, table=True):
    """Tabla de postulaciones"""
    __tablename__ = "postings"

    # Relaciones
    applicants: List["Applicant"] = Relationship(
        back_populates="posting",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    def __repr__(self) -> str:
        return f"<Posting(id={self.id}, title={self.title})>"


# ==================== Schema de solicitud ====================

class PostingCreate(PostingBase):
    """Crear postulación"""
    pass


class PostingUpdate(SQLModelBase):
    """Actualizar postulación - todos los campos opcionales"""
    title: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None
    requirements: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[PostingStatus] = None


# ==================== Schema de respuesta ====================

class PostingResponse(TimestampResponse):
    """Detalle de la postulación"""
    title: str
    description: Optional[str]
    requirements: List[str]
    start_date: date
    end_date: date
    status: PostingStatus
    applicant_count: int = Field(0, description="Cantidad de postulantes")


class PostingListResponse(TimestampResponse):
    """Elemento del listado de postulaciones"""
    title: str
    start_date: date
    end_date: date
    status: PostingStatus
    applicant_count: int = 0
