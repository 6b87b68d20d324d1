"""
Modelo de postulante - versión SQLModel

El RUT no es único: un mismo RUT puede repetirse dentro de una postulación
"""
from typing import Optional, List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column as SAColumn, String, ForeignKey

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse

if TYPE_CHECKING:
    from .posting import Posting
    from .document import ApplicantDocument


# ==================== Campos base ====================

class ApplicantBase(SQLModelBase):
    """Campos base del postulante"""
    national_id: str = Field(..., min_length=1, max_length=20, index=True, description="RUT")
    names: str = Field(..., min_length=1, max_length=100, description="Nombres")
    paternal_surname: str = Field(..., min_length=1, max_length=100, description="Apellido paterno")
    maternal_surname: Optional[str] = Field(None, max_length=100, description="Apellido materno")
    email: Optional[str] = Field(None, max_length=150, index=True, description="Correo electrónico")
    phone: Optional[str] = Field(None, max_length=30, description="Teléfono")


# ==================== Modelo de tabla ====================

class Applicant(ApplicantBase, TimestampMixin, IDMixin, table=True):
    """Tabla de postulantes"""
    __tablename__ = "applicants"

    # Clave foránea
    posting_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("postings.id", ondelete="CASCADE"), index=True, nullable=False),
        description="ID de la postulación"
    )

    # Relaciones
    posting: Optional["Posting"] = Relationship(back_populates="applicants")
    documents: List["ApplicantDocument"] = Relationship(
        back_populates="applicant",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "ApplicantDocument.created_at",
        }
    )

    def __repr__(self) -> str:
        return f"<Applicant(id={self.id}, national_id={self.national_id})>"


# ==================== Schema de solicitud ====================

class ApplicantCreate(ApplicantBase):
    """Crear postulante"""
    posting_id: str = Field(..., description="ID de la postulación")


class ApplicantUpdate(SQLModelBase):
    """Actualizar postulante - todos los campos opcionales"""
    posting_id: Optional[str] = Field(None, description="Trasladar a otra postulación")
    national_id: Optional[str] = Field(None, min_length=1, max_length=20)
    names: Optional[str] = Field(None, min_length=1, max_length=100)
    paternal_surname: Optional[str] = Field(None, min_length=1, max_length=100)
    maternal_surname: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=150)
    phone: Optional[str] = Field(None, max_length=30)


# ==================== Schema de respuesta ====================

class ApplicantResponse(TimestampResponse):
    """Detalle del postulante"""
    posting_id: str
    national_id: str
    names: str
    paternal_surname: str
    maternal_surname: Optional[str]
    email: Optional[str]
    phone: Optional[str]

    # Información relacionada
    posting_title: Optional[str] = None
    document_count: int = 0


class ApplicantListResponse(TimestampResponse):
    """Elemento del listado de postulantes"""
    posting_id: str
    national_id: str
    names: str
    paternal_surname: str
    posting_title: Optional[str] = None
