"""
Modelo de documento del postulante - versión SQLModel

El contenido binario se guarda como texto base64
"""
import base64
import binascii
from typing import Optional, TYPE_CHECKING
from pydantic import field_validator
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column as SAColumn, String, Text, ForeignKey

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse

if TYPE_CHECKING:
    from .applicant import Applicant


PDF_MEDIA_TYPE = "application/pdf"


# ==================== Modelo de tabla ====================

class ApplicantDocument(TimestampMixin, IDMixin, SQLModel, table=True):
    """Tabla de documentos del postulante"""
    __tablename__ = "applicant_documents"

    # Clave foránea
    applicant_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("applicants.id", ondelete="CASCADE"), index=True, nullable=False),
        description="ID del postulante"
    )

    content: Optional[str] = Field(default=None, sa_column=SAColumn(Text, nullable=True), description="Contenido en base64")
    media_type: str = Field(PDF_MEDIA_TYPE, max_length=100, description="Tipo MIME declarado")
    filename: Optional[str] = Field(None, max_length=255, description="Nombre original del archivo")

    # Relaciones
    applicant: Optional["Applicant"] = Relationship(back_populates="documents")

    @property
    def size(self) -> int:
        """Tamaño aproximado en bytes del contenido decodificado"""
        if not self.content:
            return 0
        padding = self.content.count("=", -2)
        return len(self.content) * 3 // 4 - padding

    def __repr__(self) -> str:
        return f"<ApplicantDocument(id={self.id}, filename={self.filename})>"


# ==================== Schema de solicitud ====================

class DocumentCreate(SQLModelBase):
    """Subir documento"""
    applicant_id: str = Field(..., description="ID del postulante")
    content: str = Field(..., description="Contenido en base64")
    media_type: str = Field(PDF_MEDIA_TYPE, max_length=100, description="Tipo MIME")
    filename: Optional[str] = Field(None, max_length=255, description="Nombre original")

    @field_validator("content")
    @classmethod
    def validate_base64(cls, v: str) -> str:
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("El contenido no es base64 válido")
        return v


# ==================== Schema de respuesta ====================

class DocumentResponse(TimestampResponse):
    """Metadatos del documento (sin contenido)"""
    applicant_id: str
    media_type: str
    filename: Optional[str]
    size: int = 0
