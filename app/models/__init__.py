"""
Módulo de modelos SQLModel

SQLModel unifica el modelo ORM y el Schema de Pydantic
"""
from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse
from .posting import (
    Posting, PostingStatus, PostingCreate, PostingUpdate,
    PostingResponse, PostingListResponse,
)
from .applicant import (
    Applicant, ApplicantCreate, ApplicantUpdate,
    ApplicantResponse, ApplicantListResponse,
)
from .document import (
    ApplicantDocument, DocumentCreate, DocumentResponse, PDF_MEDIA_TYPE,
)

__all__ = [
    # Base
    "SQLModelBase",
    "TimestampMixin",
    "IDMixin",
    "TimestampResponse",
    # Posting
    "Posting",
    "PostingStatus",
    "PostingCreate",
    "PostingUpdate",
    "PostingResponse",
    "PostingListResponse",
    # Applicant
    "Applicant",
    "ApplicantCreate",
    "ApplicantUpdate",
    "ApplicantResponse",
    "ApplicantListResponse",
    # Document
    "ApplicantDocument",
    "DocumentCreate",
    "DocumentResponse",
    "PDF_MEDIA_TYPE",
]
