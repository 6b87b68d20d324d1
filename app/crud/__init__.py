"""
Módulo de operaciones CRUD
"""
from .posting import posting_crud
from .applicant import applicant_crud
from .document import document_crud

__all__ = [
    "posting_crud",
    "applicant_crud",
    "document_crud",
]
