"""
Rutas de la API v1
"""
from . import postings, applicants, documents

__all__ = [
    "postings",
    "applicants",
    "documents",
]
