"""
Módulo de rutas de la API
"""
from fastapi import APIRouter

from .v1 import postings, applicants, documents

# Router principal
api_router = APIRouter()

# Registro de rutas por módulo
api_router.include_router(
    postings.router,
    prefix="/postings",
    tags=["Postulaciones"]
)
api_router.include_router(
    applicants.router,
    prefix="/applicants",
    tags=["Postulantes"]
)
api_router.include_router(
    documents.router,
    prefix="/documents",
    tags=["Documentos"]
)
