"""
API de documentos del postulante
"""
import base64
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.response import success_response, DictResponse, ResponseModel, MessageResponse
from app.core.exceptions import NotFoundException
from app.crud import applicant_crud, document_crud
from app.models.document import DocumentCreate, DocumentResponse

router = APIRouter()


@router.get("", summary="Documentos de un postulante", response_model=DictResponse)
async def get_documents(
    applicant_id: str = Query(..., description="ID del postulante"),
    db: AsyncSession = Depends(get_db),
):
    """
    Metadatos de los documentos de un postulante, en orden de carga
    """
    documents = await document_crud.get_by_applicant(db, applicant_id)
    items = [DocumentResponse.model_validate(d).model_dump() for d in documents]
    return success_response(data={"items": items, "total": len(items)})


@router.post("", summary="Subir documento", response_model=ResponseModel[DocumentResponse])
async def create_document(
    data: DocumentCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Registra un documento (contenido en base64) para un postulante
    """
    if not await applicant_crud.exists(db, data.applicant_id):
        raise NotFoundException("Postulante no encontrado")

    document = await document_crud.create_document(db, obj_in=data)
    return success_response(
        data=DocumentResponse.model_validate(document).model_dump(),
        message="Documento cargado exitosamente"
    )


@router.get("/{document_id}", summary="Detalle de documento", response_model=ResponseModel[DocumentResponse])
async def get_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Metadatos de un documento
    """
    document = await document_crud.get(db, document_id)
    if not document:
        raise NotFoundException("Documento no encontrado")

    return success_response(data=DocumentResponse.model_validate(document).model_dump())


@router.get("/{document_id}/download", summary="Descargar documento")
async def download_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Contenido binario del documento con su tipo MIME declarado
    """
    document = await document_crud.get(db, document_id)
    if not document or not document.content:
        raise NotFoundException("Documento no encontrado")

    filename = document.filename or f"documento_{document.id}"
    return Response(
        content=base64.b64decode(document.content),
        media_type=document.media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.delete("/{document_id}", summary="Eliminar documento", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Elimina un documento
    """
    deleted = await document_crud.delete(db, id=document_id)
    if not deleted:
        raise NotFoundException("Documento no encontrado")

    return success_response(message="Documento eliminado exitosamente")
