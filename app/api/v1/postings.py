"""
API de postulaciones (formularios)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    MessageResponse,
)
from app.core.exceptions import NotFoundException, BadRequestException
from app.crud import posting_crud, applicant_crud
from app.models.posting import (
    PostingStatus,
    PostingCreate,
    PostingUpdate,
    PostingResponse,
    PostingListResponse,
)
from app.services.document_export import build_export_filename, get_document_export_service

router = APIRouter()


class DocumentExportRequest(BaseModel):
    """Descarga masiva de documentos"""
    ids: List[str] = Field(..., min_length=1, description="IDs de las postulaciones")


@router.get("", summary="Listar postulaciones", response_model=PagedResponseModel[PostingListResponse])
async def get_postings(
    page: int = Query(1, ge=1, description="Página"),
    page_size: int = Query(20, ge=1, le=100, description="Elementos por página"),
    status: Optional[PostingStatus] = Query(None, description="Estado"),
    db: AsyncSession = Depends(get_db),
):
    """
    Listado de postulaciones con la cantidad de postulantes de cada una
    """
    skip = (page - 1) * page_size

    if status is not None:
        postings = await posting_crud.get_by_status(db, status, skip=skip, limit=page_size)
        total = await posting_crud.count_by_status(db, status)
    else:
        postings = await posting_crud.get_multi(db, skip=skip, limit=page_size)
        total = await posting_crud.count(db)

    counts = await posting_crud.count_applicants_by_posting(db, [p.id for p in postings])

    items = []
    for p in postings:
        item = PostingListResponse.model_validate(p)
        item.applicant_count = counts.get(p.id, 0)
        items.append(item.model_dump())

    return paged_response(items, total, page, page_size)


@router.post("", summary="Crear postulación", response_model=ResponseModel[PostingResponse])
async def create_posting(
    data: PostingCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Crea una nueva postulación
    """
    if data.end_date < data.start_date:
        raise BadRequestException("La fecha de término no puede ser anterior a la fecha de inicio")

    posting = await posting_crud.create_posting(db, obj_in=data)
    return success_response(
        data=PostingResponse.model_validate(posting).model_dump(),
        message="Postulación creada exitosamente"
    )


@router.post("/export", summary="Descargar documentos de postulaciones")
async def export_documents(
    data: DocumentExportRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Descarga un ZIP con los documentos de los postulantes de cada postulación

    Responde 404 si ninguna de las postulaciones tiene documentos.
    """
    service = get_document_export_service(db)
    content = await service.export_documents(data.ids)
    filename = build_export_filename()

    return Response(
        content=content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{posting_id}", summary="Detalle de postulación", response_model=ResponseModel[PostingResponse])
async def get_posting(
    posting_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Detalle de una postulación
    """
    posting = await posting_crud.get(db, posting_id)
    if not posting:
        raise NotFoundException(f"Postulación con ID {posting_id} no encontrada")

    response = PostingResponse.model_validate(posting)
    response.applicant_count = await applicant_crud.count_by_posting(db, posting_id)

    return success_response(data=response.model_dump())


@router.patch("/{posting_id}", summary="Actualizar postulación", response_model=ResponseModel[PostingResponse])
async def update_posting(
    posting_id: str,
    data: PostingUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Actualiza una postulación
    """
    posting = await posting_crud.get(db, posting_id)
    if not posting:
        raise NotFoundException(f"Postulación con ID {posting_id} no encontrada")

    start_date = data.start_date or posting.start_date
    end_date = data.end_date or posting.end_date
    if end_date < start_date:
        raise BadRequestException("La fecha de término no puede ser anterior a la fecha de inicio")

    posting = await posting_crud.update_posting(db, db_obj=posting, obj_in=data)
    response = PostingResponse.model_validate(posting)
    response.applicant_count = await applicant_crud.count_by_posting(db, posting_id)

    return success_response(
        data=response.model_dump(),
        message="Postulación actualizada exitosamente"
    )


@router.delete("/{posting_id}", summary="Eliminar postulación", response_model=MessageResponse)
async def delete_posting(
    posting_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Elimina una postulación junto con sus postulantes y documentos
    """
    posting = await posting_crud.get(db, posting_id)
    if not posting:
        raise NotFoundException(f"Postulación con ID {posting_id} no encontrada")

    await posting_crud.delete(db, id=posting_id)
    return success_response(message="Postulación eliminada exitosamente")
