"""
API de postulantes
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    MessageResponse,
    DictResponse,
)
from app.core.exceptions import NotFoundException, ConflictException
from app.crud import applicant_crud, posting_crud, document_crud
from app.models.applicant import (
    ApplicantCreate,
    ApplicantUpdate,
    ApplicantResponse,
    ApplicantListResponse,
)

router = APIRouter()


@router.get("", summary="Listar postulantes", response_model=PagedResponseModel[ApplicantListResponse])
async def get_applicants(
    page: int = Query(1, ge=1, description="Página"),
    page_size: int = Query(20, ge=1, le=100, description="Elementos por página"),
    posting_id: Optional[str] = Query(None, description="Filtrar por postulación"),
    db: AsyncSession = Depends(get_db),
):
    """
    Listado de postulantes, opcionalmente filtrado por postulación
    """
    skip = (page - 1) * page_size

    if posting_id:
        applicants = await applicant_crud.get_by_posting(
            db, posting_id, skip=skip, limit=page_size
        )
        total = await applicant_crud.count_by_posting(db, posting_id)
    else:
        applicants = await applicant_crud.get_multi(db, skip=skip, limit=page_size)
        total = await applicant_crud.count(db)

    items = []
    for a in applicants:
        item = ApplicantListResponse.model_validate(a)
        if a.posting:
            item.posting_title = a.posting.title
        items.append(item.model_dump())

    return paged_response(items, total, page, page_size)


@router.post("", summary="Registrar postulante", response_model=ResponseModel[ApplicantResponse])
async def create_applicant(
    data: ApplicantCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Registra un postulante en una postulación
    """
    posting = await posting_crud.get(db, data.posting_id)
    if not posting:
        raise NotFoundException(f"Postulación con ID {data.posting_id} no encontrada")

    if await applicant_crud.exists_in_posting(db, data.posting_id, data.national_id):
        raise ConflictException("Ya estás postulando a este cargo")

    applicant = await applicant_crud.create_applicant(db, obj_in=data)

    response = ApplicantResponse.model_validate(applicant)
    response.posting_title = posting.title

    return success_response(
        data=response.model_dump(),
        message="Postulante creado exitosamente"
    )


@router.get("/by-national-id/{national_id}", summary="Buscar postulaciones por RUT", response_model=DictResponse)
async def get_applicants_by_national_id(
    national_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Todas las postulaciones registradas con un RUT
    """
    applicants = await applicant_crud.get_by_national_id(db, national_id)
    if not applicants:
        raise NotFoundException("Postulante no encontrado")

    items = []
    for a in applicants:
        item = ApplicantListResponse.model_validate(a)
        if a.posting:
            item.posting_title = a.posting.title
        items.append(item.model_dump())

    return success_response(data={"national_id": national_id, "items": items, "total": len(items)})


@router.get("/by-email/{email}", summary="Buscar postulaciones por correo", response_model=DictResponse)
async def get_applicants_by_email(
    email: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Todas las postulaciones registradas con un correo
    """
    applicants = await applicant_crud.get_by_email(db, email)
    if not applicants:
        raise NotFoundException("Postulante no encontrado")

    items = []
    for a in applicants:
        item = ApplicantListResponse.model_validate(a)
        if a.posting:
            item.posting_title = a.posting.title
        items.append(item.model_dump())

    return success_response(data={"email": email, "items": items, "total": len(items)})


@router.get("/{applicant_id}", summary="Detalle de postulante", response_model=ResponseModel[ApplicantResponse])
async def get_applicant(
    applicant_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Detalle de un postulante con la cantidad de documentos cargados
    """
    applicant = await applicant_crud.get_detail(db, applicant_id)
    if not applicant:
        raise NotFoundException("Postulante no encontrado")

    response = ApplicantResponse.model_validate(applicant)
    if applicant.posting:
        response.posting_title = applicant.posting.title
    response.document_count = len(applicant.documents)

    return success_response(data=response.model_dump())


@router.patch("/{applicant_id}", summary="Actualizar postulante", response_model=ResponseModel[ApplicantResponse])
async def update_applicant(
    applicant_id: str,
    data: ApplicantUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Actualiza los datos de un postulante
    """
    applicant = await applicant_crud.get(db, applicant_id)
    if not applicant:
        raise NotFoundException("Postulante no encontrado")

    posting_id = data.posting_id or applicant.posting_id
    national_id = data.national_id or applicant.national_id

    if posting_id != applicant.posting_id and not await posting_crud.exists(db, posting_id):
        raise NotFoundException(f"Postulación con ID {posting_id} no encontrada")

    # Cambio de RUT o de postulación: no puede chocar con otro registro en la postulación destino
    if (posting_id, national_id) != (applicant.posting_id, applicant.national_id):
        if await applicant_crud.exists_in_posting(db, posting_id, national_id):
            raise ConflictException("Ya estás postulando a este cargo")

    applicant = await applicant_crud.update_applicant(db, db_obj=applicant, obj_in=data)
    posting = await posting_crud.get(db, applicant.posting_id)
    counts = await document_crud.count_by_applicants(db, [applicant.id])

    response = ApplicantResponse.model_validate(applicant)
    if posting:
        response.posting_title = posting.title
    response.document_count = counts.get(applicant.id, 0)

    return success_response(
        data=response.model_dump(),
        message="Postulante actualizado exitosamente"
    )


@router.delete("/{applicant_id}", summary="Eliminar postulante", response_model=MessageResponse)
async def delete_applicant(
    applicant_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Elimina un postulante y sus documentos
    """
    applicant = await applicant_crud.get(db, applicant_id)
    if not applicant:
        raise NotFoundException("Postulante no encontrado")

    await applicant_crud.delete(db, id=applicant_id)
    return success_response(message="Postulante eliminado exitosamente")
