"""
CRUD de postulantes
"""
from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.applicant import Applicant, ApplicantCreate, ApplicantUpdate
from .base import CRUDBase


class CRUDApplicant(CRUDBase[Applicant]):
    """Operaciones CRUD de postulantes"""

    async def get_detail(self, db: AsyncSession, id: str) -> Optional[Applicant]:
        """Postulante con postulación y documentos cargados"""
        result = await db.execute(
            select(self.model)
            .options(
                selectinload(self.model.posting),
                selectinload(self.model.documents),
            )
            .where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[Applicant]:
        """Listado de postulantes (con postulación precargada)"""
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.posting))
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_posting(
        self,
        db: AsyncSession,
        posting_id: str,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[Applicant]:
        """Postulantes de una postulación"""
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.posting))
            .where(self.model.posting_id == posting_id)
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_posting(self, db: AsyncSession, posting_id: str) -> int:
        """Cantidad de postulantes de una postulación"""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.posting_id == posting_id)
        )
        return result.scalar() or 0

    async def get_by_posting_with_documents(
        self,
        db: AsyncSession,
        posting_id: str
    ) -> List[Applicant]:
        """
        Todos los postulantes de una postulación para la exportación

        Carga documentos y postulación; el orden es el de registro.
        """
        result = await db.execute(
            select(self.model)
            .options(
                selectinload(self.model.documents),
                selectinload(self.model.posting),
            )
            .where(self.model.posting_id == posting_id)
            .order_by(self.model.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_national_id(
        self,
        db: AsyncSession,
        national_id: str
    ) -> List[Applicant]:
        """Postulantes con un RUT (puede haber varios)"""
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.posting))
            .where(self.model.national_id == national_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_email(self, db: AsyncSession, email: str) -> List[Applicant]:
        """Postulantes con un correo (puede haber varios)"""
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.posting))
            .where(self.model.email == email)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def exists_in_posting(
        self,
        db: AsyncSession,
        posting_id: str,
        national_id: str
    ) -> bool:
        """¿Ya existe una postulación con este RUT en esta postulación?"""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(
                self.model.posting_id == posting_id,
                self.model.national_id == national_id,
            )
        )
        return (result.scalar() or 0) > 0

    async def create_applicant(
        self,
        db: AsyncSession,
        *,
        obj_in: ApplicantCreate
    ) -> Applicant:
        """Crea un postulante"""
        return await self.create(db, obj_in=obj_in.model_dump())

    async def update_applicant(
        self,
        db: AsyncSession,
        *,
        db_obj: Applicant,
        obj_in: ApplicantUpdate
    ) -> Applicant:
        """Actualiza un postulante"""
        update_data = obj_in.model_dump(exclude_unset=True)
        return await self.update(db, db_obj=db_obj, obj_in=update_data)


applicant_crud = CRUDApplicant(Applicant)
