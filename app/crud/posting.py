"""
CRUD de postulaciones
"""
from typing import Dict, List, Sequence
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.posting import Posting, PostingCreate, PostingUpdate, PostingStatus
from app.models.applicant import Applicant
from .base import CRUDBase


class CRUDPosting(CRUDBase[Posting]):
    """Operaciones CRUD de postulaciones"""

    async def get_by_status(
        self,
        db: AsyncSession,
        status: PostingStatus,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[Posting]:
        """Postulaciones filtradas por estado"""
        result = await db.execute(
            select(self.model)
            .where(self.model.status == status)
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_status(self, db: AsyncSession, status: PostingStatus) -> int:
        """Cantidad de postulaciones en un estado"""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.status == status)
        )
        return result.scalar() or 0

    async def count_applicants_by_posting(
        self,
        db: AsyncSession,
        posting_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Cantidad de postulantes por postulación, en una sola consulta"""
        if not posting_ids:
            return {}
        result = await db.execute(
            select(Applicant.posting_id, func.count(Applicant.id))
            .where(Applicant.posting_id.in_(posting_ids))
            .group_by(Applicant.posting_id)
        )
        counts = {posting_id: count for posting_id, count in result.all()}
        return {posting_id: counts.get(posting_id, 0) for posting_id in posting_ids}

    async def create_posting(
        self,
        db: AsyncSession,
        *,
        obj_in: PostingCreate
    ) -> Posting:
        """Crea una postulación"""
        return await self.create(db, obj_in=obj_in.model_dump())

    async def update_posting(
        self,
        db: AsyncSession,
        *,
        db_obj: Posting,
        obj_in: PostingUpdate
    ) -> Posting:
        """Actualiza una postulación"""
        update_data = obj_in.model_dump(exclude_unset=True)
        return await self.update(db, db_obj=db_obj, obj_in=update_data)


posting_crud = CRUDPosting(Posting)
