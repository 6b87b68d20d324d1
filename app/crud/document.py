"""
CRUD de documentos del postulante
"""
from typing import List, Dict
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.document import ApplicantDocument, DocumentCreate
from .base import CRUDBase


class CRUDDocument(CRUDBase[ApplicantDocument]):
    """Operaciones CRUD de documentos"""

    async def get_by_applicant(
        self,
        db: AsyncSession,
        applicant_id: str
    ) -> List[ApplicantDocument]:
        """Documentos de un postulante, en orden de carga"""
        result = await db.execute(
            select(self.model)
            .where(self.model.applicant_id == applicant_id)
            .order_by(self.model.created_at.asc())
        )
        return list(result.scalars().all())

    async def count_by_applicants(
        self,
        db: AsyncSession,
        applicant_ids: List[str]
    ) -> Dict[str, int]:
        """Cantidad de documentos por postulante"""
        if not applicant_ids:
            return {}
        result = await db.execute(
            select(self.model.applicant_id, func.count(self.model.id))
            .where(self.model.applicant_id.in_(applicant_ids))
            .group_by(self.model.applicant_id)
        )
        counts = {applicant_id: count for applicant_id, count in result.all()}
        return {applicant_id: counts.get(applicant_id, 0) for applicant_id in applicant_ids}

    async def create_document(
        self,
        db: AsyncSession,
        *,
        obj_in: DocumentCreate
    ) -> ApplicantDocument:
        """Registra un documento"""
        return await self.create(db, obj_in=obj_in.model_dump())


document_crud = CRUDDocument(ApplicantDocument)
