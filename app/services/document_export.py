"""
Exportación masiva de documentos de postulantes

Estructura del ZIP generado:

    Postulaciones{YYYYMMDD}.zip
    └── {cargo}.zip                            (una entrada por postulación)
        └── {nombres}_{apellido}_{rut}.zip     (una entrada por RUT)
            └── documento_1.pdf ...            (una entrada por documento)

Cada nivel es un ZIP completo que se agrega como entrada binaria del nivel
superior. Los postulantes se agrupan por RUT, no por ID: varios registros con
el mismo RUT dentro de una postulación forman un solo ZIP.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import date, datetime, timezone
from functools import partial
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NoDocumentsFoundError
from app.crud import applicant_crud
from app.models.applicant import Applicant
from app.models.document import ApplicantDocument, PDF_MEDIA_TYPE
from .archive import ArchiveBuilder

ApplicantLoader = Callable[[str], Awaitable[List[Applicant]]]


@dataclass
class PackagedArchive:
    """ZIP ya finalizado de un nivel de la exportación"""
    name: str
    content: bytes
    entry_count: int
    document_count: int


# ================= Nombres =================

def document_entry_name(document: ApplicantDocument, position: int) -> str:
    """
    Nombre del documento dentro del ZIP del postulante

    Usa el nombre original; si no existe, documento_{posición}.{pdf|bin}.
    La posición es 1-based dentro de la secuencia completa del grupo.
    """
    if document.filename:
        return document.filename
    extension = "pdf" if document.media_type == PDF_MEDIA_TYPE else "bin"
    return f"documento_{position}.{extension}"


def applicant_label(applicant: Applicant) -> str:
    """nombres_apellidoPaterno_rut"""
    return f"{applicant.names}_{applicant.paternal_surname}_{applicant.national_id}"


def posting_display_name(posting_id: str, applicants: Sequence[Applicant]) -> str:
    """Cargo de la postulación, o Postulacion_{id} si no tiene"""
    posting = getattr(applicants[0], "posting", None) if applicants else None
    title = posting.title if posting is not None else None
    return title or f"Postulacion_{posting_id}"


def build_export_filename(today: Optional[date] = None) -> str:
    """Nombre del ZIP principal: Postulaciones{YYYYMMDD}.zip"""
    today = today or datetime.now(timezone.utc).date()
    return f"{settings.export_filename_prefix}{today:%Y%m%d}.zip"


# ================= Agrupación =================

def group_by_national_id(applicants: Sequence[Applicant]) -> Dict[str, List[Applicant]]:
    """Agrupa por RUT respetando el orden de primera aparición"""
    groups: Dict[str, List[Applicant]] = {}
    for applicant in applicants:
        groups.setdefault(applicant.national_id, []).append(applicant)
    return groups


def count_exportable_documents(applicants: Sequence[Applicant]) -> int:
    """Documentos con contenido entre todos los postulantes"""
    return sum(
        1
        for applicant in applicants
        for document in applicant.documents
        if document.content
    )


# ================= Empaquetado =================

async def package_applicant(
    documents: Sequence[ApplicantDocument],
    label: str,
) -> PackagedArchive:
    """
    ZIP con los documentos de un grupo de RUT.

    Los documentos sin contenido o con base64 inválido se omiten. Si no queda
    ninguno se devuelve igualmente un ZIP vacío.
    """
    added = 0
    async with ArchiveBuilder.open(label) as archive:
        for position, document in enumerate(documents, start=1):
            if not document.content:
                logger.warning(f"El documento {document.id} no tiene contenido")
                continue

            try:
                data = base64.b64decode(document.content, validate=True)
            except (binascii.Error, ValueError) as exc:
                logger.error(f"Error al procesar documento {document.id}: {exc}")
                continue

            entry_name = archive.add_entry(document_entry_name(document, position), data)
            logger.debug(f"Agregando documento: {entry_name} ({len(data)} bytes)")
            added += 1

        if added == 0:
            logger.warning(f"No se agregaron documentos para el postulante {label}")

        logger.info(f"Se agregaron {added} de {len(documents)} documentos al ZIP del postulante {label}")
        content = await archive.finalize()

    return PackagedArchive(name=f"{label}.zip", content=content, entry_count=added, document_count=added)


async def package_posting(
    applicants: Sequence[Applicant],
    posting_name: str,
) -> PackagedArchive:
    """
    ZIP de una postulación: un ZIP interno por RUT.

    Un error en un grupo se registra y el grupo se omite; nunca interrumpe
    al resto de la postulación.
    """
    groups = group_by_national_id(applicants)
    logger.info(f"Postulantes únicos por RUT en '{posting_name}': {len(groups)}")

    exported_documents = 0
    async with ArchiveBuilder.open(posting_name) as archive:
        for national_id, records in groups.items():
            try:
                label = applicant_label(records[0])
                documents = [document for record in records for document in record.documents]
                logger.info(f"Postulante {label}: {len(documents)} documentos")

                if not documents:
                    continue

                packaged = await package_applicant(documents, label)
                if packaged.entry_count == 0:
                    continue

                archive.add_entry(packaged.name, packaged.content)
                exported_documents += packaged.document_count
            except Exception:
                logger.exception(f"Error al procesar postulante con RUT {national_id}")

        content = await archive.finalize()

    return PackagedArchive(
        name=f"{posting_name}.zip",
        content=content,
        entry_count=archive.entry_count,
        document_count=exported_documents,
    )


# ================= Orquestador =================

class DocumentExportService:
    """
    Exportación masiva de documentos por postulación.

    Procesa las postulaciones en orden y de a una; la carga de postulantes
    se inyecta para no depender de una sesión concreta.
    """

    def __init__(self, load_applicants: ApplicantLoader):
        self._load_applicants = load_applicants

    @staticmethod
    def _deduplicate(posting_ids: Sequence[str]) -> List[str]:
        unique_ids = list(dict.fromkeys(posting_ids))
        if len(unique_ids) != len(posting_ids):
            repeated = sorted({pid for pid in posting_ids if posting_ids.count(pid) > 1})
            logger.warning(f"IDs de postulación repetidos, se procesan una sola vez: {', '.join(repeated)}")
        return unique_ids

    async def export_documents(self, posting_ids: Sequence[str]) -> bytes:
        """
        ZIP principal con un ZIP por postulación que tenga documentos

        Raises:
            NoDocumentsFoundError: ninguna postulación tiene documentos
        """
        unique_ids = self._deduplicate(list(posting_ids))
        logger.info(f"Descargando documentos para postulaciones IDs: {', '.join(unique_ids)}")

        documents_found = 0
        documents_exported = 0
        postings_exported = 0

        async with ArchiveBuilder.open(settings.export_filename_prefix) as archive:
            for posting_id in unique_ids:
                logger.info(f"=== Procesando postulación ID: {posting_id} ===")
                applicants = await self._load_applicants(posting_id)

                if not applicants:
                    logger.warning(f"No se encontraron postulantes para la postulación {posting_id}")
                    continue

                posting_documents = count_exportable_documents(applicants)
                documents_found += posting_documents
                logger.info(
                    f"Postulación {posting_id}: {len(applicants)} postulantes, {posting_documents} documentos"
                )

                if posting_documents == 0:
                    logger.warning(f"No se encontraron documentos para los postulantes de la postulación {posting_id}")
                    continue

                posting_name = posting_display_name(posting_id, applicants)
                packaged = await package_posting(applicants, posting_name)
                if packaged.entry_count == 0:
                    logger.warning(f"La postulación '{posting_name}' no generó ningún ZIP de postulante")
                    continue

                entry_name = archive.add_entry(packaged.name, packaged.content)
                documents_exported += packaged.document_count
                postings_exported += 1
                logger.info(f"ZIP de postulación agregado: {entry_name}")

            logger.info(
                f"Resumen exportación: {documents_found} documentos encontrados, "
                f"{documents_exported} exportados, {postings_exported} postulaciones"
            )

            # Sin documentos el archivo principal se descarta al salir del bloque
            if documents_found == 0:
                raise NoDocumentsFoundError(data={"ids": unique_ids})
            if documents_exported == 0:
                raise NoDocumentsFoundError(
                    "No se pudo exportar ningún documento de las postulaciones solicitadas",
                    data={"ids": unique_ids},
                )

            return await archive.finalize()


def get_document_export_service(db: AsyncSession) -> DocumentExportService:
    """Servicio de exportación ligado a una sesión de base de datos"""
    return DocumentExportService(partial(applicant_crud.get_by_posting_with_documents, db))
