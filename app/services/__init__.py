"""
Capa de servicios
"""
from .archive import ArchiveBuilder, sanitize_entry_name
from .document_export import (
    DocumentExportService,
    PackagedArchive,
    build_export_filename,
    get_document_export_service,
    package_applicant,
    package_posting,
)

__all__ = [
    "ArchiveBuilder",
    "sanitize_entry_name",
    "DocumentExportService",
    "PackagedArchive",
    "build_export_filename",
    "get_document_export_service",
    "package_applicant",
    "package_posting",
]
