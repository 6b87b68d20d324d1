"""
Constructor de archivos ZIP en memoria

Se usa en los tres niveles de la exportación (documentos, postulante,
postulación). Cada instancia es independiente: se abre, se le agregan
entradas y se finaliza una sola vez para obtener los bytes del ZIP.
"""
from __future__ import annotations

import asyncio
import io
import posixpath
import zipfile
import zlib
from typing import Optional, Set

from loguru import logger

from app.core.config import settings
from app.core.exceptions import ArchiveEncodingError

DEFAULT_ENTRY_NAME = "archivo"


def sanitize_entry_name(name: str) -> str:
    """Entrada plana: sin separadores de ruta ni espacios en los extremos."""
    cleaned = name.replace("/", "-").replace("\\", "-").strip()
    return cleaned or DEFAULT_ENTRY_NAME


class ArchiveBuilder:
    """
    ZIP deflate construido completamente en memoria.

    Uso:
        async with ArchiveBuilder.open("postulacion") as archive:
            archive.add_entry("documento_1.pdf", data)
            content = await archive.finalize()

    Al salir del bloque sin haber finalizado (por ejemplo ante una excepción)
    el archivo se descarta y se liberan el ZIP y su buffer.

    Los nombres de entrada son únicos dentro de un archivo: un nombre repetido
    se renombra a "nombre (2).ext", "nombre (3).ext", etc.
    """

    def __init__(self, name: str = "", compression_level: Optional[int] = None):
        self.name = name
        level = settings.export_compression_level if compression_level is None else compression_level
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(
            self._buffer,
            mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=level,
        )
        self._names: Set[str] = set()
        self._finalized = False

    @classmethod
    def open(cls, name: str = "", compression_level: Optional[int] = None) -> "ArchiveBuilder":
        """Abre un archivo nuevo"""
        return cls(name=name, compression_level=compression_level)

    async def __aenter__(self) -> "ArchiveBuilder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self._finalized:
            self.discard()

    @property
    def entry_count(self) -> int:
        return len(self._names)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _unique_name(self, name: str) -> str:
        if name not in self._names:
            return name
        stem, ext = posixpath.splitext(name)
        counter = 2
        while f"{stem} ({counter}){ext}" in self._names:
            counter += 1
        unique = f"{stem} ({counter}){ext}"
        logger.warning(f"Nombre repetido en '{self.name}': '{name}' se agrega como '{unique}'")
        return unique

    def add_entry(self, name: str, content: bytes) -> str:
        """
        Agrega una entrada binaria al archivo

        Returns:
            Nombre final de la entrada dentro del ZIP
        """
        if self._finalized:
            raise ArchiveEncodingError(f"El archivo '{self.name}' ya fue finalizado")

        entry_name = self._unique_name(sanitize_entry_name(name))
        try:
            self._zip.writestr(entry_name, content)
        except (zipfile.BadZipFile, zlib.error, ValueError, OSError) as exc:
            raise ArchiveEncodingError(
                f"Error al agregar '{entry_name}' al archivo '{self.name}': {exc}"
            ) from exc

        self._names.add(entry_name)
        return entry_name

    def _close(self) -> bytes:
        try:
            self._zip.close()
            return self._buffer.getvalue()
        finally:
            self._buffer.close()

    async def finalize(self) -> bytes:
        """Escribe el directorio central y devuelve los bytes del ZIP"""
        if self._finalized:
            raise ArchiveEncodingError(f"El archivo '{self.name}' ya fue finalizado")
        self._finalized = True

        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, self._close)
        except (zipfile.BadZipFile, zlib.error, ValueError, OSError) as exc:
            raise ArchiveEncodingError(
                f"Error al finalizar el archivo '{self.name}': {exc}"
            ) from exc

        logger.debug(f"ZIP '{self.name}' finalizado: {self.entry_count} entradas, {len(content)} bytes")
        return content

    def discard(self) -> None:
        """Cierra el archivo sin generar bytes; no hace nada si ya está cerrado"""
        if self._finalized:
            return
        self._finalized = True
        try:
            self._zip.close()
        except (zipfile.BadZipFile, zlib.error, ValueError, OSError) as exc:
            logger.warning(f"Error al descartar el archivo '{self.name}': {exc}")
        finally:
            self._buffer.close()
        logger.debug(f"ZIP '{self.name}' descartado con {self.entry_count} entradas")
