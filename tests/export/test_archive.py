"""
Pruebas del constructor de ZIP en memoria
"""
import io
import zipfile

import pytest

from app.core.exceptions import ArchiveEncodingError
from app.services.archive import ArchiveBuilder, sanitize_entry_name
from tests.conftest import read_zip


@pytest.mark.asyncio
async def test_finalize_returns_valid_deflated_zip():
    """El resultado es un ZIP válido con compresión deflate"""
    archive = ArchiveBuilder.open("prueba")
    archive.add_entry("documento_1.pdf", b"%PDF-1.4 " + b"a" * 500)
    archive.add_entry("documento_2.bin", b"\x00\x01\x02")

    content = await archive.finalize()

    assert archive.is_finalized
    assert read_zip(content) == {
        "documento_1.pdf": b"%PDF-1.4 " + b"a" * 500,
        "documento_2.bin": b"\x00\x01\x02",
    }
    with zipfile.ZipFile(io.BytesIO(content)) as zf:
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in zf.infolist())
        assert zf.testzip() is None


@pytest.mark.asyncio
async def test_empty_archive_is_valid_zip():
    """Un archivo sin entradas sigue siendo un ZIP válido"""
    archive = ArchiveBuilder.open("vacio")
    content = await archive.finalize()

    assert archive.entry_count == 0
    assert read_zip(content) == {}


@pytest.mark.asyncio
async def test_duplicate_entry_names_are_renamed():
    """Los nombres repetidos no se sobrescriben"""
    archive = ArchiveBuilder.open("repetidos")
    assert archive.add_entry("cv.pdf", b"uno") == "cv.pdf"
    assert archive.add_entry("cv.pdf", b"dos") == "cv (2).pdf"
    assert archive.add_entry("cv.pdf", b"tres") == "cv (3).pdf"

    entries = read_zip(await archive.finalize())
    assert entries == {"cv.pdf": b"uno", "cv (2).pdf": b"dos", "cv (3).pdf": b"tres"}


def test_sanitize_entry_name():
    """Los separadores de ruta se reemplazan para mantener el ZIP plano"""
    assert sanitize_entry_name("Técnico/Administrativo.zip") == "Técnico-Administrativo.zip"
    assert sanitize_entry_name("a\\b") == "a-b"
    assert sanitize_entry_name("   ") == "archivo"


@pytest.mark.asyncio
async def test_unicode_entry_names_survive():
    """Nombres con tildes y eñes se conservan"""
    archive = ArchiveBuilder.open("unicode")
    archive.add_entry("José_Muñoz_12345678-9.zip", b"x")

    entries = read_zip(await archive.finalize())
    assert list(entries) == ["José_Muñoz_12345678-9.zip"]


@pytest.mark.asyncio
async def test_add_after_finalize_raises():
    archive = ArchiveBuilder.open("cerrado")
    await archive.finalize()

    with pytest.raises(ArchiveEncodingError):
        archive.add_entry("tarde.pdf", b"x")


@pytest.mark.asyncio
async def test_double_finalize_raises():
    archive = ArchiveBuilder.open("cerrado")
    await archive.finalize()

    with pytest.raises(ArchiveEncodingError):
        await archive.finalize()


@pytest.mark.asyncio
async def test_independent_archives_do_not_share_entries():
    """Cada instancia tiene su propio buffer"""
    first = ArchiveBuilder.open("uno")
    second = ArchiveBuilder.open("dos")
    first.add_entry("a.pdf", b"a")
    second.add_entry("b.pdf", b"b")

    assert read_zip(await first.finalize()) == {"a.pdf": b"a"}
    assert read_zip(await second.finalize()) == {"b.pdf": b"b"}


@pytest.mark.asyncio
async def test_context_manager_discards_on_error():
    """Una excepción dentro del bloque libera el ZIP y su buffer"""
    with pytest.raises(RuntimeError):
        async with ArchiveBuilder.open("abandonado") as archive:
            archive.add_entry("documento_1.pdf", b"x")
            raise RuntimeError("fallo")

    assert archive.is_finalized
    assert archive._buffer.closed

    with pytest.raises(ArchiveEncodingError):
        archive.add_entry("tarde.pdf", b"x")


@pytest.mark.asyncio
async def test_context_manager_keeps_finalized_content():
    async with ArchiveBuilder.open("normal") as archive:
        archive.add_entry("a.pdf", b"a")
        content = await archive.finalize()

    assert read_zip(content) == {"a.pdf": b"a"}


def test_discard_is_idempotent():
    archive = ArchiveBuilder.open("descartado")
    archive.add_entry("a.pdf", b"a")

    archive.discard()
    archive.discard()

    assert archive._buffer.closed
