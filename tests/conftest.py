"""
Configuración de pruebas

Fixtures: base de datos en memoria, cliente HTTP de prueba y fábrica de datos
"""
import base64
import io
import zipfile
from typing import AsyncGenerator, Dict, Optional
from dataclasses import dataclass, field

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

import app.models  # noqa: F401  registra las tablas
from app.core.database import get_db
from app.main import create_app


# SQLite en memoria como base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def read_zip(data: bytes) -> Dict[str, bytes]:
    """Entradas de un ZIP en memoria: {nombre: contenido}"""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def encode(data: bytes) -> str:
    """Contenido en base64, como se guarda en la base de datos"""
    return base64.b64encode(data).decode("ascii")


# ========== Fábrica de datos de prueba ==========

@dataclass
class DataFactory:
    """
    Fábrica de datos de prueba

    Centraliza la creación de datos para no repetir código entre archivos
    """
    client: AsyncClient
    _counter: int = field(default=0, repr=False)

    def _next_id(self) -> str:
        """Sufijo único para evitar conflictos"""
        self._counter += 1
        return str(self._counter)

    async def create_posting(self, **overrides) -> dict:
        """Crea una postulación y devuelve los datos de la respuesta"""
        suffix = self._next_id()
        data = {
            "title": f"Cargo de prueba {suffix}",
            "description": "Descripción de prueba",
            "requirements": ["Título profesional", "Licencia clase B"],
            "start_date": "2025-01-01",
            "end_date": "2025-01-31",
            **overrides
        }
        resp = await self.client.post("/api/v1/postings", json=data)
        assert resp.status_code == 200, f"Error al crear postulación: {resp.text}"
        return resp.json()["data"]

    async def create_applicant(self, posting_id: Optional[str] = None, **overrides) -> dict:
        """Crea un postulante; crea la postulación si no se indica"""
        if posting_id is None:
            posting = await self.create_posting()
            posting_id = posting["id"]

        suffix = self._next_id()
        data = {
            "posting_id": posting_id,
            "national_id": f"{suffix}-{suffix}",
            "names": f"Nombre{suffix}",
            "paternal_surname": f"Apellido{suffix}",
            "maternal_surname": "Materno",
            "email": f"postulante{suffix}@example.com",
            "phone": "+56911112222",
            **overrides
        }
        resp = await self.client.post("/api/v1/applicants", json=data)
        assert resp.status_code == 200, f"Error al crear postulante: {resp.text}"
        return resp.json()["data"]

    async def create_document(
        self,
        applicant_id: Optional[str] = None,
        content: bytes = b"%PDF-1.4 contenido de prueba",
        **overrides
    ) -> dict:
        """Sube un documento; crea el postulante si no se indica"""
        if applicant_id is None:
            applicant = await self.create_applicant()
            applicant_id = applicant["id"]

        data = {
            "applicant_id": applicant_id,
            "content": encode(content),
            "media_type": "application/pdf",
            **overrides
        }
        resp = await self.client.post("/api/v1/documents", json=data)
        assert resp.status_code == 200, f"Error al subir documento: {resp.text}"
        return resp.json()["data"]


@pytest_asyncio.fixture
async def factory(client: AsyncClient) -> DataFactory:
    """Instancia de la fábrica de datos"""
    return DataFactory(client=client)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesión de base de datos independiente por prueba

    Crea las tablas antes de la prueba y descarta el motor al terminar
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, future=True)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Cliente HTTP de prueba

    Reemplaza la dependencia get_db por la sesión de prueba
    """
    app = create_app()

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
