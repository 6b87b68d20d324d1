"""
Pruebas de la API de documentos
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_document_flow(client: AsyncClient, factory: DataFactory):
    """Subir, listar, descargar y eliminar un documento"""
    applicant = await factory.create_applicant()
    applicant_id = applicant["id"]

    # 1. Create
    document = await factory.create_document(
        applicant_id=applicant_id,
        content=b"%PDF-1.4 curriculum",
        filename="curriculum.pdf",
    )
    document_id = document["id"]
    assert document["size"] == len(b"%PDF-1.4 curriculum")
    assert "content" not in document

    # 2. Listado por postulante
    response = await client.get("/api/v1/documents", params={"applicant_id": applicant_id})
    assert response.status_code == 200
    assert response.json()["data"]["total"] == 1

    # 3. Descarga
    response = await client.get(f"/api/v1/documents/{document_id}/download")
    assert response.status_code == 200
    assert response.content == b"%PDF-1.4 curriculum"
    assert response.headers["content-type"] == "application/pdf"
    assert "curriculum.pdf" in response.headers["content-disposition"]

    # 4. Delete
    response = await client.delete(f"/api/v1/documents/{document_id}")
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/documents/{document_id}")).status_code == 404


@pytest.mark.asyncio
async def test_document_rejects_invalid_base64(client: AsyncClient, factory: DataFactory):
    """El contenido debe ser base64 válido"""
    applicant = await factory.create_applicant()
    data = {
        "applicant_id": applicant["id"],
        "content": "esto no es base64!!",
        "media_type": "application/pdf",
    }
    response = await client.post("/api/v1/documents", json=data)
    assert response.status_code == 422
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_document_requires_existing_applicant(client: AsyncClient):
    """No se puede subir un documento a un postulante inexistente"""
    data = {
        "applicant_id": "no-existe",
        "content": "SGVsbG8=",
    }
    response = await client.post("/api/v1/documents", json=data)
    assert response.status_code == 404
