"""
Pruebas de la API de postulantes

Verifica que models → crud → api funcionen de punta a punta
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_applicant_crud_flow(client: AsyncClient, factory: DataFactory):
    """Flujo CRUD completo de un postulante"""
    posting = await factory.create_posting(title="Contador")

    # 1. Create
    applicant = await factory.create_applicant(
        posting_id=posting["id"],
        national_id="12345678-9",
        names="María José",
        paternal_surname="González",
    )
    applicant_id = applicant["id"]
    assert applicant["posting_title"] == "Contador"

    # 2. Read (detalle)
    await factory.create_document(applicant_id=applicant_id)
    response = await client.get(f"/api/v1/applicants/{applicant_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["national_id"] == "12345678-9"
    assert data["document_count"] == 1

    # 3. Read (listado filtrado por postulación)
    response = await client.get("/api/v1/applicants", params={"posting_id": posting["id"]})
    assert response.status_code == 200
    assert response.json()["data"]["total"] == 1
    assert response.json()["data"]["items"][0]["posting_title"] == "Contador"

    # 4. Update
    response = await client.patch(f"/api/v1/applicants/{applicant_id}", json={"phone": "+56999999999"})
    assert response.status_code == 200
    assert response.json()["data"]["phone"] == "+56999999999"

    # 5. Delete
    response = await client.delete(f"/api/v1/applicants/{applicant_id}")
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/applicants/{applicant_id}")).status_code == 404


@pytest.mark.asyncio
async def test_applicant_requires_existing_posting(client: AsyncClient):
    """No se puede postular a una postulación inexistente"""
    data = {
        "posting_id": "no-existe",
        "national_id": "1-9",
        "names": "Juan",
        "paternal_surname": "Pérez",
    }
    response = await client.post("/api/v1/applicants", json=data)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_applicant_duplicate_national_id_in_posting(client: AsyncClient, factory: DataFactory):
    """El mismo RUT no puede postular dos veces al mismo cargo por la API"""
    posting = await factory.create_posting()
    await factory.create_applicant(posting_id=posting["id"], national_id="11111111-1")

    data = {
        "posting_id": posting["id"],
        "national_id": "11111111-1",
        "names": "Otro",
        "paternal_surname": "Registro",
    }
    response = await client.post("/api/v1/applicants", json=data)
    assert response.status_code == 409
    assert response.json()["message"] == "Ya estás postulando a este cargo"

    # en otra postulación sí puede
    other = await factory.create_posting()
    await factory.create_applicant(posting_id=other["id"], national_id="11111111-1")


@pytest.mark.asyncio
async def test_update_national_id_conflict(client: AsyncClient, factory: DataFactory):
    """Cambiar el RUT a uno ya registrado en la postulación es un conflicto"""
    posting = await factory.create_posting()
    await factory.create_applicant(posting_id=posting["id"], national_id="1-1")
    second = await factory.create_applicant(posting_id=posting["id"], national_id="2-2")

    response = await client.patch(f"/api/v1/applicants/{second['id']}", json={"national_id": "1-1"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_get_applicants_by_national_id(client: AsyncClient, factory: DataFactory):
    """Búsqueda de todas las postulaciones de un RUT"""
    first = await factory.create_posting()
    second = await factory.create_posting()
    await factory.create_applicant(posting_id=first["id"], national_id="7-7")
    await factory.create_applicant(posting_id=second["id"], national_id="7-7")

    response = await client.get("/api/v1/applicants/by-national-id/7-7")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 2
    assert {item["posting_id"] for item in data["items"]} == {first["id"], second["id"]}

    response = await client.get("/api/v1/applicants/by-national-id/0-0")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_applicants_by_email(client: AsyncClient, factory: DataFactory):
    """Búsqueda de todas las postulaciones de un correo"""
    first = await factory.create_posting(title="Cajero")
    second = await factory.create_posting(title="Bodeguero")
    await factory.create_applicant(posting_id=first["id"], email="ana.rojas@example.com")
    await factory.create_applicant(posting_id=second["id"], email="ana.rojas@example.com")
    await factory.create_applicant(posting_id=first["id"], email="otro@example.com")

    response = await client.get("/api/v1/applicants/by-email/ana.rojas@example.com")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 2
    assert {item["posting_title"] for item in data["items"]} == {"Cajero", "Bodeguero"}

    response = await client.get("/api/v1/applicants/by-email/nadie@example.com")
    assert response.status_code == 404
    assert response.json()["message"] == "Postulante no encontrado"


@pytest.mark.asyncio
async def test_move_applicant_to_another_posting(client: AsyncClient, factory: DataFactory):
    """Un postulante puede trasladarse a otra postulación"""
    origin = await factory.create_posting(title="Origen")
    target = await factory.create_posting(title="Destino")
    applicant = await factory.create_applicant(posting_id=origin["id"], national_id="5-5")

    response = await client.patch(
        f"/api/v1/applicants/{applicant['id']}",
        json={"posting_id": target["id"]},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["posting_id"] == target["id"]
    assert data["posting_title"] == "Destino"

    response = await client.get("/api/v1/applicants", params={"posting_id": origin["id"]})
    assert response.json()["data"]["total"] == 0


@pytest.mark.asyncio
async def test_move_applicant_checks_target_posting(client: AsyncClient, factory: DataFactory):
    """El traslado valida la postulación destino y el RUT en ella"""
    origin = await factory.create_posting()
    target = await factory.create_posting()
    await factory.create_applicant(posting_id=target["id"], national_id="6-6")
    applicant = await factory.create_applicant(posting_id=origin["id"], national_id="6-6")

    response = await client.patch(
        f"/api/v1/applicants/{applicant['id']}",
        json={"posting_id": target["id"]},
    )
    assert response.status_code == 409

    response = await client.patch(
        f"/api/v1/applicants/{applicant['id']}",
        json={"posting_id": "no-existe"},
    )
    assert response.status_code == 404
