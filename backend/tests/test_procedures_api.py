# tests/test_procedures_api.py
import pytest


def _procedure(procedure_id="p1", **extra):
    return {
        "id": procedure_id,
        "date": "2025-03-04",
        "time": "08:00",
        "hospital": "Hospital Ángeles",
        "doctorId": "d1",
        "doctorName": "Dr. A",
        "procedureType": "Artroscopia",
        "paymentType": "Aseguradora",
        "cost": 45000,
        "commission": 2250.5,
        "status": "programado",
        **extra,
    }


@pytest.mark.asyncio
async def test_save_and_list_procedure(api_client):
    res = await api_client.post("/api/procedures", json=_procedure())
    assert res.status_code == 200
    saved = res.json()
    assert saved["procedureType"] == "Artroscopia"
    assert saved["cost"] == 45000
    assert saved["commission"] == 2250.5

    listed = (await api_client.get("/api/procedures")).json()
    assert [p["id"] for p in listed] == ["p1"]


@pytest.mark.asyncio
async def test_resave_overwrites_by_id(api_client):
    await api_client.post("/api/procedures", json=_procedure(status="programado"))
    await api_client.post("/api/procedures", json=_procedure(status="realizado", technician="Luis"))

    listed = (await api_client.get("/api/procedures")).json()
    assert len(listed) == 1
    assert listed[0]["status"] == "realizado"
    assert listed[0]["technician"] == "Luis"


@pytest.mark.asyncio
async def test_procedure_may_reference_unknown_doctor(api_client):
    res = await api_client.post("/api/procedures", json=_procedure(doctorId="nobody"))
    assert res.status_code == 200
    assert res.json()["doctorId"] == "nobody"


@pytest.mark.asyncio
async def test_delete_reports_count(api_client):
    await api_client.post("/api/procedures", json=_procedure())

    res = await api_client.delete("/api/procedures/p1")
    assert res.status_code == 200
    assert res.json() == {"success": True, "result": 1}
    assert (await api_client.get("/api/procedures")).json() == []

    res = await api_client.delete("/api/procedures/p1")
    assert res.status_code == 200
    assert res.json() == {"success": True, "result": 0}


@pytest.mark.asyncio
async def test_procedures_survive_doctor_delete(api_client):
    await api_client.post("/api/doctors", json={"id": "d1", "name": "Dr. A"})
    await api_client.post("/api/procedures", json=_procedure())

    await api_client.delete("/api/doctors/d1")

    listed = (await api_client.get("/api/procedures")).json()
    assert [p["id"] for p in listed] == ["p1"]
