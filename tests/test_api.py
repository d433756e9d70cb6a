from carestore.core.config import settings

P = settings.API_PREFIX


async def test_health(client):
    r = await client.get(f"{P}/health")
    assert r.status_code == 200 and r.json() == {"status": "ok"}


async def test_invoke_commands_over_http(client):
    r = await client.post(f"{P}/commands/create_contact", json={"name": "Dr. A", "contact_type": "NURSE", "enabled_relay": False})
    assert r.status_code == 200
    nurse = r.json()
    r = await client.post(f"{P}/commands/create_medication", json={
        "name": "Ibuprofen", "dosage_type": "tablet", "strength": 200, "units": "mg",
        "quantity": 30, "prescriber_id": nurse["id"],
    })
    med = r.json()
    r = await client.post(f"{P}/commands/log_dose", json={"medication_id": med["id"], "strength": 200, "units": "mg"})
    assert r.status_code == 200
    r = await client.post(f"{P}/commands/get_medications", json={"id": med["id"]})
    assert r.json()[0]["quantity"] == 29
    r = await client.post(f"{P}/commands/get_all_care_instructions")
    assert r.status_code == 200 and r.json() == []


async def test_errors_are_structured(client):
    r = await client.post(f"{P}/commands/create_contact", json={"name": "", "contact_type": "PATIENT", "enabled_relay": False})
    assert r.status_code == 422
    assert r.json()["error"]["kind"] == "ValidationError"

    r = await client.post(f"{P}/commands/log_dose", json={"medication_id": "ghost", "strength": 1, "units": "mg"})
    assert r.status_code == 409
    assert r.json()["error"] == {
        "kind": "IntegrityError",
        "message": "medication 'ghost' does not exist",
        "invariant": "medication_exists",
    }

    r = await client.post(f"{P}/commands/not_a_command", json={})
    assert r.status_code == 404
    assert r.json()["error"]["kind"] == "NotFoundError"

    r = await client.post(f"{P}/commands/get_medications", json=[1, 2])
    assert r.status_code == 422


async def test_rest_routes(client):
    r = await client.post(f"{P}/contacts", json={"name": "Nurse Joy", "contact_type": "NURSE"})
    assert r.status_code == 201
    nurse_id = r.json()["id"]

    r = await client.post(f"{P}/medications", json={
        "name": "Amoxicillin", "dosage_type": "capsule", "strength": 500, "units": "mg",
        "quantity": 2, "prescriber_id": nurse_id,
    })
    assert r.status_code == 201
    med_id = r.json()["id"]

    for _ in range(2):
        assert (await client.post(f"{P}/medications/{med_id}/logs", json={"strength": 500, "units": "mg"})).status_code == 201
    r = await client.post(f"{P}/medications/{med_id}/logs", json={"strength": 500, "units": "mg"})
    assert r.status_code == 409

    r = await client.get(f"{P}/medications/{med_id}/logs", params={"limit": 1})
    assert len(r.json()) == 1

    r = await client.get(f"{P}/medications/missing")
    assert r.status_code == 404
    assert r.json()["error"]["kind"] == "NotFoundError"

    r = await client.post(f"{P}/medications", json={"name": "X", "dosage_type": "tablet", "strength": 1, "units": "mg", "quantity": -3})
    assert r.status_code == 422
    assert r.json()["error"]["kind"] == "ValidationError"

    r = await client.delete(f"{P}/medications/{med_id}")
    assert r.status_code == 409
    r = await client.delete(f"{P}/medications/{med_id}", params={"cascade": "true"})
    assert r.json() == {"deleted": med_id, "logs_deleted": 2}

    r = await client.post(f"{P}/care-instructions", json={"title": "Hydrate", "content": "Drink water"})
    assert r.status_code == 201
    r = await client.get(f"{P}/care-instructions")
    assert [c["title"] for c in r.json()] == ["Hydrate"]
