"""HTTP tests for tenant, person, role, permission, admin and role-mapping routes."""

import pytest

ADMIN_PASSWORD = "Str0ng!Pass"


def tenant(name: str) -> dict:
    return {"name": name, "contact": {"phoneNumber": "0211234567", "email": "ops@example.co.za"}}


def role(code: str, permissions: list[str], system: bool = False) -> dict:
    return {
        "roleName": code.replace("_", " ").title(),
        "roleCode": code,
        "description": f"Role for {code.lower()} users",
        "permissions": permissions,
        "isSystem": system,
    }


# ── Tenants ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_tenant_activation_routes(client):
    created = (await client.post("/internal/tenants", json=tenant("Acme Ltd"))).json()["data"]

    off = await client.patch(f"/internal/tenants/{created['id']}/deactivate")
    assert off.status_code == 200
    assert off.json()["data"]["account"]["isActive"]["value"] is False
    assert off.json()["message"] == "Tenant deactivated successfully"

    on = await client.patch(f"/internal/tenants/{created['id']}/activate")
    assert on.json()["data"]["account"]["isActive"]["value"] is True
    assert len(on.json()["data"]["account"]["isActive"]["changes"]) == 2

    missing = await client.patch("/internal/tenants/TENANT0/activate")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_tenant_names_and_minimal_are_not_captured_as_ids(client):
    await client.post("/internal/tenants", json=tenant("Zulu Logistics"))
    await client.post("/internal/tenants", json=tenant("Alpha Trust"))

    names = await client.get("/internal/tenants/names")
    assert names.status_code == 200
    assert names.json()["data"] == ["Alpha Trust", "Zulu Logistics"]

    minimal = (await client.get("/internal/tenants/minimal")).json()["data"]
    assert [set(m) for m in minimal] == [{"id", "name"}, {"id", "name"}]


# ── Persons ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_person_create_derives_birth_date(client):
    payload = {
        "firstName": "Thandi",
        "surname": "Nkosi",
        "preferredName": "Thandi",
        "contact": {"mobile": "0821234567", "email": "thandi@example.co.za"},
        "demographics": {"idNumber": "9001015009087", "gender": "Female"},
    }
    response = await client.post("/internal/persons", json=payload)
    assert response.status_code == 201
    assert response.json()["data"]["demographics"]["dateOfBirth"] == "1990-01-01"


@pytest.mark.asyncio
async def test_person_validate_checks_without_saving(client):
    payload = {
        "firstName": "Thandi",
        "surname": "Nkosi",
        "preferredName": "Thandi",
        "contact": {"mobile": "0821234567", "email": "thandi@example.co.za"},
        "demographics": {"idNumber": "9001015009087", "gender": "Female", "dateOfBirth": "1991-01-01"},
    }
    response = await client.post("/internal/persons/validate", json=payload)
    assert response.status_code == 200
    result = response.json()["data"]
    assert result["isValid"] is False
    assert result["errors"][0]["field"] == "demographics.dateOfBirth"

    del payload["demographics"]["dateOfBirth"]
    ok = (await client.post("/internal/persons/validate", json=payload)).json()["data"]
    assert ok == {"isValid": True, "errors": [], "warnings": []}

    listed = (await client.get("/internal/persons")).json()
    assert listed["pagination"]["total"] == 0


# ── Roles and permissions ────────────────────────────────────────────


@pytest.mark.asyncio
async def test_role_conflict_protection_and_permission_lookup(client):
    first = await client.post("/internal/roles", json=role("LOOKUP_MANAGER", ["lookup.*"]))
    assert first.status_code == 201

    duplicate = await client.post("/internal/roles", json=role("LOOKUP_MANAGER", ["lookup.read"]))
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "Conflict"

    system = (await client.post("/internal/roles", json=role("INTERNAL_ROOT_ADMIN", ["*"], system=True))).json()["data"]
    forbidden = await client.delete(f"/internal/roles/{system['id']}")
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "System roles cannot be deleted"

    permissions = await client.get("/internal/roles/code/LOOKUP_MANAGER/permissions")
    assert permissions.json()["data"] == {"roleCode": "LOOKUP_MANAGER", "permissions": ["lookup.*"]}
    assert (await client.get("/internal/roles/code/NOPE/permissions")).status_code == 404


@pytest.mark.asyncio
async def test_permission_sets(client):
    response = await client.post("/internal/permissions", json={"module": "lookup", "permissions": ["create", "read"]})
    assert response.status_code == 201
    assert response.json()["data"]["id"].startswith("IPERMISSION")


# ── Admins ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_admin_lifecycle_hides_password(client):
    payload = {
        "roles": ["Lookup Manager"],
        "personId": "PERSON1700000000001",
        "accessDetails": {"email": "jo@touchafrica.co.za", "password": ADMIN_PASSWORD},
    }
    created = await client.post("/internal/admins", json=payload)
    assert created.status_code == 201
    admin = created.json()["data"]
    assert "password" not in admin["accessDetails"]

    fetched = (await client.get(f"/internal/admins/{admin['id']}")).json()["data"]
    assert "password" not in fetched["accessDetails"]

    duplicate = await client.post("/internal/admins", json={**payload, "personId": "PERSON1700000000002"})
    assert duplicate.status_code == 409

    wrong_domain = await client.post(
        "/internal/admins",
        json={**payload, "accessDetails": {"email": "jo@gmail.com", "password": ADMIN_PASSWORD}},
    )
    assert wrong_domain.status_code == 400

    off = await client.patch(f"/internal/admins/{admin['id']}/deactivate")
    assert off.json()["data"]["account"]["isActive"]["value"] is False

    protected = await client.delete(f"/internal/admins/{admin['id']}")
    assert protected.status_code == 403
    assert protected.json()["error"]["code"] == "Forbidden"


# ── Role mappings ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_role_mapping_status_and_reload(client):
    status = (await client.get("/internal/role-mappings")).json()["data"]
    assert status["source"] == "default"
    assert status["mappings"]["Lookup Manager"] == "LOOKUP_MANAGER"

    reloaded = await client.post("/internal/role-mappings/reload")
    assert reloaded.status_code == 200
    assert reloaded.json()["message"] == "Role mappings reloaded"


# ── Service requests ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_service_request_routes(client):
    payload = {
        "title": "Mr",
        "names": "Sipho",
        "surname": "Dlamini",
        "typeOfUser": "Farmer",
        "messageRelationTo": "Support",
        "message": "The dashboard does not load on my phone.",
        "contactInfo": {"phoneNumber": "0821234567", "email": "sipho@example.co.za"},
    }
    created = await client.post("/internal/service-requests", json=payload)
    assert created.status_code == 201
    record = created.json()["data"]
    assert record["id"].startswith("SVCR")
    assert record["processing"]["status"] == "open"

    closed = await client.patch(f"/internal/service-requests/{record['id']}", json={"processing": {"status": "closed"}})
    assert closed.json()["data"]["processing"]["status"] == "closed"

    export = await client.get("/internal/service-requests/export", params={"format": "csv"})
    assert export.status_code == 200
    assert "service_requests_export_" in export.headers["content-disposition"]
    assert "sipho@example.co.za" in export.text

    deleted = await client.delete(f"/internal/service-requests/{record['id']}")
    assert deleted.status_code == 200
    assert (await client.get(f"/internal/service-requests/{record['id']}")).status_code == 404
