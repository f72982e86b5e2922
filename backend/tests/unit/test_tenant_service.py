"""Unit tests for TenantService."""

import pytest

from tenant_admin.application.services import TenantService
from tenant_admin.domain.exceptions import EntityNotFoundError


def tenant(name: str, email: str = "ops@example.co.za") -> dict:
    return {"name": name, "contact": {"phoneNumber": "0211234567", "email": email}}


@pytest.fixture
def service(store, clock) -> TenantService:
    return TenantService(store, clock=clock)


@pytest.mark.asyncio
async def test_create_defaults_account_to_active(service: TenantService):
    record = await service.create(tenant("Acme Ltd"))
    assert record["id"].startswith("TENANT")
    assert record["account"] == {"isActive": {"value": True, "changes": []}}
    assert "active" not in record


@pytest.mark.asyncio
async def test_partial_contact_update_keeps_other_contact_fields(service: TenantService):
    record = await service.create(tenant("Acme Ltd"))
    updated = await service.update(record["id"], {"contact": {"email": "new@example.co.za"}})
    assert updated["contact"] == {"phoneNumber": "0211234567", "email": "new@example.co.za"}
    assert updated["account"]["isActive"]["value"] is True


@pytest.mark.asyncio
async def test_empty_contact_update_keeps_stored_contact(service: TenantService):
    record = await service.create(tenant("Acme Ltd"))
    updated = await service.update(record["id"], {"contact": {}})
    assert updated["contact"] == {"phoneNumber": "0211234567", "email": "ops@example.co.za"}


@pytest.mark.asyncio
async def test_deactivate_and_activate_record_history(service: TenantService):
    record = await service.create(tenant("Acme Ltd"))

    off = await service.deactivate(record["id"], actor="ADMIN7")
    assert off["account"]["isActive"]["value"] is False
    assert off["updated"]["by"] == "ADMIN7"

    on = await service.activate(record["id"], actor="ADMIN8")
    changes = on["account"]["isActive"]["changes"]
    assert on["account"]["isActive"]["value"] is True
    assert [(c["by"], c["action"]) for c in changes] == [("ADMIN7", "deactivated"), ("ADMIN8", "activated")]


@pytest.mark.asyncio
async def test_activate_missing_tenant(service: TenantService):
    with pytest.raises(EntityNotFoundError):
        await service.activate("TENANT0")


@pytest.mark.asyncio
async def test_names_and_minimal_are_sorted(service: TenantService):
    b = await service.create(tenant("bravo Holdings"))
    a = await service.create(tenant("Alpha Trust"))
    await service.create(tenant("Alpha Trust"))

    assert await service.names() == ["Alpha Trust", "bravo Holdings"]
    minimal = await service.minimal()
    assert [m["name"] for m in minimal] == ["Alpha Trust", "Alpha Trust", "bravo Holdings"]
    assert minimal[0] == {"id": a["id"], "name": "Alpha Trust"}
    assert minimal[-1]["id"] == b["id"]


@pytest.mark.asyncio
async def test_is_active_filter_and_stats(service: TenantService):
    keep = await service.create(tenant("Alpha Trust"))
    gone = await service.create(tenant("Bravo Holdings"))
    await service.deactivate(gone["id"])

    active = await service.list({"isActive": "true"})
    assert [r["id"] for r in active["data"]] == [keep["id"]]

    stats = await service.stats()
    assert stats["counts"]["account.isActive.value"] == {"true": 1, "false": 1}
    assert stats["insights"]["activeCount"] == 1
