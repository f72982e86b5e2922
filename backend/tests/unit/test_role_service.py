"""Unit tests for RoleService, PermissionService and permission derivation."""

import pytest

from tenant_admin.application.services import (
    PermissionService,
    RoleMappingConfig,
    RoleService,
    derive_permissions_from_roles,
    permission_matches,
)
from tenant_admin.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ProtectedEntityError,
)


def role(code: str, permissions: list[str], *, system: bool = False, name: str | None = None) -> dict:
    return {
        "roleName": name or code.replace("_", " ").title(),
        "roleCode": code,
        "description": f"Role for {code.lower()} users",
        "permissions": permissions,
        "isSystem": system,
    }


@pytest.fixture
def service(store, clock) -> RoleService:
    return RoleService(store, clock=clock)


@pytest.mark.asyncio
async def test_role_code_is_unique(service: RoleService):
    await service.create(role("LOOKUP_MANAGER", ["lookup.read"]))
    with pytest.raises(DuplicateEntityError):
        await service.create(role("LOOKUP_MANAGER", ["lookup.create"], name="Another name"))


@pytest.mark.asyncio
async def test_update_preserves_immutable_fields(service: RoleService):
    created = await service.create(role("LOOKUP_MANAGER", ["lookup.read"]))
    updated = await service.update(
        created["id"],
        {"roleName": "Renamed", "roleCode": "HACKED", "isSystem": True, "permissions": ["lookup.*"]},
    )
    assert updated["roleName"] == created["roleName"]
    assert updated["roleCode"] == "LOOKUP_MANAGER"
    assert updated["isSystem"] is False
    assert updated["permissions"] == ["lookup.*"]


@pytest.mark.asyncio
async def test_system_roles_are_protected(service: RoleService):
    root = await service.create(role("INTERNAL_ROOT_ADMIN", ["*"], system=True))
    with pytest.raises(ProtectedEntityError):
        await service.update(root["id"], {"priority": 99})
    with pytest.raises(ProtectedEntityError):
        await service.delete(root["id"])
    assert await service.get_by_id(root["id"]) is not None


@pytest.mark.asyncio
async def test_permissions_for_and_has_permission(service: RoleService):
    await service.create(role("LOOKUP_MANAGER", ["lookup.*", "tenant.read"]))

    assert await service.permissions_for("LOOKUP_MANAGER") == ["lookup.*", "tenant.read"]
    assert await service.has_permission("LOOKUP_MANAGER", "lookup.delete")
    assert await service.has_permission("LOOKUP_MANAGER", "tenant.read")
    assert not await service.has_permission("LOOKUP_MANAGER", "tenant.delete")
    assert not await service.has_permission("NOPE", "lookup.read")
    with pytest.raises(EntityNotFoundError):
        await service.permissions_for("NOPE")


@pytest.mark.parametrize(
    "required, granted, expected",
    [
        ("lookup.read", "lookup.read", True),
        ("lookup.read", "lookup.*", True),
        ("lookup.read", "*", True),
        ("lookup.read", "all.access", True),
        ("lookup.read", "tenant.*", False),
        ("lookup.read", "lookup.create", False),
        ("", "*", False),
    ],
)
def test_permission_matches(required, granted, expected):
    assert permission_matches(required, granted) is expected


@pytest.mark.asyncio
async def test_derive_permissions_from_labels_and_codes(service: RoleService):
    await service.create(role("LOOKUP_MANAGER", ["lookup.read", "lookup.create"]))
    await service.create(role("TENANT_ADMIN", ["tenant.read", "lookup.read"]))
    mappings = RoleMappingConfig().load()

    permissions = await derive_permissions_from_roles(
        ["Lookup Manager", "TENANT_ADMIN", "Unknown Role", ""],
        mappings,
        service,
    )
    assert permissions == ["lookup.read", "lookup.create", "tenant.read"]
    assert await derive_permissions_from_roles(None, mappings, service) == []


@pytest.mark.asyncio
async def test_permission_stats_count_per_module(store, clock):
    service = PermissionService(store, clock=clock)
    record = await service.create({"module": "lookup", "permissions": ["create", "read"]})
    assert record["id"].startswith("IPERMISSION")
    await service.create({"module": "tenant", "permissions": ["read"]})

    stats = await service.stats()
    assert stats["insights"]["permissionsPerModule"] == {"lookup": 2, "tenant": 1}
    assert stats["insights"]["totalPermissions"] == 3
