"""Application services for internal roles and internal permission sets."""

import logging
from collections.abc import Sequence
from typing import Any

from tenant_admin.application.schemas import PermissionCreate, PermissionUpdate, RoleCreate, RoleUpdate
from tenant_admin.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ProtectedEntityError,
)

from .permission_resolver import permission_matches
from .resource_service import Record, ResourceDefinition, ResourceService

logger = logging.getLogger(__name__)

ROLE = ResourceDefinition(
    name="Role",
    slug="roles",
    collection="roles",
    id_prefix="ROLE",
    create_schema=RoleCreate,
    update_schema=RoleUpdate,
    default_sort="roleName",
    search_fields=("roleName", "roleCode", "description"),
    export_fields=(
        "id",
        "roleName",
        "roleCode",
        "description",
        "permissions",
        "isSystem",
        "isActive",
        "priority",
        "created.when",
    ),
    stats_fields=("isSystem", "isActive"),
    filter_fields={"roleName": "roleName", "roleCode": "roleCode"},
    flag_filters={"isActive": "isActive", "isSystem": "isSystem"},
    active_path="isActive",
    stamp_active=False,
)

PERMISSION = ResourceDefinition(
    name="Permission",
    slug="permissions",
    collection="permissions",
    id_prefix="IPERMISSION",
    create_schema=PermissionCreate,
    update_schema=PermissionUpdate,
    default_sort="module",
    search_fields=("module", "permissions"),
    export_fields=("id", "module", "permissions", "created.when"),
    stats_fields=("module",),
    filter_fields={"module": "module"},
    active_path=None,
    stamp_active=False,
)


class RoleService(ResourceService):
    """Roles are named containers of ``module.action`` permissions.

    ``roleCode`` is unique. ``roleName``, ``roleCode`` and ``isSystem`` never
    change after creation, and system roles can be neither updated nor deleted.
    """

    definition = ROLE

    async def get_by_code(self, role_code: str) -> Record | None:
        matches = await self._store.find_by(self._collection, "roleCode", role_code)
        return matches[0] if matches else None

    async def _require(self, record_id: str) -> Record:
        role = await self._store.get(self._collection, record_id)
        if role is None:
            raise EntityNotFoundError(self.definition.name, record_id)
        return role

    async def _before_create(self, fields: Record) -> Record:
        if await self.get_by_code(fields["roleCode"]) is not None:
            raise DuplicateEntityError(self.definition.name, "roleCode", fields["roleCode"])
        return fields

    async def _before_update(self, record_id: str, fields: Record, actor: str) -> Record:
        role = await self._require(record_id)
        if role.get("isSystem"):
            raise ProtectedEntityError(self.definition.name, record_id, "System roles cannot be modified")
        fields["roleName"] = role.get("roleName")
        fields["roleCode"] = role.get("roleCode")
        fields["isSystem"] = role.get("isSystem") is True
        return fields

    async def _before_delete(self, record_id: str, actor: str) -> None:
        role = await self._require(record_id)
        if role.get("isSystem"):
            raise ProtectedEntityError(self.definition.name, record_id, "System roles cannot be deleted")

    async def permissions_for(self, role_code: str) -> list[str]:
        role = await self.get_by_code(role_code)
        if role is None:
            raise EntityNotFoundError(self.definition.name, role_code)
        return list(role.get("permissions") or [])

    async def has_permission(self, role_code: str, permission: str) -> bool:
        """Whether the role grants ``permission`` (honouring ``module.*`` and ``*`` grants)."""
        try:
            granted = await self.permissions_for(role_code)
        except EntityNotFoundError:
            return False
        return any(permission_matches(permission, g) for g in granted)

    def _insights(self, records: Sequence[Record]) -> dict[str, Any]:
        insights = super()._insights(records)
        insights["systemCount"] = sum(1 for r in records if r.get("isSystem"))
        insights["averagePermissions"] = (
            round(sum(len(r.get("permissions") or []) for r in records) / len(records), 2) if records else 0
        )
        return insights


class PermissionService(ResourceService):
    """Permission sets grouped by module."""

    definition = PERMISSION

    def _insights(self, records: Sequence[Record]) -> dict[str, Any]:
        insights = super()._insights(records)
        per_module: dict[str, int] = {}
        for record in records:
            module = record.get("module") or "unset"
            per_module[module] = per_module.get(module, 0) + len(record.get("permissions") or [])
        insights["permissionsPerModule"] = per_module
        insights["totalPermissions"] = sum(per_module.values())
        return insights
