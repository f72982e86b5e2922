"""Internal role and internal permission endpoints."""

from fastapi import APIRouter, Depends

from tenant_admin.application.services import RoleService
from tenant_admin.infrastructure.dependencies import get_permission_service, get_role_service
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router
from tenant_admin.presentation.api.responses import envelope


def _role_routes(router: APIRouter) -> None:
    @router.get("/code/{role_code}/permissions")
    async def role_permissions(role_code: str, service: RoleService = Depends(get_role_service)):
        """Permissions granted by the role with this code."""
        permissions = await service.permissions_for(role_code)
        return envelope({"roleCode": role_code, "permissions": permissions})


router = build_resource_router("/roles", "Roles", get_role_service, extra_routes=_role_routes)
permission_router = build_resource_router("/permissions", "Permissions", get_permission_service)
