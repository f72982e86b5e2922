"""Tenant endpoints, including activation and the name pickers."""

from fastapi import APIRouter, Depends

from tenant_admin.application.services import TenantService
from tenant_admin.infrastructure.dependencies import get_tenant_service
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router
from tenant_admin.presentation.api.responses import envelope


def _tenant_routes(router: APIRouter) -> None:
    @router.get("/names")
    async def tenant_names(service: TenantService = Depends(get_tenant_service)):
        """Sorted unique tenant names."""
        return envelope(await service.names())

    @router.get("/minimal")
    async def tenant_minimal(service: TenantService = Depends(get_tenant_service)):
        """``{id, name}`` for every tenant, sorted by name."""
        return envelope(await service.minimal())


router = build_resource_router(
    "/tenants",
    "Tenants",
    get_tenant_service,
    extra_routes=_tenant_routes,
    activation=True,
)
