"""Role mapping status and reload."""

from fastapi import APIRouter, Depends

from tenant_admin.application.services import RoleMappingConfig
from tenant_admin.infrastructure.dependencies import get_role_mappings
from tenant_admin.presentation.api.responses import envelope

router = APIRouter(prefix="/role-mappings", tags=["Role Mappings"])


@router.get("")
async def role_mapping_status(role_mappings: RoleMappingConfig = Depends(get_role_mappings)):
    """Current label → role code table and where it was loaded from."""
    return envelope({**role_mappings.status(), "mappings": role_mappings.all_mappings()})


@router.post("/reload")
async def reload_role_mappings(role_mappings: RoleMappingConfig = Depends(get_role_mappings)):
    role_mappings.reload()
    return envelope(role_mappings.status(), message="Role mappings reloaded")
