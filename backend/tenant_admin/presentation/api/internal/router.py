"""Internal API router — aggregates every ``/internal/<resource>`` router."""

from fastapi import APIRouter

from tenant_admin.presentation.api.internal.admins import router as admins_router
from tenant_admin.presentation.api.internal.lookups import category_router as lookup_categories_router
from tenant_admin.presentation.api.internal.lookups import router as lookups_router
from tenant_admin.presentation.api.internal.lookups import sub_category_router as lookup_sub_categories_router
from tenant_admin.presentation.api.internal.persons import router as persons_router
from tenant_admin.presentation.api.internal.role_mappings import router as role_mappings_router
from tenant_admin.presentation.api.internal.roles import permission_router as permissions_router
from tenant_admin.presentation.api.internal.roles import router as roles_router
from tenant_admin.presentation.api.internal.service_requests import router as service_requests_router
from tenant_admin.presentation.api.internal.tenants import router as tenants_router

router = APIRouter(prefix="/internal")
router.include_router(lookups_router)
router.include_router(lookup_categories_router)
router.include_router(lookup_sub_categories_router)
router.include_router(tenants_router)
router.include_router(persons_router)
router.include_router(roles_router)
router.include_router(permissions_router)
router.include_router(admins_router)
router.include_router(service_requests_router)
router.include_router(role_mappings_router)
