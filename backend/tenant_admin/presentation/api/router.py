"""Top-level API router — health plus the internal resource routers."""

from fastapi import APIRouter

from tenant_admin.presentation.api.endpoints.health import router as health_router
from tenant_admin.presentation.api.internal.router import router as internal_router

router = APIRouter()
router.include_router(health_router)
router.include_router(internal_router)
