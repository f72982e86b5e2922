"""Internal admin endpoints."""

from tenant_admin.infrastructure.dependencies import get_admin_service
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router

router = build_resource_router("/admins", "Admins", get_admin_service, activation=True)
