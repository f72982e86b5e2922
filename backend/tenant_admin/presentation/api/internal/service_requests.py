"""Service request endpoints."""

from tenant_admin.infrastructure.dependencies import get_service_request_service
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router

router = build_resource_router("/service-requests", "Service Requests", get_service_request_service)
