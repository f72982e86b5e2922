"""Lookup, lookup category and lookup sub-category endpoints."""

from tenant_admin.infrastructure.dependencies import (
    get_lookup_category_service,
    get_lookup_service,
    get_lookup_sub_category_service,
)
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router

router = build_resource_router("/lookups", "Lookups", get_lookup_service)
category_router = build_resource_router("/lookup-categories", "Lookup Categories", get_lookup_category_service)
sub_category_router = build_resource_router(
    "/lookup-sub-categories", "Lookup Sub-Categories", get_lookup_sub_category_service
)
