"""FastAPI dependency injection — wires infrastructure to the application layer."""

from typing import TypeVar

from fastapi import Depends, Request

from tenant_admin.application.interfaces import DocumentStore
from tenant_admin.application.services import (
    AdminService,
    LookupCategoryService,
    LookupService,
    LookupSubCategoryService,
    PermissionService,
    PersonService,
    ResourceService,
    RoleMappingConfig,
    RoleService,
    ServiceRequestService,
    TenantService,
)
from tenant_admin.config import Settings, get_settings

ServiceT = TypeVar("ServiceT", bound=ResourceService)


def get_document_store(request: Request) -> DocumentStore:
    """The store opened in the application lifespan."""
    return request.app.state.document_store


def get_role_mappings(request: Request) -> RoleMappingConfig:
    return request.app.state.role_mappings


def get_actor(request: Request) -> str:
    """Who is acting: ``admin.id``, else ``user.id``, else ``user.email``, else ``"system"``.

    ``request.state.admin`` / ``request.state.user`` are populated by the
    upstream authentication middleware.
    """
    for attr, keys in (("admin", ("id",)), ("user", ("id", "email"))):
        principal = getattr(request.state, attr, None)
        if not principal:
            continue
        for key in keys:
            value = principal.get(key) if isinstance(principal, dict) else getattr(principal, key, None)
            if value:
                return str(value)
    return "system"


def _build(service_cls: type[ServiceT], store: DocumentStore, settings: Settings, **extra) -> ServiceT:
    return service_cls(
        store,
        collection_path=settings.collection_path(service_cls.definition.collection),
        default_page_size=settings.default_page_size,
        **extra,
    )


def get_lookup_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> LookupService:
    return _build(LookupService, store, settings)


def get_lookup_category_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> LookupCategoryService:
    return _build(LookupCategoryService, store, settings)


def get_lookup_sub_category_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> LookupSubCategoryService:
    return _build(LookupSubCategoryService, store, settings)


def get_tenant_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> TenantService:
    return _build(TenantService, store, settings)


def get_person_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> PersonService:
    return _build(PersonService, store, settings)


def get_role_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> RoleService:
    return _build(RoleService, store, settings)


def get_permission_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> PermissionService:
    return _build(PermissionService, store, settings)


def get_service_request_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> ServiceRequestService:
    return _build(ServiceRequestService, store, settings)


def get_admin_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> AdminService:
    """AdminService with the configured email domain and password policy."""
    return _build(
        AdminService,
        store,
        settings,
        email_domain=settings.admin_email_domain,
        password_pattern=settings.admin_password_pattern,
    )
