from .admin_service import AdminService
from .lookup_service import LookupCategoryService, LookupService, LookupSubCategoryService
from .permission_resolver import derive_permissions_from_roles, permission_matches
from .person_service import PersonService
from .resource_service import ExportResult, ResourceDefinition, ResourceService
from .role_mapping import DEFAULT_ROLE_MAPPINGS, RoleMappingConfig
from .role_service import PermissionService, RoleService
from .service_request_service import ServiceRequestService
from .tenant_service import TenantService

__all__ = [
    "AdminService",
    "DEFAULT_ROLE_MAPPINGS",
    "ExportResult",
    "LookupCategoryService",
    "LookupService",
    "LookupSubCategoryService",
    "PermissionService",
    "PersonService",
    "ResourceDefinition",
    "ResourceService",
    "RoleMappingConfig",
    "RoleService",
    "ServiceRequestService",
    "TenantService",
    "derive_permissions_from_roles",
    "permission_matches",
]
