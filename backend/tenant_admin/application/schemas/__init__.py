from .admin import AdminCreate, AdminLogin, AdminUpdate
from .common import AccountState, ActiveState, BulkRequest, RecordSchema
from .lookup import (
    LookupCategoryCreate,
    LookupCategoryUpdate,
    LookupCreate,
    LookupSubCategoryCreate,
    LookupSubCategoryUpdate,
    LookupUpdate,
)
from .person import PersonCreate, PersonUpdate
from .role import PermissionCreate, PermissionUpdate, RoleCreate, RoleUpdate
from .service_request import ServiceRequestCreate, ServiceRequestUpdate
from .tenant import TenantCreate, TenantUpdate

__all__ = [
    "AccountState",
    "ActiveState",
    "AdminCreate",
    "AdminLogin",
    "AdminUpdate",
    "BulkRequest",
    "LookupCategoryCreate",
    "LookupCategoryUpdate",
    "LookupCreate",
    "LookupSubCategoryCreate",
    "LookupSubCategoryUpdate",
    "LookupUpdate",
    "PermissionCreate",
    "PermissionUpdate",
    "PersonCreate",
    "PersonUpdate",
    "RecordSchema",
    "RoleCreate",
    "RoleUpdate",
    "ServiceRequestCreate",
    "ServiceRequestUpdate",
    "TenantCreate",
    "TenantUpdate",
]
