"""Turn role labels or role codes into a flat list of permissions.

Roles are only containers of permissions: a friendly label such as
``"Lookup Manager"`` is mapped to its role code through the role mapping
configuration, and the code's permissions are read from the role collection.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tenant_admin.domain.exceptions import EntityNotFoundError

from .role_mapping import RoleMappingConfig

if TYPE_CHECKING:
    from .role_service import RoleService

logger = logging.getLogger(__name__)

GLOBAL_GRANTS = ("*", "all.access")


def permission_matches(required: str, granted: str) -> bool:
    """Does ``granted`` satisfy ``required``? Supports ``module.*`` and global grants."""
    if not required or not granted:
        return False
    if granted in GLOBAL_GRANTS or granted == required:
        return True
    module, dot, _ = required.partition(".")
    return bool(dot) and granted == f"{module}.*"


async def derive_permissions_from_roles(
    roles: Iterable[str] | None,
    role_mappings: RoleMappingConfig,
    role_service: "RoleService",
) -> list[str]:
    """Unique permissions granted by ``roles``, in first-seen order.

    Each entry may be a mapped label or a role code. Roles with no backing
    document contribute nothing.
    """
    permissions: dict[str, None] = {}
    for role in roles or ():
        if not role:
            continue
        role_code = role_mappings.get_mapping(role) or role
        try:
            granted = await role_service.permissions_for(role_code)
        except EntityNotFoundError:
            logger.debug("No role document for %s; skipping", role_code)
            continue
        permissions.update(dict.fromkeys(p for p in granted if p))
    return list(permissions)
