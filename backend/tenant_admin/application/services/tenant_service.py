"""Application service for tenants."""

from typing import Any

from tenant_admin.application import query_utils
from tenant_admin.application.schemas import TenantCreate, TenantUpdate

from .resource_service import AccountActivationMixin, ResourceDefinition, ResourceService

TENANT = ResourceDefinition(
    name="Tenant",
    slug="tenants",
    collection="tenants",
    id_prefix="TENANT",
    create_schema=TenantCreate,
    update_schema=TenantUpdate,
    default_sort="name",
    search_fields=("name", "contact.email", "contact.phoneNumber"),
    export_fields=(
        "id",
        "name",
        "contact.phoneNumber",
        "contact.email",
        "account.isActive.value",
        "created.when",
        "updated.when",
    ),
    stats_fields=("account.isActive.value",),
    filter_fields={"name": "name", "email": "contact.email"},
    flag_filters={"isActive": "account.isActive.value"},
    active_path="account.isActive.value",
    stamp_active=False,
)


class TenantService(AccountActivationMixin, ResourceService):
    """Tenants carry an ``account.isActive`` flag with a change history."""

    definition = TENANT

    async def names(self) -> list[str]:
        """Sorted unique tenant names."""
        records = await self.all()
        return sorted({r["name"] for r in records if r.get("name")}, key=str.casefold)

    async def minimal(self) -> list[dict[str, Any]]:
        """``{id, name}`` pairs for pickers, sorted by name."""
        records = query_utils.sort_items(await self.all(), "name")
        return [{"id": r["id"], "name": r.get("name")} for r in records]
