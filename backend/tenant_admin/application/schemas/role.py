"""Pydantic schemas for internal roles and internal permissions."""

from typing import Annotated

from pydantic import Field, StringConstraints

from .common import RecordSchema

# module.action ("lookup.create"), a module wildcard ("lookup.*") or the global "*"
PERMISSION_PATTERN = r"^(\*|[a-zA-Z][a-zA-Z0-9]*(\.[a-zA-Z][a-zA-Z0-9]*)*\.([a-zA-Z][a-zA-Z0-9]*|\*))$"

Permission = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PERMISSION_PATTERN)]


class RoleCreate(RecordSchema):
    """Schema for creating a role: a named container of permissions."""

    role_name: str = Field(min_length=3, max_length=50)
    role_code: str = Field(min_length=2, max_length=30, pattern=r"^[A-Z_]+$")
    description: str = Field(min_length=10, max_length=200)
    permissions: list[Permission] = Field(min_length=1, max_length=100)
    is_system: bool = False
    is_active: bool = True
    priority: int = Field(50, ge=0, le=100)


class RoleUpdate(RecordSchema):
    """Schema for updating a role.

    ``roleName``, ``roleCode`` and ``isSystem`` are fixed once created and are
    not accepted here.
    """

    description: str | None = Field(None, min_length=10, max_length=200)
    permissions: list[Permission] | None = Field(None, min_length=1, max_length=100)
    is_active: bool | None = None
    priority: int | None = Field(None, ge=0, le=100)


class PermissionCreate(RecordSchema):
    """Schema for an internal permission set grouped by module."""

    module: str = Field(min_length=1)
    permissions: list[str] = Field(min_length=1)


class PermissionUpdate(RecordSchema):
    module: str | None = Field(None, min_length=1)
    permissions: list[str] | None = Field(None, min_length=1)
