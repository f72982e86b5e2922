"""Pydantic schemas for tenants."""

from pydantic import Field

from .common import EMAIL_PATTERN, SA_PHONE_PATTERN, AccountState, RecordSchema


class TenantContact(RecordSchema):
    phone_number: str = Field(pattern=SA_PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)


class TenantContactUpdate(RecordSchema):
    phone_number: str | None = Field(None, pattern=SA_PHONE_PATTERN)
    email: str | None = Field(None, pattern=EMAIL_PATTERN)


class TenantCreate(RecordSchema):
    """Schema for creating a tenant."""

    name: str = Field(min_length=3, max_length=50)
    contact: TenantContact
    account: AccountState = Field(default_factory=AccountState)


class TenantUpdate(RecordSchema):
    """Schema for updating a tenant; contact fields may be sent one at a time."""

    name: str | None = Field(None, min_length=3, max_length=50)
    contact: TenantContactUpdate | None = None
