"""Pydantic schemas for internal admins."""

from typing import Any

from pydantic import Field

from .common import EMAIL_PATTERN, AccountState, RecordSchema

PERSON_ID_PATTERN = r"^PERSON\d{13}$"


class AccessDetails(RecordSchema):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8)
    last_login: list[Any] = Field(default_factory=list)


class AccessDetailsUpdate(RecordSchema):
    password: str | None = Field(None, min_length=8)


class AdminCreate(RecordSchema):
    """Schema for creating an internal admin.

    The email domain and password policy are configuration-driven and checked
    by ``AdminService``.
    """

    roles: list[str] = Field(min_length=1, max_length=50)
    person_id: str = Field(pattern=PERSON_ID_PATTERN)
    access_details: AccessDetails
    account: AccountState = Field(default_factory=AccountState)


class AdminUpdate(RecordSchema):
    """Schema for updating an internal admin.

    ``personId`` and ``accessDetails.email`` are immutable and are dropped
    from update payloads.
    """

    roles: list[str] | None = Field(None, min_length=1, max_length=50)
    access_details: AccessDetailsUpdate | None = None


class AdminLogin(RecordSchema):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)
