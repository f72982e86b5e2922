"""Pydantic schemas for service requests (contact-us style enquiries)."""

from pydantic import Field

from .common import EMAIL_PATTERN, SA_PHONE_PATTERN, RecordSchema


class ContactInfo(RecordSchema):
    phone_number: str = Field(pattern=SA_PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)


class ContactInfoUpdate(RecordSchema):
    phone_number: str | None = Field(None, pattern=SA_PHONE_PATTERN)
    email: str | None = Field(None, pattern=EMAIL_PATTERN)


class Processing(RecordSchema):
    status: str = "open"


class ServiceRequestCreate(RecordSchema):
    """Schema for logging a service request; new requests start ``open``."""

    title: str = Field(min_length=2, max_length=50)
    names: str = Field(min_length=3, max_length=50)
    surname: str = Field(min_length=3, max_length=50)
    company: str = Field("", max_length=50)
    role: str = Field("", max_length=50)
    type_of_user: str = Field(min_length=3, max_length=50)
    message_relation_to: str = Field(min_length=3, max_length=50)
    message: str = Field(min_length=3, max_length=200)
    contact_info: ContactInfo
    processing: Processing = Field(default_factory=Processing)


class ServiceRequestUpdate(RecordSchema):
    title: str | None = Field(None, min_length=2, max_length=50)
    names: str | None = Field(None, min_length=3, max_length=50)
    surname: str | None = Field(None, min_length=3, max_length=50)
    company: str | None = Field(None, max_length=50)
    role: str | None = Field(None, max_length=50)
    type_of_user: str | None = Field(None, min_length=3, max_length=50)
    message_relation_to: str | None = Field(None, min_length=3, max_length=50)
    message: str | None = Field(None, min_length=3, max_length=200)
    contact_info: ContactInfoUpdate | None = None
    processing: Processing | None = None
