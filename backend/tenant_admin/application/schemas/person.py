"""Pydantic schemas for person records (South African context)."""

from typing import Annotated, Literal

from pydantic import Field, StringConstraints, field_validator

from .common import EMAIL_PATTERN, SA_PHONE_PATTERN, RecordSchema

Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=SA_PHONE_PATTERN)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, pattern=EMAIL_PATTERN)]
NonEmpty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

Province = Literal[
    "Eastern Cape",
    "Free State",
    "Gauteng",
    "KwaZulu-Natal",
    "Limpopo",
    "Mpumalanga",
    "Northern Cape",
    "North West",
    "Western Cape",
]
Gender = Literal["Male", "Female", "Other", "Prefer not to say"]
ProcessingBasis = Literal[
    "consent",
    "contract",
    "legal_obligation",
    "legitimate_interest",
    "vital_interest",
    "public_task",
    "other",
]


class PersonContact(RecordSchema):
    mobile: Phone
    home: Phone | None = None
    work: Phone | None = None
    email: Email


class PersonContactUpdate(RecordSchema):
    mobile: Phone | None = None
    home: Phone | None = None
    work: Phone | None = None
    email: Email | None = None


class Address(RecordSchema):
    line1: NonEmpty
    line2: str | None = None
    unit: str | None = None
    complex: str | None = None
    street_number: str | None = None
    street_name: NonEmpty
    suburb: NonEmpty
    city: NonEmpty
    municipality: str | None = None
    province: Province
    postal_code: str = Field(pattern=r"^\d{4}$")
    country_code: str = Field("ZA", pattern=r"^[A-Z]{2}$")


class Addresses(RecordSchema):
    residential: Address | None = None
    postal: Address | None = None


class Demographics(RecordSchema):
    id_number: str = Field(pattern=r"^\d{13}$")
    gender: Gender
    date_of_birth: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    nationality: str | None = None
    home_language: str | None = None


class DemographicsUpdate(RecordSchema):
    id_number: str | None = Field(None, pattern=r"^\d{13}$")
    gender: Gender | None = None
    date_of_birth: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    nationality: str | None = None
    home_language: str | None = None


class Popia(RecordSchema):
    """POPIA consent. Processing personal information requires explicit consent."""

    consent: bool
    processing_basis: ProcessingBasis
    consent_timestamp: str | None = None

    @field_validator("consent")
    @classmethod
    def _consent_given(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("Consent to process personal information is required")
        return value


class PersonCreate(RecordSchema):
    """Schema for creating a person."""

    first_name: NonEmpty
    middle_names: list[NonEmpty] | None = None
    surname: NonEmpty
    preferred_name: NonEmpty
    contact: PersonContact
    addresses: Addresses | None = None
    demographics: Demographics
    popia: Popia | None = None


class PersonUpdate(RecordSchema):
    """Schema for updating a person; all fields optional."""

    first_name: NonEmpty | None = None
    middle_names: list[NonEmpty] | None = None
    surname: NonEmpty | None = None
    preferred_name: NonEmpty | None = None
    contact: PersonContactUpdate | None = None
    addresses: Addresses | None = None
    demographics: DemographicsUpdate | None = None
    popia: Popia | None = None
