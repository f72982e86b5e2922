"""Shared building blocks for the resource schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
# Accepts +27123456789, 27123456789 and 0123456789
SA_PHONE_PATTERN = r"^(\+27|27|0)[0-9]{9}$"


class RecordSchema(BaseModel):
    """Base for request payloads.

    Attributes are snake_case in Python and camelCase on the wire (and in the
    document store). Unknown keys are dropped, strings are trimmed.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ActiveState(RecordSchema):
    """``isActive`` flag together with its change history."""

    value: bool = True
    changes: list[dict[str, Any]] = Field(default_factory=list)


class AccountState(RecordSchema):
    is_active: ActiveState = Field(default_factory=ActiveState)


class BulkRequest(BaseModel):
    """Body of ``POST /internal/<resource>/bulk``."""

    operation: str = Field(min_length=1)
    data: list[Any]
