"""Pydantic schemas for lookups, lookup categories and lookup sub-categories."""

from typing import Annotated

from pydantic import Field, StringConstraints

from .common import RecordSchema

LookupItem = Annotated[str, StringConstraints(strip_whitespace=True)]


class LookupCreate(RecordSchema):
    """Schema for creating a lookup (e.g. ``Emergency Types / Fire``)."""

    category: str = Field(min_length=3, max_length=50)
    sub_category: str = Field(min_length=3, max_length=50)
    items: list[LookupItem] = Field(min_length=1, max_length=25)
    description: str = Field(min_length=3, max_length=200)


class LookupUpdate(RecordSchema):
    """Schema for updating a lookup; all fields optional."""

    category: str | None = Field(None, min_length=3, max_length=50)
    sub_category: str | None = Field(None, min_length=3, max_length=50)
    items: list[LookupItem] | None = Field(None, min_length=1, max_length=25)
    description: str | None = Field(None, min_length=3, max_length=200)
    active: bool | None = None


class LookupCategoryCreate(RecordSchema):
    category: str = Field(min_length=3, max_length=50)
    description: str = Field(min_length=3, max_length=200)


class LookupCategoryUpdate(RecordSchema):
    category: str | None = Field(None, min_length=3, max_length=50)
    description: str | None = Field(None, min_length=3, max_length=200)
    active: bool | None = None


class LookupSubCategoryCreate(RecordSchema):
    subcategory: str = Field(min_length=3, max_length=50)
    description: str = Field(min_length=3, max_length=200)


class LookupSubCategoryUpdate(RecordSchema):
    subcategory: str | None = Field(None, min_length=3, max_length=50)
    description: str | None = Field(None, min_length=3, max_length=200)
    active: bool | None = None
