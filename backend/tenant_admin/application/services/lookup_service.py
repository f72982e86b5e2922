"""Application services for lookups, lookup categories and lookup sub-categories."""

from collections.abc import Sequence
from typing import Any

from tenant_admin.application import query_utils
from tenant_admin.application.schemas import (
    LookupCategoryCreate,
    LookupCategoryUpdate,
    LookupCreate,
    LookupSubCategoryCreate,
    LookupSubCategoryUpdate,
    LookupUpdate,
)

from .resource_service import Record, ResourceDefinition, ResourceService

LOOKUP = ResourceDefinition(
    name="Lookup",
    slug="lookups",
    collection="lookups",
    id_prefix="LOOKUP",
    create_schema=LookupCreate,
    update_schema=LookupUpdate,
    default_sort="category",
    search_fields=("category", "subCategory", "description", "items"),
    export_fields=("id", "category", "subCategory", "items", "description", "active", "created.when", "updated.when"),
    stats_fields=("category", "subCategory", "active"),
    filter_fields={"category": "category", "subCategory": "subCategory"},
    flag_filters={"active": "active"},
)

LOOKUP_CATEGORY = ResourceDefinition(
    name="LookupCategory",
    slug="lookup_categories",
    collection="lookupCategories",
    id_prefix="LOOKUP_CATEGORY",
    create_schema=LookupCategoryCreate,
    update_schema=LookupCategoryUpdate,
    default_sort="category",
    search_fields=("category", "description"),
    export_fields=("id", "category", "description", "active", "created.when", "updated.when"),
    stats_fields=("active",),
    filter_fields={"category": "category"},
    flag_filters={"active": "active"},
)

LOOKUP_SUB_CATEGORY = ResourceDefinition(
    name="LookupSubCategory",
    slug="lookup_sub_categories",
    collection="lookupSubCategories",
    id_prefix="LOOKUP_SUB_CATEGORY",
    create_schema=LookupSubCategoryCreate,
    update_schema=LookupSubCategoryUpdate,
    default_sort="subcategory",
    search_fields=("subcategory", "description"),
    export_fields=("id", "subcategory", "description", "active", "created.when", "updated.when"),
    stats_fields=("active",),
    filter_fields={"subcategory": "subcategory"},
    flag_filters={"active": "active"},
)


class LookupService(ResourceService):
    """Lookups: named lists of items grouped by category and sub-category."""

    definition = LOOKUP

    def _insights(self, records: Sequence[Record]) -> dict[str, Any]:
        insights = super()._insights(records)
        insights["categories"] = query_utils.distinct_values(records, "category")
        insights["subCategories"] = query_utils.distinct_values(records, "subCategory")
        insights["totalItems"] = sum(len(r.get("items") or []) for r in records)
        return insights


class LookupCategoryService(ResourceService):
    definition = LOOKUP_CATEGORY


class LookupSubCategoryService(ResourceService):
    definition = LOOKUP_SUB_CATEGORY
