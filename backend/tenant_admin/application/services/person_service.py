"""Application service for person records."""

import logging
from datetime import date
from typing import Any

from tenant_admin.application import query_utils
from tenant_admin.application.schemas import PersonCreate, PersonUpdate
from tenant_admin.application.validation import validated_fields
from tenant_admin.domain.exceptions import EntityNotFoundError, ValidationError

from .resource_service import Record, ResourceDefinition, ResourceService

logger = logging.getLogger(__name__)

PERSON = ResourceDefinition(
    name="Person",
    slug="persons",
    collection="people",
    id_prefix="PERSON",
    create_schema=PersonCreate,
    update_schema=PersonUpdate,
    default_sort="surname",
    search_fields=(
        "firstName",
        "middleNames",
        "surname",
        "preferredName",
        "contact.email",
        "contact.mobile",
        "demographics.idNumber",
    ),
    export_fields=(
        "id",
        "firstName",
        "surname",
        "preferredName",
        "contact.mobile",
        "contact.email",
        "demographics.idNumber",
        "demographics.gender",
        "demographics.dateOfBirth",
        "addresses.residential.province",
        "created.when",
    ),
    stats_fields=("demographics.gender", "addresses.residential.province"),
    filter_fields={
        "firstName": "firstName",
        "surname": "surname",
        "gender": "demographics.gender",
        "province": "addresses.residential.province",
    },
    active_path=None,
    stamp_active=False,
)


def date_of_birth_from_id(id_number: str) -> str | None:
    """Birth date encoded in a South African ID number (``YYMMDD...``) as ``YYYY-MM-DD``.

    Two-digit years up to 30 are read as 20xx, the rest as 19xx. Returns
    ``None`` when the first six digits are not a real calendar date.
    """
    if len(id_number) < 6 or not id_number[:6].isdigit():
        return None
    yy, mm, dd = int(id_number[:2]), int(id_number[2:4]), int(id_number[4:6])
    year = 2000 + yy if yy <= 30 else 1900 + yy
    try:
        return date(year, mm, dd).isoformat()
    except ValueError:
        return None


class PersonService(ResourceService):
    """Persons; the date of birth is derived from the ID number when omitted."""

    definition = PERSON

    def _reconcile_birth_date(self, demographics: Record) -> None:
        id_number = demographics.get("idNumber")
        if not id_number:
            return
        derived = date_of_birth_from_id(id_number)
        if derived is None:
            raise ValidationError([{
                "field": "demographics.idNumber",
                "rule": "sa_id_date",
                "message": "ID number does not start with a valid birth date",
            }])
        given = demographics.get("dateOfBirth")
        if given is None:
            demographics["dateOfBirth"] = derived
        elif given != derived:
            raise ValidationError([{
                "field": "demographics.dateOfBirth",
                "rule": "sa_id_mismatch",
                "message": f"Date of birth {given} does not match ID number ({derived})",
            }])

    async def _before_create(self, fields: Record) -> Record:
        self._reconcile_birth_date(fields.setdefault("demographics", {}))
        return fields

    async def _before_update(self, record_id: str, fields: Record, actor: str) -> Record:
        demographics = fields.get("demographics")
        if not demographics or not ({"idNumber", "dateOfBirth"} & demographics.keys()):
            return fields

        current = await self._store.get(self._collection, record_id)
        if current is None:
            raise EntityNotFoundError(self.definition.name, record_id)
        merged = {**(query_utils.get_path(current, "demographics") or {}), **demographics}
        if "idNumber" in demographics and "dateOfBirth" not in demographics:
            merged.pop("dateOfBirth", None)
        self._reconcile_birth_date(merged)
        demographics["dateOfBirth"] = merged.get("dateOfBirth")
        return fields

    def check(self, payload: Any) -> dict[str, Any]:
        """Validate a would-be person without persisting it.

        Returns ``{isValid, errors, warnings}``; ``errors`` uses the same
        ``{field, rule, message}`` shape as ``ValidationError.details``.
        """
        try:
            fields = validated_fields(self.definition.create_schema, payload)
            self._reconcile_birth_date(fields.setdefault("demographics", {}))
        except ValidationError as exc:
            return {"isValid": False, "errors": exc.details, "warnings": []}
        return {"isValid": True, "errors": [], "warnings": []}
