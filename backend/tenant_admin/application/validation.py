"""Schema validation returning ``Ok(model) | Err(errors)`` instead of raising."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tenant_admin.domain.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Ok(Generic[ModelT]):
    value: ModelT


@dataclass(frozen=True)
class Err:
    errors: list[dict[str, Any]]


def _describe(error: dict[str, Any]) -> dict[str, Any]:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return {
        "field": location or "body",
        "rule": error.get("type", "invalid"),
        "message": error.get("msg", "Invalid value"),
    }


def validate(schema: type[ModelT], payload: Any) -> Ok[ModelT] | Err:
    """Validate *payload* against *schema*.

    Every violated constraint is reported as ``{field, rule, message}`` where
    ``field`` is the dotted location of the offending value.
    """
    if not isinstance(payload, dict):
        return Err([{"field": "body", "rule": "dict_type", "message": "Payload must be a JSON object"}])
    try:
        return Ok(schema.model_validate(payload))
    except PydanticValidationError as exc:
        return Err([_describe(error) for error in exc.errors()])


def validated_fields(schema: type[BaseModel], payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate and dump *payload* in its stored (camelCase) shape, or raise ``ValidationError``.

    ``partial`` keeps only the fields the caller actually sent, so update
    schemas never overwrite stored values with defaults.
    """
    result = validate(schema, payload)
    if isinstance(result, Err):
        raise ValidationError(result.errors)
    return result.value.model_dump(mode="json", by_alias=True, exclude_unset=partial, exclude_none=True)
