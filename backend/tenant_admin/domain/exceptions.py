"""Domain-specific exceptions — framework-independent."""

from typing import Any


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationError(Exception):
    """Raised when a payload violates its resource schema.

    ``details`` holds one ``{"field", "rule", "message"}`` mapping per
    violated constraint.
    """

    def __init__(self, details: list[dict[str, Any]], message: str = "Validation failed"):
        self.details = details
        self.message = message
        super().__init__(message)


class UnsupportedOperationError(Exception):
    """Raised when a bulk request names an operation other than create/update/delete."""

    def __init__(self, operation: Any):
        self.operation = operation
        super().__init__(f"Unsupported bulk operation: {operation}")


class ProtectedEntityError(Exception):
    """Raised when a write targets an entity that must not change (e.g. system roles)."""

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"{entity_type} '{entity_id}': {reason}")
