"""Maps domain exceptions onto HTTP status codes and the error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from tenant_admin.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ProtectedEntityError,
    UnsupportedOperationError,
    ValidationError,
)
from tenant_admin.presentation.api.responses import error_envelope

logger = logging.getLogger(__name__)


async def _validation_error(request: Request, exc: ValidationError):
    return error_envelope(status.HTTP_400_BAD_REQUEST, "ValidationError", exc.message, exc.details)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body",
            "rule": error.get("type", "invalid"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return error_envelope(status.HTTP_400_BAD_REQUEST, "ValidationError", "Validation failed", details)


async def _not_found(request: Request, exc: EntityNotFoundError):
    return error_envelope(status.HTTP_404_NOT_FOUND, "NotFound", str(exc))


async def _unsupported(request: Request, exc: UnsupportedOperationError):
    return error_envelope(status.HTTP_400_BAD_REQUEST, "UnsupportedOperation", str(exc))


async def _duplicate(request: Request, exc: DuplicateEntityError):
    return error_envelope(status.HTTP_409_CONFLICT, "Conflict", str(exc))


async def _protected(request: Request, exc: ProtectedEntityError):
    return error_envelope(status.HTTP_403_FORBIDDEN, "Forbidden", exc.reason)


async def _unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "UnknownError", "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(UnsupportedOperationError, _unsupported)
    app.add_exception_handler(DuplicateEntityError, _duplicate)
    app.add_exception_handler(ProtectedEntityError, _protected)
    app.add_exception_handler(Exception, _unexpected)
