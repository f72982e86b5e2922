"""Person endpoints, including the dry-run ``/validate`` check."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from tenant_admin.application.services import PersonService
from tenant_admin.infrastructure.dependencies import get_person_service
from tenant_admin.presentation.api.internal.resource_routes import build_resource_router
from tenant_admin.presentation.api.responses import envelope


def _person_routes(router: APIRouter) -> None:
    @router.post("/validate")
    async def validate_person(
        payload: Any = Body(...),
        service: PersonService = Depends(get_person_service),
    ):
        """Check a person payload and its ID/birth-date consistency without saving it."""
        return envelope(service.check(payload))


router = build_resource_router("/persons", "Persons", get_person_service, extra_routes=_person_routes)
