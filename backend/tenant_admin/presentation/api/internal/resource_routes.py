"""Route builders shared by every ``/internal/<resource>`` router.

Collection routes (list, search, export, stats, bulk, create) are registered
before the ``/{record_id}`` routes so static segments such as ``/stats`` are
never captured as an id. Resource modules add their own static routes between
the two calls.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from tenant_admin.application.schemas import BulkRequest
from tenant_admin.application.services import ResourceService
from tenant_admin.domain.exceptions import EntityNotFoundError
from tenant_admin.infrastructure.dependencies import get_actor
from tenant_admin.presentation.api.responses import envelope

ServiceProvider = Callable[..., ResourceService]


def _label(service: ResourceService) -> str:
    return service.definition.name


def add_collection_routes(router: APIRouter, get_service: ServiceProvider) -> None:
    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: Any = Body(...),
        actor: str = Depends(get_actor),
        service: ResourceService = Depends(get_service),
    ):
        """Validate and create a record; the id and audit stamps are server-assigned."""
        record = await service.create(payload, actor)
        return envelope(
            record,
            message=f"{_label(service)} created successfully",
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("")
    async def list_records(request: Request, service: ResourceService = Depends(get_service)):
        """Filter, search, sort and paginate (``page``, ``limit``, ``sortBy``, ``sortDirection``, ``search``)."""
        result = await service.list(dict(request.query_params))
        return envelope(result["data"], pagination=result["pagination"])

    async def search_records(request: Request, service: ResourceService = Depends(get_service)):
        """Free-text ``q`` over the wider field set, with ``createdAfter``/``createdBefore``."""
        result = await service.search(dict(request.query_params))
        return envelope(result["data"], pagination=result["pagination"], searchTerm=result["searchTerm"])

    router.add_api_route("/search", search_records, methods=["GET"])
    router.add_api_route("/query", search_records, methods=["GET"], name="query_records")

    @router.get("/export")
    async def export_records(
        request: Request,
        format: str = Query("json", description="csv or json"),
        service: ResourceService = Depends(get_service),
    ) -> Response:
        params = {k: v for k, v in request.query_params.items() if k != "format"}
        export = await service.export(format, params)
        return Response(
            content=export.content,
            media_type=export.media_type,
            headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
        )

    @router.get("/stats")
    async def record_stats(service: ResourceService = Depends(get_service)):
        return envelope(await service.stats())

    @router.post("/bulk")
    async def bulk_records(
        body: BulkRequest,
        actor: str = Depends(get_actor),
        service: ResourceService = Depends(get_service),
    ):
        """Apply create/update/delete to each item; 207 when any item failed."""
        result = await service.bulk(body.operation, body.data, actor)
        return envelope(
            result,
            success=result["success"],
            message=(
                f"Bulk {result['operation']} completed: "
                f"{result['successful']} successful, {result['failed']} failed"
            ),
            status_code=status.HTTP_200_OK if result["success"] else status.HTTP_207_MULTI_STATUS,
        )


def add_item_routes(router: APIRouter, get_service: ServiceProvider) -> None:
    @router.get("/{record_id}")
    async def get_record(record_id: str, service: ResourceService = Depends(get_service)):
        record = await service.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(_label(service), record_id)
        return envelope(record)

    async def update_record(
        record_id: str,
        payload: Any = Body(...),
        actor: str = Depends(get_actor),
        service: ResourceService = Depends(get_service),
    ):
        """Merge the validated fields into the stored record."""
        record = await service.update(record_id, payload, actor)
        return envelope(record, message=f"{_label(service)} updated successfully")

    router.add_api_route("/{record_id}", update_record, methods=["PUT"], name="replace_record")
    router.add_api_route("/{record_id}", update_record, methods=["PATCH"], name="patch_record")

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        actor: str = Depends(get_actor),
        service: ResourceService = Depends(get_service),
    ):
        await service.delete(record_id, actor)
        return envelope({"id": record_id}, message=f"{_label(service)} deleted successfully")


def add_activation_routes(router: APIRouter, get_service: ServiceProvider) -> None:
    """``PATCH /{record_id}/activate`` and ``/deactivate`` for account-carrying resources."""

    @router.patch("/{record_id}/activate")
    async def activate_record(
        record_id: str,
        actor: str = Depends(get_actor),
        service: Any = Depends(get_service),
    ):
        record = await service.activate(record_id, actor)
        return envelope(record, message=f"{_label(service)} activated successfully")

    @router.patch("/{record_id}/deactivate")
    async def deactivate_record(
        record_id: str,
        actor: str = Depends(get_actor),
        service: Any = Depends(get_service),
    ):
        record = await service.deactivate(record_id, actor)
        return envelope(record, message=f"{_label(service)} deactivated successfully")


def build_resource_router(
    prefix: str,
    tag: str,
    get_service: ServiceProvider,
    *,
    extra_routes: Callable[[APIRouter], None] | None = None,
    activation: bool = False,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    add_collection_routes(router, get_service)
    if extra_routes is not None:
        extra_routes(router)
    if activation:
        add_activation_routes(router, get_service)
    add_item_routes(router, get_service)
    return router
