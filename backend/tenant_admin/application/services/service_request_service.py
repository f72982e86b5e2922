"""Application service for service requests logged through the contact form."""

from collections.abc import Sequence
from typing import Any

from tenant_admin.application import query_utils
from tenant_admin.application.schemas import ServiceRequestCreate, ServiceRequestUpdate

from .resource_service import Record, ResourceDefinition, ResourceService

SERVICE_REQUEST = ResourceDefinition(
    name="ServiceRequest",
    slug="service_requests",
    collection="serviceRequests",
    id_prefix="SVCR",
    create_schema=ServiceRequestCreate,
    update_schema=ServiceRequestUpdate,
    default_sort="created.when",
    search_fields=(
        "title",
        "names",
        "surname",
        "company",
        "typeOfUser",
        "messageRelationTo",
        "message",
        "contactInfo.email",
        "processing.status",
    ),
    export_fields=(
        "id",
        "title",
        "names",
        "surname",
        "company",
        "typeOfUser",
        "messageRelationTo",
        "contactInfo.phoneNumber",
        "contactInfo.email",
        "processing.status",
        "created.when",
    ),
    stats_fields=("processing.status", "typeOfUser", "messageRelationTo"),
    filter_fields={
        "status": "processing.status",
        "typeOfUser": "typeOfUser",
        "messageRelationTo": "messageRelationTo",
    },
    active_path=None,
    stamp_active=False,
)


class ServiceRequestService(ResourceService):
    definition = SERVICE_REQUEST

    def _insights(self, records: Sequence[Record]) -> dict[str, Any]:
        insights = super()._insights(records)
        statuses = [query_utils.get_path(r, "processing.status") for r in records]
        insights["openCount"] = sum(1 for s in statuses if s == "open")
        insights["statuses"] = sorted({s for s in statuses if s})
        return insights
