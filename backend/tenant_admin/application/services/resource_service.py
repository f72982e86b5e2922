"""Generic resource service: the create/read/update/delete/list/bulk/export/stats pipeline.

Every resource (lookups, tenants, persons, roles, admins, ...) runs the same
sequence: validate the payload against the resource schema, stamp an id and
``created``/``updated`` metadata, write to the document store, and answer
list-style queries by running the in-memory query utilities over the whole
collection. Subclasses supply a ``ResourceDefinition`` and override the
``_before_*`` hooks for resource-specific rules.
"""

import copy
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from tenant_admin.application import query_utils
from tenant_admin.application.interfaces import DocumentStore
from tenant_admin.application.validation import validated_fields
from tenant_admin.domain.entities import AuditStamp, to_iso, utc_now
from tenant_admin.domain.exceptions import (
    EntityNotFoundError,
    UnsupportedOperationError,
    ValidationError,
)
from tenant_admin.domain.identifiers import new_id

logger = logging.getLogger(__name__)

Record = dict[str, Any]

DEFAULT_COLLECTION_ROOT = "touchAfrica/southAfrica"
BULK_OPERATIONS = ("create", "update", "delete")


@dataclass(frozen=True)
class ResourceDefinition:
    """Static description of one resource type."""

    name: str
    slug: str
    collection: str
    id_prefix: str
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    default_sort: str
    search_fields: tuple[str, ...]
    export_fields: tuple[str, ...]
    stats_fields: tuple[str, ...] = ()
    # query parameter → dotted path, case-insensitive substring match
    filter_fields: Mapping[str, str] = field(default_factory=dict)
    # query parameter → dotted path of a boolean field
    flag_filters: Mapping[str, str] = field(default_factory=dict)
    # dotted path of the active flag, None when the resource has none
    active_path: str | None = "active"
    stamp_active: bool = True

    @property
    def wide_search_fields(self) -> tuple[str, ...]:
        return self.search_fields + ("created.by", "updated.by")


@dataclass
class ExportResult:
    content: str
    media_type: str
    filename: str
    record_count: int


def _int_param(params: Mapping[str, Any], name: str, default: int) -> int:
    raw = params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


class ResourceService:
    """Orchestrates the record pipeline for one resource. Depends on the store port (DI)."""

    definition: ResourceDefinition

    def __init__(
        self,
        store: DocumentStore,
        *,
        collection_path: str | None = None,
        default_page_size: int = 10,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._collection = collection_path or f"{DEFAULT_COLLECTION_ROOT}/{self.definition.collection}"
        self._default_page_size = default_page_size
        self._clock = clock

    @property
    def collection_path(self) -> str:
        return self._collection

    # ── Hooks ────────────────────────────────────────────────────────

    async def _before_create(self, fields: Record) -> Record:
        return fields

    async def _before_update(self, record_id: str, fields: Record, actor: str) -> Record:
        return fields

    async def _before_delete(self, record_id: str, actor: str) -> None:
        return None

    def _present(self, record: Record) -> Record:
        """Shape a stored document for callers (e.g. strip secrets)."""
        return record

    def _insights(self, records: Sequence[Record]) -> dict[str, Any]:
        insights: dict[str, Any] = {"total": len(records)}
        path = self.definition.active_path
        if path:
            insights["activeCount"] = sum(1 for r in records if query_utils.get_path(r, path) is True)
            insights["inactiveCount"] = sum(1 for r in records if query_utils.get_path(r, path) is False)
        return insights

    # ── Single-record operations ─────────────────────────────────────

    async def create(self, payload: Any, actor: str = "system") -> Record:
        fields = validated_fields(self.definition.create_schema, payload)
        fields = await self._before_create(fields)

        moment = self._clock()
        record_id = await self._free_id(int(moment.timestamp() * 1000))
        stamp = AuditStamp.now(actor, moment).to_dict()
        record: Record = {"id": record_id, **fields, "created": stamp, "updated": dict(stamp)}
        if self.definition.stamp_active:
            record.setdefault("active", True)

        stored = await self._store.create(self._collection, record_id, record)
        logger.info("Created %s %s by %s", self.definition.name, record_id, actor)
        return self._present(stored)

    async def _free_id(self, epoch_ms: int) -> str:
        """First ``<prefix><ms>`` id at or after *epoch_ms* not already taken in the collection."""
        while True:
            record_id = new_id(self.definition.id_prefix, clock=lambda: epoch_ms)
            if await self._store.get(self._collection, record_id) is None:
                return record_id
            epoch_ms += 1

    async def get_by_id(self, record_id: str) -> Record | None:
        record = await self._store.get(self._collection, record_id)
        return self._present(record) if record is not None else None

    async def update(self, record_id: str, payload: Any, actor: str = "system") -> Record:
        fields = validated_fields(self.definition.update_schema, payload, partial=True)
        fields = await self._before_update(record_id, fields, actor)
        fields["updated"] = AuditStamp.now(actor, self._clock()).to_dict()

        try:
            await self._store.merge(self._collection, record_id, fields)
        except EntityNotFoundError as exc:
            raise EntityNotFoundError(self.definition.name, record_id) from exc
        logger.info("Updated %s %s by %s", self.definition.name, record_id, actor)

        record = await self.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(self.definition.name, record_id)
        return record

    async def delete(self, record_id: str, actor: str = "system") -> None:
        await self._before_delete(record_id, actor)
        removed = await self._store.delete(self._collection, record_id)
        if not removed:
            raise EntityNotFoundError(self.definition.name, record_id)
        logger.info("Deleted %s %s by %s", self.definition.name, record_id, actor)

    # ── Collection queries ───────────────────────────────────────────

    async def all(self) -> list[Record]:
        """Every record in the collection, presented."""
        return [self._present(r) for r in await self._store.list_all(self._collection)]

    def _filter(self, records: list[Record], params: Mapping[str, Any]) -> list[Record]:
        for param, path in self.definition.filter_fields.items():
            value = params.get(param)
            if value not in (None, ""):
                records = query_utils.filter_contains(records, path, value)
        for param, path in self.definition.flag_filters.items():
            value = params.get(param)
            if value not in (None, ""):
                records = query_utils.filter_flag(records, path, value)
        return records

    def _sorted(self, records: list[Record], params: Mapping[str, Any]) -> list[Record]:
        sort_field = params.get("sortBy") or self.definition.default_sort
        direction = params.get("sortDirection") or params.get("order") or "asc"
        return query_utils.sort_items(records, sort_field, direction)

    def _page(self, records: list[Record], params: Mapping[str, Any]) -> query_utils.Page:
        return query_utils.paginate(
            records,
            _int_param(params, "page", 1),
            _int_param(params, "limit", self._default_page_size),
        )

    def _listing(self, records: list[Record], params: Mapping[str, Any]) -> list[Record]:
        records = self._filter(records, params)
        term = params.get("search") or params.get("q")
        records = query_utils.search_items(records, term, self.definition.search_fields)
        return self._sorted(records, params)

    async def list(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Filter → search → sort → paginate over the whole collection."""
        params = params or {}
        records = self._listing(await self.all(), params)
        page = self._page(records, params)
        return {"data": page.data, "pagination": page.pagination}

    async def search(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Free-text ``q``/``search`` over the wider field set, plus a ``created.when`` window."""
        params = params or {}
        term = params.get("q") or params.get("search")
        records = self._filter(await self.all(), params)
        records = query_utils.search_items(records, term, self.definition.wide_search_fields)
        records = query_utils.filter_date_range(
            records,
            "created.when",
            after=params.get("createdAfter"),
            before=params.get("createdBefore"),
        )
        page = self._page(self._sorted(records, params), params)
        return {"data": page.data, "pagination": page.pagination, "searchTerm": term}

    # ── Bulk / export / stats ────────────────────────────────────────

    async def bulk(self, operation: Any, items: Sequence[Any], actor: str = "system") -> dict[str, Any]:
        """Apply one operation to every item, collecting failures instead of aborting.

        Items run sequentially; earlier successes are not rolled back when a
        later item fails.
        """
        kind = str(operation or "").strip().lower()
        if kind not in BULK_OPERATIONS:
            raise UnsupportedOperationError(operation)

        result: dict[str, Any] = {
            "operation": kind,
            "timestamp": to_iso(self._clock()),
            "processed": 0,
            "successful": 0,
            "failed": 0,
            "errors": [],
            "data": [],
        }
        for index, item in enumerate(items):
            try:
                result["data"].append(await self._bulk_item(kind, index, item, actor))
                result["successful"] += 1
            except Exception as exc:
                logger.warning("Bulk %s of %s item %d failed: %s", kind, self.definition.name, index, exc)
                result["failed"] += 1
                result["errors"].append(self._bulk_error(index, item, exc))
            result["processed"] += 1

        result["success"] = result["failed"] == 0
        return result

    def _bulk_error(self, index: int, item: Any, exc: Exception) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "index": index,
            "error": str(exc),
            "data": self._present(copy.deepcopy(dict(item))) if isinstance(item, Mapping) else item,
        }
        if isinstance(exc, ValidationError):
            entry["details"] = exc.details
        return entry

    async def _bulk_item(self, kind: str, index: int, item: Any, actor: str) -> dict[str, Any]:
        if kind == "create":
            created = await self.create(item, actor)
            return {"index": index, "id": created["id"], "status": "created", "data": created}

        record_id = item if isinstance(item, str) and kind == "delete" else (
            item.get("id") if isinstance(item, Mapping) else None
        )
        if not record_id:
            raise ValueError(f"ID is required for {kind} operation")
        if kind == "update":
            changes = {k: v for k, v in item.items() if k != "id"}
            updated = await self.update(record_id, changes, actor)
            return {"index": index, "id": record_id, "status": "updated", "data": updated}
        await self.delete(record_id, actor)
        return {"index": index, "id": record_id, "status": "deleted"}

    async def export(self, format: Any = "json", params: Mapping[str, Any] | None = None) -> ExportResult:
        """Serialize the filtered, sorted collection.

        The export covers every matching record; it is paginated only when the
        caller passes ``page`` or ``limit`` explicitly.
        """
        params = params or {}
        records = self._listing(await self.all(), params)
        if "page" in params or "limit" in params:
            records = self._page(records, params).data

        fmt = query_utils.normalize_format(format)
        if fmt == "csv":
            content = query_utils.export_items(records, "csv", self.definition.export_fields)
            media_type = "text/csv"
        else:
            content = query_utils.export_items(records, "json")
            media_type = "application/json"

        day = to_iso(self._clock())[:10]
        return ExportResult(
            content=content,
            media_type=media_type,
            filename=f"{self.definition.slug}_export_{day}.{fmt}",
            record_count=len(records),
        )

    async def stats(self) -> dict[str, Any]:
        records = await self.all()
        stats = query_utils.aggregate_stats(records, self.definition.stats_fields)
        stats["insights"] = self._insights(records)
        stats["generatedAt"] = to_iso(self._clock())
        return stats


class AccountActivationMixin:
    """``activate``/``deactivate`` for resources carrying ``account.isActive``."""

    async def _set_account_active(self: ResourceService, record_id: str, value: bool, actor: str) -> Record:
        current = await self._store.get(self._collection, record_id)
        if current is None:
            raise EntityNotFoundError(self.definition.name, record_id)

        moment = self._clock()
        history = list(query_utils.get_path(current, "account.isActive.changes") or [])
        history.append({"by": actor, "when": to_iso(moment), "action": "activated" if value else "deactivated"})
        await self._store.merge(
            self._collection,
            record_id,
            {
                "account": {"isActive": {"value": value, "changes": history}},
                "updated": AuditStamp.now(actor, moment).to_dict(),
            },
        )
        logger.info("%s %s %s by %s", self.definition.name, record_id, history[-1]["action"], actor)
        return self._present(await self._store.get(self._collection, record_id))

    async def activate(self, record_id: str, actor: str = "system") -> Record:
        return await self._set_account_active(record_id, True, actor)

    async def deactivate(self, record_id: str, actor: str = "system") -> Record:
        return await self._set_account_active(record_id, False, actor)
