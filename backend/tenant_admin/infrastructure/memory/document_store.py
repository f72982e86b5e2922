"""In-memory DocumentStore for tests and local development."""

import copy
from typing import Any

from tenant_admin.application.interfaces import Document, DocumentStore
from tenant_admin.application.query_utils import deep_merge, get_path
from tenant_admin.domain.exceptions import EntityNotFoundError


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store; callers always receive copies."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    def _collection(self, collection: str) -> dict[str, Document]:
        return self._collections.setdefault(collection, {})

    async def get(self, collection: str, doc_id: str) -> Document | None:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def create(self, collection: str, doc_id: str, data: Document) -> Document:
        docs = self._collection(collection)
        docs[doc_id] = deep_merge(docs.get(doc_id, {}), copy.deepcopy(data))
        return copy.deepcopy(docs[doc_id])

    async def merge(self, collection: str, doc_id: str, data: Document) -> None:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise EntityNotFoundError(collection, doc_id)
        docs[doc_id] = deep_merge(docs[doc_id], copy.deepcopy(data))

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._collection(collection).pop(doc_id, None) is not None

    async def list_all(self, collection: str) -> list[Document]:
        return [copy.deepcopy(doc) for doc in self._collection(collection).values()]

    async def find_by(self, collection: str, field: str, value: Any) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if get_path(doc, field) == value
        ]
