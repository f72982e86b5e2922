"""DocumentStore implementation backed by Google Cloud Firestore."""

from collections.abc import Mapping
from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from tenant_admin.application.interfaces import Document, DocumentStore
from tenant_admin.domain.exceptions import EntityNotFoundError


def flatten_fields(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Nested maps → dotted field paths, so ``update`` merges instead of replacing maps.

    Empty maps contribute no paths; merging one leaves the stored map as is.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten_fields(value, f"{path}."))
        else:
            flat[path] = value
    return flat


class FirestoreDocumentStore(DocumentStore):
    """Implements the DocumentStore port on a Firestore ``AsyncClient``."""

    def __init__(self, client: firestore.AsyncClient):
        self._client = client

    def _doc(self, collection: str, doc_id: str):
        return self._client.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        snapshot = await self._doc(collection, doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    async def create(self, collection: str, doc_id: str, data: Document) -> Document:
        doc_ref = self._doc(collection, doc_id)
        await doc_ref.set(data, merge=True)
        snapshot = await doc_ref.get()
        return snapshot.to_dict() or dict(data)

    async def merge(self, collection: str, doc_id: str, data: Document) -> None:
        fields = flatten_fields(data)
        if not fields:
            if not (await self._doc(collection, doc_id).get()).exists:
                raise EntityNotFoundError(collection, doc_id)
            return
        try:
            await self._doc(collection, doc_id).update(fields)
        except NotFound as exc:
            raise EntityNotFoundError(collection, doc_id) from exc

    async def delete(self, collection: str, doc_id: str) -> bool:
        doc_ref = self._doc(collection, doc_id)
        snapshot = await doc_ref.get()
        if not snapshot.exists:
            return False
        await doc_ref.delete()
        return True

    async def list_all(self, collection: str) -> list[Document]:
        return [doc.to_dict() async for doc in self._client.collection(collection).stream()]

    async def find_by(self, collection: str, field: str, value: Any) -> list[Document]:
        query = self._client.collection(collection).where(filter=FieldFilter(field, "==", value))
        return [doc.to_dict() async for doc in query.stream()]
