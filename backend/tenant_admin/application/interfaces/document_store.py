"""Abstract document store interface (port) — one JSON document per record."""

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]


class DocumentStore(ABC):
    """Port for document persistence, implemented in the infrastructure layer.

    Collections are addressed by slash-separated paths such as
    ``touchAfrica/southAfrica/lookups``; documents inside a collection are
    keyed by their record id.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Retrieve a single document, or None when it does not exist."""
        ...

    @abstractmethod
    async def create(self, collection: str, doc_id: str, data: Document) -> Document:
        """Write a document with merge semantics and return what was written."""
        ...

    @abstractmethod
    async def merge(self, collection: str, doc_id: str, data: Document) -> None:
        """Deep-merge *data* into an existing document.

        Raises EntityNotFoundError when the document does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Hard-delete a document. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def list_all(self, collection: str) -> list[Document]:
        """Return every document in the collection."""
        ...

    @abstractmethod
    async def find_by(self, collection: str, field: str, value: Any) -> list[Document]:
        """Return documents whose (dotted) field equals *value*."""
        ...
