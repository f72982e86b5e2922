"""DocumentStore implementation backed by a SQLAlchemy ``documents`` table."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenant_admin.application.interfaces import Document, DocumentStore
from tenant_admin.application.query_utils import deep_merge, get_path
from tenant_admin.domain.exceptions import EntityNotFoundError
from tenant_admin.infrastructure.database.models import DocumentModel


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port on any async SQLAlchemy database.

    Each call runs in its own session and commits before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, collection: str, doc_id: str) -> Document | None:
        async with self._session_factory() as session:
            model = await session.get(DocumentModel, (collection, doc_id))
            return dict(model.data) if model else None

    async def create(self, collection: str, doc_id: str, data: Document) -> Document:
        async with self._session_factory() as session:
            model = await session.get(DocumentModel, (collection, doc_id))
            if model is None:
                model = DocumentModel(collection=collection, id=doc_id, data=dict(data))
                session.add(model)
            else:
                model.data = deep_merge(model.data, data)
            await session.commit()
            return dict(model.data)

    async def merge(self, collection: str, doc_id: str, data: Document) -> None:
        async with self._session_factory() as session:
            model = await session.get(DocumentModel, (collection, doc_id))
            if model is None:
                raise EntityNotFoundError(collection, doc_id)
            # reassign so the JSON column is flagged dirty
            model.data = deep_merge(model.data, data)
            await session.commit()

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(DocumentModel).where(
                    DocumentModel.collection == collection,
                    DocumentModel.id == doc_id,
                )
            )
            await session.commit()
            return result.rowcount > 0

    async def list_all(self, collection: str) -> list[Document]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(DocumentModel)
                .where(DocumentModel.collection == collection)
                .order_by(DocumentModel.created_at, DocumentModel.id)
            )
            return [dict(model.data) for model in result.scalars().all()]

    async def find_by(self, collection: str, field: str, value: Any) -> list[Document]:
        return [doc for doc in await self.list_all(collection) if get_path(doc, field) == value]
