"""Selects and opens the configured DocumentStore adapter."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tenant_admin.application.interfaces import DocumentStore
from tenant_admin.config import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_document_store(settings: Settings) -> AsyncIterator[DocumentStore]:
    """Yield the store named by ``settings.document_store`` and release it afterwards."""
    backend = settings.document_store

    if backend == "memory":
        from tenant_admin.infrastructure.memory import InMemoryDocumentStore

        logger.info("Using in-memory document store")
        yield InMemoryDocumentStore()

    elif backend == "sql":
        from tenant_admin.infrastructure.database import Base, build_engine, build_session_factory
        from tenant_admin.infrastructure.database.repositories import SQLAlchemyDocumentStore

        engine = build_engine(settings.database_url, echo=settings.log_level_sql.upper() == "DEBUG")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Using SQL document store at %s", engine.url.render_as_string(hide_password=True))
        try:
            yield SQLAlchemyDocumentStore(build_session_factory(engine))
        finally:
            await engine.dispose()

    else:
        from tenant_admin.infrastructure.firestore import FirestoreDocumentStore, build_firestore_client

        client = build_firestore_client(settings.firestore_project)
        try:
            yield FirestoreDocumentStore(client)
        finally:
            client.close()
