from .document_repository import SQLAlchemyDocumentStore

__all__ = ["SQLAlchemyDocumentStore"]
