from .client import build_firestore_client
from .document_store import FirestoreDocumentStore, flatten_fields

__all__ = ["FirestoreDocumentStore", "build_firestore_client", "flatten_fields"]
