"""Firestore async client construction."""

import logging

from google.cloud import firestore

logger = logging.getLogger(__name__)


def build_firestore_client(project: str | None = None) -> firestore.AsyncClient:
    """Create an ``AsyncClient``; credentials come from the environment (ADC)."""
    client = firestore.AsyncClient(project=project)
    logger.info("Firestore client ready (project=%s)", client.project)
    return client
